# app/routes/designer.py

from contextlib import contextmanager
from fastapi import APIRouter, HTTPException, Response
from typing import Iterator, Optional, Tuple
import logging

from app.config import Config
from app.models.requests import (
    CreateSessionRequest, DesignParamsInput, DropEvent, PointerEvent,
    ResizeACRequest, SelectRequest, VertexEvent, VertexIndex,
)
from app.models.responses import DesignerState
from app.services.renderer import pdf_page, render_base64, render_bytes
from app.services.sessions import describe, store
from app.services.validator import layout_warnings, validate_ac_size, validate_params
from roomlayout.editor import Editor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["designer"])

@contextmanager
def _session(session_id: str) -> Iterator[Editor]:
    # One command at a time per session
    with store.locked(session_id) as editor:
        if editor is None:
            raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
        yield editor

def _room_point(editor: Editor, evt: PointerEvent) -> Tuple[float, float]:
    if evt.space == "room":
        return (evt.x, evt.y)
    return editor.to_room(evt.x, evt.y)

def _state(session_id: str, editor: Editor, changed: bool = True, image: bool = False) -> DesignerState:
    warnings = layout_warnings(editor.scene)
    return describe(
        session_id,
        editor,
        changed=changed,
        image_base64=render_base64(editor.scene, Config.EXPORT_DPI) if image else None,
        message=" ".join(warnings) if warnings else None,
    )

def _apply_params(editor: Editor, body: DesignParamsInput) -> bool:
    changes = body.model_dump(exclude_none=True)
    ok, errors = validate_params(editor.state.params, changes)
    if not ok:
        raise HTTPException(status_code=400, detail=errors)
    return editor.update_params(**changes)

# --- sessions ---

@router.post("", response_model=DesignerState, status_code=201)
def create_session(req: Optional[CreateSessionRequest] = None, image: bool = False):
    try:
        session_id = store.create()
        with _session(session_id) as editor:
            if req is not None and req.params is not None:
                try:
                    _apply_params(editor, req.params)
                except HTTPException:
                    store.delete(session_id)
                    raise
            return _state(session_id, editor, image=image)
    except HTTPException as http_exc:
        raise http_exc
    except Exception as e:
        logger.exception("session creation failed")
        raise HTTPException(status_code=500, detail=f"An internal server error occurred: {str(e)}")

@router.get("/{session_id}", response_model=DesignerState)
def get_session(session_id: str, image: bool = False):
    with _session(session_id) as editor:
        return _state(session_id, editor, changed=False, image=image)

@router.delete("/{session_id}", status_code=204)
def delete_session(session_id: str):
    if not store.delete(session_id):
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return Response(status_code=204)

@router.patch("/{session_id}/params", response_model=DesignerState)
def update_params(session_id: str, body: DesignParamsInput, image: bool = False):
    with _session(session_id) as editor:
        changed = _apply_params(editor, body)
        return _state(session_id, editor, changed, image)

# --- room outline ---

def _vertex_index(editor: Editor, index: int) -> int:
    if not 0 <= index < len(editor.state.polygon):
        raise HTTPException(status_code=404, detail=f"No vertex at index {index}")
    return index

@router.post("/{session_id}/polygon/move", response_model=DesignerState)
def move_vertex(session_id: str, body: VertexEvent):
    with _session(session_id) as editor:
        x, y = _room_point(editor, body)
        changed = editor.move_vertex(_vertex_index(editor, body.index), x, y)
        return _state(session_id, editor, changed)

@router.post("/{session_id}/polygon/insert", response_model=DesignerState)
def insert_vertex(session_id: str, body: VertexIndex):
    with _session(session_id) as editor:
        changed = editor.insert_vertex(_vertex_index(editor, body.index))
        return _state(session_id, editor, changed)

@router.post("/{session_id}/polygon/remove", response_model=DesignerState)
def remove_vertex(session_id: str, body: VertexIndex):
    with _session(session_id) as editor:
        changed = editor.remove_vertex(_vertex_index(editor, body.index))
        return _state(session_id, editor, changed)

@router.post("/{session_id}/polygon/reset", response_model=DesignerState)
def reset_polygon(session_id: str):
    with _session(session_id) as editor:
        return _state(session_id, editor, editor.reset_polygon())

# --- door ---

@router.post("/{session_id}/door/drag", response_model=DesignerState)
def drag_door(session_id: str, body: PointerEvent):
    with _session(session_id) as editor:
        x, y = _room_point(editor, body)
        return _state(session_id, editor, editor.drag_door(x, y))

# --- racks ---

@router.post("/{session_id}/racks/reset", response_model=DesignerState)
def reset_racks(session_id: str):
    with _session(session_id) as editor:
        return _state(session_id, editor, editor.reset_racks())

@router.post("/{session_id}/racks/{index}/drag", response_model=DesignerState)
def drag_rack(session_id: str, index: int, body: PointerEvent):
    with _session(session_id) as editor:
        if not 0 <= index < len(editor.state.racks):
            raise HTTPException(status_code=404, detail=f"No rack at index {index}")
        x, y = _room_point(editor, body)
        return _state(session_id, editor, editor.drag_rack(index, x, y))

# --- AC units ---

@router.post("/{session_id}/drop", response_model=DesignerState)
def drop_asset(session_id: str, body: DropEvent):
    with _session(session_id) as editor:
        x, y = _room_point(editor, body)
        ac_id = editor.drop_asset(body.asset_type, x, y)
        if ac_id is None:
            logger.debug("drop of %s at (%.1f, %.1f) discarded", body.asset_type, x, y)
        return _state(session_id, editor, ac_id is not None)

def _ac(editor: Editor, ac_id: str):
    if not any(u.id == ac_id for u in editor.state.ac_units):
        raise HTTPException(status_code=404, detail=f"Unknown AC unit: {ac_id}")
    return ac_id

@router.post("/{session_id}/ac/{ac_id}/drag", response_model=DesignerState)
def drag_ac(session_id: str, ac_id: str, body: PointerEvent):
    with _session(session_id) as editor:
        x, y = _room_point(editor, body)
        return _state(session_id, editor, editor.drag_ac(_ac(editor, ac_id), x, y))

@router.patch("/{session_id}/ac/{ac_id}", response_model=DesignerState)
def resize_ac(session_id: str, ac_id: str, body: ResizeACRequest):
    with _session(session_id) as editor:
        _ac(editor, ac_id)
        ok, errors = validate_ac_size(body.width, body.height)
        if not ok:
            raise HTTPException(status_code=400, detail=errors)
        return _state(session_id, editor, editor.resize_ac(ac_id, body.width, body.height))

@router.delete("/{session_id}/ac/{ac_id}", response_model=DesignerState)
def delete_ac(session_id: str, ac_id: str):
    with _session(session_id) as editor:
        return _state(session_id, editor, editor.delete_ac(_ac(editor, ac_id)))

@router.post("/{session_id}/select", response_model=DesignerState)
def select_ac(session_id: str, body: SelectRequest):
    with _session(session_id) as editor:
        if body.ac_id is not None:
            _ac(editor, body.ac_id)
        return _state(session_id, editor, editor.select_ac(body.ac_id))

# --- export ---

@router.get("/{session_id}/export.{fmt}")
def export_layout(session_id: str, fmt: str):
    # Render outside the session lock; the scene is immutable
    with _session(session_id) as editor:
        editor.begin_export()
        scene = editor.scene
    try:
        payload, media_type = render_bytes(scene, fmt, Config.EXPORT_DPI)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("export of session %s failed", session_id)
        raise HTTPException(status_code=500, detail=f"An internal server error occurred: {str(e)}")
    finally:
        with store.locked(session_id):
            editor.end_export()

    headers = {"Content-Disposition": f'attachment; filename="layout.{fmt.lower()}"'}
    if fmt.lower() == "pdf":
        orientation, _ = pdf_page(scene.room_w, scene.room_h)
        headers["X-Page-Orientation"] = orientation
    return Response(content=payload, media_type=media_type, headers=headers)
