# app/services/sessions.py
# In-memory editor sessions. Nothing is persisted; a restart drops every session.
import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import asdict
from typing import Dict, Iterator, Optional

from app.config import Config
from app.models.responses import ACUnitOut, DesignerState, DoorOut, RackOut, RoomOut, ViewOut
from roomlayout.editor import DesignParams, Editor

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Editors keyed by session id, each guarded by its own lock. Route handlers
    run in a threadpool, so every command takes the session lock for its whole
    state transition.
    """

    def __init__(self):
        self._sessions: Dict[str, Editor] = {}
        self._locks: Dict[str, threading.Lock] = {}

    def create(self) -> str:
        params = DesignParams(unit=Config.DEFAULT_UNIT)
        editor = Editor(params, preview_w=Config.PREVIEW_WIDTH, preview_h=Config.PREVIEW_HEIGHT)
        session_id = uuid.uuid4().hex
        self._locks[session_id] = threading.Lock()
        self._sessions[session_id] = editor
        logger.info("session %s created (%d racks packed)", session_id, len(editor.state.racks))
        return session_id

    def get(self, session_id: str) -> Optional[Editor]:
        return self._sessions.get(session_id)

    @contextmanager
    def locked(self, session_id: str) -> Iterator[Optional[Editor]]:
        """Hold the session lock; yields None for an unknown session."""
        lock = self._locks.get(session_id)
        if lock is None:
            yield None
            return
        with lock:
            yield self._sessions.get(session_id)

    def delete(self, session_id: str) -> bool:
        removed = self._sessions.pop(session_id, None) is not None
        self._locks.pop(session_id, None)
        if removed:
            logger.info("session %s closed", session_id)
        return removed

    def __len__(self):
        return len(self._sessions)


store = SessionStore()


def describe(session_id: str, editor: Editor, changed: bool = True, image_base64: Optional[str] = None, message: Optional[str] = None) -> DesignerState:
    """Flatten the editor's scene into the response model."""
    sc = editor.scene
    p = editor.state.params
    g = sc.door_geometry

    door = None
    if g is not None:
        door = DoorOut(
            side=p.door_side,
            offset=p.door_offset,
            gap_start=g.gap_start,
            gap_end=g.gap_end,
            leaf=g.leaf,
            anchor=g.anchor,
            edge_index=g.edge_index,
        )

    return DesignerState(
        session_id=session_id,
        changed=changed,
        exporting=editor.state.exporting,
        room=RoomOut(
            unit=p.unit,
            width=p.room.to_physical(sc.room_w),
            length=p.room.to_physical(sc.room_h),
            width_px=sc.room_w,
            height_px=sc.room_h,
            scale=sc.scale,
            area_px=sc.polygon_area,
            simple=sc.polygon_simple,
        ),
        params=asdict(p),
        polygon=list(sc.polygon),
        door=door,
        racks=[
            RackOut(index=i, x=r.x, y=r.y, width=sc.rack_w, height=sc.rack_d, label=r.label)
            for i, r in enumerate(sc.racks)
        ],
        cable_managers=list(sc.cable_managers),
        ac_units=[
            ACUnitOut(
                id=b.unit.id, side=b.unit.side, offset=b.unit.offset,
                x=b.x, y=b.y, width=b.unit.width, height=b.unit.height, selected=b.selected,
            )
            for b in sc.ac_boxes
        ],
        selected_ac=editor.state.selected_ac,
        view=ViewOut(fit_scale=sc.view.fit_scale, offset_x=sc.view.offset_x, offset_y=sc.view.offset_y),
        image_base64=image_base64,
        message=message,
    )
