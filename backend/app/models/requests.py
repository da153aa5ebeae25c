# app/models/requests.py
from pydantic import BaseModel
from typing import Optional, Literal

Side = Literal["top", "bottom", "left", "right"]
Unit = Literal["feet", "meters"]

class DesignParamsInput(BaseModel):
    """Partial parameter update; only fields that are set are applied."""
    unit: Optional[Unit] = None
    room_width: Optional[float] = None
    room_length: Optional[float] = None
    door_side: Optional[Side] = None
    door_offset: Optional[float] = None
    num_racks: Optional[int] = None
    num_rows: Optional[int] = None
    rack_width: Optional[float] = None
    rack_depth: Optional[float] = None
    show_cable_managers: Optional[bool] = None
    cable_manager_width: Optional[float] = None
    snap_to_racks: Optional[bool] = None

class CreateSessionRequest(BaseModel):
    params: Optional[DesignParamsInput] = None

class PointerEvent(BaseModel):
    x: float
    y: float
    # "canvas": preview pixels, translated with the view transform. "room": room pixels.
    space: Literal["canvas", "room"] = "canvas"

class VertexEvent(PointerEvent):
    index: int

class VertexIndex(BaseModel):
    index: int

class DropEvent(PointerEvent):
    asset_type: str

class ResizeACRequest(BaseModel):
    width: float
    height: float

class SelectRequest(BaseModel):
    ac_id: Optional[str] = None
