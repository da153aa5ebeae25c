# app/models/responses.py
from pydantic import BaseModel
from typing import List, Optional, Tuple

class RackOut(BaseModel):
    index: int
    x: float
    y: float
    width: float
    height: float
    label: str

class ACUnitOut(BaseModel):
    id: str
    side: str
    offset: float
    x: float
    y: float
    width: float
    height: float
    selected: bool = False

class DoorOut(BaseModel):
    side: str
    offset: float
    gap_start: Tuple[float, float]
    gap_end: Tuple[float, float]
    leaf: Tuple[float, float, float, float]
    anchor: Tuple[float, float]
    edge_index: int

class ViewOut(BaseModel):
    fit_scale: float
    offset_x: float
    offset_y: float

class RoomOut(BaseModel):
    unit: str
    width: float
    length: float
    width_px: float
    height_px: float
    scale: float
    area_px: float
    simple: bool

class DesignerState(BaseModel):
    session_id: str
    changed: bool = True
    exporting: bool = False
    room: RoomOut
    params: dict
    polygon: List[Tuple[float, float]]
    door: Optional[DoorOut] = None  # None: outline too degenerate to carry a door
    racks: List[RackOut]
    cable_managers: List[Tuple[float, float, float, float]]
    ac_units: List[ACUnitOut]
    selected_ac: Optional[str] = None
    view: ViewOut
    image_base64: Optional[str] = None
    message: Optional[str] = None
