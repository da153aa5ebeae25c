# roomlayout/editor.py
"""
Editor session state and commands.

State is explicit: `EditorState` holds everything the user has set or
placed. Anything derivable (pixel sizes, door geometry, AC boxes) lives in a
`Scene` produced by the pure `recompute` pass, which `Editor` runs after every
command. Commands apply one complete state transition and report whether
anything changed.
"""
import itertools
import logging
from dataclasses import dataclass, field, fields, replace
from typing import List, Optional, Tuple

from roomlayout import ac_units as acu
from roomlayout import polygon as poly
from roomlayout.doors import DoorGeometry, DoorSpec, compute_door_geometry
from roomlayout.polygon import Point
from roomlayout.racks import Rack, auto_pack, cable_manager_strips, snap_to_grid, validate_placement
from roomlayout.room import PREVIEW_H, PREVIEW_W, RoomDimensions, ViewTransform
from roomlayout.walls import WallSnap, snap_point_to_wall, snap_to_wall

logger = logging.getLogger(__name__)

AC_ASSET = "ACUnit"

# Parameters whose change invalidates the packed rack layout
RACK_INPUTS = {
    "unit", "room_width", "room_length", "door_side", "door_offset",
    "num_racks", "num_rows", "rack_width", "rack_depth",
    "show_cable_managers", "cable_manager_width",
}


@dataclass(frozen=True)
class DesignParams:
    unit: str = "feet"
    room_width: float = 40
    room_length: float = 25
    door_side: str = "top"
    door_offset: float = 0.5
    num_racks: int = 4
    num_rows: int = 1
    rack_width: float = 2
    rack_depth: float = 4
    show_cable_managers: bool = False
    cable_manager_width: float = 0.2
    snap_to_racks: bool = True

    @property
    def room(self) -> RoomDimensions:
        return RoomDimensions(self.unit, self.room_width, self.room_length)

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]


@dataclass
class EditorState:
    params: DesignParams = field(default_factory=DesignParams)
    polygon: List[Point] = field(default_factory=list)
    racks: List[Rack] = field(default_factory=list)
    ac_units: List[acu.ACUnit] = field(default_factory=list)
    selected_ac: Optional[str] = None
    # Exports in flight; overlapping exports each hold one count
    exports: int = 0

    @property
    def exporting(self) -> bool:
        return self.exports > 0


@dataclass(frozen=True)
class ACBox:
    unit: acu.ACUnit
    x: float
    y: float
    selected: bool


@dataclass(frozen=True)
class Scene:
    room_w: float
    room_h: float
    scale: float
    rack_w: float
    rack_d: float
    cable_manager_w: float
    door: DoorSpec
    door_geometry: Optional[DoorGeometry]
    racks: Tuple[Rack, ...]
    cable_managers: Tuple[Tuple[float, float, float, float], ...]
    ac_boxes: Tuple[ACBox, ...]
    polygon: Tuple[Point, ...]
    polygon_area: float
    polygon_simple: bool
    view: ViewTransform


def recompute(state: EditorState, preview_w: float = PREVIEW_W, preview_h: float = PREVIEW_H) -> Scene:
    p = state.params
    room = p.room
    room_w, room_h = room.width_px, room.height_px
    rack_w, rack_d = room.to_pixels(p.rack_width), room.to_pixels(p.rack_depth)
    cm_w = room.to_pixels(p.cable_manager_width)
    door = DoorSpec.for_scale(room.scale)

    strips = cable_manager_strips(state.racks, rack_w, rack_d, cm_w) if p.show_cable_managers else []
    boxes = []
    for u in state.ac_units:
        x, y = acu.ac_pixel_position(u, room_w, room_h)
        boxes.append(ACBox(unit=u, x=x, y=y, selected=u.id == state.selected_ac))

    return Scene(
        room_w=room_w,
        room_h=room_h,
        scale=room.scale,
        rack_w=rack_w,
        rack_d=rack_d,
        cable_manager_w=cm_w,
        door=door,
        door_geometry=compute_door_geometry(state.polygon, p.door_side, door, room_w, room_h),
        racks=tuple(state.racks),
        cable_managers=tuple(strips),
        ac_boxes=tuple(boxes),
        polygon=tuple(state.polygon),
        polygon_area=poly.polygon_area(state.polygon),
        polygon_simple=poly.polygon_is_simple(state.polygon),
        view=ViewTransform.fit(room_w, room_h, preview_w, preview_h),
    )


class Editor:
    def __init__(self, params: Optional[DesignParams] = None, preview_w: float = PREVIEW_W, preview_h: float = PREVIEW_H):
        params = params or DesignParams()
        self.preview_w, self.preview_h = preview_w, preview_h
        self._ids = itertools.count(1)
        room = params.room
        self.state = EditorState(
            params=params,
            polygon=poly.scale_polygon(poly.DEFAULT_OUTLINE, room.width_px, room.height_px),
        )
        self.state.racks = self._pack()
        self._refresh()

    # --- internals ---

    def _refresh(self) -> None:
        self.scene = recompute(self.state, self.preview_w, self.preview_h)

    def _pack(self) -> List[Rack]:
        p = self.state.params
        room = p.room
        return auto_pack(
            p.num_racks,
            p.num_rows,
            room.width_px,
            room.height_px,
            room.to_pixels(p.rack_width),
            room.to_pixels(p.rack_depth),
            p.show_cable_managers,
            room.to_pixels(p.cable_manager_width),
            self.state.polygon,
            p.door_side,
            DoorSpec.for_scale(room.scale),
        )

    def _set_polygon(self, polygon: List[Point]) -> bool:
        if polygon == self.state.polygon:
            return False
        self.state.polygon = polygon
        self.state.racks = self._pack()
        self._refresh()
        return True

    def _next_id(self) -> str:
        return f"ac-{next(self._ids)}"

    def _snap(self, x: float, y: float, w: float, h: float) -> WallSnap:
        room_w, room_h = self.room_size
        snap = snap_point_to_wall((x, y), w, h, self.state.polygon, room_w, room_h)
        if snap is None:
            # No outline to project onto; fall back to the bounding rectangle
            snap = snap_to_wall(x, y, w, h, room_w, room_h)
        return snap

    @property
    def room_size(self) -> Tuple[float, float]:
        return (self.scene.room_w, self.scene.room_h)

    def to_room(self, sx: float, sy: float) -> Point:
        """Canvas (preview) pixels to room pixels."""
        return self.scene.view.to_room(sx, sy)

    # --- parameters ---

    def update_params(self, **changes) -> bool:
        old = self.state.params
        new = replace(old, **changes)
        if new == old:
            return False

        self.state.params = new
        old_size = (old.room.width_px, old.room.height_px)
        new_size = (new.room.width_px, new.room.height_px)
        if new_size != old_size:
            self.state.polygon = poly.scale_polygon(self.state.polygon, *new_size)
        if any(getattr(old, k) != getattr(new, k) for k in RACK_INPUTS):
            self.state.racks = self._pack()
        self._refresh()
        return True

    # --- polygon editing ---

    def move_vertex(self, index: int, x: float, y: float) -> bool:
        if self.state.exporting or not 0 <= index < len(self.state.polygon):
            return False
        room_w, room_h = self.room_size
        return self._set_polygon(poly.move_point(self.state.polygon, index, x, y, room_w, room_h))

    def insert_vertex(self, index: int) -> bool:
        if not 0 <= index < len(self.state.polygon):
            return False
        return self._set_polygon(poly.insert_point(self.state.polygon, index))

    def remove_vertex(self, index: int) -> bool:
        if not 0 <= index < len(self.state.polygon):
            return False
        return self._set_polygon(poly.remove_point(self.state.polygon, index))

    def reset_polygon(self) -> bool:
        return self._set_polygon(poly.rectangle(*self.room_size))

    # --- door ---

    def drag_door(self, x: float, y: float) -> bool:
        if self.state.exporting:
            return False
        snap = self._snap(x, y, 0, 0)
        return self.update_params(door_side=snap.side, door_offset=snap.offset)

    # --- racks ---

    def reset_racks(self) -> bool:
        racks = self._pack()
        changed = racks != self.state.racks
        self.state.racks = racks
        self._refresh()
        return changed

    def drag_rack(self, index: int, x: float, y: float) -> bool:
        if self.state.exporting or not 0 <= index < len(self.state.racks):
            return False
        p = self.state.params
        sc = self.scene

        if p.snap_to_racks and self.state.racks:
            x, y = snap_to_grid(
                index, self.state.racks, sc.rack_w, sc.rack_d,
                p.show_cable_managers, sc.cable_manager_w, p.num_racks, p.num_rows,
            )

        current = self.state.racks[index]
        if (current.x, current.y) == (x, y):
            return False

        if not validate_placement(x, y, sc.rack_w, sc.rack_d, self.state.polygon, p.door_side, sc.door, sc.room_w, sc.room_h):
            logger.debug("rack %d: (%.1f, %.1f) rejected", index, x, y)
            return False

        racks = list(self.state.racks)
        racks[index] = racks[index].moved(x, y)
        self.state.racks = racks
        self._refresh()
        return True

    # --- AC units ---

    def drop_asset(self, asset_type: str, x: float, y: float) -> Optional[str]:
        """Create an AC unit from a palette drop at room point (x, y); returns its id."""
        if self.state.exporting or asset_type != AC_ASSET:
            return None
        sc = self.scene
        w, h = (d * sc.scale for d in acu.DEFAULT_AC_SIZE)
        snap = self._snap(x, y, w, h)

        provisional = acu.ACUnit(id=self._next_id(), side=snap.side, offset=snap.offset, width=w, height=h)
        placed = acu.resolve_placement(provisional, snap, self.state.polygon, sc.room_w, sc.room_h, self.state.params.door_side, sc.door)
        if placed is None:
            return None

        self.state.ac_units = self.state.ac_units + [placed]
        self.state.selected_ac = placed.id
        self._refresh()
        return placed.id

    def drag_ac(self, ac_id: str, x: float, y: float) -> bool:
        if self.state.exporting:
            return False
        ac = acu.find_ac(self.state.ac_units, ac_id)
        if ac is None:
            return False
        sc = self.scene
        snap = self._snap(x, y, ac.width, ac.height)

        updated = acu.resolve_drag(self.state.ac_units, ac, snap, self.state.polygon, sc.room_w, sc.room_h, self.state.params.door_side, sc.door)
        if updated == self.state.ac_units:
            return False
        self.state.ac_units = updated
        self._refresh()
        return True

    def resize_ac(self, ac_id: str, width: float, height: float) -> bool:
        """Resize to a physical width/height."""
        if acu.find_ac(self.state.ac_units, ac_id) is None:
            return False
        scale = self.scene.scale
        updated = acu.resize_ac(self.state.ac_units, ac_id, width * scale, height * scale)
        changed = updated != self.state.ac_units
        self.state.ac_units = updated
        self._refresh()
        return changed

    def delete_ac(self, ac_id: str) -> bool:
        if acu.find_ac(self.state.ac_units, ac_id) is None:
            return False
        self.state.ac_units = acu.delete_ac(self.state.ac_units, ac_id)
        if self.state.selected_ac == ac_id:
            self.state.selected_ac = None
        self._refresh()
        return True

    def select_ac(self, ac_id: Optional[str]) -> bool:
        if ac_id is not None and acu.find_ac(self.state.ac_units, ac_id) is None:
            return False
        if ac_id == self.state.selected_ac:
            return False
        self.state.selected_ac = ac_id
        self._refresh()
        return True

    # --- export lock ---

    def begin_export(self) -> None:
        self.state.exports += 1

    def end_export(self) -> None:
        self.state.exports = max(0, self.state.exports - 1)
