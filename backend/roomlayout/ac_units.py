# roomlayout/ac_units.py
"""
AC unit placement.

AC units always hug a wall and are stored as (side, offset). A proposed
placement is checked against the room outline and the door swing; when it is
rejected the unit slides along its *current* wall looking for the first valid
offset, and when that fails too the placement is dropped.
"""
import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from roomlayout.doors import DoorSpec, is_in_door_swing
from roomlayout.polygon import Point, box_inside_polygon
from roomlayout.walls import WallSnap, wall_to_pixel

logger = logging.getLogger(__name__)

FALLBACK_STEPS = 100
MIN_AC_PX = 16

# Size of a unit dropped from the palette, in physical units
DEFAULT_AC_SIZE = (3, 1)


@dataclass(frozen=True)
class ACUnit:
    id: str
    side: str
    offset: float
    width: float
    height: float


def ac_pixel_position(ac: ACUnit, room_w: float, room_h: float) -> Tuple[float, float]:
    return wall_to_pixel(ac.side, ac.offset, ac.width, ac.height, room_w, room_h)


def _placement_ok(ac: ACUnit, polygon, room_w, room_h, door_side, door) -> bool:
    x, y = ac_pixel_position(ac, room_w, room_h)
    if not box_inside_polygon(x, y, ac.width, ac.height, polygon):
        return False
    return not is_in_door_swing(x, y, ac.width, ac.height, door_side, door, room_w, room_h, polygon)


def validate_snap(snap: WallSnap, ac: ACUnit, polygon: Sequence[Point], room_w: float, room_h: float, door_side: str, door: DoorSpec) -> bool:
    candidate = replace(ac, side=snap.side, offset=snap.offset)
    return _placement_ok(candidate, polygon, room_w, room_h, door_side, door)


def find_fallback_offset(ac: ACUnit, polygon: Sequence[Point], room_w: float, room_h: float, door_side: str, door: DoorSpec) -> Optional[float]:
    """First valid offset in 0, 1/100, ..., 1 along ac.side, or None."""
    for i in range(FALLBACK_STEPS + 1):
        offset = i / FALLBACK_STEPS
        if _placement_ok(replace(ac, offset=offset), polygon, room_w, room_h, door_side, door):
            return offset
    return None


def resolve_placement(ac: ACUnit, snap: WallSnap, polygon: Sequence[Point], room_w: float, room_h: float, door_side: str, door: DoorSpec) -> Optional[ACUnit]:
    if validate_snap(snap, ac, polygon, room_w, room_h, door_side, door):
        return replace(ac, side=snap.side, offset=snap.offset)

    fallback = find_fallback_offset(ac, polygon, room_w, room_h, door_side, door)
    if fallback is not None:
        logger.debug("AC %s: %s@%.2f rejected, sliding to %s@%.2f", ac.id, snap.side, snap.offset, ac.side, fallback)
        return replace(ac, offset=fallback)

    logger.debug("AC %s: no valid offset on %s wall", ac.id, ac.side)
    return None


def resolve_drag(
    ac_units: List[ACUnit],
    ac: ACUnit,
    snap: WallSnap,
    polygon: Sequence[Point],
    room_w: float,
    room_h: float,
    door_side: str,
    door: DoorSpec,
) -> List[ACUnit]:
    """
    Apply a drag end to the collection.

    1. valid proposal: commit side and offset
    2. otherwise the first valid offset on the unit's current side (side kept)
    3. otherwise the collection is returned as is
    """
    resolved = resolve_placement(ac, snap, polygon, room_w, room_h, door_side, door)
    if resolved is None:
        return ac_units
    return [
        replace(u, side=resolved.side, offset=resolved.offset) if u.id == ac.id else u
        for u in ac_units
    ]


def resize_ac(ac_units: List[ACUnit], ac_id: str, new_w: float, new_h: float) -> List[ACUnit]:
    # Containment is not re-checked here; the next drag re-validates.
    return [
        replace(u, width=max(MIN_AC_PX, new_w), height=max(MIN_AC_PX, new_h)) if u.id == ac_id else u
        for u in ac_units
    ]


def delete_ac(ac_units: List[ACUnit], ac_id: str) -> List[ACUnit]:
    return [u for u in ac_units if u.id != ac_id]


def find_ac(ac_units: Sequence[ACUnit], ac_id: str) -> Optional[ACUnit]:
    return next((u for u in ac_units if u.id == ac_id), None)
