# roomlayout/doors.py
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from roomlayout.polygon import MIN_VERTICES, Point

# Door opening and leaf length, in physical units
DOOR_WIDTH_UNITS = 3
DOOR_LEAF_UNITS = 3


@dataclass(frozen=True)
class DoorSpec:
    width: float
    leaf: float

    @classmethod
    def for_scale(cls, scale: float) -> "DoorSpec":
        return cls(width=DOOR_WIDTH_UNITS * scale, leaf=DOOR_LEAF_UNITS * scale)


@dataclass(frozen=True)
class DoorGeometry:
    gap_start: Point
    gap_end: Point
    leaf: Tuple[float, float, float, float]
    anchor: Point
    edge_index: int

    @property
    def gap_mid(self) -> Point:
        return ((self.gap_start[0] + self.gap_end[0]) / 2, (self.gap_start[1] + self.gap_end[1]) / 2)


def _side_target(door_side: str, room_w: float, room_h: float) -> Point:
    cx, cy = room_w / 2, room_h / 2
    return {
        "top": (cx, 0.0),
        "bottom": (cx, room_h),
        "left": (0.0, cy),
        "right": (room_w, cy),
    }.get(door_side, (cx, cy))


def compute_door_geometry(polygon: Sequence[Point], door_side: str, door: DoorSpec, room_w: float, room_h: float) -> Optional[DoorGeometry]:
    """
    Anchor the door on the polygon edge whose midpoint is closest to the
    middle of the requested side of the room's bounding rectangle.

    The gap is `door.width` long, centred on that edge midpoint and running
    along the edge; the leaf starts at the gap start and points a quarter
    turn counter-clockwise from the edge direction. Returns None for an
    invalid (< 3 vertex) outline.
    """
    if not polygon or len(polygon) < MIN_VERTICES:
        return None

    tx, ty = _side_target(door_side, room_w, room_h)

    best_idx, best_dist = 0, None
    n = len(polygon)
    for i in range(n):
        x1, y1 = polygon[i]
        x2, y2 = polygon[(i + 1) % n]
        d = math.hypot((x1 + x2) / 2 - tx, (y1 + y2) / 2 - ty)
        if best_dist is None or d < best_dist:
            best_idx, best_dist = i, d

    x1, y1 = polygon[best_idx]
    x2, y2 = polygon[(best_idx + 1) % n]
    mx, my = (x1 + x2) / 2, (y1 + y2) / 2

    angle = math.atan2(y2 - y1, x2 - x1)
    half = door.width / 2
    gx, gy = half * math.cos(angle), half * math.sin(angle)

    gap_start = (mx - gx, my - gy)
    gap_end = (mx + gx, my + gy)

    leaf_angle = angle - math.pi / 2
    leaf = (
        gap_start[0],
        gap_start[1],
        gap_start[0] + door.leaf * math.cos(leaf_angle),
        gap_start[1] + door.leaf * math.sin(leaf_angle),
    )

    return DoorGeometry(gap_start=gap_start, gap_end=gap_end, leaf=leaf, anchor=(mx, my), edge_index=best_idx)


def is_in_door_swing(x: float, y: float, w: float, h: float, door_side: str, door: DoorSpec, room_w: float, room_h: float, polygon: Sequence[Point]) -> bool:
    # Circular keep-out around the gap midpoint, radius max(w, h) of the box being tested.
    g = compute_door_geometry(polygon, door_side, door, room_w, room_h)
    if g is None:
        return False
    gx, gy = g.gap_mid
    return math.hypot(x + w / 2 - gx, y + h / 2 - gy) < max(w, h)
