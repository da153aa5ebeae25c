# roomlayout/walls.py
"""
Wall-relative placement.

Objects that hug a wall (door, AC units) are stored symbolically as a wall
side plus a normalized offset in [0, 1]. The offset is measured along the free
travel of the wall (wall length minus object size), so a placement survives
room resizing unchanged.

`wall_to_pixel` turns a symbolic placement into a top-left pixel position;
the snapping helpers go the other way, from an arbitrary point to a side and
offset.
"""
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from roomlayout.polygon import Point

SIDES = ("top", "bottom", "left", "right")


@dataclass(frozen=True)
class WallSnap:
    side: str
    offset: float


@dataclass(frozen=True)
class EdgeSnap:
    edge_index: int
    t: float
    point: Point
    distance: float


def wall_to_pixel(side: str, offset: float, width: float, height: float, room_w: float, room_h: float) -> Tuple[float, float]:
    x, y = 0.0, 0.0
    if side == "top":
        x = offset * (room_w - width)
        y = 0.0
    elif side == "bottom":
        x = offset * (room_w - width)
        y = room_h - height
    elif side == "left":
        x = 0.0
        y = offset * (room_h - height)
    elif side == "right":
        x = room_w - width
        y = offset * (room_h - height)
    return (x, y)


def snap_to_nearest_edge(point: Point, obj_w: float, obj_h: float, polygon: Sequence[Point]) -> Optional[EdgeSnap]:
    """
    Project `point` onto every polygon edge (clamped to the segment) and keep
    the closest projection. Ties keep the earlier edge.

    `obj_w`/`obj_h` are accepted for call-site symmetry with the codec; the
    projection uses the raw point.
    """
    px, py = point
    best: Optional[EdgeSnap] = None
    n = len(polygon)
    for i in range(n):
        x1, y1 = polygon[i]
        x2, y2 = polygon[(i + 1) % n]
        vx, vy = x2 - x1, y2 - y1
        len2 = (vx * vx + vy * vy) or 1
        t = ((px - x1) * vx + (py - y1) * vy) / len2
        t = max(0.0, min(1.0, t))
        ex, ey = x1 + vx * t, y1 + vy * t
        d = math.hypot(px - ex, py - ey)
        if best is None or d < best.distance:
            best = EdgeSnap(edge_index=i, t=t, point=(ex, ey), distance=d)
    return best


def classify_side(polygon: Sequence[Point], snap: EdgeSnap, room_w: float, room_h: float) -> str:
    """Reduce the winning edge to one of the four canonical wall sides."""
    x1, y1 = polygon[snap.edge_index]
    x2, y2 = polygon[(snap.edge_index + 1) % len(polygon)]
    ex, ey = snap.point
    if abs(x2 - x1) >= abs(y2 - y1):
        return "top" if ey < room_h / 2 else "bottom"
    return "left" if ex < room_w / 2 else "right"


def snap_point_to_wall(point: Point, obj_w: float, obj_h: float, polygon: Sequence[Point], room_w: float, room_h: float) -> Optional[WallSnap]:
    snap = snap_to_nearest_edge(point, obj_w, obj_h, polygon)
    if snap is None:
        return None
    return WallSnap(side=classify_side(polygon, snap, room_w, room_h), offset=snap.t)


def snap_to_wall(px: float, py: float, w: float, h: float, room_w: float, room_h: float) -> WallSnap:
    """Rectangle-only variant: nearest of the four room walls by raw distance."""
    dists = [
        ("top", py),
        ("bottom", room_h - py - h),
        ("left", px),
        ("right", room_w - px - w),
    ]
    side = min(dists, key=lambda d: d[1])[0]

    if side in ("top", "bottom"):
        offset = px / ((room_w - w) or 1)
    else:
        offset = py / ((room_h - h) or 1)

    return WallSnap(side=side, offset=max(0.0, min(1.0, offset)))
