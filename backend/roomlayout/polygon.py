# roomlayout/polygon.py
"""
Room outline model: an ordered, implicitly closed list of (x, y) vertices in
room pixel units. All edit helpers return a new list and never mutate their input.
"""
from typing import List, Sequence, Tuple

from shapely.geometry import MultiPoint, Polygon

Point = Tuple[float, float]

MIN_VERTICES = 3

DEFAULT_OUTLINE: List[Point] = [(0.0, 0.0), (60.0, 0.0), (60.0, 30.0), (0.0, 30.0)]


def rectangle(room_w: float, room_h: float) -> List[Point]:
    return [(0.0, 0.0), (float(room_w), 0.0), (float(room_w), float(room_h)), (0.0, float(room_h))]


def scale_polygon(points: Sequence[Point], target_w: float, target_h: float) -> List[Point]:
    """
    Stretch the outline so its bounding box becomes exactly [0,target_w] x [0,target_h].
    X and Y are scaled independently, so the aspect ratio is not preserved.
    """
    if not points:
        return []
    min_x, min_y, max_x, max_y = MultiPoint(list(points)).bounds

    old_w = (max_x - min_x) or 1
    old_h = (max_y - min_y) or 1

    scale_x = target_w / old_w
    scale_y = target_h / old_h

    return [((x - min_x) * scale_x, (y - min_y) * scale_y) for x, y in points]


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Ray-casting parity test. Horizontal edges fall back to a divisor of 1."""
    px, py = point
    inside = False
    n = len(polygon)
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if (yi > py) != (yj > py):
            denom = (yj - yi) or 1
            if px < (xj - xi) * (py - yi) / denom + xi:
                inside = not inside
        j = i
    return inside


def box_inside_polygon(x: float, y: float, w: float, h: float, polygon: Sequence[Point]) -> bool:
    # Corner test only: a concave notch between two corners is not detected.
    return (
        point_in_polygon((x, y), polygon)
        and point_in_polygon((x + w, y), polygon)
        and point_in_polygon((x, y + h), polygon)
        and point_in_polygon((x + w, y + h), polygon)
    )


def clamp_point(x: float, y: float, room_w: float, room_h: float) -> Point:
    return (max(0.0, min(room_w, x)), max(0.0, min(room_h, y)))


def move_point(polygon: Sequence[Point], index: int, x: float, y: float, room_w: float, room_h: float) -> List[Point]:
    target = clamp_point(x, y, room_w, room_h)
    return [target if i == index else p for i, p in enumerate(polygon)]


def insert_point(polygon: Sequence[Point], index: int) -> List[Point]:
    """Insert the midpoint of edge (index, index+1) right after `index`."""
    nxt = (index + 1) % len(polygon)
    x1, y1 = polygon[index]
    x2, y2 = polygon[nxt]
    out = list(polygon)
    out.insert(index + 1, ((x1 + x2) / 2, (y1 + y2) / 2))
    return out


def remove_point(polygon: Sequence[Point], index: int) -> List[Point]:
    if len(polygon) <= MIN_VERTICES:
        return list(polygon)
    return [p for i, p in enumerate(polygon) if i != index]


def polygon_area(polygon: Sequence[Point]) -> float:
    if len(polygon) < MIN_VERTICES:
        return 0.0
    return Polygon(polygon).area


def polygon_is_simple(polygon: Sequence[Point]) -> bool:
    """True when the outline does not cross itself. Informational only."""
    if len(polygon) < MIN_VERTICES:
        return False
    return Polygon(polygon).is_valid
