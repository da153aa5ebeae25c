# roomlayout/racks.py
"""
Rack layout: deterministic row packing, grid snapping and drag validation.

Racks have no identity beyond their list position. Auto-pack rebuilds the whole
list; a drag moves a single entry.
"""
from dataclasses import dataclass, replace
from math import ceil
from typing import List, Sequence, Tuple

from roomlayout.doors import DoorSpec, is_in_door_swing
from roomlayout.polygon import Point, box_inside_polygon

ROW_GAP = 48  # px between rack rows, independent of unit scale


@dataclass(frozen=True)
class Rack:
    x: float
    y: float
    label: str

    def moved(self, x: float, y: float) -> "Rack":
        return replace(self, x=x, y=y)


def rack_label(n: int) -> str:
    return f"Rack\n{n}"


def _pitch(rack_w: float, show_cable_managers: bool, cable_manager_w: float) -> float:
    return rack_w + (cable_manager_w if show_cable_managers else 0)


def validate_placement(x: float, y: float, w: float, h: float, polygon: Sequence[Point], door_side: str, door: DoorSpec, room_w: float, room_h: float) -> bool:
    """Box fully inside the outline and clear of the door swing."""
    if not box_inside_polygon(x, y, w, h, polygon):
        return False
    if is_in_door_swing(x, y, w, h, door_side, door, room_w, room_h, polygon):
        return False
    return True


def auto_pack(
    num_racks: int,
    num_rows: int,
    room_w: float,
    room_h: float,
    rack_w: float,
    rack_d: float,
    show_cable_managers: bool,
    cable_manager_w: float,
    polygon: Sequence[Point],
    door_side: str,
    door: DoorSpec,
) -> List[Rack]:
    """
    Lay racks out in centred rows, row-major.

    Every row but the last holds ceil(num_racks / num_rows) racks; the last row
    takes whatever is left. Slots outside the outline or inside the door swing
    are skipped, so fewer racks than requested may come back.
    """
    if num_racks <= 0 or num_rows <= 0:
        return []

    results: List[Rack] = []
    racks_per_row = ceil(num_racks / num_rows)
    pitch = _pitch(rack_w, show_cable_managers, cable_manager_w)
    gap = cable_manager_w if show_cable_managers else 0

    total_height = num_rows * rack_d + (num_rows - 1) * ROW_GAP
    start_y = max((room_h - total_height) / 2, 0)

    for row in range(num_rows):
        in_row = num_racks - racks_per_row * (num_rows - 1) if row == num_rows - 1 else racks_per_row
        row_width = in_row * rack_w + (in_row - 1) * gap
        start_x = max((room_w - row_width) / 2, 0)
        y = start_y + row * (rack_d + ROW_GAP)

        for col in range(in_row):
            x = start_x + col * pitch
            if not validate_placement(x, y, rack_w, rack_d, polygon, door_side, door, room_w, room_h):
                continue
            results.append(Rack(x=x, y=y, label=rack_label(len(results) + 1)))
            if len(results) == num_racks:
                return results

    return results


def snap_to_grid(
    index: int,
    racks: Sequence[Rack],
    rack_w: float,
    rack_d: float,
    show_cable_managers: bool,
    cable_manager_w: float,
    num_racks: int,
    num_rows: int,
) -> Tuple[float, float]:
    """Grid slot for `index`, measured from racks[0] wherever it currently sits."""
    if not racks:
        return (0.0, 0.0)

    racks_per_row = ceil(num_racks / max(num_rows, 1)) or 1
    col = index % racks_per_row
    row = index // racks_per_row

    first = racks[0]
    x = first.x + col * _pitch(rack_w, show_cable_managers, cable_manager_w)
    y = first.y + row * (rack_d + ROW_GAP)
    return (x, y)


def cable_manager_strips(racks: Sequence[Rack], rack_w: float, rack_d: float, cable_manager_w: float) -> List[Tuple[float, float, float, float]]:
    """(x, y, w, h) of the strip drawn after every rack but the last."""
    return [
        (r.x + rack_w + cable_manager_w / 2, r.y, cable_manager_w, rack_d)
        for r in list(racks)[:-1]
    ]
