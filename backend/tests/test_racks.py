import pytest

from roomlayout.doors import DoorSpec
from roomlayout.polygon import rectangle
from roomlayout.racks import (
    ROW_GAP,
    Rack,
    auto_pack,
    cable_manager_strips,
    snap_to_grid,
    validate_placement,
)

W, H = 600, 375
ROOM = rectangle(W, H)
DOOR = DoorSpec.for_scale(15)
RACK_W, RACK_D = 30, 60  # 2 x 4 ft
CM = 3  # 0.2 ft


def pack(num_racks, num_rows, polygon=ROOM, cable_managers=False, door_side="top"):
    return auto_pack(num_racks, num_rows, W, H, RACK_W, RACK_D, cable_managers, CM, polygon, door_side, DOOR)


def test_single_row_is_centred():
    racks = pack(4, 1)
    assert [r.x for r in racks] == [240, 270, 300, 330]
    assert all(r.y == 157.5 for r in racks)
    assert [r.label for r in racks] == ["Rack\n1", "Rack\n2", "Rack\n3", "Rack\n4"]


def test_cable_managers_widen_the_row():
    racks = pack(4, 1, cable_managers=True)
    assert [r.x for r in racks] == pytest.approx([235.5, 268.5, 301.5, 334.5])


def test_last_row_takes_the_remainder():
    racks = pack(5, 2)
    start_y = (H - (2 * RACK_D + ROW_GAP)) / 2
    assert [(r.x, r.y) for r in racks] == [
        (255, start_y), (285, start_y), (315, start_y),
        (270, start_y + RACK_D + ROW_GAP), (300, start_y + RACK_D + ROW_GAP),
    ]


def test_slots_outside_the_outline_are_skipped():
    narrow = [(0, 0), (290, 0), (290, 375), (0, 375)]
    racks = pack(4, 1, polygon=narrow)
    assert racks == [Rack(240, 157.5, "Rack\n1")]


def test_slots_in_the_door_swing_are_skipped_and_labels_stay_sequential():
    # Top wall pulled down to y=150, so the door sits right above the middle racks
    poly = [(0, 150), (600, 150), (600, 375), (0, 375)]
    racks = pack(5, 1, polygon=poly)
    assert [r.x for r in racks] == [225, 345]
    assert [r.label for r in racks] == ["Rack\n1", "Rack\n2"]


def test_auto_pack_is_deterministic():
    assert pack(7, 3) == pack(7, 3)


def test_auto_pack_with_no_racks_or_rows():
    assert pack(0, 1) == []
    assert pack(4, 0) == []


def test_more_rows_than_needed_leaves_empty_rows():
    # ceil(5/4) = 2 per row; the request is met in the third row and the last row would get -1
    racks = pack(5, 4, door_side="bottom")
    assert len(racks) == 5
    assert racks[-1].label == "Rack\n5"


def test_snap_to_grid_uses_first_rack_as_anchor():
    racks = pack(4, 1)
    assert snap_to_grid(2, racks, RACK_W, RACK_D, False, CM, 4, 1) == (300, 157.5)

    drifted = [racks[0].moved(100, 100)] + racks[1:]
    assert snap_to_grid(1, drifted, RACK_W, RACK_D, False, CM, 4, 1) == (130, 100)


def test_snap_to_grid_rows_and_cable_managers():
    racks = [Rack(10, 20, "Rack\n1")]
    x, y = snap_to_grid(3, racks, RACK_W, RACK_D, True, CM, 4, 2)
    assert x == pytest.approx(10 + RACK_W + CM)
    assert y == 20 + RACK_D + ROW_GAP


def test_snap_to_grid_without_racks():
    assert snap_to_grid(3, [], RACK_W, RACK_D, False, CM, 4, 1) == (0.0, 0.0)


def test_validate_placement():
    assert validate_placement(100, 100, RACK_W, RACK_D, ROOM, "top", DOOR, W, H)
    assert not validate_placement(590, 100, RACK_W, RACK_D, ROOM, "top", DOOR, W, H)
    assert not validate_placement(285, 0, RACK_W, RACK_D, ROOM, "top", DOOR, W, H)


def test_cable_manager_strips_between_racks():
    racks = pack(4, 1, cable_managers=True)
    strips = cable_manager_strips(racks, RACK_W, RACK_D, CM)
    assert len(strips) == 3
    assert strips[0] == pytest.approx((235.5 + RACK_W + CM / 2, 157.5, CM, RACK_D))
    assert cable_manager_strips([], RACK_W, RACK_D, CM) == []
