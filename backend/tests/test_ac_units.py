import pytest

from roomlayout.ac_units import (
    ACUnit,
    ac_pixel_position,
    delete_ac,
    find_ac,
    find_fallback_offset,
    resize_ac,
    resolve_drag,
    resolve_placement,
    validate_snap,
)
from roomlayout.doors import DoorSpec, is_in_door_swing
from roomlayout.polygon import box_inside_polygon, rectangle
from roomlayout.walls import WallSnap

W, H = 600, 375
ROOM = rectangle(W, H)
DOOR = DoorSpec.for_scale(15)


def unit(ac_id="ac-1", side="top", offset=0.0, width=45, height=15):
    return ACUnit(id=ac_id, side=side, offset=offset, width=width, height=height)


def brute_force_offsets(ac, polygon, door_side):
    valid = []
    for i in range(1001):
        offset = i / 1000
        x, y = ac_pixel_position(ACUnit(ac.id, ac.side, offset, ac.width, ac.height), W, H)
        if box_inside_polygon(x, y, ac.width, ac.height, polygon) and not is_in_door_swing(
            x, y, ac.width, ac.height, door_side, DOOR, W, H, polygon
        ):
            valid.append(offset)
    return valid


def test_pixel_position_goes_through_wall_codec():
    assert ac_pixel_position(unit(side="left", offset=0.5), W, H) == (0, 180)


def test_validate_snap_checks_outline_and_door():
    ac = unit()
    assert validate_snap(WallSnap("top", 0.1), ac, ROOM, W, H, "top", DOOR)
    # Centred on the top wall, right under the door
    assert not validate_snap(WallSnap("top", 0.5), ac, ROOM, W, H, "top", DOOR)
    # The far walls lie on the parity test's exclusive edges
    assert not validate_snap(WallSnap("right", 0.5), ac, ROOM, W, H, "top", DOOR)


def test_fallback_returns_first_valid_step():
    ac = unit(side="top")
    assert find_fallback_offset(ac, ROOM, W, H, "top", DOOR) == 0.0
    assert find_fallback_offset(unit(side="right"), ROOM, W, H, "top", DOOR) is None


def test_fallback_within_one_step_of_reference():
    # Tall unit on the top wall; the door on the left wall blocks the first stretch
    ac = unit(side="top", width=45, height=200)
    reference = brute_force_offsets(ac, ROOM, "left")
    assert reference
    found = find_fallback_offset(ac, ROOM, W, H, "left", DOOR)
    assert found > 0
    assert found == pytest.approx(reference[0], abs=0.01)


def test_resolve_drag_commits_valid_proposal():
    ac = unit()
    other = unit("ac-2", side="left", offset=0.3)
    out = resolve_drag([ac, other], ac, WallSnap("top", 0.1), ROOM, W, H, "top", DOOR)
    assert out[0].side == "top" and out[0].offset == 0.1
    assert out[1] == other


def test_resolve_drag_falls_back_along_current_wall():
    ac = unit(side="left", offset=0.3)
    out = resolve_drag([ac], ac, WallSnap("right", 0.5), ROOM, W, H, "top", DOOR)
    assert out[0].side == "left"
    assert out[0].offset == 0.0


def test_resolve_drag_keeps_collection_when_nothing_fits():
    ac = unit(side="right", offset=0.2)
    units = [ac, unit("ac-2")]
    assert resolve_drag(units, ac, WallSnap("right", 0.5), ROOM, W, H, "top", DOOR) is units


def test_door_blocking_whole_wall_discards_placement():
    # 10 px of travel along the top wall, all of it inside the door swing
    ac = unit(side="top", width=590, height=15)
    assert resolve_placement(ac, WallSnap("top", 0.5), ROOM, W, H, "top", DOOR) is None
    units = [ac]
    assert resolve_drag(units, ac, WallSnap("top", 0.5), ROOM, W, H, "top", DOOR) is units


def test_resize_clamps_to_minimum_and_skips_validation():
    units = [unit(), unit("ac-2")]
    out = resize_ac(units, "ac-1", 10, 700)
    assert (out[0].width, out[0].height) == (16, 700)
    assert out[1] == units[1]


def test_delete_and_find():
    units = [unit(), unit("ac-2")]
    assert [u.id for u in delete_ac(units, "ac-1")] == ["ac-2"]
    assert delete_ac(units, "nope") == units
    assert find_ac(units, "ac-2") is units[1]
    assert find_ac(units, "nope") is None
