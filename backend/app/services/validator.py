from typing import Dict, Any, Tuple, List

from roomlayout.editor import DesignParams, Scene
from roomlayout.polygon import box_inside_polygon

MAX_RACKS = 50
MIN_AC_UNITS = 0.2  # smallest AC side the control panel accepts, physical units

def _rects_overlap(r1, r2) -> bool:
    x1, y1, w1, h1 = r1
    x2, y2, w2, h2 = r2
    # No overlap if one is completely to the left/right or above/below the other
    if x1 + w1 <= x2: return False
    if x2 + w2 <= x1: return False
    if y1 + h1 <= y2: return False
    if y2 + h2 <= y1: return False
    return True

def validate_params(current: DesignParams, changes: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """Range checks on a parameter update, against the parameters it would produce.
    Room width/length are not checked here: the engine clamps them."""
    errors: List[str] = []

    unknown = sorted(set(changes) - set(DesignParams.field_names()))
    for name in unknown:
        errors.append(f'Unknown parameter "{name}".')
    if unknown:
        return (False, errors)

    merged = {name: changes.get(name, getattr(current, name)) for name in DesignParams.field_names()}

    if not 1 <= merged["num_racks"] <= MAX_RACKS:
        errors.append(f"Number of racks must be between 1 and {MAX_RACKS}.")
    if not 1 <= merged["num_rows"] <= max(merged["num_racks"], 1):
        errors.append("Number of rows must be between 1 and the number of racks.")
    for key in ("rack_width", "rack_depth", "cable_manager_width"):
        if merged[key] <= 0:
            errors.append(f"{key.replace('_', ' ').capitalize()} must be positive.")
    if not 0 <= merged["door_offset"] <= 1:
        errors.append("Door offset must be within [0, 1].")

    return (len(errors) == 0, errors)

def validate_ac_size(width: float, height: float) -> Tuple[bool, List[str]]:
    errors: List[str] = []
    if width < MIN_AC_UNITS or height < MIN_AC_UNITS:
        errors.append(f"AC unit sides must be at least {MIN_AC_UNITS}.")
    return (len(errors) == 0, errors)

def layout_warnings(scene: Scene) -> List[str]:
    """Soft checks on a committed layout. Resizing an AC unit is not re-validated,
    so this is where an out-of-room or overlapping unit shows up."""
    warnings: List[str] = []

    for box in scene.ac_boxes:
        if not box_inside_polygon(box.x, box.y, box.unit.width, box.unit.height, scene.polygon):
            warnings.append(f"AC unit {box.unit.id} extends outside the room.")

    for box in scene.ac_boxes:
        ac_rect = (box.x, box.y, box.unit.width, box.unit.height)
        for rack in scene.racks:
            if _rects_overlap(ac_rect, (rack.x, rack.y, scene.rack_w, scene.rack_d)):
                warnings.append(f"AC unit {box.unit.id} overlaps {rack.label.replace(chr(10), ' ')}.")

    return warnings
