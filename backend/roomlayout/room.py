# roomlayout/room.py
from dataclasses import dataclass
from typing import Tuple

# Pixels per physical unit
UNIT_SCALES = {
    "feet": 15,
    "meters": 50,
}

MIN_ROOM = 5
MAX_ROOM = 100

PREVIEW_W = 900
PREVIEW_H = 500


def clamp_room(value: float) -> float:
    """Clamp a user-entered room dimension to [MIN_ROOM, MAX_ROOM]; empty/zero becomes MIN_ROOM."""
    if not value or value < MIN_ROOM:
        return MIN_ROOM
    if value > MAX_ROOM:
        return MAX_ROOM
    return value


def unit_scale(unit: str) -> int:
    return UNIT_SCALES.get(unit, UNIT_SCALES["feet"])


@dataclass
class RoomDimensions:
    unit: str = "feet"
    width: float = 40
    length: float = 25

    @property
    def scale(self) -> int:
        return unit_scale(self.unit)

    @property
    def width_px(self) -> float:
        return clamp_room(self.width) * self.scale

    @property
    def height_px(self) -> float:
        return clamp_room(self.length) * self.scale

    def to_pixels(self, physical: float) -> float:
        return physical * self.scale

    def to_physical(self, px: float) -> float:
        return px / self.scale


@dataclass(frozen=True)
class ViewTransform:
    """Maps room pixels onto the fixed-size preview canvas and back.

    The room is shrunk (never enlarged) to fit the preview and centred in it.
    """

    fit_scale: float
    offset_x: float
    offset_y: float

    @classmethod
    def fit(cls, room_w: float, room_h: float, preview_w: float = PREVIEW_W, preview_h: float = PREVIEW_H) -> "ViewTransform":
        fit_scale = min(preview_w / (room_w or 1), preview_h / (room_h or 1), 1)
        offset_x = (preview_w - room_w * fit_scale) / 2
        offset_y = (preview_h - room_h * fit_scale) / 2
        return cls(fit_scale, offset_x, offset_y)

    def to_room(self, sx: float, sy: float) -> Tuple[float, float]:
        return ((sx - self.offset_x) / self.fit_scale, (sy - self.offset_y) / self.fit_scale)

    def to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return (x * self.fit_scale + self.offset_x, y * self.fit_scale + self.offset_y)
