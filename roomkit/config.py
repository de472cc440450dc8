from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from PySide6.QtCore import QSettings

log = logging.getLogger(__name__)

SETTINGS_ORG = "RoomBuilder"
SETTINGS_APP = "Editor"
DEFAULT_PRESET = "med"


class ConfigurationError(ValueError):
    """Invalid room geometry or grid preset; raised at setup, never per call."""


@dataclass(frozen=True)
class StepPreset:
    name: str
    grid: float      # horizontal quantization
    grid_y: float    # vertical quantization (wall items)
    move: float      # nudge distance for floor items
    rotate: float    # degrees
    scale: float

    def validate(self) -> "StepPreset":
        for attr in ("grid", "grid_y", "move", "rotate", "scale"):
            v = getattr(self, attr)
            if not v > 0:
                raise ConfigurationError(f"preset {self.name!r}: {attr} must be > 0, got {v!r}")
        return self


PRESETS: Dict[str, StepPreset] = {
    "fine":   StepPreset("fine",   grid=0.12, grid_y=0.08, move=0.12, rotate=5.0,  scale=0.02),
    "med":    StepPreset("med",    grid=0.25, grid_y=0.16, move=0.25, rotate=15.0, scale=0.05),
    "coarse": StepPreset("coarse", grid=0.5,  grid_y=0.25, move=0.5,  rotate=30.0, scale=0.1),
}


def preset(name: str) -> StepPreset:
    try:
        return PRESETS[name].validate()
    except KeyError:
        raise ConfigurationError(f"unknown step preset {name!r} (expected one of {sorted(PRESETS)})") from None


@dataclass(frozen=True)
class RoomConfig:
    half_x: float = 3.0
    half_z: float = 3.0
    height: float = 3.0
    wall_thick: float = 0.12
    wall_eps: float = 0.002      # wall items sit this far in front of the wall face
    wall_inset: float = 0.2
    min_height: float = 0.2
    headroom: float = 0.6
    pan_margin: float = 1.0
    stack_eps: float = 0.001
    scale_min: float = 0.3
    scale_max: float = 2.2
    zoom_min: float = 60.0
    zoom_max: float = 200.0
    zoom_step: float = 10.0
    spawn_height: float = 1.2

    def __post_init__(self):
        self.validate()

    def validate(self):
        if not (self.half_x > 0 and self.half_z > 0 and self.height > 0):
            raise ConfigurationError("room half extents and height must be > 0")
        if self.wall_inset >= min(self.half_x, self.half_z):
            raise ConfigurationError("wall inset leaves no room along the wall")
        if not self.min_height < self.max_height:
            raise ConfigurationError(
                f"wall height domain [{self.min_height}, {self.max_height}] is empty")
        if not 0 < self.scale_min <= self.scale_max:
            raise ConfigurationError("scale bounds inverted")
        if not 0 < self.zoom_min <= self.zoom_max:
            raise ConfigurationError("zoom bounds inverted")
        if self.pan_margin < 0 or self.wall_thick < 0 or self.wall_eps < 0:
            raise ConfigurationError("pan margin and wall sizes must be >= 0")

    # derived wall planes
    @property
    def max_height(self) -> float:
        return self.height - self.headroom

    @property
    def back_wall_z(self) -> float:
        return -self.half_z - self.wall_thick / 2

    @property
    def left_wall_x(self) -> float:
        return -self.half_x - self.wall_thick / 2

    @property
    def back_front_z(self) -> float:
        return -self.half_z + self.wall_eps

    @property
    def left_front_x(self) -> float:
        return -self.half_x + self.wall_eps

    @property
    def pan_x(self) -> float:
        return self.half_x + self.pan_margin

    @property
    def pan_z(self) -> float:
        return self.half_z + self.pan_margin


def load_preset_name(settings: Optional[QSettings] = None) -> str:
    st = settings or QSettings(SETTINGS_ORG, SETTINGS_APP)
    name = st.value("step_preset", DEFAULT_PRESET, str)
    if name not in PRESETS:
        log.info("ignoring stored step preset %r", name)
        return DEFAULT_PRESET
    return name


def save_preset_name(name: str, settings: Optional[QSettings] = None):
    preset(name)
    st = settings or QSettings(SETTINGS_ORG, SETTINGS_APP)
    st.setValue("step_preset", name)
