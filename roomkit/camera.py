from __future__ import annotations
import logging
from typing import Optional, Tuple

from .config import RoomConfig
from .models import Vec3
from .utils import clamp

log = logging.getLogger(__name__)


def clamp_pan(target: Vec3, position: Vec3, room: RoomConfig) -> Tuple[Vec3, Vec3]:
    """Keep the look-target inside the pan envelope; the camera follows by the same delta."""
    tx, ty, tz = target
    nx = clamp(tx, -room.pan_x, room.pan_x)
    nz = clamp(tz, -room.pan_z, room.pan_z)
    dx, dz = nx - tx, nz - tz
    if dx == 0.0 and dz == 0.0:
        return target, position
    log.debug("pan clamped by (%.3f, %.3f)", dx, dz)
    px, py, pz = position
    return (nx, ty, nz), (px + dx, py, pz + dz)


class CameraRig:
    """Orthographic pan-only camera: look-target, eye position and zoom."""

    def __init__(self, room: RoomConfig, zoom: float = 120.0,
                 position: Optional[Vec3] = None, target: Optional[Vec3] = None):
        self.room = room
        self.position: Vec3 = (7.0, 7.0, 7.0) if position is None else tuple(map(float, position))
        self.target: Vec3 = (0.0, 0.0, 0.0) if target is None else tuple(map(float, target))
        self.zoom = clamp(zoom, room.zoom_min, room.zoom_max)
        self.pan_enabled = True

    def pan_by(self, dx: float, dz: float) -> bool:
        if not self.pan_enabled:
            return False
        tx, ty, tz = self.target
        px, py, pz = self.position
        self.target = (tx + dx, ty, tz + dz)
        self.position = (px + dx, py, pz + dz)
        return True

    def zoom_by(self, sign: int) -> float:
        r = self.room
        self.zoom = clamp(self.zoom + sign * r.zoom_step, r.zoom_min, r.zoom_max)
        return self.zoom

    def tick(self):
        self.target, self.position = clamp_pan(self.target, self.position, self.room)
