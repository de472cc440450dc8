from __future__ import annotations
import logging
import math
from typing import Iterable, Optional, Tuple

from PySide6.QtCore import QPointF
from PySide6.QtGui import QTransform

from .catalog import spec_for
from .models import Item

log = logging.getLogger(__name__)

FLOOR_Y = 0.0
STACK_EPS = 0.001   # keeps a resting base off the support surface


def support_top(sup: Item) -> Optional[Tuple[float, float, float]]:
    """(top height, half_x, half_z) of a support at its current scale, or None."""
    spec = spec_for(sup.type).support
    if spec is None:
        return None
    s = sup.scale
    return sup.y + spec.top_offset * s, spec.half_x * s, spec.half_z * s


def inside_support_top(x: float, z: float, sup: Item, hx: float, hz: float) -> bool:
    # into the support's local frame: translate, then undo its yaw
    to_local = QTransform().rotate(-math.degrees(sup.rotation_y))
    local = to_local.map(QPointF(x - sup.x, z - sup.z))
    return abs(local.x()) <= hx and abs(local.y()) <= hz


def resolve_top(items: Iterable[Item], x: float, z: float, exclude_id: Optional[str] = None) -> Optional[float]:
    best: Optional[float] = None
    for sup in items:
        if sup.id == exclude_id:
            continue
        top = support_top(sup)
        if top is None:
            continue
        top_y, hx, hz = top
        if inside_support_top(x, z, sup, hx, hz) and (best is None or top_y > best):
            best = top_y
    return best


def resting_height(items: Iterable[Item], item: Item, x: float, z: float,
                   eps: float = STACK_EPS) -> float:
    """Height `item` rests at when placed at (x, z); floor unless a support is underneath.

    Pure: `items` is not modified, and only the item's own type and scale are read.
    """
    spec = spec_for(item.type)
    if not spec.is_stackable:
        return FLOOR_Y
    top = resolve_top(items, x, z, exclude_id=item.id)
    if top is None:
        return FLOOR_Y
    log.debug("%s rests on support top %.3f", item.id, top)
    return top - spec.base_offset * item.scale + eps
