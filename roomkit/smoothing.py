from __future__ import annotations
from dataclasses import dataclass

from .models import Item, Vec3
from .utils import damp

DAMP_RATE = 9.0


@dataclass(frozen=True)
class RenderedTransform:
    position: Vec3
    rotation_y: float
    scale: float

    @classmethod
    def of(cls, item: Item) -> "RenderedTransform":
        return cls(item.position, item.rotation_y, item.scale)


def damped_approach(rendered: RenderedTransform, target: Item,
                    rate: float = DAMP_RATE, dt: float = 1 / 60) -> RenderedTransform:
    """One frame of easing from what is on screen toward the item's logical transform."""
    pos = tuple(damp(c, t, rate, dt) for c, t in zip(rendered.position, target.position))
    return RenderedTransform(pos,
                             damp(rendered.rotation_y, target.rotation_y, rate, dt),
                             damp(rendered.scale, target.scale, rate, dt))
