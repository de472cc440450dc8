from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .models import DomainKind, Item, Vec3
from .placement import PlacementController
from .state import ItemCollection

log = logging.getLogger(__name__)

# which of (x, y, z) a pointer may drive on each surface
_FREE_AXES = {
    DomainKind.FLOOR:     (True, False, True),
    DomainKind.BACK_WALL: (True, True, False),
    DomainKind.LEFT_WALL: (False, True, True),
}


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Armed:
    item_id: str
    domain: str
    offset: Vec3   # item free-axis coords minus the grab hit point


DragState = Union[Idle, Armed]
IDLE = Idle()


class DragSession:
    """Pointer drag state machine: Idle <-> Armed(item, domain, grab offset).

    Pan input is off exactly while Armed; `on_pan_changed` is told on every
    edge. Release and "missed" always end in Idle.
    """

    def __init__(self, placement: PlacementController,
                 on_pan_changed: Optional[Callable[[bool], None]] = None):
        self.placement = placement
        self.on_pan_changed = on_pan_changed
        self.state: DragState = IDLE

    @property
    def active(self) -> bool:
        return isinstance(self.state, Armed)

    @property
    def pan_enabled(self) -> bool:
        return not self.active

    @property
    def item_id(self) -> Optional[str]:
        return self.state.item_id if isinstance(self.state, Armed) else None

    def press(self, item: Item, hit: Vec3):
        domain = self.placement.domain_for(item).kind
        mask = _FREE_AXES[domain]
        offset = tuple((p - h) if free else 0.0
                       for p, h, free in zip(item.position, hit, mask))
        was_active = self.active
        if was_active:
            # re-armed without a release in between: the new item wins
            log.debug("drag re-armed from %s to %s", self.state.item_id, item.id)
        self.state = Armed(item.id, domain, offset)
        log.debug("drag armed: %s on %s, offset %s", item.id, domain, offset)
        if not was_active:
            self._pan(False)

    def move(self, items: ItemCollection, surface: str, hit: Vec3) -> ItemCollection:
        """Apply a pointer move; returns the (possibly unchanged) collection."""
        st = self.state
        if not isinstance(st, Armed):
            return items
        if surface != st.domain:
            return items
        item = items.get(st.item_id)
        if item is None:
            log.info("dragged item %s is gone, ending drag", st.item_id)
            self.release()
            return items
        ox, oy, oz = st.offset
        hx, hy, hz = hit
        candidate = (hx + ox, hy + oy, hz + oz)
        return items.replaced(self.placement.constrain(item, candidate, items))

    def release(self):
        was_active = self.active
        self.state = IDLE
        if was_active:
            log.debug("drag released")
        # pan is re-enabled on every release, armed or not
        self._pan(True)

    def missed(self):
        self.release()

    def check(self, items: ItemCollection) -> bool:
        """Drop a session whose item no longer exists. True if it was dropped."""
        st = self.state
        if isinstance(st, Armed) and st.item_id not in items:
            log.info("dragged item %s is gone, ending drag", st.item_id)
            self.release()
            return True
        return False

    def _pan(self, enabled: bool):
        if self.on_pan_changed:
            self.on_pan_changed(enabled)
