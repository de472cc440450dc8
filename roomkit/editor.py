from __future__ import annotations
import logging
import random
import time
from dataclasses import replace
from typing import Callable, Dict, Optional

from .camera import CameraRig
from .catalog import spec_for
from .config import RoomConfig, preset
from .drag import DragSession
from .models import Item, Vec3
from .placement import PlacementController
from .smoothing import DAMP_RATE, RenderedTransform, damped_approach
from .stacking import FLOOR_Y, resolve_top, resting_height
from .state import ItemCollection, RoomState
from .utils import THEMES

log = logging.getLogger(__name__)


def _new_id(item_type: str) -> str:
    return f"{item_type}-{int(time.time() * 1000)}-{random.randrange(100000)}"


class RoomEditor:
    """Owns the item snapshot, selection, drag session and camera; all edits go through here."""

    def __init__(self, room: Optional[RoomConfig] = None, preset_name: str = "med",
                 status_cb: Optional[Callable[[str], None]] = None,
                 on_change: Optional[Callable[[], None]] = None,
                 id_factory: Callable[[str], str] = _new_id):
        self.room = room or RoomConfig()
        self.preset_name = preset_name
        self.placement = PlacementController(self.room, preset(preset_name))
        self.state = RoomState(self.placement)
        self.items = ItemCollection()
        self.selected_id: Optional[str] = None
        self.theme_idx = 0
        self.camera = CameraRig(self.room)
        self.drag = DragSession(self.placement, on_pan_changed=self._on_pan_changed)
        self.rendered: Dict[str, RenderedTransform] = {}
        self._status_cb = status_cb
        self.on_change = on_change
        self._new_id = id_factory

    # ---- helpers ----
    @property
    def steps(self):
        return self.placement.steps

    @property
    def selected(self) -> Optional[Item]:
        return self.items.get(self.selected_id)

    @property
    def pan_enabled(self) -> bool:
        return self.drag.pan_enabled

    def _status(self, text: str):
        if self._status_cb:
            self._status_cb(text)

    def _commit(self, items: ItemCollection):
        if items is self.items:
            return
        self.items = items
        if self.on_change:
            self.on_change()

    def _update_selected(self, fn):
        it = self.selected
        if it is None:
            return None
        new = fn(it)
        if new is not it:
            self._commit(self.items.replaced(new))
        return new

    def _on_pan_changed(self, enabled: bool):
        self.camera.pan_enabled = enabled

    # ---- configuration ----
    def set_preset(self, name: str):
        self.placement.steps = preset(name)
        self.preset_name = name
        log.info("step preset -> %s", name)
        self._status(f"Step/Grid: {name}")

    def set_theme(self, idx: int):
        self.theme_idx = idx % len(THEMES)

    def zoom_by(self, sign: int) -> float:
        return self.camera.zoom_by(sign)

    # ---- add / remove ----
    def add_item(self, item_type: str) -> Item:
        item = self.placement.spawn(self._new_id(item_type), item_type, self.items)
        self._commit(self.items.added(item))
        self.selected_id = item.id
        log.info("added %s at %s", item.id, item.position)
        return item

    def remove_selected(self) -> Optional[str]:
        sid = self.selected_id
        if sid is None:
            return None
        self._commit(self.items.removed(sid))
        self.selected_id = None
        log.info("removed %s", sid)
        return sid

    def clear_all(self):
        self._commit(ItemCollection())
        self.selected_id = None

    def select(self, item_id: Optional[str]):
        self.selected_id = item_id if item_id in self.items else None

    # ---- nudge / rotate / scale / props ----
    def move_dir(self, direction: str) -> Optional[Item]:
        return self._update_selected(lambda it: self.placement.nudge(it, direction, self.items))

    def rotate_by(self, sign: int) -> Optional[Item]:
        return self._update_selected(lambda it: self.placement.rotate(it, sign))

    def scale_by(self, sign: int) -> Optional[Item]:
        return self._update_selected(lambda it: self.placement.rescale(it, sign))

    def set_wall(self, side: str) -> Optional[Item]:
        it = self.selected
        if it is None or not spec_for(it.type).is_wall:
            return None
        return self._update_selected(lambda it: self.placement.snap_to_wall(it, side))

    def set_props(self, **attrs) -> Optional[Item]:
        wall = attrs.pop("wall", None)
        out = self._update_selected(lambda it: replace(it, props=replace(it.props, **attrs)))
        if wall is not None and out is not None and spec_for(out.type).is_wall:
            out = self.set_wall(wall)
        return out

    # ---- pointer ----
    def pointer_down(self, item_id: str, hit: Vec3):
        it = self.items.get(item_id)
        if it is None:
            return
        self.selected_id = item_id
        self.drag.press(it, hit)

    def pointer_move(self, surface: str, hit: Vec3):
        self._commit(self.drag.move(self.items, surface, hit))

    def pointer_up(self):
        self.drag.release()

    def pointer_missed(self):
        self.selected_id = None
        self.drag.missed()

    # ---- queries ----
    def resolve_resting_height(self, x: float, z: float, exclude_id: Optional[str] = None) -> float:
        """Preview of where something set down at (x, z) would rest, without committing."""
        it = self.items.get(exclude_id)
        if it is not None:
            return resting_height(self.items, it, x, z, self.room.stack_eps)
        top = resolve_top(self.items, x, z, exclude_id)
        return FLOOR_Y if top is None else top

    # ---- frame ----
    def tick(self, dt: float):
        self.drag.check(self.items)
        self.camera.tick()
        rendered: Dict[str, RenderedTransform] = {}
        for it in self.items:
            cur = self.rendered.get(it.id)
            rendered[it.id] = RenderedTransform.of(it) if cur is None else \
                damped_approach(cur, it, DAMP_RATE, dt)
        self.rendered = rendered

    # ---- persistence ----
    def save(self) -> Dict:
        return self.state.serialize(self.items, self.theme_idx, self.camera.zoom)

    def load(self, data: Dict):
        items, theme, zoom = self.state.deserialize(data)
        self.drag.release()
        self.selected_id = None
        self.rendered = {}
        self._commit(items)
        if theme is not None:
            self.set_theme(theme)
        if zoom is not None:
            self.camera.zoom = zoom
            self.camera.zoom_by(0)
        self._status(f"Loaded {len(items)} items")
