from __future__ import annotations
import logging
from dataclasses import asdict
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .catalog import CATALOG
from .models import Item, ItemProps
from .utils import clamp

log = logging.getLogger(__name__)

SAVE_VERSION = 1


class ItemCollection:
    """Immutable snapshot of the placed items, keyed by id, in insertion order.

    Every mutation returns a new collection, so a reader holding a snapshot
    never sees a half-applied transform.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Item] = ()):
        self._items: Dict[str, Item] = {it.id: it for it in items}

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id) -> bool:
        return item_id in self._items

    def __eq__(self, other) -> bool:
        return isinstance(other, ItemCollection) and list(self) == list(other)

    def __repr__(self) -> str:
        return f"ItemCollection({list(self._items)!r})"

    def get(self, item_id: Optional[str]) -> Optional[Item]:
        if item_id is None:
            return None
        return self._items.get(item_id)

    def ids(self) -> List[str]:
        return list(self._items)

    def added(self, item: Item) -> "ItemCollection":
        return ItemCollection([*self, item])

    def replaced(self, item: Item) -> "ItemCollection":
        if item.id not in self._items:
            log.debug("replace of unknown item %s ignored", item.id)
            return self
        return ItemCollection(item if it.id == item.id else it for it in self)

    def removed(self, item_id: str) -> "ItemCollection":
        return ItemCollection(it for it in self if it.id != item_id)


class RoomState:
    """JSON payload <-> ItemCollection (plus theme and zoom)."""

    def __init__(self, placement):
        self.placement = placement

    def serialize(self, items: ItemCollection, theme_idx: int = 0, zoom: float = 120) -> Dict:
        out: List[Dict] = []
        for it in items:
            props = {k: v for k, v in asdict(it.props).items() if v is not None}
            out.append({
                "id": it.id,
                "type": it.type,
                "position": list(it.position),
                "rotationY": it.rotation_y,
                "scale": it.scale,
                "props": _camel(props),
            })
        return {"version": SAVE_VERSION, "items": out, "themeIdx": int(theme_idx), "zoom": zoom}

    def deserialize(self, data: Dict) -> Tuple[ItemCollection, Optional[int], Optional[float]]:
        if not isinstance(data, dict):
            raise ValueError("save data must be a JSON object")
        raw = data.get("items", [])
        if not isinstance(raw, list):
            raise ValueError("'items' must be a list")
        items: List[Item] = []
        for d in raw:
            try:
                item = self._item_from_dict(d)
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"malformed item {d!r}: {e}") from e
            if item is None:
                continue
            items.append(item)
        theme = data.get("themeIdx")
        zoom = data.get("zoom")
        return (self._settle_floor(items),
                theme if isinstance(theme, int) else None,
                float(zoom) if isinstance(zoom, (int, float)) else None)

    def _item_from_dict(self, d: Dict) -> Optional[Item]:
        kind = d["type"]
        if kind not in CATALOG:
            log.info("skipping item %s of unknown type %r", d.get("id"), kind)
            return None
        x, y, z = (float(v) for v in d["position"])
        props = ItemProps(**_snake(d.get("props") or {}))
        room = self.placement.room
        item = Item(id=str(d["id"]), type=kind, position=(x, y, z),
                    rotation_y=float(d.get("rotationY", 0.0)),
                    scale=clamp(float(d.get("scale", 1.0)), room.scale_min, room.scale_max),
                    props=props)
        if CATALOG[kind].is_wall:
            item = self.placement.snap_to_wall(item, self.placement.wall_side(item))
        return item

    def _settle_floor(self, items: List[Item]) -> ItemCollection:
        """Re-constrain floor items; stackables go last so they settle on seated supports."""
        out = ItemCollection(items)
        floor = [it for it in items if not CATALOG[it.type].is_wall]
        floor.sort(key=lambda it: CATALOG[it.type].is_stackable)
        for it in floor:
            seated = self.placement.constrain(out.get(it.id), it.position, out)
            if seated.position != it.position:
                log.debug("loaded %s moved from %s to %s", it.id, it.position, seated.position)
            out = out.replaced(seated)
        return out


_CAMEL = {"bed_sheet": "bedSheet", "rug_w": "rugW", "rug_d": "rugD", "rug_color": "rugColor"}
_SNAKE = {v: k for k, v in _CAMEL.items()}


def _camel(props: Dict) -> Dict:
    return {_CAMEL.get(k, k): v for k, v in props.items()}


def _snake(props: Dict) -> Dict:
    known = set(ItemProps.__dataclass_fields__)
    out = {}
    for k, v in props.items():
        key = _SNAKE.get(k, k)
        if key in known:
            out[key] = v
    return out
