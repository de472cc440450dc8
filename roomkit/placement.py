from __future__ import annotations
import logging
import math
from dataclasses import replace
from typing import Iterable, Union

from .catalog import spec_for
from .config import RoomConfig, StepPreset
from .models import Direction, FloorDomain, Item, Vec3, WallDomain, WallSide
from .stacking import FLOOR_Y, resting_height
from .utils import clamp, clamp_snap, deg, quantize

log = logging.getLogger(__name__)

Domain = Union[FloorDomain, WallDomain]


def wall_rotation(side: str) -> float:
    return math.pi / 2 if side == WallSide.LEFT else 0.0


class PlacementController:
    """Turns candidate coordinates into transforms that respect the item's domain.

    Floor items: x/z clamped to the room and snapped to `steps.grid`, y on the
    floor or on a support. Wall items: one horizontal axis and the height are
    free (inset from the room corners), the other axis is pinned just in front
    of the wall and the rotation follows the wall.
    """

    def __init__(self, room: RoomConfig, steps: StepPreset):
        self.room = room
        self.steps = steps.validate()

    # ---- domains ----
    def wall_side(self, item: Item) -> str:
        return item.props.wall or spec_for(item.type).default_wall or WallSide.BACK

    def domain_for(self, item: Item) -> Domain:
        if spec_for(item.type).is_wall:
            return WallDomain(self.wall_side(item))
        return FloorDomain()

    def floor_xz(self, x: float, z: float):
        r, g = self.room, self.steps.grid
        return (clamp_snap(x, -r.half_x, r.half_x, g),
                clamp_snap(z, -r.half_z, r.half_z, g))

    def wall_free(self, side: str, v: float) -> float:
        r = self.room
        half = r.half_x if side == WallSide.BACK else r.half_z
        return clamp_snap(v, -half + r.wall_inset, half - r.wall_inset, self.steps.grid)

    def wall_height(self, y: float) -> float:
        return clamp_snap(y, self.room.min_height, self.room.max_height, self.steps.grid_y)

    def wall_position(self, side: str, free: float, y: float) -> Vec3:
        if side == WallSide.BACK:
            return (free, y, self.room.back_front_z)
        return (self.room.left_front_x, y, free)

    # ---- constrained transforms ----
    def constrain(self, item: Item, candidate: Vec3, items: Iterable[Item] = ()) -> Item:
        """Full transform for `item` moved toward `candidate` (only its free axes are read)."""
        cx, cy, cz = candidate
        domain = self.domain_for(item)
        if isinstance(domain, WallDomain):
            side = domain.side
            free = self.wall_free(side, cx if side == WallSide.BACK else cz)
            pos = self.wall_position(side, free, self.wall_height(cy))
            return item.moved(*pos, rotation_y=wall_rotation(side))
        if isinstance(domain, FloorDomain):
            x, z = self.floor_xz(cx, cz)
            return item.moved(x, self.settle(item, x, z, items), z)
        raise TypeError(f"unhandled placement domain {domain!r}")

    def settle(self, item: Item, x: float, z: float, items: Iterable[Item]) -> float:
        if spec_for(item.type).is_stackable:
            return resting_height(items, item, x, z, self.room.stack_eps)
        return FLOOR_Y

    def snap_to_wall(self, item: Item, side: str) -> Item:
        """Seat a wall item on `side`. The free axis survives only if the side is unchanged."""
        if side not in WallSide.ALL:
            raise ValueError(f"unknown wall side {side!r}")
        r = self.room
        same_side = self.wall_side(item) == side
        y = clamp(item.y, r.min_height, r.max_height)
        if side == WallSide.BACK:
            free = clamp(item.x, -r.half_x + r.wall_inset, r.half_x - r.wall_inset) if same_side else 0.0
        else:
            free = clamp(item.z, -r.half_z + r.wall_inset, r.half_z - r.wall_inset) if same_side else 0.0
        return replace(item.moved(*self.wall_position(side, free, y)),
                       rotation_y=wall_rotation(side),
                       props=replace(item.props, wall=side))

    # ---- nudges / rotate / scale ----
    def nudge(self, item: Item, direction: str, items: Iterable[Item] = ()) -> Item:
        if direction not in Direction.ALL:
            raise ValueError(f"unknown direction {direction!r}")
        domain = self.domain_for(item)
        if isinstance(domain, WallDomain):
            g, gy = self.steps.grid, self.steps.grid_y
            dh = {Direction.LEFT: -g, Direction.RIGHT: g}.get(direction, 0.0)
            dy = {Direction.UP: gy, Direction.DOWN: -gy}.get(direction, 0.0)
            if domain.side == WallSide.BACK:
                cand = (item.x + dh, item.y + dy, item.z)
            else:
                # facing the left wall, screen-left runs toward +z
                cand = (item.x, item.y + dy, item.z - dh)
            return self.constrain(item, cand)
        s = self.steps.move
        dx = {Direction.LEFT: -s, Direction.RIGHT: s}.get(direction, 0.0)
        dz = {Direction.UP: -s, Direction.DOWN: s}.get(direction, 0.0)
        return self.constrain(item, (item.x + dx, item.y, item.z + dz), items)

    def rotate(self, item: Item, sign: int) -> Item:
        if spec_for(item.type).is_wall:
            return item
        step = self.steps.rotate
        # lands on the current preset's angular grid even after a preset change
        return replace(item, rotation_y=deg(quantize(item.rotation_deg + sign * step, step)))

    def rescale(self, item: Item, sign: int) -> Item:
        if spec_for(item.type).is_wall:
            return item
        r = self.room
        return replace(item, scale=clamp(item.scale + sign * self.steps.scale, r.scale_min, r.scale_max))

    # ---- spawning ----
    def spawn(self, item_id: str, item_type: str, items: Iterable[Item] = ()) -> Item:
        spec = spec_for(item_type)
        if spec.is_wall:
            side = spec.default_wall
            props = replace(spec.default_props, wall=side)
            return Item(id=item_id, type=item_type,
                        position=self.wall_position(side, 0.0, self.room.spawn_height),
                        rotation_y=wall_rotation(side), scale=1.0, props=props)
        x, z = self.next_floor_slot(items)
        item = Item(id=item_id, type=item_type, position=(x, FLOOR_Y, z), props=spec.default_props)
        return item.moved(x, self.settle(item, x, z, items), z)

    def next_floor_slot(self, items: Iterable[Item]):
        step, r = self.steps.grid, self.room
        used = {(round(it.x / step), round(it.z / step))
                for it in items if not spec_for(it.type).is_wall}
        for iz in range(math.ceil(-r.half_z / step), math.floor(r.half_z / step) + 1):
            for ix in range(math.ceil(-r.half_x / step), math.floor(r.half_x / step) + 1):
                if (ix, iz) not in used:
                    return ix * step, iz * step
        log.info("no free floor slot left, spawning at the origin")
        return 0.0, 0.0
