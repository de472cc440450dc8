from __future__ import annotations
import math
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

Vec3 = Tuple[float, float, float]


class WallSide:
    BACK = "back"
    LEFT = "left"
    ALL = (BACK, LEFT)


class DomainKind:
    FLOOR = "floor"
    BACK_WALL = "back"
    LEFT_WALL = "left"


class Surface:
    """Tracked interaction planes a pointer hit can be reported against."""
    FLOOR = DomainKind.FLOOR
    BACK = DomainKind.BACK_WALL
    LEFT = DomainKind.LEFT_WALL
    ALL = (FLOOR, BACK, LEFT)


class Direction:
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    ALL = (LEFT, RIGHT, UP, DOWN)


class WoodTone:
    LIGHT = "light"
    MID = "mid"
    DARK = "dark"


@dataclass(frozen=True)
class ItemProps:
    bed_sheet: Optional[str] = None
    rug_w: Optional[float] = None
    rug_d: Optional[float] = None
    rug_color: Optional[str] = None
    wood: Optional[str] = None
    wall: Optional[str] = None  # "back" | "left", wall-mounted only


@dataclass(frozen=True)
class Item:
    id: str
    type: str
    position: Vec3 = (0.0, 0.0, 0.0)
    rotation_y: float = 0.0
    scale: float = 1.0
    props: ItemProps = field(default_factory=ItemProps)

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    @property
    def z(self) -> float:
        return self.position[2]

    @property
    def rotation_deg(self) -> float:
        return math.degrees(self.rotation_y)

    def moved(self, x: float, y: float, z: float, **changes) -> "Item":
        return replace(self, position=(float(x), float(y), float(z)), **changes)


# ---- placement domains: one variant per coordinate domain ----
@dataclass(frozen=True)
class FloorDomain:
    kind: str = DomainKind.FLOOR


@dataclass(frozen=True)
class WallDomain:
    side: str = WallSide.BACK

    @property
    def kind(self) -> str:
        return DomainKind.BACK_WALL if self.side == WallSide.BACK else DomainKind.LEFT_WALL
