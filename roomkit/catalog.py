from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

from .models import ItemProps, WallSide, WoodTone


class UnknownItemType(KeyError):
    pass


@dataclass(frozen=True)
class SupportTop:
    """Top surface of a support at scale 1: height above origin and half extents."""
    top_offset: float
    half_x: float
    half_z: float


@dataclass(frozen=True)
class TypeSpec:
    name: str
    support: Optional[SupportTop] = None
    base_offset: Optional[float] = None   # set => stackable
    default_wall: Optional[str] = None    # set => wall-mounted
    default_props: ItemProps = ItemProps()

    @property
    def is_wall(self) -> bool:
        return self.default_wall is not None

    @property
    def is_support(self) -> bool:
        return self.support is not None

    @property
    def is_stackable(self) -> bool:
        return self.base_offset is not None


CATALOG: Dict[str, TypeSpec] = {
    "bed":     TypeSpec("bed", default_props=ItemProps(bed_sheet="#C7D6E8")),
    "desk":    TypeSpec("desk", support=SupportTop(0.62 + 0.03, 1.3 / 2, 0.6 / 2),
                        default_props=ItemProps(wood=WoodTone.MID)),
    "dresser": TypeSpec("dresser", support=SupportTop(0.9, 1.0 / 2, 0.45 / 2),
                        default_props=ItemProps(wood=WoodTone.MID)),
    "chair":   TypeSpec("chair", default_props=ItemProps(wood=WoodTone.MID)),
    "rug":     TypeSpec("rug", default_props=ItemProps(rug_w=1.6, rug_d=1.2, rug_color="#C2A6A0")),
    "tv":      TypeSpec("tv", base_offset=0.11),
    "lamp":    TypeSpec("lamp", base_offset=0.0),
    "plant":   TypeSpec("plant", base_offset=0.03),
    "trash":   TypeSpec("trash", base_offset=0.0),
    "window":  TypeSpec("window", default_wall=WallSide.BACK),
    "frame":   TypeSpec("frame", default_wall=WallSide.LEFT),
    "mirror":  TypeSpec("mirror", default_wall=WallSide.BACK),
}

# plan view footprint (w, d) in metres at scale 1
FOOTPRINTS: Dict[str, tuple] = {
    "bed": (1.2, 2.0), "desk": (1.3, 0.6), "dresser": (1.0, 0.45), "chair": (0.45, 0.45),
    "rug": (1.6, 1.2), "tv": (0.8, 0.12), "lamp": (0.3, 0.3), "plant": (0.3, 0.3),
    "trash": (0.28, 0.28), "window": (1.0, 0.05), "frame": (0.6, 0.05), "mirror": (0.5, 0.05),
}


def spec_for(item_type: str) -> TypeSpec:
    try:
        return CATALOG[item_type]
    except KeyError:
        raise UnknownItemType(item_type) from None
