from .utils import quantize, clamp, clamp_snap, damp
from .models import Item, ItemProps, WallSide, DomainKind, Surface, Direction, FloorDomain, WallDomain
from .config import RoomConfig, StepPreset, PRESETS, ConfigurationError, preset
from .catalog import CATALOG, TypeSpec, SupportTop, UnknownItemType, spec_for
from .stacking import resting_height, support_top
from .placement import PlacementController, wall_rotation
from .state import ItemCollection, RoomState
from .drag import DragSession, Idle, Armed
from .camera import CameraRig, clamp_pan
from .smoothing import RenderedTransform, damped_approach
from .editor import RoomEditor

__all__ = [
    "quantize", "clamp", "clamp_snap", "damp",
    "Item", "ItemProps", "WallSide", "DomainKind", "Surface", "Direction", "FloorDomain", "WallDomain",
    "RoomConfig", "StepPreset", "PRESETS", "ConfigurationError", "preset",
    "CATALOG", "TypeSpec", "SupportTop", "UnknownItemType", "spec_for",
    "resting_height", "support_top", "PlacementController", "wall_rotation",
    "ItemCollection", "RoomState", "DragSession", "Idle", "Armed",
    "CameraRig", "clamp_pan", "RenderedTransform", "damped_approach", "RoomEditor",
]
