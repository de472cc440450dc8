from __future__ import annotations
import math
from PySide6.QtGui import QColor

# ===== Plan view scale =====
PX_PER_M = 100.0        # 1 m of room = 100 px in the plan view
WALL_BAND_PX = 14.0
EPS = 1e-9

# ===== Colors =====
WALL_BORDER = QColor(30, 90, 200)
ITEM_COLOR = QColor(255, 220, 0, 150)
ITEM_BORDER = QColor(120, 95, 0)
WALL_ITEM_COLOR = QColor(14, 165, 233, 150)
SUPPORT_COLOR = QColor(191, 168, 142, 170)

# ===== Grid visuals =====
MAJOR_EVERY = 4
BG_COLOR = QColor("#F5EFEA")
GRID_MINOR = QColor("#D0D6E0")
GRID_MAJOR = QColor("#A8B3C2")

# ===== Themes (floor, wall) =====
THEMES = [
    ("Sky",   "#D7EBFF", "#F2F7FF"),
    ("Mauve", "#E9D3D6", "#F2E4E7"),
    ("Cream", "#F4E6C8", "#FFF3D9"),
    ("Mint",  "#D9F1EA", "#EDFBF7"),
]


def quantize(v: float, step: float) -> float:
    # halves round up, so a shifted pointer shifts the result by whole steps
    return math.floor(v / step + 0.5) * step


def clamp(v: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, v))


def clamp_snap(v: float, lo: float, hi: float, step: float) -> float:
    # clamp first; a bound off the grid pulls the result one step back inside
    c = clamp(v, lo, hi)
    q = quantize(c, step)
    if q > hi + EPS:
        q -= step
    elif q < lo - EPS:
        q += step
    if q < lo - EPS or q > hi + EPS:
        return c    # domain narrower than one step
    return q


def damp(current: float, target: float, rate: float, dt: float) -> float:
    """Frame-rate independent exponential approach of `current` to `target`."""
    return current + (target - current) * (1.0 - math.exp(-rate * dt))


def deg(d: float) -> float:
    return math.radians(d)
