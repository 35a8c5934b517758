"""Theme helpers for UI components."""

from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class AnimationSpec:
    color: str
    glow_alpha: int  # 0-255, alpha of the outer waves
    period_ms: int
    amplitude: float  # relative scale change at the peak of a pulse


ANIMATION_SPECS = {
    "speaking-animation": AnimationSpec("#4cc2ff", 110, 600, 0.12),
    "listening-animation": AnimationSpec("#66bb6a", 110, 1200, 0.08),
    "wakeword-animation": AnimationSpec("#ffb74d", 110, 1800, 0.05),
    "": AnimationSpec("#9e9e9e", 60, 3000, 0.0),
}

# point sizes per text-size class
TEXT_SIZE_POINTS = {
    "short-text": 28,
    "medium-text": 22,
    "long-text": 18,
    "very-long-text": 15,
    "": 18,
}


def get_animation_spec(animation_class: str) -> AnimationSpec:
    return ANIMATION_SPECS.get(animation_class, ANIMATION_SPECS[""])


def get_text_point_size(size_class: str) -> int:
    return TEXT_SIZE_POINTS.get(size_class, TEXT_SIZE_POINTS[""])


def get_overlay_palette(theme: str) -> dict:
    """Return palette dict for overlay."""
    if theme == "light":
        return {
            "bg_top": QColor(235, 235, 238, 0),
            "bg_bottom": QColor(210, 210, 215, 220),
            "text": "#1e1e1e",
            "muted": "rgba(0, 0, 0, 180)",
            "panel": "rgba(255, 255, 255, 200)",
        }
    return {
        "bg_top": QColor(30, 30, 34, 0),
        "bg_bottom": QColor(40, 40, 46, 215),
        "text": "#f5f5f5",
        "muted": "rgba(255, 255, 255, 190)",
        "panel": "rgba(20, 20, 24, 170)",
    }
