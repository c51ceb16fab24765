"""Enumerations used throughout StickForge."""

from enum import StrEnum


class PlaybackMode(StrEnum):
    LOOP = "loop"
    REVERSE = "reverse"
    PINGPONG = "pingpong"
    ONCE = "once"


class EasingName(StrEnum):
    LINEAR = "linear"
    EASE_IN_QUAD = "easeInQuad"
    EASE_OUT_QUAD = "easeOutQuad"
    EASE_IN_OUT_QUAD = "easeInOutQuad"
    EASE_IN_CUBIC = "easeInCubic"
    EASE_OUT_CUBIC = "easeOutCubic"
    EASE_IN_OUT_CUBIC = "easeInOutCubic"
    EASE_IN_OUT_SINE = "easeInOutSine"
    EASE_OUT_BACK = "easeOutBack"
    EASE_OUT_ELASTIC = "easeOutElastic"
    EASE_OUT_BOUNCE = "easeOutBounce"


DEFAULT_EASING = EasingName.EASE_IN_OUT_CUBIC
