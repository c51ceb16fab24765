"""Named easing curves.

Every function maps normalised time ``t`` in [0, 1] to a progress value.
Most stay inside [0, 1]; ``easeOutBack`` and ``easeOutElastic`` overshoot
past 1 before settling, which is intended.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from typing import TypeAlias

from stickforge.models.enums import DEFAULT_EASING, EasingName

logger = logging.getLogger(__name__)

EasingFunc: TypeAlias = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease_in_quad(t: float) -> float:
    return t * t


def ease_out_quad(t: float) -> float:
    return 1 - (1 - t) * (1 - t)


def ease_in_out_quad(t: float) -> float:
    if t < 0.5:
        return 2 * t * t
    return 1 - pow(-2 * t + 2, 2) / 2


def ease_in_cubic(t: float) -> float:
    return t * t * t


def ease_out_cubic(t: float) -> float:
    return 1 - pow(1 - t, 3)


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - pow(-2 * t + 2, 3) / 2


def ease_in_out_sine(t: float) -> float:
    return -(math.cos(math.pi * t) - 1) / 2


def ease_out_back(t: float) -> float:
    """Slight overshoot past 1 before settling."""
    c1 = 1.70158
    c3 = c1 + 1
    return 1 + c3 * pow(t - 1, 3) + c1 * pow(t - 1, 2)


def ease_out_elastic(t: float) -> float:
    """Decaying oscillation around 1."""
    if t == 0 or t == 1:
        return t
    c4 = (2 * math.pi) / 3
    return pow(2, -10 * t) * math.sin((t * 10 - 0.75) * c4) + 1


def ease_out_bounce(t: float) -> float:
    n1 = 7.5625
    d1 = 2.75
    if t < 1 / d1:
        return n1 * t * t
    if t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    if t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    t -= 2.625 / d1
    return n1 * t * t + 0.984375


EASINGS: dict[str, EasingFunc] = {
    EasingName.LINEAR: linear,
    EasingName.EASE_IN_QUAD: ease_in_quad,
    EasingName.EASE_OUT_QUAD: ease_out_quad,
    EasingName.EASE_IN_OUT_QUAD: ease_in_out_quad,
    EasingName.EASE_IN_CUBIC: ease_in_cubic,
    EasingName.EASE_OUT_CUBIC: ease_out_cubic,
    EasingName.EASE_IN_OUT_CUBIC: ease_in_out_cubic,
    EasingName.EASE_IN_OUT_SINE: ease_in_out_sine,
    EasingName.EASE_OUT_BACK: ease_out_back,
    EasingName.EASE_OUT_ELASTIC: ease_out_elastic,
    EasingName.EASE_OUT_BOUNCE: ease_out_bounce,
}


def available_easings() -> list[str]:
    return [str(name) for name in EASINGS]


def resolve_easing(name: str | None) -> EasingFunc:
    """Return the curve for *name*; unknown or missing names get the default."""
    if name is None:
        return EASINGS[DEFAULT_EASING]
    func = EASINGS.get(name)
    if func is None:
        logger.debug("Unknown easing %r, using %s", name, DEFAULT_EASING)
        return EASINGS[DEFAULT_EASING]
    return func


def ease(name: str | None, t: float) -> float:
    return resolve_easing(name)(t)
