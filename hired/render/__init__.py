"""Typing renderer and line animators."""

from __future__ import annotations

from hired.render.animators import Animator, bar_tick, bar_width, filled_width, percent
from hired.render.typing import TypedRenderer, typing_interval

__all__ = [
    "Animator",
    "TypedRenderer",
    "bar_tick",
    "bar_width",
    "filled_width",
    "percent",
    "typing_interval",
]
