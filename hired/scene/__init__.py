"""The announcement scene: beats and the runner that plays them."""

from __future__ import annotations

from hired.scene.beats import Beat, build_default_scene
from hired.scene.runner import SceneRunner

__all__ = ["Beat", "SceneRunner", "build_default_scene"]
