"""Scene beats for the announcement.

A scene is an ordered tuple of small immutable beats. Each beat names its
``kind``; :class:`hired.scene.runner.SceneRunner` maps kinds to handlers,
so new beats can be composed into a scene without touching the renderers.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Union

from hired.models import DisplayConfig

THANKS_CAPTION = "Special thanks to..."
THANKS_BAR_STEPS = 28
FINAL_PAUSE = 0.3


@dataclass(frozen=True)
class Title:
    """Set the window and tab title."""

    kind: ClassVar[str] = "title"
    text: str


@dataclass(frozen=True)
class Clear:
    kind: ClassVar[str] = "clear"


@dataclass(frozen=True)
class Fade:
    """Fade a line in; ``role`` is a theme colour role (``sub``, ``ok``, ...)."""

    kind: ClassVar[str] = "fade"
    text: str
    role: str = "sub"


@dataclass(frozen=True)
class Bar:
    kind: ClassVar[str] = "bar"
    steps: int = 30


@dataclass(frozen=True)
class Pause:
    kind: ClassVar[str] = "pause"
    seconds: float


@dataclass(frozen=True)
class Banner:
    """Large banner text, followed by an optional centred caption."""

    kind: ClassVar[str] = "banner"
    text: str
    caption: str = ""


@dataclass(frozen=True)
class Rule:
    kind: ClassVar[str] = "rule"


@dataclass(frozen=True)
class Command:
    """A fake shell command and its result."""

    kind: ClassVar[str] = "command"
    command: str
    result: str


@dataclass(frozen=True)
class Logo:
    kind: ClassVar[str] = "logo"
    path: Path


@dataclass(frozen=True)
class CaptionedBar:
    kind: ClassVar[str] = "captioned_bar"
    caption: str
    steps: int = 30


@dataclass(frozen=True)
class Spinner:
    """Spinner shown while a background task of ``seconds`` runs."""

    kind: ClassVar[str] = "spinner"
    seconds: float


@dataclass(frozen=True)
class Pulse:
    kind: ClassVar[str] = "pulse"
    text: str


Beat = Union[
    Title, Clear, Fade, Bar, Pause, Banner, Rule, Command, Logo, CaptionedBar, Spinner, Pulse
]


def build_default_scene(config: DisplayConfig) -> tuple[Beat, ...]:
    """Build the announcement scene for ``config``.

    Args:
        config: Display configuration

    Returns:
        Beats in playback order

    """
    pause = Pause(config.pause)
    beats: list[Beat] = [
        Title(f"Joining {config.company} — {config.name}"),
        Clear(),
        Fade("Initializing onboarding sequence…"),
        Bar(config.bar_steps),
        pause,
        Clear(),
        Banner(f"Joining {config.company}", caption=f"{config.role} @ {config.company}"),
        pause,
        Rule(),
        Command("whoami", config.name),
        pause,
        Command("echo position", config.role),
        pause,
        Command("echo start_date", config.start),
        pause,
        Rule(),
        Command("echo user_message", config.formatted_message),
        pause,
    ]
    if config.logo is not None:
        beats.append(Logo(config.logo))
    beats.append(pause)

    if config.thanks:
        beats += [
            Rule(),
            CaptionedBar(THANKS_CAPTION, THANKS_BAR_STEPS),
            Spinner(config.loading_seconds),
        ]
        beats += [Pulse(f"✓ {name}") for name in config.thanks]
        beats.append(pause)

    beats += [Rule(), Fade("Done.", role="ok"), Pause(FINAL_PAUSE)]
    return tuple(beats)
