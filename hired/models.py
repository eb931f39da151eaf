"""Pydantic models for hired.

Provides the validated, immutable values built once at startup: the display
configuration, logging settings and the probed terminal profile.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_SPEED = 50.0
FALLBACK_RATE = 30.0

_YES_WORDS = frozenset({"y", "yes", "true", "1", "on"})


def is_yes(value: Any) -> bool:
    """Interpret a yes/no setting the way the shell flags do."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _YES_WORDS


def resolve_rate(value: Any, fallback: float = FALLBACK_RATE) -> float:
    """Return ``value`` as a positive finite rate, or ``fallback``."""
    if isinstance(value, bool):
        return fallback
    try:
        rate = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(rate) or rate <= 0:
        return fallback
    return rate


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ColorTier(str, Enum):
    """Colour depth supported by the output terminal."""

    TRUECOLOR = "truecolor"
    EIGHT_BIT = "256"
    BASIC = "basic"
    NONE = "none"


class DisplayConfig(BaseModel):
    """Everything the announcement scene needs to know, fixed at startup."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="Your Name", description="Who got the offer")
    company: str = Field(default="Acme Corp", description="Company joined")
    role: str = Field(default="Software Engineer", description="Position")
    start: str = Field(default="Soon", description="Start date")
    message: str = Field(
        default="Excited to join the team at {company}",
        description="User message; {name} {company} {role} {start} are substituted",
    )
    logo: Path | None = Field(default=None, description="Logo art or image file")
    speed: float = Field(default=DEFAULT_SPEED, description="Typing speed (chars/sec)")
    pause: float = Field(default=0.5, ge=0.0, description="Pause between beats (s)")
    type_results: bool = Field(default=False, description="Type command results too")
    quiet_border: bool = Field(default=False, description="Hide horizontal rules")
    bar_steps: int = Field(default=34, ge=1, description="Main progress bar resolution")
    use_cursor: bool = Field(default=True, description="Draw a faux cursor while typing")
    cursor_glyph: str = Field(default="▌", min_length=1, description="Faux cursor glyph")
    thanks: tuple[str, ...] = Field(default=(), description="Names to thank")
    loading_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Duration of the spinner's background task (s)",
    )
    external_tools: bool = Field(
        default=True,
        description="Use figlet/lolcat/pv/chafa/jp2a when installed",
    )

    @field_validator("speed", mode="before")
    @classmethod
    def validate_speed(cls, v: Any) -> float:
        """Substitute the fallback rate for non-numeric or non-positive speeds."""
        rate = resolve_rate(v, fallback=-1.0)
        if rate < 0:
            logger.warning(
                "Invalid typing speed %r, using %.0f chars/sec", v, FALLBACK_RATE
            )
            return FALLBACK_RATE
        return rate

    @field_validator("type_results", "quiet_border", "use_cursor", "external_tools", mode="before")
    @classmethod
    def validate_yes_no(cls, v: Any) -> bool:
        """Accept yes/no words as well as booleans."""
        return is_yes(v)

    @field_validator("logo", mode="before")
    @classmethod
    def validate_logo(cls, v: Any) -> Any:
        """Treat an empty logo setting as no logo."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    @field_validator("thanks", mode="before")
    @classmethod
    def validate_thanks(cls, v: Any) -> Any:
        """Split comma-separated name lists."""
        if v is None:
            return ()
        if isinstance(v, str):
            return tuple(item.strip() for item in v.split(",") if item.strip())
        return tuple(str(item) for item in v if str(item).strip())

    @property
    def formatted_message(self) -> str:
        """User message with known placeholders filled in."""
        text = self.message
        for key in ("name", "company", "role", "start"):
            text = text.replace("{" + key + "}", getattr(self, key))
        return text


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: LogLevel = Field(default=LogLevel.WARNING, description="Log level")
    file: str | None = Field(default=None, description="Log file path")


class Config(BaseModel):
    """Top-level configuration as loaded from file, environment and CLI."""

    model_config = ConfigDict(frozen=True)

    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class TerminalProfile(BaseModel):
    """Capabilities of the output terminal, probed once."""

    model_config = ConfigDict(frozen=True)

    columns: int = Field(default=80, ge=1, description="Terminal width in cells")
    color_tier: ColorTier = Field(default=ColorTier.BASIC, description="Colour depth")
    interactive: bool = Field(default=False, description="Output is a terminal")

    @property
    def can_hide_cursor(self) -> bool:
        """Cursor visibility can only be toggled on a real terminal."""
        return self.interactive
