"""Capability providers for optional external tools.

Every concern that an external program can improve (figlet banners, lolcat
gradients, pv pacing, chafa/jp2a logos) has a native provider that shells
out and a built-in fallback. :func:`probe_capabilities` looks the tools up
once and returns the selected providers; callers never re-check ``PATH``.
A native provider that fails raises :class:`ExternalToolError`, which the
owning chain logs before handing the work to its fallback.
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Callable, Protocol, Sequence

import pyfiglet

from hired.terminal.theme import Theme
from hired.utils.exceptions import ExternalToolError
from hired.utils.logging_config import get_logger

logger = get_logger(__name__)

TOOL_TIMEOUT = 10.0
TEXT_ART_SUFFIXES = frozenset({".ans", ".ansi", ".txt"})
LOGO_HEIGHT = 20
DEFAULT_FONT = "standard"
IMAGE_TOOLS = ("chafa", "jp2a")


def _run_tool(
    args: Sequence[str],
    stdin: str | None = None,
    timeout: float = TOOL_TIMEOUT,
) -> str:
    """Run an external tool and return its stdout."""
    tool = Path(args[0]).name
    try:
        result = subprocess.run(  # noqa: S603 - arguments are never shell-interpreted
            list(args),
            input=stdin,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        msg = f"{tool} exited with status {e.returncode}"
        raise ExternalToolError(tool, msg, {"stderr": (e.stderr or "").strip()}) from e
    except subprocess.TimeoutExpired as e:
        msg = f"{tool} timed out after {timeout:.0f}s"
        raise ExternalToolError(tool, msg) from e
    except OSError as e:
        msg = f"{tool} could not be started: {e}"
        raise ExternalToolError(tool, msg) from e
    if not result.stdout:
        msg = f"{tool} produced no output"
        raise ExternalToolError(tool, msg)
    return result.stdout


# Banner ---------------------------------------------------------------------


class BannerProvider(Protocol):
    name: str

    def render(self, text: str, width: int) -> str: ...


class PlainBanner:
    """Last resort: the text itself."""

    name = "plain"

    def render(self, text: str, width: int) -> str:
        return text


class PyFigletBanner:
    """Figlet rendering through the pyfiglet library."""

    name = "pyfiglet"

    def __init__(self, font: str = DEFAULT_FONT) -> None:
        self.font = font

    def render(self, text: str, width: int) -> str:
        try:
            art = pyfiglet.figlet_format(text, font=self.font, width=width)
        except pyfiglet.FigletError as e:
            logger.warning("pyfiglet could not render the banner: %s", e)
            return PlainBanner().render(text, width)
        return art.rstrip("\n")


class FigletBanner:
    """The ``figlet`` binary, falling back to pyfiglet."""

    name = "figlet"

    def __init__(self, executable: str, fallback: BannerProvider | None = None) -> None:
        self.executable = executable
        self.fallback = fallback or PyFigletBanner()

    def render(self, text: str, width: int) -> str:
        try:
            return _run_tool([self.executable, "-w", str(width), text]).rstrip("\n")
        except ExternalToolError as e:
            logger.warning("%s; using %s", e, self.fallback.name)
            return self.fallback.render(text, width)


# Gradient -------------------------------------------------------------------


class GradientFilter(Protocol):
    name: str

    def apply(self, text: str, theme: Theme) -> str: ...


class BuiltinGradient:
    """Spread the theme gradient across each line."""

    name = "builtin"

    def apply(self, text: str, theme: Theme) -> str:
        return theme.colorize(text)


class LolcatGradient:
    """Pipe text through ``lolcat -f``, falling back to the built-in gradient."""

    name = "lolcat"

    def __init__(self, executable: str, fallback: GradientFilter | None = None) -> None:
        self.executable = executable
        self.fallback = fallback or BuiltinGradient()

    def apply(self, text: str, theme: Theme) -> str:
        if not theme.enabled:
            return text
        try:
            return _run_tool([self.executable, "-f"], stdin=text).rstrip("\n")
        except ExternalToolError as e:
            logger.warning("%s; using %s gradient", e, self.fallback.name)
            return self.fallback.apply(text, theme)


# Pacing ---------------------------------------------------------------------


class PvPacer:
    """Character-rate pacing with ``pv -qL``.

    Only safe for plain text: pv knows nothing about escape sequences or a
    faux cursor, so the renderer decides when to delegate.
    """

    name = "pv"

    def __init__(self, executable: str) -> None:
        self.executable = executable

    def pace(self, text: str, rate: float, stream: IO[str], fd: int) -> None:
        """Write ``text`` to ``fd`` at ``rate`` characters per second."""
        data = text.encode("utf-8")
        # pv limits bytes, so scale by the average encoded character size
        byte_rate = rate * len(data) / max(len(text), 1)
        limit = str(max(1, round(byte_rate)))
        stream.flush()
        try:
            subprocess.run(  # noqa: S603
                [self.executable, "-qL", limit],
                input=data,
                stdout=fd,
                timeout=max(TOOL_TIMEOUT, len(text) / max(rate, 1.0) * 4),
                check=True,
            )
        except subprocess.CalledProcessError as e:
            msg = f"pv exited with status {e.returncode}"
            raise ExternalToolError(self.name, msg) from e
        except (OSError, subprocess.TimeoutExpired) as e:
            msg = f"pv failed: {e}"
            raise ExternalToolError(self.name, msg) from e


# Logo -----------------------------------------------------------------------


class ImageRenderer(Protocol):
    name: str

    def render(self, path: Path, columns: int) -> str: ...


class ChafaRenderer:
    name = "chafa"

    def __init__(self, executable: str) -> None:
        self.executable = executable

    def render(self, path: Path, columns: int) -> str:
        return _run_tool(
            [self.executable, "--symbols", "vhalf", "--size", f"{columns}x{LOGO_HEIGHT}", str(path)]
        )


class Jp2aRenderer:
    name = "jp2a"

    def __init__(self, executable: str) -> None:
        self.executable = executable

    def render(self, path: Path, columns: int) -> str:
        return _run_tool([self.executable, f"--width={columns}", str(path)])


@dataclass(frozen=True)
class LogoResult:
    """Logo output, or a hint explaining why there is none.

    ``tools`` names the programs mentioned in ``hint`` so they can be highlighted.
    """

    art: str | None = None
    hint: str | None = None
    tools: tuple[str, ...] = ()


class LogoRenderer:
    """Text art is copied verbatim; images go to the first working renderer."""

    def __init__(self, image_renderers: Sequence[ImageRenderer] = ()) -> None:
        self.image_renderers = tuple(image_renderers)

    @property
    def name(self) -> str:
        return "+".join(r.name for r in self.image_renderers) or "text-only"

    def render(self, path: Path, columns: int) -> LogoResult:
        if not path.is_file():
            logger.warning("Logo file %s not found", path)
            return LogoResult(hint=f"Logo file {path} not found.")

        if path.suffix.lower() in TEXT_ART_SUFFIXES:
            try:
                return LogoResult(art=path.read_text(encoding="utf-8", errors="replace"))
            except OSError as e:
                logger.warning("Could not read logo %s: %s", path, e)
                return LogoResult(hint=f"Could not read {path.name}.")

        for renderer in self.image_renderers:
            try:
                return LogoResult(art=renderer.render(path, columns))
            except ExternalToolError as e:
                logger.warning("%s", e)
        return LogoResult(
            hint="Install chafa or jp2a to render images in terminal.",
            tools=IMAGE_TOOLS,
        )


# Probe ----------------------------------------------------------------------


@dataclass(frozen=True)
class Capabilities:
    """The providers chosen for this run."""

    banner: BannerProvider
    gradient: GradientFilter
    logo: LogoRenderer
    pacer: PvPacer | None = None

    def describe(self) -> str:
        pacer = self.pacer.name if self.pacer else "builtin"
        return (
            f"banner={self.banner.name} gradient={self.gradient.name} "
            f"pacer={pacer} logo={self.logo.name}"
        )


def builtin_capabilities() -> Capabilities:
    """Providers that need nothing outside the Python environment."""
    return Capabilities(
        banner=PyFigletBanner(),
        gradient=BuiltinGradient(),
        logo=LogoRenderer(),
        pacer=None,
    )


def probe_capabilities(
    enabled: bool = True,
    which: Callable[[str], str | None] = shutil.which,
) -> Capabilities:
    """Look for the optional tools once and select a provider per concern.

    Args:
        enabled: When False, skip the lookup and use built-in providers only
        which: Executable lookup (``shutil.which``)

    """
    if not enabled:
        caps = builtin_capabilities()
        logger.debug("External tools disabled: %s", caps.describe())
        return caps

    figlet = which("figlet")
    lolcat = which("lolcat")
    pv = which("pv")
    image_renderers: list[ImageRenderer] = []
    chafa = which("chafa")
    if chafa:
        image_renderers.append(ChafaRenderer(chafa))
    jp2a = which("jp2a")
    if jp2a:
        image_renderers.append(Jp2aRenderer(jp2a))

    caps = Capabilities(
        banner=FigletBanner(figlet) if figlet else PyFigletBanner(),
        gradient=LolcatGradient(lolcat) if lolcat else BuiltinGradient(),
        logo=LogoRenderer(image_renderers),
        pacer=PvPacer(pv) if pv else None,
    )
    logger.debug("Capabilities: %s", caps.describe())
    return caps
