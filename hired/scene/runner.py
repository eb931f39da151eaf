"""Scene runner.

Executes beats one after another against the terminal, the typing renderer,
the animators and the capability providers chosen at startup.
"""

from __future__ import annotations

from typing import Callable, Iterable

from hired.models import DisplayConfig
from hired.render.animators import Animator
from hired.render.typing import TypedRenderer
from hired.scene.beats import (
    Banner,
    Bar,
    Beat,
    CaptionedBar,
    Clear,
    Command,
    Fade,
    Logo,
    Pause,
    Pulse,
    Rule,
    Spinner,
    Title,
    build_default_scene,
)
from hired.terminal.session import Terminal
from hired.tools.providers import Capabilities, builtin_capabilities
from hired.utils.logging_config import get_logger
from hired.utils.time import Clock

logger = get_logger(__name__)


class SceneRunner:
    """Plays beats from a scene."""

    def __init__(
        self,
        terminal: Terminal,
        config: DisplayConfig,
        capabilities: Capabilities | None = None,
        clock: Clock | None = None,
        renderer: TypedRenderer | None = None,
        animator: Animator | None = None,
    ) -> None:
        """Initialize scene runner.

        Args:
            terminal: Output terminal
            config: Display configuration
            capabilities: Providers for banner, gradient, logo and pacing
            clock: Clock for every pause and frame delay
            renderer: Typing renderer (built from ``config`` when omitted)
            animator: Animator (built from ``config`` when omitted)

        """
        self.terminal = terminal
        self.theme = terminal.theme
        self.config = config
        self.capabilities = capabilities or builtin_capabilities()
        self.clock = clock or Clock()
        self.renderer = renderer or TypedRenderer.from_config(
            terminal, config, clock=self.clock, pacer=self.capabilities.pacer
        )
        self.animator = animator or Animator.from_config(terminal, config, clock=self.clock)

        self._handlers: dict[str, Callable[[Beat], None]] = {
            Title.kind: self._play_title,
            Clear.kind: self._play_clear,
            Fade.kind: self._play_fade,
            Bar.kind: self._play_bar,
            Pause.kind: self._play_pause,
            Banner.kind: self._play_banner,
            Rule.kind: self._play_rule,
            Command.kind: self._play_command,
            Logo.kind: self._play_logo,
            CaptionedBar.kind: self._play_captioned_bar,
            Spinner.kind: self._play_spinner,
            Pulse.kind: self._play_pulse,
        }

    def run(self, beats: Iterable[Beat] | None = None) -> None:
        """Play ``beats``, or the default announcement scene."""
        if beats is None:
            beats = build_default_scene(self.config)
        for beat in beats:
            self.play(beat)

    def play(self, beat: Beat) -> None:
        handler = self._handlers.get(beat.kind)
        if handler is None:
            msg = f"Unknown beat kind: {beat.kind}"
            raise ValueError(msg)
        logger.debug("Beat: %r", beat)
        handler(beat)

    def _play_title(self, beat: Title) -> None:
        self.terminal.set_title(beat.text)

    def _play_clear(self, _beat: Clear) -> None:
        self.terminal.clear_screen()

    def _play_fade(self, beat: Fade) -> None:
        color = getattr(self.theme, beat.role)
        self.animator.fade_in_line(f"{color}{beat.text}{self.theme.reset}")

    def _play_bar(self, beat: Bar) -> None:
        self.animator.gradient_bar(beat.steps)

    def _play_pause(self, beat: Pause) -> None:
        self.clock.sleep(beat.seconds)

    def _play_banner(self, beat: Banner) -> None:
        width = self.terminal.columns
        art = self.capabilities.banner.render(beat.text, width)
        self.terminal.line(self.capabilities.gradient.apply(art, self.theme))
        if beat.caption:
            self.animator.center(beat.caption)

    def _play_rule(self, _beat: Rule) -> None:
        self.animator.soft_rule()

    def _play_command(self, beat: Command) -> None:
        theme = self.theme
        self.terminal.write(f"{theme.cmd}$ {theme.reset}")
        self.renderer.type_line(beat.command)
        if self.config.type_results:
            self.terminal.write(theme.sub)
            self.renderer.type_out(beat.result)
            self.terminal.line(theme.reset)
        else:
            self.terminal.line(f"{theme.sub}{beat.result}{theme.reset}")

    def _play_logo(self, beat: Logo) -> None:
        theme = self.theme
        result = self.capabilities.logo.render(beat.path, self.terminal.columns)
        self.terminal.line()
        if result.art is not None:
            self.terminal.write(result.art if result.art.endswith("\n") else result.art + "\n")
        else:
            hint = result.hint or ""
            for tool in result.tools:
                hint = hint.replace(tool, f"{theme.accent}{tool}{theme.reset}")
            self.terminal.line(f"{theme.sub}[hint]{theme.reset} {hint}")
        self.terminal.line()

    def _play_captioned_bar(self, beat: CaptionedBar) -> None:
        self.animator.progress_with_caption(beat.caption, beat.steps)

    def _play_spinner(self, beat: Spinner) -> None:
        self.animator.spinner(beat.seconds)

    def _play_pulse(self, beat: Pulse) -> None:
        self.animator.pulse_line(beat.text)
