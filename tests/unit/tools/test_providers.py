"""Unit tests for the optional-tool providers and their fallbacks."""

from __future__ import annotations

import subprocess

import pytest

from hired.models import ColorTier
from hired.terminal.ansi import strip_ansi
from hired.terminal.theme import get_theme
from hired.tools import providers
from hired.tools.providers import (
    BuiltinGradient,
    ChafaRenderer,
    FigletBanner,
    Jp2aRenderer,
    LogoRenderer,
    LolcatGradient,
    PlainBanner,
    PvPacer,
    PyFigletBanner,
    builtin_capabilities,
    probe_capabilities,
)
from hired.utils.exceptions import ExternalToolError

pytestmark = [pytest.mark.tools, pytest.mark.unit]


def _fake_run(stdout="", returncode=0, exc=None):
    calls = []

    def run(args, **kwargs):
        calls.append((list(args), kwargs))
        if exc is not None:
            raise exc
        if returncode:
            raise subprocess.CalledProcessError(returncode, args, output=stdout, stderr="bad")
        return subprocess.CompletedProcess(args, 0, stdout=stdout, stderr="")

    run.calls = calls
    return run


class TestProbeCapabilities:
    """Test selecting providers from what is on PATH."""

    def test_nothing_installed(self):
        caps = probe_capabilities(which=lambda name: None)
        assert isinstance(caps.banner, PyFigletBanner)
        assert isinstance(caps.gradient, BuiltinGradient)
        assert caps.pacer is None
        assert caps.logo.image_renderers == ()

    def test_everything_installed(self):
        caps = probe_capabilities(which=lambda name: f"/usr/bin/{name}")
        assert isinstance(caps.banner, FigletBanner)
        assert isinstance(caps.gradient, LolcatGradient)
        assert isinstance(caps.pacer, PvPacer)
        assert [r.name for r in caps.logo.image_renderers] == ["chafa", "jp2a"]
        assert caps.describe() == "banner=figlet gradient=lolcat pacer=pv logo=chafa+jp2a"

    def test_lookup_happens_once_per_tool(self):
        looked_up = []

        def which(name):
            looked_up.append(name)

        probe_capabilities(which=which)
        assert sorted(looked_up) == ["chafa", "figlet", "jp2a", "lolcat", "pv"]

    def test_disabled_skips_lookup(self):
        def which(name):
            raise AssertionError("PATH must not be searched")

        caps = probe_capabilities(enabled=False, which=which)
        assert caps.describe() == builtin_capabilities().describe()


class TestBanners:
    """Test banner rendering and fallbacks."""

    def test_pyfiglet_renders_art(self):
        art = PyFigletBanner().render("Hi", 80)
        assert len(art.splitlines()) > 1
        assert "Hi" not in art

    def test_pyfiglet_unknown_font_falls_back_to_plain(self, caplog):
        assert PyFigletBanner(font="no-such-font-xyz").render("Hi", 80) == "Hi"
        assert "pyfiglet could not render" in caplog.text

    def test_plain(self):
        assert PlainBanner().render("Joining Acme", 10) == "Joining Acme"

    def test_figlet_binary(self, monkeypatch):
        run = _fake_run(stdout="ART\n")
        monkeypatch.setattr(providers.subprocess, "run", run)
        assert FigletBanner("/usr/bin/figlet").render("Hi", 60) == "ART"
        assert run.calls[0][0] == ["/usr/bin/figlet", "-w", "60", "Hi"]

    def test_failing_figlet_falls_back(self, monkeypatch, caplog):
        monkeypatch.setattr(providers.subprocess, "run", _fake_run(returncode=1))
        banner = FigletBanner("/usr/bin/figlet", fallback=PlainBanner())
        assert banner.render("Hi", 60) == "Hi"
        assert "figlet exited with status 1" in caplog.text


class TestGradients:
    """Test gradient filters."""

    def test_builtin_keeps_text(self):
        theme = get_theme(ColorTier.EIGHT_BIT)
        assert strip_ansi(BuiltinGradient().apply("abc", theme)) == "abc"

    def test_lolcat_pipes_text(self, monkeypatch):
        run = _fake_run(stdout="\x1b[38;5;1mabc\x1b[0m\n")
        monkeypatch.setattr(providers.subprocess, "run", run)
        out = LolcatGradient("/usr/bin/lolcat").apply("abc", get_theme(ColorTier.EIGHT_BIT))
        assert out == "\x1b[38;5;1mabc\x1b[0m"
        assert run.calls[0][0] == ["/usr/bin/lolcat", "-f"]
        assert run.calls[0][1]["input"] == "abc"

    def test_lolcat_skipped_without_colour(self, monkeypatch):
        run = _fake_run(stdout="x")
        monkeypatch.setattr(providers.subprocess, "run", run)
        assert LolcatGradient("lolcat").apply("abc", get_theme(ColorTier.NONE)) == "abc"
        assert run.calls == []

    def test_lolcat_missing_at_runtime_falls_back(self, monkeypatch, caplog):
        monkeypatch.setattr(providers.subprocess, "run", _fake_run(exc=FileNotFoundError("gone")))
        theme = get_theme(ColorTier.EIGHT_BIT)
        out = LolcatGradient("/usr/bin/lolcat").apply("abc", theme)
        assert strip_ansi(out) == "abc"
        assert "could not be started" in caplog.text


class TestPvPacer:
    """Test the pv pacer."""

    def test_invokes_pv_with_rate(self, monkeypatch, stream):
        run = _fake_run()
        monkeypatch.setattr(providers.subprocess, "run", run)
        PvPacer("/usr/bin/pv").pace("hello", 49.6, stream, 1)
        args, kwargs = run.calls[0]
        assert args == ["/usr/bin/pv", "-qL", "50"]
        assert kwargs["input"] == b"hello"
        assert kwargs["stdout"] == 1

    def test_rate_scaled_to_bytes_for_multibyte_text(self, monkeypatch, stream):
        run = _fake_run()
        monkeypatch.setattr(providers.subprocess, "run", run)
        PvPacer("/usr/bin/pv").pace("h\u00e9\u00e9", 30, stream, 1)
        args, kwargs = run.calls[0]
        # three characters, five bytes
        assert args == ["/usr/bin/pv", "-qL", "50"]
        assert kwargs["input"] == "h\u00e9\u00e9".encode("utf-8")

    def test_failure_raises(self, monkeypatch, stream):
        monkeypatch.setattr(providers.subprocess, "run", _fake_run(returncode=2))
        with pytest.raises(ExternalToolError) as excinfo:
            PvPacer("/usr/bin/pv").pace("hello", 10, stream, 1)
        assert excinfo.value.tool == "pv"


class TestLogoRenderer:
    """Test logo rendering."""

    def test_text_art_copied_verbatim(self, tmp_path):
        logo = tmp_path / "logo.ans"
        logo.write_text("\x1b[31m<>\x1b[0m\n", encoding="utf-8")
        result = LogoRenderer().render(logo, 80)
        assert result.art == "\x1b[31m<>\x1b[0m\n"
        assert result.hint is None

    def test_missing_file_gives_hint(self, tmp_path):
        result = LogoRenderer().render(tmp_path / "nope.png", 80)
        assert result.art is None
        assert "not found" in result.hint

    def test_image_without_renderers_gives_install_hint(self, tmp_path):
        logo = tmp_path / "logo.png"
        logo.write_bytes(b"\x89PNG")
        result = LogoRenderer().render(logo, 80)
        assert result.hint == "Install chafa or jp2a to render images in terminal."
        assert result.tools == ("chafa", "jp2a")

    def test_chafa_preferred_then_jp2a(self, tmp_path, monkeypatch):
        logo = tmp_path / "logo.png"
        logo.write_bytes(b"\x89PNG")

        def run(args, **kwargs):
            if "chafa" in args[0]:
                raise subprocess.CalledProcessError(1, args, stderr="")
            return subprocess.CompletedProcess(args, 0, stdout="@@\n", stderr="")

        monkeypatch.setattr(providers.subprocess, "run", run)
        renderer = LogoRenderer([ChafaRenderer("/bin/chafa"), Jp2aRenderer("/bin/jp2a")])
        assert renderer.render(logo, 40).art == "@@\n"

    def test_chafa_arguments(self, tmp_path, monkeypatch):
        logo = tmp_path / "logo.png"
        logo.write_bytes(b"\x89PNG")
        run = _fake_run(stdout="##")
        monkeypatch.setattr(providers.subprocess, "run", run)
        LogoRenderer([ChafaRenderer("chafa")]).render(logo, 70)
        assert run.calls[0][0] == ["chafa", "--symbols", "vhalf", "--size", "70x20", str(logo)]
