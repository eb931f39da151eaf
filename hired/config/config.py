"""Configuration management for hired.

Provides hierarchical loading from defaults → TOML file → environment → CLI.
The result is a frozen :class:`~hired.models.Config` that is passed
explicitly to every component; nothing here is kept in module globals.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import toml
from pydantic import ValidationError

from hired.models import Config
from hired.utils.exceptions import ConfigurationError
from hired.utils.logging_config import get_logger

logger = get_logger(__name__)

CONFIG_FILENAME = "hired.toml"

# Environment variable -> config path
ENV_MAPPINGS: dict[str, str] = {
    "HIRED_NAME": "display.name",
    "HIRED_COMPANY": "display.company",
    "HIRED_ROLE": "display.role",
    "HIRED_START": "display.start",
    "HIRED_MESSAGE": "display.message",
    "HIRED_LOGO": "display.logo",
    "HIRED_SPEED": "display.speed",
    "HIRED_PAUSE": "display.pause",
    "HIRED_TYPE_RESULTS": "display.type_results",
    "HIRED_QUIET_BORDER": "display.quiet_border",
    "HIRED_BAR_STEPS": "display.bar_steps",
    "HIRED_USE_CURSOR": "display.use_cursor",
    "HIRED_CURSOR_SYM": "display.cursor_glyph",
    "HIRED_THANKS": "display.thanks",
    "HIRED_LOADING_SECONDS": "display.loading_seconds",
    "HIRED_EXTERNAL_TOOLS": "display.external_tools",
    "HIRED_LOG_LEVEL": "logging.level",
    "HIRED_LOG_FILE": "logging.file",
}


def _set_nested(d: dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    cur = d
    for p in parts[:-1]:
        cur = cur.setdefault(p, {})
    cur[parts[-1]] = value


class ConfigManager:
    """Loads and validates configuration."""

    def __init__(
        self,
        config_file: str | Path | None = None,
        cli_overrides: Mapping[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        """Initialize configuration manager.

        Args:
            config_file: Path to TOML config file. If None, searches for hired.toml
            cli_overrides: Display settings given on the command line; None values are ignored
            environ: Environment to read (defaults to ``os.environ``)

        """
        self._environ = os.environ if environ is None else environ
        self._cli_overrides = dict(cli_overrides or {})
        self.config_file = self._find_config_file(config_file)
        self.config = self._load_config()

    def _find_config_file(self, config_file: str | Path | None) -> Path | None:
        """Find configuration file in standard locations."""
        if config_file:
            return Path(config_file)

        search_paths = [
            Path.cwd() / CONFIG_FILENAME,
            Path.home() / ".config" / "hired" / CONFIG_FILENAME,
            Path.home() / f".{CONFIG_FILENAME}",
        ]
        for path in search_paths:
            if path.exists():
                return path
        return None

    def _load_config(self) -> Config:
        """Load configuration from file, environment and CLI overrides."""
        config_data: dict[str, Any] = {}

        if self.config_file and self.config_file.exists():
            try:
                with open(self.config_file, encoding="utf-8") as f:
                    config_data.update(toml.load(f))
            except (OSError, toml.TomlDecodeError) as e:
                logger.warning("Failed to load config file %s: %s", self.config_file, e)
        elif self.config_file:
            logger.warning("Config file %s does not exist", self.config_file)

        config_data = self._merge_config(config_data, self._get_env_config())
        config_data = self._merge_config(config_data, self._get_cli_config())

        try:
            return Config(**config_data)
        except ValidationError as e:
            msg = f"Invalid configuration: {e}"
            raise ConfigurationError(msg) from e

    def _get_env_config(self) -> dict[str, Any]:
        """Get configuration from environment variables.

        Values stay strings; the models coerce numbers, yes/no words and
        comma-separated lists.
        """
        env_config: dict[str, Any] = {}
        for env_name, cfg_path in ENV_MAPPINGS.items():
            raw = self._environ.get(env_name)
            if raw is None:
                continue
            _set_nested(env_config, cfg_path, raw)
        return env_config

    def _get_cli_config(self) -> dict[str, Any]:
        display = {
            key: value
            for key, value in self._cli_overrides.items()
            if value is not None and value != ()
        }
        return {"display": display} if display else {}

    def _merge_config(
        self,
        base: dict[str, Any],
        override: dict[str, Any],
    ) -> dict[str, Any]:
        """Merge configuration dictionaries recursively."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value

        return result


def load_config(
    config_file: str | Path | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> Config:
    """Build the configuration for one run."""
    return ConfigManager(config_file, cli_overrides).config
