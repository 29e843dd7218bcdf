"""Runtime settings for the TodoMVC end-to-end suite.

Values are resolved from pytest CLI options, then environment variables, then
defaults, and frozen into one Settings object shared by fixtures, hooks and the
randomized data utilities.
"""

from __future__ import annotations

import os
import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pytest import Config

DEFAULT_BASE_URL = "https://demo.playwright.dev/todomvc/"
DEFAULT_BROWSER = "chromium"
DEFAULT_VIEWPORT = "1280x720"
DEFAULT_ARTIFACTS_DIR = "artifacts"
DEFAULT_TIMEOUT_MS = 10_000
DEFAULT_MODE = "on-failure"
DEFAULT_FAKER_LOCALE = "en_US"
DEFAULT_LIST_SIZE = 5
DEFAULT_LOG_LEVEL = "INFO"
MODE_CHOICES = {"on", "off", "on-failure"}
BROWSER_CHOICES = {"chromium", "firefox", "webkit"}
LOG_LEVEL_CHOICES = {"DEBUG", "INFO", "WARNING", "ERROR"}

# Artifact policies share the same on/off/on-failure vocabulary.
ARTIFACT_MODES = ("trace", "video", "screenshot", "attachments")

# pytest option dest -> Settings source key; dests mirror conftest.pytest_addoption
# (the log level flag is --e2e-log-level because pytest owns --log-level).
CLI_DESTS = {
    "base_url": "base_url",
    "browser": "browser",
    "headless": "headless",
    "slowmo_ms": "slowmo_ms",
    "viewport": "viewport",
    "artifacts_dir": "artifacts_dir",
    "pw_trace": "trace",
    "video": "video",
    "screenshot": "screenshot",
    "attachments": "attachments",
    "timeout_ms": "timeout_ms",
    "locale": "locale",
    "timezone_id": "timezone_id",
    "seed": "seed",
    "faker_locale": "faker_locale",
    "list_size": "list_size",
    "log_level": "log_level",
}

# xdist workerinput key carrying the controller's resolved seed.
WORKER_SEED_KEY = "e2e_seed"

_process_seed: int | None = None


@dataclass(frozen=True)
class Settings:
    """Resolved suite settings shared by fixtures, hooks and data factories."""

    base_url: str
    browser_name: str
    headless: bool
    slowmo_ms: int
    viewport_width: int
    viewport_height: int
    artifacts_dir: Path
    timeout_ms: int
    trace: str
    video: str
    screenshot: str
    attachments: str
    locale: str
    timezone_id: str
    seed: int
    faker_locale: str
    list_size: int
    log_level: str

    @property
    def viewport(self) -> dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}


def run_seed() -> int:
    """Return the per-process fallback seed, drawing it on first use."""
    global _process_seed
    if _process_seed is None:
        _process_seed = secrets.randbelow(2**32)
    return _process_seed


def _get_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_bool(value: str, *, name: str) -> bool:
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"Invalid boolean for {name}: {value!r}")


def _parse_int(value: object, *, name: str, minimum: int = 0) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        parsed = value
    else:
        try:
            parsed = int(str(value))
        except ValueError as exc:
            raise ValueError(f"Invalid integer for {name}: {value!r}") from exc
    if parsed < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {parsed}")
    return parsed


def _parse_choice(value: object, *, name: str, choices: set[str], upper: bool = False) -> str:
    normalized = str(value).strip()
    normalized = normalized.upper() if upper else normalized.lower()
    if normalized not in choices:
        raise ValueError(f"Invalid {name} {value!r}; expected one of {sorted(choices)}")
    return normalized


def parse_viewport(value: str) -> tuple[int, int]:
    """Parse a WIDTHxHEIGHT viewport string into integer dimensions."""

    width_str, sep, height_str = value.lower().strip().partition("x")
    if not sep:
        raise ValueError(f"Viewport must be WIDTHxHEIGHT, got {value!r}")
    width = _parse_int(width_str, name="viewport width", minimum=1)
    height = _parse_int(height_str, name="viewport height", minimum=1)
    return width, height


def _pick(cli: dict[str, object], key: str, env_name: str, default: object) -> object:
    cli_value = cli.get(key)
    if cli_value is not None:
        return cli_value
    env_value = _get_env(env_name)
    if env_value is not None:
        return env_value
    return default


def _build_settings_from_sources(*, cli: dict[str, object] | None) -> Settings:
    """Merge CLI/env/defaults with precedence CLI > env > defaults."""

    cli = cli or {}

    browser_name = _parse_choice(
        _pick(cli, "browser", "BROWSER", DEFAULT_BROWSER),
        name="browser",
        choices=BROWSER_CHOICES,
    )

    headless_raw = _pick(cli, "headless", "HEADLESS", True)
    headless = (
        headless_raw
        if isinstance(headless_raw, bool)
        else _parse_bool(str(headless_raw), name="HEADLESS")
    )

    viewport_width, viewport_height = parse_viewport(
        str(_pick(cli, "viewport", "VIEWPORT", DEFAULT_VIEWPORT))
    )

    modes = {
        mode_name: _parse_choice(
            _pick(cli, mode_name, mode_name.upper(), DEFAULT_MODE),
            name=f"{mode_name} mode",
            choices=MODE_CHOICES,
        )
        for mode_name in ARTIFACT_MODES
    }

    seed_raw = _pick(cli, "seed", "SEED", None)
    seed = run_seed() if seed_raw is None else _parse_int(seed_raw, name="SEED")

    return Settings(
        base_url=str(_pick(cli, "base_url", "BASE_URL", DEFAULT_BASE_URL)),
        browser_name=browser_name,
        headless=headless,
        slowmo_ms=_parse_int(_pick(cli, "slowmo_ms", "SLOWMO_MS", 0), name="SLOWMO_MS"),
        viewport_width=viewport_width,
        viewport_height=viewport_height,
        artifacts_dir=Path(
            str(_pick(cli, "artifacts_dir", "ARTIFACTS_DIR", DEFAULT_ARTIFACTS_DIR))
        ),
        timeout_ms=_parse_int(
            _pick(cli, "timeout_ms", "TIMEOUT_MS", DEFAULT_TIMEOUT_MS), name="TIMEOUT_MS"
        ),
        trace=modes["trace"],
        video=modes["video"],
        screenshot=modes["screenshot"],
        attachments=modes["attachments"],
        locale=str(_pick(cli, "locale", "LOCALE", "en-US")),
        timezone_id=str(_pick(cli, "timezone_id", "TIMEZONE_ID", "UTC")),
        seed=seed,
        faker_locale=str(_pick(cli, "faker_locale", "FAKER_LOCALE", DEFAULT_FAKER_LOCALE)),
        list_size=_parse_int(
            _pick(cli, "list_size", "LIST_SIZE", DEFAULT_LIST_SIZE), name="LIST_SIZE", minimum=1
        ),
        log_level=_parse_choice(
            _pick(cli, "log_level", "LOG_LEVEL", DEFAULT_LOG_LEVEL),
            name="LOG_LEVEL",
            choices=LOG_LEVEL_CHOICES,
            upper=True,
        ),
    )


def get_settings(pytest_config: Config | None = None) -> Settings:
    """Return the cached Settings for a pytest session, or an env/default-only copy."""

    if pytest_config is None:
        return _build_settings_from_sources(cli=None)

    # Cached on the pytest config so hooks and fixtures agree, including on the seed.
    cached = getattr(pytest_config, "_e2e_settings_cache", None)
    if cached is not None:
        return cached

    cli_values = {key: pytest_config.getoption(dest) for dest, key in CLI_DESTS.items()}
    # xdist workers replay the controller's seed so every process generates the same data.
    workerinput = getattr(pytest_config, "workerinput", None) or {}
    if cli_values["seed"] is None and WORKER_SEED_KEY in workerinput:
        cli_values["seed"] = workerinput[WORKER_SEED_KEY]
    settings = _build_settings_from_sources(cli=cli_values)
    pytest_config._e2e_settings_cache = settings  # type: ignore[attr-defined]
    return settings
