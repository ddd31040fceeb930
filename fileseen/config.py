# fileseen/config.py
from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, fields, replace
from datetime import timezone, tzinfo
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

log = logging.getLogger(__name__)

__all__ = [
    "ScanConfig",
    "load_config",
    "resolve_timezone",
    "check_log_level",
    "configure_logging",
    "TZ_ENV_VAR",
    "LOG_FORMAT",
]

TZ_ENV_VAR = "FILESEEN_TZ"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOCAL_ZONE = "local"


@dataclass(frozen=True)
class ScanConfig:
    """
    Settings for a report run.

    Attributes
    ----------
    timezone : str
        Zone used to derive hour of day: ``"local"`` (process zone), ``"UTC"``,
        or an IANA name such as ``"Europe/Berlin"``.
    log_level : str
        Console log level name.
    encoding : str
        Text encoding of input files.
    explain_rejections : bool
        Also log JSON Schema diagnostics (DEBUG) for every rejected line.
    """
    timezone: str = LOCAL_ZONE
    log_level: str = "INFO"
    encoding: str = "utf-8"
    explain_rejections: bool = False

    @property
    def tz(self) -> Optional[tzinfo]:
        return resolve_timezone(self.timezone)


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """
    Map a zone name to a tzinfo. ``None``/``"local"`` -> None (local calendar).

    Raises
    ------
    ConfigError
        If the name is not a known zone.
    """
    if name is None:
        return None
    token = str(name).strip()
    if not token or token.casefold() == LOCAL_ZONE:
        return None
    if token.upper() in ("UTC", "Z"):
        return timezone.utc
    try:
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
    except ImportError as e:  # pragma: no cover
        raise ConfigError("named time zones need Python 3.9+ (zoneinfo)") from e
    try:
        return ZoneInfo(token)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown time zone: {token!r}") from e


def check_log_level(name: str) -> str:
    """Return the upper-cased level name, or raise ConfigError if logging does not know it."""
    level = str(name).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"log_level must be a logging level name, got {name!r}")
    return level


def _load_text(path_or_text: str) -> str:
    p = Path(path_or_text)
    try:
        is_file = p.is_file()
    except (OSError, ValueError):
        is_file = False
    if is_file:
        try:
            return p.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"cannot read config file {p}: {e}") from e
    # Allow passing raw YAML as a convenience
    return path_or_text


def _coerce(raw: Dict[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(ScanConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"unknown config key(s): {', '.join(unknown)}")

    out: Dict[str, Any] = {}
    for key in ("timezone", "log_level", "encoding"):
        if key in raw and raw[key] is not None:
            out[key] = str(raw[key])
    if "log_level" in out:
        out["log_level"] = check_log_level(out["log_level"])
    if "explain_rejections" in raw:
        value = raw["explain_rejections"]
        if not isinstance(value, bool):
            raise ConfigError("explain_rejections must be true or false")
        out["explain_rejections"] = value
    return out


def load_config(path_or_text: Optional[str] = None, *, env: Optional[Dict[str, str]] = None) -> ScanConfig:
    """
    Load settings from a YAML/JSON file path or raw YAML string.

    ``None`` gives the defaults. ``FILESEEN_TZ`` in the environment overrides
    the configured zone. The zone name is checked eagerly.

    Raises
    ------
    ConfigError
        If parsing or validation fails.
    """
    cfg = ScanConfig()
    if path_or_text is not None:
        raw_text = _load_text(path_or_text)
        try:
            # JSON is valid YAML
            raw = yaml.safe_load(raw_text)
        except yaml.YAMLError as e:
            try:
                raw = json.loads(raw_text)
            except ValueError:
                raise ConfigError(f"Could not parse config as YAML/JSON: {e}") from e
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError("Config document must be a mapping at the top level.")
        cfg = replace(cfg, **_coerce(raw))

    environ = os.environ if env is None else env
    tz_override = environ.get(TZ_ENV_VAR)
    if tz_override:
        log.debug("time zone overridden by %s=%s", TZ_ENV_VAR, tz_override)
        cfg = replace(cfg, timezone=tz_override)

    resolve_timezone(cfg.timezone)
    return cfg


def configure_logging(level: str = "INFO", stream=None) -> None:
    """Attach one stream handler (stderr by default) to the root logger, replacing any earlier one."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    for h in list(root.handlers):
        if getattr(h, "_fileseen", False):
            root.removeHandler(h)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._fileseen = True  # type: ignore[attr-defined]
    root.addHandler(handler)
