"""Persistent settings for the hash-it command line tool.

Settings live in a small JSON file in a per-user application data
location. The file is validated against `schemas/settings.schema.json`
with jsonschema and written with an atomic replace; on POSIX systems the
directory and file get owner-only permissions where possible. Reading
never creates anything on disk; the directory is made on first save.

Effective settings are resolved in this order (later wins):
built-in defaults, the settings file, HASHIT_* environment variables
(a `.env` file in the working directory is loaded first), and finally
whatever the caller passes explicitly (the CLI flags).
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import jsonschema
from dotenv import find_dotenv, load_dotenv

from .errors import SettingsError

_APP_NAME = "HashIt"
_SETTINGS_FILE = "settings.json"
_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "settings.schema.json"

DEFAULTS: Dict[str, Any] = {
    "format": "table",
    "uppercase": False,
    "color": True,
    "quiet": False,
    "workers": 1,
}

_ENV_VARS = {
    "format": "HASHIT_FORMAT",
    "uppercase": "HASHIT_UPPERCASE",
    "color": "HASHIT_COLOR",
    "quiet": "HASHIT_QUIET",
    "workers": "HASHIT_WORKERS",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

_schema_cache: Optional[dict] = None


def _get_user_data_dir() -> Path:
    """Return a platform-appropriate per-user data directory for the app."""
    system = platform.system()
    home = Path.home()
    if system == "Windows":
        appdata = os.getenv("APPDATA")
        if appdata:
            return Path(appdata) / _APP_NAME
        return home / f".{_APP_NAME}"
    if system == "Darwin":
        return home / "Library" / "Application Support" / _APP_NAME
    # Linux / other: honor XDG_DATA_HOME if set
    xdg = os.getenv("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / _APP_NAME
    return home / ".local" / "share" / _APP_NAME


def ensure_settings_dir() -> Path:
    d = _get_user_data_dir()
    d.mkdir(parents=True, exist_ok=True)
    if os.name == "posix":
        try:
            d.chmod(0o700)
        except OSError:
            pass
    return d


def settings_path() -> Path:
    """Location of the settings file; the directory may not exist yet."""
    return _get_user_data_dir() / _SETTINGS_FILE


def _load_schema() -> dict:
    global _schema_cache
    if _schema_cache is None:
        with _SCHEMA_PATH.open("r", encoding="utf-8") as f:
            _schema_cache = json.load(f)
    return _schema_cache


def validate_settings(data: Any) -> List[str]:
    """Return a list of human readable schema errors (empty when valid)."""
    validator = jsonschema.Draft7Validator(_load_schema())
    errors = []
    for err in sorted(validator.iter_errors(data), key=lambda e: list(e.path)):
        loc = "/".join(str(p) for p in err.absolute_path) or "(root)"
        errors.append(f"{loc}: {err.message}")
    return errors


def load_settings() -> Dict[str, Any]:
    """Load the stored settings; a missing file means no stored settings."""
    p = settings_path()
    try:
        if not p.is_file():
            return {}
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SettingsError(f"{p}: invalid JSON: {e}") from e
    except OSError as e:
        raise SettingsError(f"{p}: cannot read settings: {e}") from e
    errors = validate_settings(data)
    if errors:
        raise SettingsError(f"{p}: " + "; ".join(errors))
    return data


def save_settings(data: Dict[str, Any]) -> Path:
    errors = validate_settings(data)
    if errors:
        raise SettingsError("; ".join(errors))
    try:
        p = ensure_settings_dir() / _SETTINGS_FILE
        # atomic write: write to temp then replace
        tmp = p.with_suffix(".tmp")
        try:
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            if os.name == "posix":
                try:
                    tmp.chmod(0o600)
                except OSError:
                    pass
            os.replace(str(tmp), str(p))
        finally:
            if tmp.exists():
                tmp.unlink()
    except OSError as e:
        raise SettingsError(f"cannot save settings: {e}") from e
    return p


def set_setting(key: str, value: Any) -> Path:
    s = load_settings()
    s[key] = value
    return save_settings(s)


def reset_settings() -> bool:
    """Remove the settings file so built-in defaults apply again.

    Returns True when a file was removed.
    """
    p = settings_path()
    if not p.is_file():
        return False
    try:
        p.unlink()
    except OSError as e:
        raise SettingsError(f"{p}: cannot remove settings: {e}") from e
    return True


def coerce_value(key: str, raw: str, source: Optional[str] = None) -> Any:
    """Convert the text form of a setting to the type its default has."""
    if key not in DEFAULTS:
        raise SettingsError(
            f"Unknown setting: {key}. Known settings: {', '.join(sorted(DEFAULTS))}"
        )
    source = source or key
    kind = type(DEFAULTS[key])
    if kind is bool:
        val = raw.strip().lower()
        if val in _TRUE:
            return True
        if val in _FALSE:
            return False
        raise SettingsError(f"{source}: expected a boolean, got {raw!r}")
    if kind is int:
        try:
            return int(raw)
        except ValueError as e:
            raise SettingsError(f"{source}: expected an integer, got {raw!r}") from e
    return raw.strip()


def parse_assignment(text: str) -> Tuple[str, Any]:
    """Parse a `key=value` pair given on the command line."""
    key, sep, raw = text.partition("=")
    key = key.strip()
    if not sep or not key:
        raise SettingsError(f"Expected KEY=VALUE, got {text!r}")
    value = coerce_value(key, raw)
    errors = validate_settings({key: value})
    if errors:
        raise SettingsError("; ".join(errors))
    return key, value


def env_overrides() -> Dict[str, Any]:
    """Read HASHIT_* variables, loading a local `.env` file first.

    A variable that is set but empty counts as unset.
    """
    load_dotenv(find_dotenv(usecwd=True))
    out = {}
    for key, var in _ENV_VARS.items():
        raw = os.getenv(var)
        if raw is None or not raw.strip():
            continue
        out[key] = coerce_value(key, raw, source=var)
    errors = validate_settings(out)
    if errors:
        raise SettingsError("environment: " + "; ".join(errors))
    return out


def effective_settings(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Merge defaults, stored settings, environment and explicit overrides.

    Keys in `overrides` whose value is None are ignored, so unset CLI flags
    do not mask configured values.
    """
    merged = dict(DEFAULTS)
    merged.update(load_settings())
    merged.update(env_overrides())
    for k, v in (overrides or {}).items():
        if v is not None:
            merged[k] = v
    return merged
