"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all configuration for specdocs:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.specdocs/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~specdocs.models.GlobalConfig`
  JSON file storing rendering defaults (expansion policy, wrap width,
  snippet base URL, default status label).
* **Project config** -- ``./specdocs.json``, a partial config deep-merged
  over the global one so a documentation repository can pin its own policy.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project-local config, and global config into the
  final effective configuration.

All file writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`) so a reader never observes a half-written file.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from specdocs.exceptions import ConfigError
from specdocs.models import GlobalConfig

_APP_NAME = "specdocs"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "specdocs.json"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/specdocs/`` (default ``~/.config/specdocs/``).
    On macOS/Windows: ``~/.specdocs/``.

    Returns:
        Absolute path to the configuration directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_CONFIG_HOME", (".config",))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/specdocs/`` (default ``~/.local/share/specdocs/``).
    On macOS/Windows: ``~/.specdocs/logs/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_DATA_HOME", (".local", "share"))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    On success the temp file is renamed over *path*; on any failure the temp
    file is cleaned up and *path* is left untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up the temp file on any error (including KeyboardInterrupt).
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def _read_json(path: Path, kind: str) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid {kind} at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {kind} at {path}: expected a JSON object")
    return data


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the XDG config directory.

    Returns:
        The deserialised :class:`~specdocs.models.GlobalConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = global_config_path()
    if not path.is_file():
        return GlobalConfig()
    data = _read_json(path, "global config")
    try:
        return GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk.

    Args:
        config: The configuration to save.
    """
    data = config.model_dump(mode="json")
    atomic_write(global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./specdocs.json``.

    Project-local config sits between global config and environment variables
    in the precedence chain. It may be partial: only the keys it sets
    override the global values.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    return _read_json(path, "project config")


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return *base* with *override* merged in; nested dicts merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# --- Precedence resolution ---


def resolve_config(
    cli_base_url: Optional[str] = None,
    cli_output_dir: Optional[str] = None,
) -> GlobalConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_base_url``, ``cli_output_dir``)
        2. Environment variables (``SPECDOCS_BASE_URL``,
           ``SPECDOCS_STATUS_LABEL``, ``SPECDOCS_OUTPUT_DIR``)
        3. Project config (``./specdocs.json``)
        4. User config (``~/.config/specdocs/config.json``)
        5. Defaults

    Returns:
        The effective :class:`~specdocs.models.GlobalConfig`.

    Raises:
        ConfigError: If any layer is unreadable or the merged result fails
            validation.
    """
    # 5 + 4. Load base global config (fills in defaults automatically)
    data = load_global_config().model_dump(mode="json")

    # 3. Layer in project-local config
    project = load_project_config()
    if project is not None:
        data = _deep_merge(data, project)
        for section in GlobalConfig.model_fields:
            if not isinstance(data.get(section), dict):
                raise ConfigError(
                    f"Invalid project config: '{section}' must be a JSON object"
                )

    # 2. Environment variables
    env_base_url = os.environ.get("SPECDOCS_BASE_URL")
    if env_base_url:
        data["snippets"]["base_url"] = env_base_url
    env_label = os.environ.get("SPECDOCS_STATUS_LABEL")
    if env_label:
        data["pages"]["default_status_label"] = env_label
    env_output_dir = os.environ.get("SPECDOCS_OUTPUT_DIR")
    if env_output_dir:
        data["pages"]["output_dir"] = env_output_dir

    # 1. CLI flags (highest precedence)
    if cli_base_url is not None:
        data["snippets"]["base_url"] = cli_base_url
    if cli_output_dir is not None:
        data["pages"]["output_dir"] = cli_output_dir

    try:
        return GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
