"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for jwtbearer:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.jwtbearer/`` on macOS and Windows. See :func:`get_config_dir`,
  :func:`get_data_dir`, :func:`get_providers_dir`.
* **Global config** -- A single :class:`~jwtbearer.models.GlobalConfig`
  JSON file storing defaults (output format, default provider).
* **Providers** -- One JSON file per token endpoint identity, each
  deserialised into a :class:`~jwtbearer.models.ProviderConfig`. Managed
  via :func:`load_provider`, :func:`save_provider`, :func:`delete_provider`.
* **Precedence resolution** -- :func:`resolve_config` merges the CLI flag,
  environment variable, project-local config, and global config into the
  active provider.
* **Credential resolution** -- :func:`resolve_credential` reads the signing
  key material from environment variables or files.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from jwtbearer.exceptions import ConfigError
from jwtbearer.models import GlobalConfig, ProviderConfig

_APP_NAME = "jwtbearer"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "jwtbearer.json"
_ENV_PROVIDER = "JWTBEARER_PROVIDER"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform uses the XDG Base Directory layout (Linux/BSD)."""
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

    On Linux/BSD: ``$XDG_CONFIG_HOME/jwtbearer/`` (default ``~/.config/jwtbearer/``).
    On macOS/Windows: ``~/.jwtbearer/``.

    Returns:
        Absolute path to the configuration directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/jwtbearer/`` (default ``~/.local/share/jwtbearer/``).
    On macOS/Windows: ``~/.jwtbearer/data/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_providers_dir() -> Path:
    """Return the providers directory (``<config_dir>/providers/``), creating it if necessary."""
    path = get_config_dir() / "providers"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. Provider files may
    name key material, so they are written with ``0o600`` permissions.
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
        os.chmod(tmp_path, 0o600)
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


def _read_json(path: Path, what: str) -> Any:
    """Read and decode a JSON file, wrapping failures in :class:`ConfigError`."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid {what} at {path}: {exc}") from exc


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~jwtbearer.models.GlobalConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    data = _read_json(path, "global config")
    try:
        return GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Providers ---


def _provider_path(name: str) -> Path:
    return get_providers_dir() / f"{name}.json"


def list_providers() -> list[str]:
    """Return all provider names found in the providers directory, sorted alphabetically."""
    return sorted(p.stem for p in get_providers_dir().glob("*.json") if p.is_file())


def load_provider(name: str) -> ProviderConfig:
    """Load a provider from disk.

    The file holds a flat mapping of :class:`~jwtbearer.models.ConfigKey`
    names to values and goes through
    :meth:`~jwtbearer.models.ProviderConfig.from_mapping`, so hand-edited
    files get the same trimming and flag parsing as any other source.
    A provider without an explicit ``provider_name`` takes its file name.

    Args:
        name: Provider name (``<name>.json`` in the providers directory).

    Returns:
        The deserialised :class:`~jwtbearer.models.ProviderConfig`.

    Raises:
        ConfigError: If the file does not exist, contains invalid JSON, or
            fails validation.
    """
    path = _provider_path(name)
    if not path.is_file():
        raise ConfigError(f"Provider '{name}' not found at {path}")
    data = _read_json(path, f"provider '{name}'")
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid provider '{name}' at {path}: expected a JSON object")
    if not str(data.get("provider_name") or "").strip():
        data["provider_name"] = name
    try:
        return ProviderConfig.from_mapping(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid provider '{name}' at {path}: {exc}") from exc


def save_provider(name: str, config: ProviderConfig) -> None:
    """Persist a provider atomically to the providers directory."""
    data = config.model_dump(mode="json")
    _atomic_write(_provider_path(name), json.dumps(data, indent=2) + "\n")


def delete_provider(name: str) -> None:
    """Delete a provider's JSON file from disk.

    Raises:
        ConfigError: If the provider does not exist.
    """
    path = _provider_path(name)
    if not path.is_file():
        raise ConfigError(f"Provider '{name}' not found at {path}")
    path.unlink()


def provider_exists(name: str) -> bool:
    """Check whether a provider file exists on disk."""
    return _provider_path(name).is_file()


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./jwtbearer.json``.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    return _read_json(path, "project config")


# --- Precedence resolution ---


def resolve_config(
    cli_provider: Optional[str] = None,
) -> tuple[GlobalConfig, Optional[ProviderConfig]]:
    """Resolve the active provider with full precedence chain.

    Precedence (high to low):
        1. CLI flag (``cli_provider``)
        2. Environment variable (``JWTBEARER_PROVIDER``)
        3. Project config (``./jwtbearer.json``)
        4. User config (``~/.config/jwtbearer/config.json``)
        5. The only configured provider, when auto-select is enabled

    Returns:
        A tuple of ``(global_config, active_provider_or_None)``.
    """
    global_cfg = load_global_config()

    resolved: Optional[str] = global_cfg.default_provider
    project = load_project_config()
    if project is not None and project.get("default_provider"):
        resolved = project["default_provider"]
    env_provider = os.environ.get(_ENV_PROVIDER)
    if env_provider:
        resolved = env_provider
    if cli_provider is not None:
        resolved = cli_provider

    if resolved is None and global_cfg.auto_select_single_provider:
        providers = list_providers()
        if len(providers) == 1:
            resolved = providers[0]

    provider: Optional[ProviderConfig] = None
    if resolved is not None:
        provider = load_provider(resolved)
    return global_cfg, provider


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - ``"keyring:service:account"`` -- not supported

    Args:
        source: The source descriptor string.

    Returns:
        The resolved credential string.

    Raises:
        ConfigError: If the source can't be resolved.
    """
    source = source.strip()

    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source.startswith("keyring:"):
        raise ConfigError("Keyring credential sources are not supported")

    raise ConfigError(f"Unknown credential source format: {source}")
