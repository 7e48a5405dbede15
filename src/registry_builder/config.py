"""
Configuration for a registry run.

Settings come from an optional YAML file (``registry.yml`` in the registry root
by default); anything not set there falls back to DEFAULT_CONFIG.
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigValidationError, FilesystemError

CONFIG_FILENAME = "registry.yml"
REWRITE_MODES = ("text", "imports")

DEFAULT_CONFIG: dict[str, Any] = {
    "source_dir": ".",
    "staging_dir": "staged",
    "index_name": "index.ts",
    "extension": ".ts",
    "sort_modules": True,
    "rewrite_mode": "text",
}


@dataclass
class RegistryConfig:
    """Where the registry lives and how modules are processed."""

    source_dir: Path = Path(".")
    staging_dir: str = "staged"
    index_name: str = "index.ts"
    extension: str = ".ts"
    sort_modules: bool = True
    rewrite_mode: str = "text"

    def __post_init__(self):
        self.source_dir = Path(self.source_dir)

    @property
    def staging_path(self) -> Path:
        return self.source_dir / self.staging_dir

    @property
    def index_path(self) -> Path:
        return self.source_dir / self.index_name

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: str | Path | None = None) -> "RegistryConfig":
        """
        Create RegistryConfig from a dictionary.
        A relative source_dir is resolved against base_dir (the config file's directory).
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(f"Unknown config keys: {', '.join(unknown)}")
        merged = {**DEFAULT_CONFIG, **data}
        source_dir = Path(merged["source_dir"])
        if base_dir is not None and not source_dir.is_absolute():
            source_dir = Path(base_dir) / source_dir
        merged["source_dir"] = source_dir
        return cls(**merged)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["source_dir"] = str(self.source_dir)
        return data


def get_default_config() -> RegistryConfig:
    """Return a RegistryConfig built from DEFAULT_CONFIG."""
    return RegistryConfig.from_dict({})


def find_config_path(root: str | Path) -> Path | None:
    """Return root/registry.yml if present, else None."""
    candidate = Path(root) / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(
    config_path: str | Path | None = None,
    *,
    root: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> RegistryConfig:
    """
    Load registry configuration.

    Args:
        config_path: YAML file to read. If None, looks for registry.yml in root.
        root: Registry root used when no file sets source_dir (default: cwd).
        overrides: Values applied on top of the file (e.g. CLI flags); None values are ignored.

    Returns:
        A validated RegistryConfig.

    Raises:
        FileNotFoundError: If config_path is given but doesn't exist
        FilesystemError: If the config file cannot be read
        ConfigValidationError: If the file is not valid YAML or validation fails
    """
    root = Path(root) if root is not None else Path.cwd()
    data: dict[str, Any] = {}
    base_dir = root

    if config_path is None:
        config_path = find_config_path(root)
    else:
        config_path = Path(config_path)
        if not config_path.is_file():
            raise FileNotFoundError(f"Config file not found: {config_path}")

    if config_path is not None:
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise FilesystemError(config_path, f"Cannot read config file ({e.strerror or e})") from e
        except UnicodeDecodeError as e:
            raise ConfigValidationError(f"{config_path} is not valid UTF-8") from e
        try:
            loaded = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"{config_path} is not valid YAML: {e}") from e
        if loaded:
            if not isinstance(loaded, dict):
                raise ConfigValidationError(f"{config_path} must contain a mapping")
            data = loaded
        base_dir = config_path.parent

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    config = RegistryConfig.from_dict(data, base_dir=base_dir)
    validate_config(config)
    return config


def validate_config(config: RegistryConfig) -> None:
    """
    Validate configuration.

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    staging = config.staging_dir
    if not staging or staging in (".", "..") or "/" in staging or "\\" in staging:
        raise ConfigValidationError(f"staging_dir must be a single directory name, got {staging!r}")

    if not config.extension.startswith(".") or len(config.extension) < 2:
        raise ConfigValidationError(f"extension must look like '.ts', got {config.extension!r}")

    if not config.index_name.endswith(config.extension):
        raise ConfigValidationError(
            f"index_name {config.index_name!r} must end with extension {config.extension!r}"
        )

    if "/" in config.index_name or "\\" in config.index_name:
        raise ConfigValidationError(f"index_name must be a file name, got {config.index_name!r}")

    if config.rewrite_mode not in REWRITE_MODES:
        raise ConfigValidationError(
            f"rewrite_mode must be one of {', '.join(REWRITE_MODES)}, got {config.rewrite_mode!r}"
        )

    if not isinstance(config.sort_modules, bool):
        raise ConfigValidationError("sort_modules must be true or false")
