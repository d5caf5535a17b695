"""Generation configuration loading from TOML files."""

import tomllib
from pathlib import Path

from .generation.config import GenerationConfig


def _configs_dir() -> Path:
    return Path(__file__).parent.parent.parent / "configs"


def load_config(config_path: Path) -> GenerationConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed GenerationConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If values are out of range.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return GenerationConfig.model_validate(data)


def find_config(name: str) -> Path:
    """Find a config file by name.

    Anything that looks like a path (contains "/" or ends in .toml) is
    used as given; bare names resolve against the bundled configs/ dir.

    Raises:
        FileNotFoundError: If no candidate exists.
    """
    if "/" in name or name.endswith(".toml"):
        candidates = [Path(name)]
    else:
        candidates = [_configs_dir() / f"{name}.toml", _configs_dir() / name]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    raise FileNotFoundError(
        f"Config '{name}' not found. Bundled configs: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List available config names."""
    configs_dir = _configs_dir()
    if not configs_dir.exists():
        return []
    return sorted(p.stem for p in configs_dir.glob("*.toml"))
