"""
YAML configuration for Invaders.

A config file has four optional sections: game, display, audio and logging.
When no path is given, config.yaml in the working directory is tried first,
then config/default.yaml. Command line overrides are merged on top of the
file before anything is validated.
"""
import yaml
from pathlib import Path
from typing import Optional, Any, Dict, List
from dataclasses import dataclass, field, fields, asdict

from ..game.config import GameSettings
from ..game.errors import ConfigurationError
from .logger import get_logger

logger = get_logger(__name__)


@dataclass
class DisplayConfig:
    """Window settings."""
    window_width: int = 800
    window_height: int = 600
    title: str = "Space Invaders"
    debug: bool = False


@dataclass
class AudioConfig:
    """Sound cue settings."""
    enabled: bool = True
    sound_dir: str = "sounds"
    muted: bool = False


@dataclass
class LoggingConfig:
    """Log level and optional log file."""
    level: str = "INFO"
    log_file: str = ""


@dataclass
class Config:
    """Everything needed to launch the game."""
    game: GameSettings = field(default_factory=GameSettings)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _build_section(cls: type, values: Optional[Dict[str, Any]]) -> Any:
    """Instantiate a section dataclass, dropping keys it does not define."""
    known = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in (values or {}).items() if k in known})


def _merge(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge nested dictionaries without mutating either input.

    Args:
        base: Values read from the config file
        updates: Values that win on conflict

    Returns:
        A new dictionary
    """
    merged = dict(base)
    for key, value in updates.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _merge(current, value)
        else:
            merged[key] = value
    return merged


def _candidate_paths() -> List[Path]:
    project_root = Path(__file__).parent.parent.parent
    return [
        Path("config.yaml"),
        Path("config") / "default.yaml",
        project_root / "config.yaml",
        project_root / "config" / "default.yaml",
    ]


def _read_yaml(path: Path) -> Dict[str, Any]:
    """
    Read a YAML mapping; an empty file reads as no settings.

    Raises:
        ConfigurationError: If the document is not a mapping of sections
    """
    data = yaml.safe_load(path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{path} must contain a mapping of config sections, got {type(data).__name__}"
        )
    return data


def config_from_dict(data: Dict[str, Any]) -> Config:
    """
    Build a Config from plain data.

    Raises:
        ConfigurationError: If the game section holds invalid values
    """
    return Config(
        game=GameSettings.from_dict(data.get("game") or {}),
        display=_build_section(DisplayConfig, data.get("display")),
        audio=_build_section(AudioConfig, data.get("audio")),
        logging=_build_section(LoggingConfig, data.get("logging")),
    )


def load_config(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Config:
    """
    Load the game configuration.

    Args:
        config_path: YAML file to read (searched for if omitted)
        overrides: Nested values applied on top of the file

    Returns:
        Validated Config
    """
    if config_path is None:
        config_path = next(
            (str(path) for path in _candidate_paths() if path.is_file()), None
        )

    data: Dict[str, Any] = {}
    if config_path is not None and Path(config_path).is_file():
        data = _read_yaml(Path(config_path))
        logger.debug("Loaded config from %s", config_path)
    else:
        logger.info("No config file found, using defaults")

    if overrides:
        data = _merge(data, overrides)

    return config_from_dict(data)


def save_config(config: Config, config_path: str) -> None:
    """Write a Config out as YAML, keeping the section and field order."""
    text = yaml.safe_dump(asdict(config), default_flow_style=False, sort_keys=False)
    Path(config_path).write_text(text)
