"""Configuration constants, dataclasses and YAML persistence for nezumi-p."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

VERSION = "0.1.0"
APP_NAME = "nezumi-p"

# API constants
API_BASE = "https://prim.iledefrance-mobilites.fr/marketplace"
API_KEY_HEADER = "apiKey"

# Render loop
POLL_TIMEOUT = 1.0  # seconds, also the countdown refresh tick

# Board geometry (terminal cells)
FIRST_ROW_HEIGHT = 7
ROW_HEIGHT = 6
ROW_HEIGHT_DIVISOR = 6
RESERVED_ROWS = 3
CLOCK_ZONE_WIDTH = 14
COUNTDOWN_ZONE_WIDTH = 20
TITLE_HEIGHT = 1
STATUS_HEIGHT = 5


@dataclass(frozen=True)
class Station:
    """One monitored line/stop pair."""
    line_ref: str
    stop_point_ref: str
    name: str


# See https://data.iledefrance-mobilites.fr/explore/dataset/referentiel-des-lignes/
# and https://data.iledefrance-mobilites.fr/explore/dataset/arrets/
DEFAULT_STATIONS = (
    Station("C01378", "A463226", "Michel Bizot (8) (Balard)"),
    Station("C02251", "A23512", "Wattignies - Gravelle (77) (Gare de Lyon)"),
    Station("C01119", "A23512", "Wattignies - Gravelle (87) (Invalides)"),
    Station("C01743", "A473907", "Luxembourg (RER B) (Robinson • Saint-Rémy-lès-Chevreuse)"),
)


@dataclass(frozen=True)
class Config:
    """Persisted configuration: API key and the ordered station list."""
    api_key: str = ""
    stations: tuple[Station, ...] = field(default=DEFAULT_STATIONS)

    def to_dict(self) -> dict[str, Any]:
        return {
            "api_key": self.api_key,
            "stations": [
                {
                    "line_ref": s.line_ref,
                    "stop_point_ref": s.stop_point_ref,
                    "name": s.name,
                }
                for s in self.stations
            ],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Config":
        """Build a Config from a parsed YAML mapping, validating every field."""
        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping at the top level")

        api_key = data.get("api_key", "")
        if api_key is None:
            api_key = ""
        if not isinstance(api_key, str):
            raise ConfigError("'api_key' must be a string")

        raw_stations = data.get("stations")
        if raw_stations is None:
            return cls(api_key=api_key)
        if not isinstance(raw_stations, list):
            raise ConfigError("'stations' must be a list")

        stations = []
        for i, entry in enumerate(raw_stations):
            if not isinstance(entry, dict):
                raise ConfigError(f"stations[{i}] must be a mapping")
            values = {}
            for key in ("line_ref", "stop_point_ref", "name"):
                if key not in entry:
                    raise ConfigError(f"Missing required key '{key}' in stations[{i}]")
                value = entry[key]
                if not isinstance(value, str):
                    raise ConfigError(f"stations[{i}].{key} must be a string")
                values[key] = value
            stations.append(Station(**values))

        return cls(api_key=api_key, stations=tuple(stations))


def default_config_path() -> Path:
    """Location of the config file, following the XDG base directory layout."""
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(Path.home(), ".config")
    return Path(base) / APP_NAME / "config.yaml"


def load_config(path: Path | None = None) -> Config:
    """Load the configuration, falling back to defaults when the file is absent."""
    path = path or default_config_path()
    if not path.exists():
        logger.info("No config at %s, using defaults", path)
        return Config()

    logger.info("Loading config from %s", path)
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    # An empty file parses to None
    if data is None:
        return Config()
    return Config.from_dict(data)


def store_config(config: Config, path: Path | None = None) -> None:
    """Write the configuration back to disk, creating the directory if needed."""
    path = path or default_config_path()
    logger.info("Storing config to %s", path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as handle:
            yaml.safe_dump(config.to_dict(), handle, allow_unicode=True, sort_keys=False)
    except OSError as exc:
        raise ConfigError(f"Cannot write config file {path}: {exc}") from exc


def init_config(path: Path | None = None) -> Config:
    """Load the config and immediately persist it in normalized form."""
    config = load_config(path)
    store_config(config, path)
    return config
