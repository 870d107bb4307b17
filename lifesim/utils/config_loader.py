"""Helpers for loading and validating lifesim configuration."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional
import threading

import yaml  # type: ignore[import-untyped]

from lifesim.core.exceptions import ConfigurationError
from lifesim.core.topology import Topology

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_FILENAME_FIELDS = ("{width}", "{height}", "{iterations}")


@dataclass(frozen=True)
class RandomConfig:
    density: float
    seed: Optional[int] = None


@dataclass(frozen=True)
class ParallelConfig:
    workers: Optional[int] = None
    chunks: Optional[int] = None


@dataclass(frozen=True)
class OutputConfig:
    directory: str
    filename: str


@dataclass(frozen=True)
class LoggingConfig:
    level: str
    progress_every: int


@dataclass(frozen=True)
class LifeSimConfig:
    topology: Topology
    random: RandomConfig
    parallel: ParallelConfig
    output: OutputConfig
    logging: LoggingConfig


# Configuration cache with thread safety
_LOADER_CACHE: dict[str, LifeSimConfig] = {}
_CACHE_LOCK = threading.RLock()


def _get_config_path(path: Optional[str] = None) -> str:
    if path is None:
        # Bundled defaults live next to the package modules
        base = Path(__file__).parent.parent / "config.yaml"
        path = str(base)

    return path


def _load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except Exception as exc:
        raise ConfigurationError(f"Failed to parse config: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError("Config root must be a mapping")
    return raw


def _optional_positive_int(value: Any, key: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(key, f"must be an integer or null, got {value!r}")
    if value <= 0:
        raise ConfigurationError(key, "must be a positive integer")
    return value


def _build_random_cfg(random_raw: dict[str, Any]) -> RandomConfig:
    density = float(random_raw["density"])
    if not 0.0 <= density <= 1.0:
        raise ConfigurationError("random.density", "must be within [0, 1]")

    seed = random_raw.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ConfigurationError("random.seed", f"must be an integer or null, got {seed!r}")
    if seed is not None and seed < 0:
        raise ConfigurationError("random.seed", f"must be >= 0, got {seed}")
    return RandomConfig(density=density, seed=seed)


def _build_parallel_cfg(parallel_raw: dict[str, Any]) -> ParallelConfig:
    return ParallelConfig(
        workers=_optional_positive_int(parallel_raw.get("workers"), "parallel.workers"),
        chunks=_optional_positive_int(parallel_raw.get("chunks"), "parallel.chunks"),
    )


def _build_output_cfg(output_raw: dict[str, Any]) -> OutputConfig:
    filename = str(output_raw["filename"])
    missing = [name for name in _FILENAME_FIELDS if name not in filename]
    if missing:
        raise ConfigurationError(
            "output.filename", f"template must contain {', '.join(missing)}"
        )
    return OutputConfig(directory=str(output_raw["directory"]), filename=filename)


def _build_logging_cfg(logging_raw: dict[str, Any]) -> LoggingConfig:
    level = str(logging_raw.get("level", "INFO")).upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError("logging.level", f"unknown level '{level}'")

    progress_every = _optional_positive_int(
        logging_raw.get("progress_every", 1), "logging.progress_every"
    )
    return LoggingConfig(level=level, progress_every=progress_every or 1)


def _parse_lifesim_cfg_from_dict(raw: dict[str, Any]) -> LifeSimConfig:
    try:
        topology = Topology.parse(raw.get("topology", Topology.TOROIDAL.value))
        cfg = LifeSimConfig(
            topology=topology,
            random=_build_random_cfg(raw["random"]),
            parallel=_build_parallel_cfg(raw.get("parallel") or {}),
            output=_build_output_cfg(raw["output"]),
            logging=_build_logging_cfg(raw.get("logging") or {}),
        )
    except KeyError as exc:
        raise ConfigurationError(f"Missing required config key: {exc}") from exc
    except (AttributeError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid config schema: {exc}") from exc

    return cfg


def load_config(path: Optional[str] = None) -> LifeSimConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Optional path to YAML config. If None, load the bundled
            lifesim/config.yaml.

    Returns:
        LifeSimConfig instance

    Raises:
        ConfigurationError: on parse or validation errors
    """

    p = Path(_get_config_path(path=path))
    raw = _load_yaml_file(p)

    return _parse_lifesim_cfg_from_dict(raw=raw)


def get_config() -> LifeSimConfig:
    """Return the bundled config, loading and caching it if necessary.

    THREAD SAFETY: This function is thread-safe. Multiple threads can
    safely call this concurrently.
    """
    path = _get_config_path()
    with _CACHE_LOCK:
        if path not in _LOADER_CACHE:
            _LOADER_CACHE[path] = load_config()
        return _LOADER_CACHE[path]


def clear_config_cache() -> None:
    """Clear all cached configurations.

    Useful for testing. All subsequent calls to get_config() will reload
    from disk.
    """
    with _CACHE_LOCK:
        _LOADER_CACHE.clear()
