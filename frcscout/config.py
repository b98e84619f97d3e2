"""Analysis configuration management."""

from functools import lru_cache
from pathlib import Path

from .schemas import PoolThresholds, ScoutingConfig
from .utils import load_json

CONFIG_PATH = Path(__file__).parent / 'data' / 'scouting_config.json'


@lru_cache(maxsize=1)
def get_config() -> ScoutingConfig:
    """
    Load analysis configuration from frcscout/data/scouting_config.json.

    Configuration is cached after first load.

    Returns:
        ScoutingConfig object with validated settings

    Raises:
        FileNotFoundError: If scouting_config.json doesn't exist
        ValueError: If config file has invalid structure

    Example:
        from frcscout.config import get_config
        config = get_config()
        print(f"Feed limit: {config.feed_limit}")
    """
    return load_json(CONFIG_PATH, schema=ScoutingConfig)


def get_feed_limit() -> int:
    """Get the number of matches shown in the forecast and accuracy feeds."""
    return get_config().feed_limit


def get_variance_tolerance() -> float:
    """Get the projected-vs-actual point gap still counted as a close call."""
    return get_config().variance_tolerance


def get_default_sort_metric() -> str:
    """Get the average the draft pool is ranked by when none is chosen."""
    return get_config().default_sort_metric


def get_default_thresholds() -> PoolThresholds:
    """Get the starting draft pool thresholds."""
    return get_config().default_thresholds


def get_win_probability_fallback() -> int:
    """Get the red win probability used when neither alliance projects points."""
    return get_config().win_probability_fallback


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
