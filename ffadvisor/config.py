"""Advisor configuration management."""

from functools import lru_cache
from pathlib import Path

from .schemas import AdvisorConfig
from .utils import load_json

CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'advisor_config.json'


@lru_cache(maxsize=1)
def get_config() -> AdvisorConfig:
    """
    Load advisor configuration from data/advisor_config.json.

    Configuration is cached after first load. A missing file falls back to
    the defaults declared on AdvisorConfig.

    Returns:
        AdvisorConfig object with validated settings

    Raises:
        ValueError: If config file has invalid structure

    Example:
        from ffadvisor.config import get_config
        config = get_config()
        print(f"Player cache TTL: {config.player_cache_ttl}s")
    """
    if not CONFIG_PATH.exists():
        return AdvisorConfig()
    return load_json(CONFIG_PATH, schema=AdvisorConfig)


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
