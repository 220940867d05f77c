"""Configuration management."""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

STALE_DATES_POLICIES = ('keep', 'clear')


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file, merged over the defaults."""
    path = Path(config_path)
    
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    
    with open(path, 'r') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            loaded = yaml.safe_load(f)
        elif path.suffix.lower() == '.json':
            loaded = json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")
    
    return merge_config(get_default_config(), loaded or {})


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        'scheduling': {
            'search_limit_days': 365,  # one year past the horizon start
            'stale_dates': 'keep',
        },
        'logging': {
            'level': 'INFO',
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
        'output': {
            'results_dir': 'results',
        },
    }


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge `override` into a copy of `base`."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def setup_logging(config: Dict[str, Any], verbose: bool = False) -> None:
    """Configure the root logger from the `logging` config section."""
    logging_config = config.get('logging', {})
    level = 'DEBUG' if verbose else logging_config.get('level', 'INFO')
    
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=logging_config.get('format', '%(levelname)s %(name)s: %(message)s'),
        force=True,
    )
