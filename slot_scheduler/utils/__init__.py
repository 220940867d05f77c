"""Utility functions."""

from .config import get_default_config, load_config, merge_config, setup_logging
from .datetime_utils import at_minute, day_of_week, iter_days, minute_of_day

__all__ = [
    'get_default_config',
    'load_config',
    'merge_config',
    'setup_logging',
    'at_minute',
    'day_of_week',
    'iter_days',
    'minute_of_day',
]
