import os
import json
from types import MappingProxyType

from tzclip.logger import setup_logger

# Abbreviation -> zone used for conversion. One zone per abbreviation,
# so e.g. IST is always India and BST is always London.
DEFAULT_TIMEZONE_MAP = MappingProxyType({
    'EST': 'America/New_York',
    'EDT': 'America/New_York',
    'CST': 'America/Chicago',
    'CDT': 'America/Chicago',
    'MST': 'America/Denver',
    'MDT': 'America/Denver',
    'PST': 'America/Los_Angeles',
    'PDT': 'America/Los_Angeles',
    'GMT': 'GMT',
    'UTC': 'UTC',
    'BST': 'Europe/London',
    'IST': 'Asia/Kolkata',
    'JST': 'Asia/Tokyo',
    'AEST': 'Australia/Sydney',
    'AEDT': 'Australia/Sydney',
})

DEFAULT_ZONE = 'UTC'

# Abbreviation -> seconds east of UTC, only used to guess a zone for display.
# Scanned in this order as substrings, so an abbreviation has to come
# before any shorter one it contains (AEST before EST, AKST before KST).
# UTC and GMT are left out so "UTC+5:30" reaches the offset patterns.
DEFAULT_OFFSET_MAP = MappingProxyType({
    'AEDT': 11 * 3600,
    'AEST': 10 * 3600,
    'ACST': 9 * 3600 + 1800,
    'CEST': 2 * 3600,
    'EEST': 3 * 3600,
    'AKDT': -8 * 3600,
    'AKST': -9 * 3600,
    'EST': -5 * 3600,
    'EDT': -4 * 3600,
    'CST': -6 * 3600,
    'CDT': -5 * 3600,
    'MST': -7 * 3600,
    'MDT': -6 * 3600,
    'PST': -8 * 3600,
    'PDT': -7 * 3600,
    'HST': -10 * 3600,
    'BST': 1 * 3600,
    'CET': 1 * 3600,
    'EET': 2 * 3600,
    'MSK': 3 * 3600,
    'IST': 5 * 3600 + 1800,
    'JST': 9 * 3600,
    'KST': 9 * 3600,
})


def get_config_file():
    """Config file path, TZCLIP_CONFIG wins over the packaged config.json"""
    config_file = os.getenv('TZCLIP_CONFIG')
    if not config_file:
        config_file = os.path.join(os.path.dirname(__file__), 'config.json')
    return config_file


def load_config(config_file=None):
    """Load config.json, an empty config if it is missing or broken"""
    config_file = config_file or get_config_file()
    try:
        with open(config_file, 'r') as f:
            config = json.load(f)
    except (OSError, ValueError):
        return {}
    return config if isinstance(config, dict) else {}


def get_testing_mode(config=None):
    """Check if testing mode is enabled"""
    if config is None:
        config = load_config()
    return bool(config.get('testing_mode', False))


def _merge_table(defaults, overrides, convert):
    """Copy defaults and apply overrides, skipping entries convert rejects"""
    table = dict(defaults)
    if not overrides:
        return MappingProxyType(table)
    if not isinstance(overrides, dict):
        logger.debug(f"Ignoring table override {overrides!r}, expected an object")
        return MappingProxyType(table)

    for key, value in overrides.items():
        value = convert(value)
        if not isinstance(key, str) or not key or value is None:
            logger.debug(f"Ignoring table entry {key!r}: {overrides[key]!r}")
            continue
        table[key.upper()] = value
    return MappingProxyType(table)


def _zone_name(value):
    return value if isinstance(value, str) and value else None


def _offset_seconds(value):
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def get_timezone_map(config=None):
    """Default abbreviation -> zone table with config overrides applied"""
    if config is None:
        config = load_config()
    return _merge_table(DEFAULT_TIMEZONE_MAP, config.get('timezone_map'), _zone_name)


def get_offset_map(config=None):
    """Default abbreviation -> offset table with config overrides applied"""
    if config is None:
        config = load_config()
    return _merge_table(DEFAULT_OFFSET_MAP, config.get('offset_map'), _offset_seconds)


logger = setup_logger(__name__, testing=get_testing_mode())
