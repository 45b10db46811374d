#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Guess a UTC offset from text, for display only.

Abbreviations are looked for first, as plain case-insensitive substrings,
in the order of the offset table. Explicit offsets ("UTC+5:30", "GMT-3",
"+09:00") are only tried when no abbreviation shows up anywhere, and a
plain UTC or GMT with no offset after it means zero.
"""

import re
from types import MappingProxyType
from typing import Optional

from tzclip.config import get_offset_map, get_testing_mode
from tzclip.logger import setup_logger

logger = setup_logger(__name__, testing=get_testing_mode())

OFFSET_COMPONENTS = r'(?P<sign>[+-])(?P<hours>\d{1,2})(?::(?P<minutes>\d{2}))?(?!\d)'

OFFSET_PATTERNS = (
    re.compile(rf'UTC\s*{OFFSET_COMPONENTS}', re.IGNORECASE),
    re.compile(rf'GMT\s*{OFFSET_COMPONENTS}', re.IGNORECASE),
    # Not inside dates or phone numbers like 2025-01-15
    re.compile(rf'(?<![\w+-]){OFFSET_COMPONENTS}'),
)

ZERO_OFFSET_PATTERN = re.compile(r'\b(?:UTC|GMT)\b', re.IGNORECASE)


def parse_offset_match(match) -> int:
    """Seconds east of UTC for an offset match"""
    hours = int(match.group('hours'))
    minutes = int(match.group('minutes')) if match.group('minutes') else 0
    seconds = hours * 3600 + minutes * 60
    return -seconds if match.group('sign') == '-' else seconds


class TimezoneDetector:
    def __init__(self, offset_map=None):
        if offset_map is None:
            offset_map = get_offset_map()
        self.offset_map = MappingProxyType(
            {key.upper(): value for key, value in offset_map.items()})

    def find_abbreviation(self, text: str) -> Optional[str]:
        upper = text.upper()
        for abbreviation in self.offset_map:
            if abbreviation in upper:
                return abbreviation
        return None

    def detect_zone(self, text: str) -> Optional[int]:
        abbreviation = self.find_abbreviation(text)
        if abbreviation:
            logger.debug(f"Detected timezone abbreviation {abbreviation}")
            return self.offset_map[abbreviation]

        for pattern in OFFSET_PATTERNS:
            match = pattern.search(text)
            if match:
                offset = parse_offset_match(match)
                logger.debug(f"Detected offset {match.group(0)!r} = {offset}s")
                return offset

        if ZERO_OFFSET_PATTERN.search(text):
            logger.debug("Detected plain UTC/GMT")
            return 0

        return None
