#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Find the time expression that closes a piece of text.

Rules are tried in order and the first one whose match also passes its
arity check wins. The arity of a match is the whole match plus every
captured hour, meridiem and zone group; minutes are optional everywhere
and never count.
"""

import re
from typing import NamedTuple, Optional, Tuple

from tzclip import build_clock_pattern, build_meridiem_pattern, normalize_hour
from tzclip.config import get_testing_mode
from tzclip.logger import setup_logger

logger = setup_logger(__name__, testing=get_testing_mode())

COUNTED_GROUPS = ('hour', 'meridiem', 'zone')


class TimePattern(NamedTuple):
    name: str
    regex: re.Pattern
    min_groups: int

    def arity(self, match) -> int:
        """Number of usable components in a match of this pattern"""
        groups = match.groupdict()
        return 1 + sum(1 for key in COUNTED_GROUPS if groups.get(key))

    def accepts(self, match) -> bool:
        return self.arity(match) >= self.min_groups


class ParsedTime(NamedTuple):
    hour: int
    minute: int
    timezone_abbreviation: Optional[str]
    meridiem: Optional[str]
    rule: str
    matched_text: str

    def key(self) -> Tuple:
        """Structural part of the result, without the text it came from"""
        return (self.hour, self.minute, self.timezone_abbreviation,
                self.meridiem, self.rule)


# Most specific first
TIME_PATTERNS = (
    # 9PM EST, 9 PM EST, 9:00PM EST, 9:00 PM EST
    # The zone is optional in the regex, so "9PM" matches structurally
    # and has to be turned away by the arity check.
    TimePattern('meridiem_zone', re.compile(build_meridiem_pattern(with_zone=True)), 4),
    # 21:00 EST, 21:00EST
    TimePattern('clock_zone', re.compile(build_clock_pattern(with_zone=True)), 3),
    # 9PM, 9 PM, 9:00PM, 9:00 PM
    TimePattern('meridiem', re.compile(build_meridiem_pattern()), 3),
    # 21:00
    TimePattern('clock', re.compile(build_clock_pattern()), 2),
)


class TimeExtractor:
    def __init__(self, patterns=TIME_PATTERNS):
        self.patterns = tuple(patterns)

    def match(self, text: str):
        """Return (pattern, match) for the first rule that fully validates"""
        for pattern in self.patterns:
            match = pattern.regex.search(text)
            if not match:
                continue

            logger.debug(f"Matched pattern {pattern.name} with components: {match.groupdict()}")
            if not pattern.accepts(match):
                logger.debug(f"Not enough components for pattern {pattern.name} "
                             f"({pattern.arity(match)} < {pattern.min_groups}), continuing...")
                continue

            return pattern, match
        return None

    def extract(self, text: str) -> Optional[ParsedTime]:
        """Extract the trailing time expression from text"""
        logger.debug(f"Parsing text: {text!r}")
        found = self.match(text)
        if not found:
            logger.debug("No time pattern matched")
            return None

        pattern, match = found
        groups = match.groupdict()
        hour = int(groups['hour'])
        minute = int(groups['minute']) if groups.get('minute') else 0
        meridiem = groups['meridiem'].upper() if groups.get('meridiem') else None
        zone = groups.get('zone') or None

        parsed = ParsedTime(
            hour=normalize_hour(hour, meridiem),
            minute=minute,
            timezone_abbreviation=zone,
            meridiem=meridiem,
            rule=pattern.name,
            matched_text=text[match.start('hour'):match.end()].strip(),
        )
        logger.debug(f"Parsed {parsed}")
        return parsed
