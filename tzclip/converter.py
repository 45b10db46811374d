#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from datetime import date, datetime, timedelta, tzinfo
from types import MappingProxyType
from typing import Callable, Iterable, List, NamedTuple, Optional, Union

from dateutil import tz

from tzclip.config import DEFAULT_ZONE, get_testing_mode, get_timezone_map
from tzclip.extractor import ParsedTime
from tzclip.logger import setup_logger

logger = setup_logger(__name__, testing=get_testing_mode())

TIME_FORMAT = '%-I:%M %p'

Zone = Union[tzinfo, str]


class ConversionResult(NamedTuple):
    original_label: str
    converted_label: str
    day_offset: int
    target_zone: tzinfo


def resolve_zone(zone: Optional[Zone]) -> Optional[tzinfo]:
    """Get a tzinfo for a tzinfo or an IANA name, None if unknown"""
    if isinstance(zone, tzinfo):
        return zone
    if not isinstance(zone, str) or not zone:
        return None
    return tz.gettz(zone)


def format_time(instant: datetime) -> str:
    return instant.strftime(TIME_FORMAT)


def day_offset(source: date, target: date) -> int:
    """Which way the target calendar date moved from the source date.

    Only looks at neighbouring months: December -> January counts as a
    step forward and January -> December as a step back.
    """
    if source.month != target.month:
        if source.month == 12 and target.month == 1:
            return 1
        if source.month == 1 and target.month == 12:
            return -1
        return 1 if target.month > source.month else -1

    if source.day != target.day:
        return 1 if target.day > source.day else -1

    return 0


def day_suffix(offset: int) -> str:
    if offset > 0:
        return ' +1'
    if offset < 0:
        return ' -1'
    return ''


class TimeConverter:
    def __init__(self, timezone_map=None, default_zone: str = DEFAULT_ZONE,
                 today: Optional[Callable[[], date]] = None):
        if timezone_map is None:
            timezone_map = get_timezone_map()
        self.timezone_map = MappingProxyType(
            {key.upper(): value for key, value in timezone_map.items()})
        self.default_zone = default_zone
        self.today = today or date.today

    def source_zone_name(self, abbreviation: Optional[str]) -> str:
        """Zone identifier for an abbreviation, the default zone if unknown"""
        if not abbreviation:
            return self.default_zone
        name = self.timezone_map.get(abbreviation.upper())
        if name is None:
            logger.debug(f"Unknown timezone abbreviation {abbreviation!r}, using {self.default_zone}")
            return self.default_zone
        return name

    def source_instant(self, parsed: ParsedTime) -> Optional[datetime]:
        """Today's date at the parsed time, in the zone the text named"""
        zone_name = self.source_zone_name(parsed.timezone_abbreviation)
        source_zone = resolve_zone(zone_name)
        if source_zone is None:
            logger.debug(f"Failed to create source timezone {zone_name!r}")
            return None

        today = self.today()
        try:
            # Hours and minutes past the end of the day roll over into tomorrow
            start_of_day = datetime(today.year, today.month, today.day, tzinfo=source_zone)
            instant = start_of_day + timedelta(hours=parsed.hour, minutes=parsed.minute)
        except (ValueError, OverflowError) as e:
            logger.debug(f"Failed to create source date: {e}")
            return None

        logger.debug(f"Source date: {instant.isoformat()} ({zone_name})")
        return instant

    def original_label(self, parsed: ParsedTime, instant: datetime) -> str:
        label = format_time(instant)
        if parsed.timezone_abbreviation:
            label = f"{label} {parsed.timezone_abbreviation}"
        return label

    def _convert_instant(self, parsed: ParsedTime, instant: datetime,
                         target_zone: Optional[Zone]) -> Optional[ConversionResult]:
        zone = resolve_zone(target_zone) if target_zone is not None else tz.tzlocal()
        if zone is None:
            logger.debug(f"Unknown target timezone {target_zone!r}")
            return None

        try:
            converted = instant.astimezone(zone)
        except (ValueError, OverflowError) as e:
            logger.debug(f"Failed to convert {instant.isoformat()}: {e}")
            return None

        offset = day_offset(instant.date(), converted.date())
        result = ConversionResult(
            original_label=self.original_label(parsed, instant),
            converted_label=f"{format_time(converted)}{day_suffix(offset)}",
            day_offset=offset,
            target_zone=zone,
        )
        logger.debug(f"Original: {result.original_label}, Converted: {result.converted_label}")
        return result

    def convert(self, parsed: ParsedTime,
                target_zone: Optional[Zone] = None) -> Optional[ConversionResult]:
        """Convert a parsed time into target_zone (the local zone if None)"""
        instant = self.source_instant(parsed)
        if instant is None:
            return None
        return self._convert_instant(parsed, instant, target_zone)

    def convert_all(self, parsed: ParsedTime,
                    target_zones: Iterable[Zone]) -> Optional[List[ConversionResult]]:
        """Convert into several zones, skipping any that cannot be resolved"""
        instant = self.source_instant(parsed)
        if instant is None:
            return None

        results = []
        for target_zone in target_zones:
            result = self._convert_instant(parsed, instant, target_zone)
            if result is not None:
                results.append(result)
        return results
