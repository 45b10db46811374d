#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import sys
from typing import Iterable, List, Optional, Tuple

from tzclip.config import get_testing_mode
from tzclip.converter import ConversionResult, TimeConverter, Zone, resolve_zone
from tzclip.detector import TimezoneDetector
from tzclip.extractor import TimeExtractor
from tzclip.logger import setup_logger

logger = setup_logger(__name__, testing=get_testing_mode())

NO_TIME_MESSAGE = 'No time detected'


class TimeParser:
    """Extract a time from text and convert it, all in one call"""

    def __init__(self, extractor=None, converter=None, detector=None):
        self.extractor = extractor or TimeExtractor()
        self.converter = converter or TimeConverter()
        self.detector = detector or TimezoneDetector()

    def extract_and_convert(self, text: str,
                            target_zone: Optional[Zone] = None) -> Optional[ConversionResult]:
        parsed = self.extractor.extract(text)
        if parsed is None:
            return None
        return self.converter.convert(parsed, target_zone)

    def extract_and_convert_all(self, text: str,
                                target_zones: Iterable[Zone]) -> Optional[List[ConversionResult]]:
        parsed = self.extractor.extract(text)
        if parsed is None:
            return None
        return self.converter.convert_all(parsed, target_zones)

    def parse_and_convert_time(self, text: str) -> Optional[Tuple[str, str]]:
        """(original, converted) labels with the time shown in the local zone"""
        result = self.extract_and_convert(text)
        if result is None:
            return None
        return result.original_label, result.converted_label

    def describe(self, text: str, target_zone: Optional[Zone] = None) -> Optional[str]:
        """One line summary such as '9:00 PM EST → 2:00 AM +1'"""
        result = self.extract_and_convert(text, target_zone)
        if result is None:
            return None
        return f"{result.original_label} → {result.converted_label}"

    def detect_zone_offset(self, text: str) -> Optional[int]:
        return self.detector.detect_zone(text)


_default_parser = None


def get_default_parser() -> TimeParser:
    global _default_parser
    if _default_parser is None:
        _default_parser = TimeParser()
    return _default_parser


def extract_and_convert(text: str, target_zone: Optional[Zone] = None) -> Optional[ConversionResult]:
    """Time found at the end of text, converted into target_zone"""
    return get_default_parser().extract_and_convert(text, target_zone)


def detect_zone_offset(text: str) -> Optional[int]:
    """Seconds east of UTC hinted at by text"""
    return get_default_parser().detect_zone_offset(text)


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)

    target_zone = None
    if args and args[0] == '--to':
        if len(args) < 2:
            print("Usage: tzclip [--to ZONE] TEXT", file=sys.stderr)
            return 2
        target_zone = args[1]
        args = args[2:]
    elif args and args[0].startswith('--to='):
        target_zone = args[0].split('=', 1)[1]
        args = args[1:]

    if not args:
        print("Usage: tzclip [--to ZONE] TEXT", file=sys.stderr)
        return 2

    if target_zone is not None and resolve_zone(target_zone) is None:
        print(f"Unknown timezone: {target_zone}", file=sys.stderr)
        return 2

    text = " ".join(args)
    logger.debug(f"Converting {text!r} to {target_zone or 'local time'}")
    line = get_default_parser().describe(text, target_zone)
    print(line or NO_TIME_MESSAGE)
    return 0


if __name__ == "__main__":
    sys.exit(main())
