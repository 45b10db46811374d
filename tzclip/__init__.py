"""Pull a clock time out of copied text and show it in other timezones."""

# Time pattern components
TIME_COMPONENTS = {
    'prefix': r'.*?',                           # Any text before the time
    'hours': r'(?P<hour>\d{1,2})',              # 1-12 or 0-23, not range checked
    'minutes': r'(?::(?P<minute>\d{2}))?',      # :00-:59
    'clock': r'(?P<hour>\d{1,2}):(?P<minute>\d{2})',
    'meridiem': r'(?P<meridiem>[AaPp][Mm])',    # AM/PM in any case
    'zone': r'(?P<zone>[A-Za-z]{3,4})',         # EST, AEDT...
    'spaces': r'\s*',                           # Optional spaces
    'end': r'\s*$'                              # Time must close the text
}


# Build time patterns
def build_meridiem_pattern(with_zone=False):
    """Build the 9PM / 9:00 PM pattern, optionally followed by a zone"""
    zone = rf"(?:\s+{TIME_COMPONENTS['zone']})?" if with_zone else ''
    return (f"{TIME_COMPONENTS['prefix']}"
            f"{TIME_COMPONENTS['hours']}"
            f"{TIME_COMPONENTS['minutes']}"
            f"{TIME_COMPONENTS['spaces']}"
            f"{TIME_COMPONENTS['meridiem']}"
            f"{zone}"
            f"{TIME_COMPONENTS['end']}")


def build_clock_pattern(with_zone=False):
    """Build the 21:00 pattern, optionally followed by a zone"""
    zone = (f"{TIME_COMPONENTS['spaces']}{TIME_COMPONENTS['zone']}"
            if with_zone else '')
    return (f"{TIME_COMPONENTS['prefix']}"
            f"{TIME_COMPONENTS['clock']}"
            f"{zone}"
            f"{TIME_COMPONENTS['end']}")


# Shared meridiem handling
def normalize_hour(hour, meridiem=None):
    """Turn a 12-hour clock hour into 0-23, 24-hour hours pass through"""
    if not meridiem:
        return hour

    meridiem = meridiem.upper()
    if meridiem == 'PM' and hour < 12:
        hour += 12
    elif meridiem == 'AM' and hour == 12:
        hour = 0

    return hour


from tzclip.timeparser import (  # noqa: E402
    TimeParser,
    detect_zone_offset,
    extract_and_convert,
)
