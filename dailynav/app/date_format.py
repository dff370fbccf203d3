"""Moment-style date format tokens for note filenames and button labels.

Calendar tokens are rendered and read back by pendulum. pendulum has no
locale week numbering, so week tokens (``w``/``gggg`` and the ISO
``W``/``GGGG``) are computed here. Locale weeks follow the configured first
day of week: Monday-first uses ISO rules (week 1 contains January 4th),
Sunday-first uses US rules (week 1 contains January 1st).
"""
from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Optional

import pendulum

from dailynav.app.types import FirstDayOfWeek

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
MONTH_ABBRS = tuple(name[:3] for name in MONTH_NAMES)
# Sunday first, matching the ``d`` token numbering
WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
WEEKDAY_ABBRS = tuple(name[:3] for name in WEEKDAY_NAMES)
WEEKDAY_MINS = tuple(name[:2] for name in WEEKDAY_NAMES)

TOKEN_PATTERN = re.compile(
    r"\[[^\]]*\]"
    r"|YYYY|YY|gggg|gg|GGGG|GG"
    r"|MMMM|MMM|MM|Mo|M"
    r"|DDDD|DDD|DD|Do|D"
    r"|dddd|ddd|dd|do|d"
    r"|ww|wo|w|WW|Wo|W"
    r"|E|e|Q"
    r"|.",
    re.S,
)
FORMAT_TOKENS = frozenset(
    {
        "YYYY", "YY", "gggg", "gg", "GGGG", "GG",
        "MMMM", "MMM", "MM", "Mo", "M",
        "DDDD", "DDD", "DD", "Do", "D",
        "dddd", "ddd", "dd", "do", "d",
        "ww", "wo", "w", "WW", "Wo", "W",
        "E", "e", "Q",
    }
)
# Rendered by ``pendulum.Date.format``
PENDULUM_TOKENS = frozenset(
    {
        "YYYY", "YY",
        "MMMM", "MMM", "MM", "M",
        "DDDD", "DDD", "DD", "Do", "D",
        "dddd", "ddd", "dd",
        "E", "Q",
    }
)
# Fields handed to ``pendulum.from_format``; ordinals go in as plain numbers
_PENDULUM_PARSE_TOKENS = {
    "YYYY": "YYYY",
    "YY": "YY",
    "MMMM": "MMMM",
    "MMM": "MMM",
    "MM": "MM",
    "Mo": "M",
    "M": "M",
    "DD": "DD",
    "Do": "D",
    "D": "D",
}

_ORDINAL = r"(?:st|nd|rd|th)"


def _names_pattern(names: tuple[str, ...]) -> str:
    ordered = sorted(names, key=len, reverse=True)
    return "(?i:" + "|".join(re.escape(name) for name in ordered) + ")"


_PARSE_PATTERNS = {
    "YYYY": r"\d{4}",
    "YY": r"\d{2}",
    "gggg": r"\d{4}",
    "gg": r"\d{2}",
    "GGGG": r"\d{4}",
    "GG": r"\d{2}",
    "MMMM": _names_pattern(MONTH_NAMES),
    "MMM": _names_pattern(MONTH_ABBRS),
    "MM": r"\d{2}",
    "Mo": r"\d{1,2}" + _ORDINAL,
    "M": r"\d{1,2}",
    "DDDD": r"\d{3}",
    "DDD": r"\d{1,3}",
    "DD": r"\d{2}",
    "Do": r"\d{1,2}" + _ORDINAL,
    "D": r"\d{1,2}",
    "dddd": _names_pattern(WEEKDAY_NAMES),
    "ddd": _names_pattern(WEEKDAY_ABBRS),
    "dd": _names_pattern(WEEKDAY_MINS),
    "do": r"[0-6]" + _ORDINAL,
    "d": r"[0-6]",
    "ww": r"\d{2}",
    "wo": r"\d{1,2}" + _ORDINAL,
    "w": r"\d{1,2}",
    "WW": r"\d{2}",
    "Wo": r"\d{1,2}" + _ORDINAL,
    "W": r"\d{1,2}",
    "E": r"[1-7]",
    "e": r"[0-6]",
    "Q": r"[1-4]",
}

_ISO_RULES = (1, 4)
_US_RULES = (0, 6)


def tokenize(fmt: str) -> list[tuple[Optional[str], str]]:
    """Split a format string into ``(token, text)`` pairs.

    ``token`` is None for literal text; bracketed literals lose their brackets.
    """
    parts: list[tuple[Optional[str], str]] = []
    for match in TOKEN_PATTERN.finditer(fmt):
        text = match.group(0)
        if text.startswith("[") and text.endswith("]") and len(text) >= 2:
            parts.append((None, text[1:-1]))
        elif text in FORMAT_TOKENS:
            parts.append((text, text))
        else:
            parts.append((None, text))
    return parts


def sunday_index(day: date) -> int:
    return (day.weekday() + 1) % 7


def ordinal(number: int) -> str:
    if 11 <= number % 100 <= 13:
        return f"{number}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def week_rules(first_day_of_week: FirstDayOfWeek) -> tuple[int, int]:
    """Return ``(dow, doy)`` for locale week numbering."""
    return _ISO_RULES if first_day_of_week is FirstDayOfWeek.MONDAY else _US_RULES


def _week_one_start(year: int, dow: int, doy: int) -> date:
    anchor = date(year, 1, 7 + dow - doy)
    return anchor - timedelta(days=(sunday_index(anchor) - dow) % 7)


def week_of_year(day: date, dow: int, doy: int) -> tuple[int, int]:
    """Return ``(week, week_year)`` for ``day`` under the given week rules."""
    start = day - timedelta(days=(sunday_index(day) - dow) % 7)
    # The week belongs to the year holding this day of the week
    deciding = start + timedelta(days=doy - dow)
    week_year = deciding.year
    week = (start - _week_one_start(week_year, dow, doy)).days // 7 + 1
    return week, week_year


def _format_token(token: str, day: date, first_day_of_week: FirstDayOfWeek) -> str:
    if token in ("gggg", "gg", "w", "ww", "wo"):
        week, week_year = week_of_year(day, *week_rules(first_day_of_week))
        return _format_week_token(token.replace("g", "G").replace("w", "W"), week, week_year)
    if token in ("GGGG", "GG", "W", "WW", "Wo"):
        week, week_year = week_of_year(day, *_ISO_RULES)
        return _format_week_token(token, week, week_year)
    if token == "Mo":
        return ordinal(day.month)
    if token == "do":
        return ordinal(sunday_index(day))
    if token == "d":
        return str(sunday_index(day))
    if token == "e":
        return str((sunday_index(day) - first_day_of_week.day_index) % 7)
    raise ValueError(f"Unsupported format token: {token}")


def _format_week_token(token: str, week: int, week_year: int) -> str:
    if token == "GGGG":
        return f"{week_year:04d}"
    if token == "GG":
        return f"{week_year % 100:02d}"
    if token == "WW":
        return f"{week:02d}"
    if token == "Wo":
        return ordinal(week)
    return str(week)


def format_date(day: date, fmt: str, first_day_of_week: FirstDayOfWeek = FirstDayOfWeek.MONDAY) -> str:
    """Render ``day`` with a moment-style format string."""
    moment = pendulum.date(day.year, day.month, day.day)
    out: list[str] = []
    for token, text in tokenize(fmt):
        if token is None:
            out.append(text)
        elif token in PENDULUM_TOKENS:
            out.append(moment.format(token))
        else:
            out.append(_format_token(token, day, first_day_of_week))
    return "".join(out)


def _strip_ordinal(text: str) -> int:
    return int(re.match(r"\d+", text).group(0))


def parse_date(
    text: str,
    fmt: str,
    first_day_of_week: FirstDayOfWeek = FirstDayOfWeek.MONDAY,
) -> Optional[date]:
    """Strictly parse ``text`` against ``fmt``.

    Returns None when the text does not match the whole format or names an
    impossible date. Formats without a year component never produce a date.
    Only the canonical rendering is accepted: the result has to format back
    to ``text`` (ignoring case), which also checks weekday and quarter fields.
    """
    tokens = tokenize(fmt)
    pieces: list[str] = []
    names: list[str] = []
    for token, literal in tokens:
        if token is None:
            pieces.append(re.escape(literal))
            continue
        pieces.append(f"({_PARSE_PATTERNS[token]})")
        names.append(token)
    match = re.fullmatch("".join(pieces), text)
    if not match:
        return None
    fields = list(zip(names, match.groups()))

    try:
        if "YYYY" in names or "YY" in names:
            result = _parse_calendar(fields)
        elif "GGGG" in names or "GG" in names:
            result = _resolve_week(fields, _ISO_RULES, iso=True)
        elif "gggg" in names or "gg" in names:
            result = _resolve_week(fields, week_rules(first_day_of_week), iso=False)
        else:
            return None
    except (ValueError, OverflowError):
        # pendulum parse errors are ValueErrors too
        return None
    if result is None:
        return None
    if format_date(result, fmt, first_day_of_week).lower() != text.lower():
        return None
    return result


def _parse_calendar(fields: list[tuple[str, str]]) -> date:
    formats: list[str] = []
    values: list[str] = []
    for token, raw in fields:
        target = _PENDULUM_PARSE_TOKENS.get(token)
        if target is None:
            continue
        if token in ("Mo", "Do"):
            raw = str(_strip_ordinal(raw))
        elif token in ("MMMM", "MMM"):
            raw = raw.capitalize()
        formats.append(target)
        values.append(raw)
    parsed = pendulum.from_format(" ".join(values), " ".join(formats))
    return date(parsed.year, parsed.month, parsed.day)


def _token_value(token: str, raw: str) -> int:
    if token in ("dddd", "ddd", "dd"):
        table = {"dddd": WEEKDAY_NAMES, "ddd": WEEKDAY_ABBRS, "dd": WEEKDAY_MINS}[token]
        return [name.lower() for name in table].index(raw.lower())
    if token in ("do", "wo", "Wo"):
        return _strip_ordinal(raw)
    if token in ("gg", "GG"):
        value = int(raw)
        return value + (1900 if value > 68 else 2000)
    return int(raw)


def _resolve_week(
    fields: list[tuple[str, str]],
    rules: tuple[int, int],
    *,
    iso: bool,
) -> Optional[date]:
    """Week start for a week-numbered name, moved to a named weekday if present."""
    dow, doy = rules
    year_tokens = ("GGGG", "GG") if iso else ("gggg", "gg")
    week_tokens = ("WW", "Wo", "W") if iso else ("ww", "wo", "w")
    values: dict[str, int] = {}
    for token, raw in fields:
        if token in year_tokens or token in week_tokens or token in ("E", "e", "dddd", "ddd", "dd", "do", "d"):
            values.setdefault(token, _token_value(token, raw))

    week_year = next(values[t] for t in year_tokens if t in values)
    week = next((values[t] for t in week_tokens if t in values), 1)
    if week < 1:
        return None
    start = _week_one_start(week_year, dow, doy) + timedelta(weeks=week - 1)
    offset = 0
    if "E" in values:
        offset = (values["E"] % 7 - dow) % 7
    elif "e" in values and not iso:
        offset = values["e"]
    else:
        named = next((values[t] for t in ("dddd", "ddd", "dd", "do", "d") if t in values), None)
        if named is not None:
            offset = (named - dow) % 7
    result = start + timedelta(days=offset)
    if week_of_year(result, dow, doy) != (week, week_year):
        return None
    return result
