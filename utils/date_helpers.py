from datetime import date, datetime
from utils.constants import DATE_FORMAT, MONTH_FORMAT

_STRFTIME_MAP = {
    "MM/DD/YYYY": "%m/%d/%Y",
    "DD/MM/YYYY": "%d/%m/%Y",
    "YYYY-MM-DD": "%Y-%m-%d",
    "DD.MM.YYYY": "%d.%m.%Y",
    "MM-DD-YYYY": "%m-%d-%Y",
}


def today() -> date:
    return date.today()


def parse_date(date_str: str) -> date | None:
    """Parse a date string in YYYY-MM-DD format, returning None on failure."""
    if not date_str:
        return None
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(date_str.strip(), fmt).date()
        except ValueError:
            continue
    return None


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def month_key(d: date) -> str:
    return d.strftime(MONTH_FORMAT)


def from_epoch_millis(millis: int) -> date:
    """Calendar date of a local-midnight epoch-millisecond timestamp."""
    return datetime.fromtimestamp(millis / 1000).date()


def friendly_month(month_str: str) -> str:
    """Convert YYYY-MM to e.g. 'Feb 2026'."""
    try:
        return datetime.strptime(month_str, MONTH_FORMAT).strftime("%b %Y")
    except ValueError:
        return month_str


def format_display_date(d: date | None, fmt_key: str = "MM/DD/YYYY") -> str:
    """Render a date in the user-facing display format."""
    if d is None:
        return ""
    return d.strftime(_STRFTIME_MAP.get(fmt_key, "%m/%d/%Y"))


def parse_display_date(display_str: str, fmt_key: str) -> date | None:
    """Parse a date in the given display format. Returns None on failure.

    Falls back to ISO 8601 (and its / or . separated variants) when the
    display format doesn't match.
    """
    if not display_str:
        return None
    fmt = _STRFTIME_MAP.get(fmt_key, "%m/%d/%Y")
    try:
        return datetime.strptime(display_str.strip(), fmt).date()
    except ValueError:
        return parse_date(display_str)
