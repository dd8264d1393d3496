# utils/dates.py
from datetime import date, datetime, timezone
from typing import Optional

from dateutil import parser

def parse_date(x) -> Optional[date]:
    if x is None or x == "":
        return None
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    try:
        return parser.parse(str(x)).date()
    except (ValueError, OverflowError):
        return None

def format_due(x) -> str:
    d = parse_date(x)
    return d.strftime("%b %d, %Y") if d else "—"

def utcnow() -> datetime:
    return datetime.now(timezone.utc)
