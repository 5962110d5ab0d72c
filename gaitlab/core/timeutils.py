"""
UTC timestamp helpers

Session boundaries and zoned reading timestamps share one textual form
(2025-05-01T10:00:00.000Z) so window queries can compare strings.
"""
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso_z(moment: datetime) -> str:
    """Format an instant as ISO-8601 UTC with milliseconds and a Z suffix"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_timestamp(value: str) -> str:
    """
    Rewrite a zoned ISO-8601 timestamp into the to_iso_z form

    "2025-05-01T10:00:02Z" becomes "2025-05-01T10:00:02.000Z", so it sorts
    against session bounds as a string. Naive or unparseable values are
    returned unchanged.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return value
    if moment.tzinfo is None:
        return value
    return to_iso_z(moment)
