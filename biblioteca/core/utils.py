import datetime
import math

SECONDS_PER_DAY = 24 * 60 * 60


def utcnow() -> datetime.datetime:
    """Current UTC time as a naive datetime, the form timestamps are stored in."""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


def to_naive_utc(moment: datetime.datetime) -> datetime.datetime:
    if moment.tzinfo is not None:
        moment = moment.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return moment


def days_between(start: datetime.datetime, end: datetime.datetime) -> int:
    """Whole days from `start` to `end`, rounding any partial day up."""
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


LIKE_ESCAPE = '\\'


def contains_pattern(text: str) -> str:
    """LIKE pattern matching `text` as a literal substring; use with
    `escape=LIKE_ESCAPE`.
    """
    for char in (LIKE_ESCAPE, '%', '_'):
        text = text.replace(char, LIKE_ESCAPE + char)
    return f"%{text}%"
