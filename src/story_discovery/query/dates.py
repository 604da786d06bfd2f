"""Date-range resolution for the published-date predicates."""

import logging
from datetime import UTC, date, datetime, time, timedelta

from story_discovery.data import DatePreset

logger = logging.getLogger(__name__)

_PRESET_DAYS: dict[DatePreset, int] = {
    DatePreset.PAST_7_DAYS: 7,
    DatePreset.PAST_14_DAYS: 14,
    DatePreset.PAST_30_DAYS: 30,
}


def _one_year_before(moment: datetime) -> datetime:
    try:
        return moment.replace(year=moment.year - 1)
    except ValueError:
        # Feb 29 has no counterpart in the previous year.
        return moment.replace(year=moment.year - 1, day=28)


def resolve_preset(token: str, now: datetime) -> datetime | None:
    """Resolve a preset token to an absolute lower bound.

    Args:
        token: Preset token such as ``7days`` or ``1year``.
        now: The instant the query is built at.

    Returns:
        The lower bound, or None for an unknown token.
    """
    try:
        preset = DatePreset(token)
    except ValueError:
        logger.debug("Ignoring unknown date preset %r", token)
        return None
    if preset == DatePreset.PAST_YEAR:
        return _one_year_before(now)
    return now - timedelta(days=_PRESET_DAYS[preset])


def parse_bound(raw: str, *, end_of_day: bool = False) -> datetime | None:
    """Parse an ISO date or datetime string into an aware UTC datetime.

    Date-only strings become midnight, or the last millisecond of the day
    when ``end_of_day`` is set. Unparsable input yields None.
    """
    try:
        if "T" in raw or " " in raw.strip():
            parsed = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=UTC)
            return parsed.astimezone(UTC)
        day = date.fromisoformat(raw.strip())
    except ValueError:
        logger.debug("Ignoring unparsable date %r", raw)
        return None
    moment = time(23, 59, 59, 999000) if end_of_day else time.min
    return datetime.combine(day, moment, tzinfo=UTC)


def to_iso(moment: datetime) -> str:
    """Format like JavaScript's ``toISOString``: ``2024-01-01T00:00:00.000Z``."""
    utc = moment.astimezone(UTC)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def resolve_range(
    date_from: str | None,
    date_to: str | None,
    presets: tuple[str, ...],
    now: datetime,
) -> tuple[datetime | None, datetime | None]:
    """Combine explicit bounds and presets into one ``(lower, upper)`` pair.

    The oldest of all usable lower bounds wins. Either side may be None.
    """
    lowers: list[datetime] = []
    if date_from:
        start = parse_bound(date_from)
        if start is not None:
            lowers.append(start)
    for token in presets:
        bound = resolve_preset(token, now)
        if bound is not None:
            lowers.append(bound)

    upper = parse_bound(date_to, end_of_day=True) if date_to else None
    return (min(lowers) if lowers else None, upper)
