from datetime import datetime
from dateutil.relativedelta import relativedelta, SU


def _now(now):
    return datetime.now() if now is None else now


def calc_day_start(now: datetime = None):
    return _now(now).replace(hour=0, minute=0, second=0, microsecond=0)


def calc_week_start(now: datetime = None):
    # most recent sunday at midnight (today when today is a sunday)
    return calc_day_start(now) + relativedelta(weekday=SU(-1))


def calc_week_end(now: datetime = None):
    return calc_week_start(now) + relativedelta(days=7)


def get_events_between(events, start: datetime, end: datetime):
    # [start, end), events without a valid start never match
    return tuple(e for e in events if e.DTSTART is not None and start <= e.DTSTART < end)


def get_future_events(events, now: datetime = None):
    now = _now(now)
    return tuple(e for e in events if e.DTSTART is not None and e.DTSTART > now)


def get_this_week_events(events, now: datetime = None):
    now = _now(now)
    return get_events_between(events, calc_week_start(now), calc_week_end(now))


def get_next_event(events, now: datetime = None):
    for e in get_future_events(events, now):
        return e
    return None
