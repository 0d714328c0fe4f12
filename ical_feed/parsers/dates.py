import logging
from datetime import datetime
from ..constants import DAY_NAMES
from ..types import CalendarMoment


def make_date(token: str):
    # YYYYMMDDTHHMMSS[Z]: index 8 is skipped and the Z ignored, always local time.
    # a token that isn't a real date gives date = dayname = None
    dt = CalendarMoment(
        year = token[0:4],
        month = token[4:6],
        day = token[6:8],
        hour = token[9:11],
        minute = token[11:13],
    )
    try:
        dt.date = datetime(int(dt.year), int(dt.month), int(dt.day), int(dt.hour), int(dt.minute))
    except ValueError:
        logging.debug('dates :: invalid date-time token {!r}.'.format(token))
        dt.date = None

    # python weeks start on monday, the names table starts on sunday
    dt.dayname = DAY_NAMES[(dt.date.weekday() + 1) % 7] if dt.date is not None else None
    return dt
