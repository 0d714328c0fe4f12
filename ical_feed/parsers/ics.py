# a really simple ICS parser: we only read VEVENT blocks made of
# KEY:VALUE lines, no folding, no recurrence, no timezones
import logging
from datetime import datetime
from ..constants import BEGIN_EVENT, END_EVENT
from ..types import EventRecord, ParserState
from .dates import make_date


def parse_property(line: str, record: EventRecord):
    # split at the first ':', a line without one is a key with an empty value
    key, sep, value = line.partition(':')
    # trim both sides to survive badly formatted files
    key = key.strip()
    value = value.strip() if sep else ''

    if key == 'DTSTART':
        dt = make_date(value)
        value = dt.date
        record.start_time = dt.hour + ':' + dt.minute
        record.start_date = dt.day + '/' + dt.month + '/' + dt.year
        record.day = dt.dayname
    elif key == 'DTEND':
        dt = make_date(value)
        value = dt.date
        record.end_time = dt.hour + ':' + dt.minute
        record.end_date = dt.day + '/' + dt.month + '/' + dt.year
        record.day = dt.dayname
    elif key == 'DTSTAMP':
        value = make_date(value).date

    record[key] = value
    return key, value


def _sort_key(record):
    # events without a usable start go last, in document order (sort is stable)
    if record.DTSTART is None:
        return (1, datetime.min)
    return (0, record.DTSTART)


class ICSParser:
    def __init__(self, raw: str):
        self._raw = raw
        self.events = ()

    def parse(self):
        self.events = tuple(sorted(self._parse_events(), key=_sort_key))
        logging.debug('ics :: parsed {} events.'.format(len(self.events)))
        return self.events

    def _lines(self):
        return self._raw.replace('\r', '').split('\n')

    def _parse_events(self):
        events = []
        state = ParserState.NOT_IN_EVENT
        current = None

        for line in self._lines():
            if state == ParserState.NOT_IN_EVENT:
                # everything outside a VEVENT (VCALENDAR header, VTIMEZONE...) is skipped
                if line == BEGIN_EVENT:
                    state = ParserState.IN_EVENT
                    current = EventRecord()
            elif line == END_EVENT:
                events.append(current)
                state = ParserState.NOT_IN_EVENT
                current = None
            else:
                # a nested BEGIN:VEVENT is just another property here
                parse_property(line, current)

        if state == ParserState.IN_EVENT:
            logging.debug('ics :: dropped an unterminated event ({}).'.format(current.summary))
        return events
