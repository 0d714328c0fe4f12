from datetime import datetime
from enum import Enum

class DataClass:
    def __init__(self, **kwargs):
        for i in kwargs:
            setattr(self, i, kwargs[i])

    def __repr__(self):
        return f"{self.__class__.__name__}({', '.join([f'{k} = {v.__repr__()}' for k,v in self._fields().items()])})"

    def _fields(self):
        return self.__dict__

    def json(c):
        if isinstance(c, DataClass):
            return DataClass.json(c._fields())
        elif isinstance(c, (list, tuple)):
            return [DataClass.json(_) for _ in c]
        elif isinstance(c, dict):
            return {k: DataClass.json(v) for k,v in c.items()}
        elif isinstance(c, datetime):
            return c.isoformat()
        elif isinstance(c, Enum):
            return c._name_
        else:
            return c

class CalendarMoment(DataClass):
    # raw substrings of the token, kept as text
    year: str
    month: str
    day: str
    hour: str
    minute: str

    date: datetime # None when the token isn't a real date
    dayname: str

# named fields of an EventRecord, everything else lands in `properties`
RECORD_FIELDS = (
    'DTSTART', 'DTEND', 'DTSTAMP',
    'start_time', 'start_date', 'end_time', 'end_date', 'day',
)

class EventRecord(DataClass):
    DTSTART: datetime = None
    DTEND: datetime = None
    DTSTAMP: datetime = None

    # display helpers, filled from DTSTART / DTEND
    start_time: str = None
    start_date: str = None
    end_time: str = None
    end_date: str = None
    day: str = None

    # every other ics property (SUMMARY, LOCATION, UID...)
    properties: dict

    def __init__(self, **kwargs):
        self.properties = {}
        for k, v in kwargs.items():
            self[k] = v

    def _fields(self):
        d = {k: getattr(self, k) for k in RECORD_FIELDS}
        d.update(self.properties)
        return d

    def __getitem__(self, key):
        if key in RECORD_FIELDS:
            return getattr(self, key)
        return self.properties[key]

    def __setitem__(self, key, value):
        if key in RECORD_FIELDS:
            setattr(self, key, value)
        else:
            self.properties[key] = value

    def __contains__(self, key):
        if key in RECORD_FIELDS:
            return getattr(self, key) is not None
        return key in self.properties

    def get(self, key, default=None):
        if key not in self:
            return default
        return self[key]

    @property
    def summary(self):
        return self.properties.get('SUMMARY')

    @property
    def location(self):
        return self.properties.get('LOCATION')

class ParserState(Enum):
    NOT_IN_EVENT = 0
    IN_EVENT = 1
