from . import dates, ics
