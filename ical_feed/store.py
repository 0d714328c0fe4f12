import threading
from datetime import datetime


class EventStore:
    # the tuple is only ever replaced as a whole, readers never see a mix

    def __init__(self):
        self._lock = threading.Lock()
        self._events = ()
        self.updated_at = None

    @property
    def events(self):
        with self._lock:
            return self._events

    def replace(self, events):
        events = tuple(events)
        with self._lock:
            self._events = events
            self.updated_at = datetime.now()
        return events

    def __len__(self):
        return len(self.events)

    def __iter__(self):
        return iter(self.events)
