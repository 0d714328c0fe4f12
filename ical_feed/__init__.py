import requests
from .constants import *
from .types import *
from .errors import *
from .store import EventStore
from . import parsers, queries
from .parsers.ics import ICSParser
from .parsers.dates import make_date
import os, logging, threading, time
from urllib.parse import urlparse
from urllib.request import url2pathname


class ParserConfig:
    source = None
    timeout = DEFAULT_TIMEOUT
    retries = DEFAULT_RETRIES
    retry_delay = DEFAULT_RETRY_DELAY


class Parser:
    # fetches an ics calendar in the background, queries run on an empty
    # collection until then. on_ready(parser) / on_error(parser, error)

    def __init__(self, source, on_ready=None, on_error=None, **kwargs):
        self.config = ParserConfig()
        self.config.source = source
        self.config.timeout = kwargs.get('timeout', DEFAULT_TIMEOUT)
        self.config.retries = kwargs.get('retries', DEFAULT_RETRIES)
        self.config.retry_delay = kwargs.get('retry_delay', DEFAULT_RETRY_DELAY)

        self.client = kwargs.get('session') or requests.Session()
        self.client.headers.update({'User-Agent': USER_AGENT})

        self.on_ready = on_ready
        self.on_error = on_error

        self.store = EventStore()
        self.raw = None
        self.error = None
        self._done = threading.Event()
        self._refresh_lock = threading.Lock()
        self._task = None

        if source is not None and kwargs.get('start', True):
            self.start()

    @classmethod
    def from_text(cls, raw, on_ready=None):
        parser = cls(None, on_ready=on_ready)
        parser.load(raw)
        parser._done.set()
        if on_ready is not None:
            on_ready(parser)
        return parser

    @property
    def ready(self):
        # true once a calendar has been parsed, even if a later refresh failed
        return self.store.updated_at is not None

    def start(self):
        if self._task is not None:
            return self._task
        self._task = threading.Thread(
            target=self._run, name=f"ical-{self.config.source}", daemon=True)
        self._task.start()
        return self._task

    def wait(self, timeout=None):
        if not self._done.wait(timeout):
            return False
        if self.error is not None:
            raise self.error
        return True

    def _run(self):
        # callbacks run before wait() returns
        try:
            self.refresh()
        except Exception as e:
            self.error = e
            logging.error('ical[{}] :: {}'.format(self.config.source, e))
            try:
                if self.on_error is not None:
                    self.on_error(self, e)
            finally:
                self._done.set()
            return

        try:
            if self.on_ready is not None:
                self.on_ready(self)
        finally:
            self._done.set()

    def refresh(self):
        with self._refresh_lock:
            raw = self.fetch()
            events = self.load(raw)
            self.error = None
        return events

    def load(self, raw):
        self.raw = raw
        events = self.store.replace(ICSParser(raw).parse())
        logging.info('ical[{}] :: calendar parsed ({} events).'.format(self.config.source, len(events)))
        return events

    def fetch(self):
        source = self.config.source
        if source is None:
            raise RetrievalError(source, "no source configured")

        last = None
        attempts = max(self.config.retries, 1)
        for i in range(1, attempts + 1):
            try:
                return self._fetch_once(source)
            except UnsuccessfulResponse as e:
                # the server answered, asking again won't help
                if e.r.status_code < 500:
                    raise
                last = e
            except (requests.exceptions.RequestException, OSError) as e:
                last = e
            logging.warning('ical[{}] :: attempt {}/{} failed: {}'.format(source, i, attempts, last))
            if i < attempts:
                time.sleep(i * self.config.retry_delay)

        if isinstance(last, RetrievalError):
            raise last
        raise RetrievalError(source, last)

    def _fetch_once(self, source):
        url = urlparse(str(source))
        if url.scheme in ('http', 'https'):
            r = self.client.get(source, timeout=self.config.timeout)
            if r.status_code != 200:
                raise UnsuccessfulResponse(source, r)
            return r.text

        path = url2pathname(url.path) if url.scheme == 'file' else os.fspath(source)
        # keep CRLF as retrieved, undecodable bytes are replaced rather than fatal
        with open(path, encoding='utf-8', errors='replace', newline='') as f:
            return f.read()

    def get_events(self):
        return self.store.events

    def get_future_events(self, now=None):
        return queries.get_future_events(self.store.events, now)

    def get_this_week_events(self, now=None):
        return queries.get_this_week_events(self.store.events, now)

    def get_events_between(self, start, end):
        return queries.get_events_between(self.store.events, start, end)

    def get_next_event(self, now=None):
        return queries.get_next_event(self.store.events, now)

    def calc_day_start(self, now=None):
        return queries.calc_day_start(now)

    def calc_week_start(self, now=None):
        return queries.calc_week_start(now)

    def calc_week_end(self, now=None):
        return queries.calc_week_end(now)
