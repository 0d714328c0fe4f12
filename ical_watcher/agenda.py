import ical_feed
import logging
import json
import os
from dictdiffer import diff
from .utils import sleep, sanitize
from .config import config


def start_agenda_loop(cfg, parser: ical_feed.Parser):
    logging.info("agenda[{}] :: started.".format(cfg['name']))

    cache_file = config.get('cache', 'data/agenda_{id}.json').format(id=sanitize(cfg['name']))
    while True:
        try:
            check_agenda(cfg, parser, cache_file)
            sleep(cfg, 'agenda', 300)
        except ical_feed.RetrievalError as e:
            # the feed is down, keep the cache and try again later
            logging.warning("agenda[{}] :: {}".format(cfg['name'], e))
            sleep(cfg, 'agenda', 300)
        except Exception:
            logging.exception("agenda[{}] :: refresh failed.".format(cfg['name']))
            sleep(cfg, 'error', 120)


def check_agenda(cfg, parser, cache_file, now=None):
    # returns the dictdiffer changes, empty on the first run (no cache yet)
    parser.refresh()
    new = index_events(parser.get_this_week_events(now))

    diffs = []
    try:
        with open(cache_file) as f:
            old = json.loads(f.read())
    except (OSError, ValueError):
        # on first run, we don't have a cache file
        # so we only store the new file
        old = None

    if old is not None:
        diffs = list(diff(old, new))
        for op, path, changes in diffs:
            for line in describe_change(op, path, changes, new, old):
                logging.info("agenda[{}] :: {}".format(cfg['name'], line))

    cache_dir = os.path.dirname(cache_file)
    if cache_dir:
        os.makedirs(cache_dir, exist_ok=True)
    with open(cache_file, 'w') as f:
        f.write(json.dumps(new, indent=2))
    return diffs


def event_key(e):
    # occurrences of a recurring event share their UID
    if e.get('UID'):
        return "{}|{}".format(e['UID'], e.get('RECURRENCE-ID') or e.get('DTSTART'))
    return "{}|{}".format(e.get('DTSTART'), e.get('SUMMARY'))


def index_events(events):
    # keyed rather than listed so an insertion doesn't shift every other event
    index = {}
    for e in events:
        d = ical_feed.DataClass.json(e)
        index[event_key(d)] = d
    return index


def describe_event(e):
    return "`{}` {} {}".format(e.get('SUMMARY'), e.get('start_date'), e.get('start_time'))


def describe_change(op, path, changes, new, old):
    path = path if isinstance(path, list) else [p for p in path.split('.') if p]

    if not path:
        # whole events added to / removed from the week
        label = 'added' if op == 'add' else 'removed'
        return ["{} {}".format(label, describe_event(e)) for _, e in changes]

    event = new.get(path[0]) or old.get(path[0])
    if op == 'change':
        return ["changed {} {}: {!r} -> {!r}".format(describe_event(event), ".".join(map(str, path[1:])), *changes)]
    return ["{} {} on {}".format(op, k, describe_event(event)) for k, _ in changes]
