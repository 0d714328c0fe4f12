from .config import config, load_config
import logging
import ical_feed
import threading
from .agenda import start_agenda_loop


def start_calendar(cal):
    logging.info(f"Starting calendar {cal['name']}")
    parser = create_parser(cal)
    thread = threading.Thread(target=start_agenda_loop, args=(cal, parser), name=f"agenda-{cal['name']}")
    thread.start()
    return thread


def create_parser(cal):
    logging.info('parser[{}] :: starting.'.format(cal['name']))
    # the agenda loop drives the refreshes, no background fetch here
    return ical_feed.Parser(
        cal['url'],
        timeout=cal.get('timeout', ical_feed.DEFAULT_TIMEOUT),
        retries=cal.get('retries', ical_feed.DEFAULT_RETRIES),
        start=False,
    )


def main(path='config.yaml'):
    load_config(path)
    if not config['calendars']:
        logging.warning('no calendars configured in {}.'.format(path))
    return [start_calendar(c) for c in config['calendars']]
