import time
from .config import config


def get_interval(cfg, kind, default):
    # per-calendar intervals win over the global ones
    intervals = cfg.get('intervals') or {}
    if kind in intervals:
        return intervals[kind]
    return config.get('intervals', {}).get(kind, default)


def sleep(cfg, kind, default):
    time.sleep(get_interval(cfg, kind, default))


def sanitize(s):
    return ''.join([(c if c in 'abcdefghijklmnopqrstuvwxyz0123456789' else "_") for c in s.lower()])
