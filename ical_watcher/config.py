from yaml import load, Loader
import logging

DEFAULTS = {
    'log_level': 'INFO',
    'cache': 'data/agenda_{id}.json',
    'intervals': {
        'agenda': 300,
        'error': 120,
    },
    'calendars': [],
}

config = {}


def load_config(path='config.yaml'):
    with open(path, 'r') as f:
        data = load(f, Loader=Loader) or {}

    config.clear()
    config.update(DEFAULTS)
    config.update(data)
    config['intervals'] = {**DEFAULTS['intervals'], **(data.get('intervals') or {})}

    logging.basicConfig(level=config['log_level'])
    return config
