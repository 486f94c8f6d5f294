"""Configuration file handling."""

import logging
import logging.config
import os
from os.path import expanduser

import yaml

HOME = expanduser('~')
DEFAULT_CONFIG = os.path.join(HOME, '.config', 'ofxsimple', 'ofxsimple.yaml')


def load_config(path=None):
    """Read the YAML configuration file.

    ::

        global:
          decimal_separator: ','
          from: Assets:Bank:Checking
          currency: EUR
          logging:
            version: 1
            ...

    Parameters:
        path (str): Config file, defaults to
            ``~/.config/ofxsimple/ofxsimple.yaml``.

    Returns:
        dict: Parsed configuration, empty if the file does not exist.
    """
    path = path or DEFAULT_CONFIG

    if not os.path.isfile(path):
        return {}

    with open(path, 'r') as c_file:
        return yaml.safe_load(c_file) or {}


def global_options(config):
    return dict(config.get('global') or {})


def setup_logging(config):
    """Configure logging from the ``global.logging`` section.

    Falls back to warnings on stderr when the section is missing.
    """
    log_config = global_options(config).get('logging')

    if log_config:
        logging.config.dictConfig(log_config)
    else:
        logging.basicConfig(level=logging.WARNING)
