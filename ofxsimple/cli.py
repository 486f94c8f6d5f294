#! /usr/bin/env python3
"""Command line interface for ofxsimple package."""

from argparse import ArgumentParser
import locale
import logging
import os
import sys

from yapsy.PluginManager import PluginManager
import yaml

from ofxsimple.config import global_options, load_config, setup_logging
from ofxsimple.parser import OFXParser
from ofxsimple.strings import Errors, Info, Warnings

DIR_PATH = os.path.dirname(os.path.realpath(__file__))
PARSER_PLUGIN = 'Simple OFX Parser'


def get_args(argv=None):
    """Build CLI arguments list."""

    parser = ArgumentParser()

    parser.add_argument(
        '-i', '--input-file',
        dest='input_file',
        default=None,
        help='.OFX file to parse'
    )
    parser.add_argument(
        '-c', '--config',
        dest='config',
        default=None,
        help='YAML config file with defaults and logging setup.'
    )
    parser.add_argument(
        '-d', '--decimal-separator',
        dest='decimal_separator',
        default=None,
        help='Decimal separator used in amounts, overrides the locale.'
    )
    parser.add_argument(
        '-f', '--format',
        dest='format',
        choices=['yaml', 'ledger'],
        default=None,
        help='Output format, yaml (default) or ledger.'
    )
    parser.add_argument(
        '-a', '--account',
        dest='from',
        default=None,
        help='Ledger account for the bank side of each transaction.'
    )
    args = parser.parse_args(argv)

    return dict((k, v) for k, v in vars(args).items() if v)


def get_plugin(manager, name):
    """Find a plugin by name."""
    for plugin in manager.getAllPlugins():
        if plugin.name == name:
            return plugin.plugin_object

    return None


def load_plugins():
    manager = PluginManager()
    manager.setPluginPlaces([os.path.join(DIR_PATH, 'plugins')])
    manager.collectPlugins()

    return manager


def print_yaml(conf, out):
    parser = OFXParser(conf.get('decimal_separator'))
    statements = parser.parse_file(conf.get('input_file'))

    yaml.safe_dump(
        [s.to_dict() for s in statements],
        out,
        default_flow_style=False,
        sort_keys=False
    )


def print_ledger(conf, out):
    logger = logging.getLogger(__name__)
    logger.info(Info.plugin_used.format(PARSER_PLUGIN))

    parser = get_plugin(load_plugins(), PARSER_PLUGIN)
    if parser is None:
        raise LookupError(Errors.no_plugin.format(PARSER_PLUGIN))

    conf.setdefault('from', 'Assets:Unknown')
    _, transactions = parser.build_journal(conf.get('input_file'), conf)

    for transaction in transactions:
        print(transaction.to_string() + '\n', file=out)


def main(argv=None, out=None):
    """Parse an OFX file and print its statements."""

    out = out or sys.stdout
    cli_options = get_args(argv)
    config = load_config(cli_options.get('config'))

    setup_logging(config)

    # Host locale supplies the default decimal separator.
    try:
        locale.setlocale(locale.LC_ALL, '')
    except locale.Error as e:
        logging.getLogger(__name__).warning(Warnings.no_locale.format(e))

    conf = global_options(config)
    conf.pop('logging', None)
    conf.update(cli_options)

    if conf.get('format', 'yaml') == 'ledger':
        print_ledger(conf, out)
    else:
        print_yaml(conf, out)

    return 0


if __name__ == '__main__':
    sys.exit(main())
