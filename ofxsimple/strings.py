"""String constants."""


class Warnings(object):
    no_acctid = 'No ACCTID found'
    no_locale = 'Host locale not available, using C: {}'


class Info(object):
    no_amount = 'Skip transaction {} on {}, no amount'
    no_date = 'Skip transaction {}, no date'
    plugin_used = 'Use plugin: {}'
    parsed = 'Parsed {} statement(s) from {}'


class Errors(object):
    no_plugin = 'Plugin not found: {}'
