"""Parse ofx files into journal object."""

import logging

from yapsy.IPlugin import IPlugin

from ofxsimple.journal import statements_to_journal
from ofxsimple.parser import OFXParser
from ofxsimple.strings import Info

logger = logging.getLogger(__name__)


class ParseOFX(IPlugin):
    """OFX file parsing without an SGML tree."""

    def __init__(self):
        super(ParseOFX, self).__init__()
        self.is_activated = False

    def build_journal(self, ofx_file, config):
        """Parse `ofx_file` into journal transactions.

        Parameters:
            ofx_file (str): Path to the OFX file.
            config (dict): Account options, ``from`` is required,
                ``currency`` and ``decimal_separator`` are optional.

        Returns:
            tuple: ``(None, transactions)``, no balance assertions are read
            from the file.
        """
        parser = OFXParser(config.get('decimal_separator'))
        statements = parser.parse_file(ofx_file)
        logger.info(Info.parsed.format(len(statements), ofx_file))

        transactions = statements_to_journal(statements, config)
        transactions.sort(key=lambda x: x.date)

        return None, transactions
