"""Extract statements and transactions from simple OFX files."""

from ofxsimple.parser import (
    OFXParser,
    OFXTransaction,
    Statement,
    parse_file,
    parse_string,
    resolve_decimal_separator,
)

__version__ = '0.1'
