"""Parse simple OFX files into statement records.

Banks hand out OFX downloads in loosely formed SGML, so this module does not
build a tree. It scans for statement regions, then transaction lists, then
single transactions, and pulls each field out on its own. Anything it cannot
find is left empty.
"""

from collections import namedtuple
import locale
import logging
import os
import re

from ofxsimple.strings import Warnings

logger = logging.getLogger(__name__)

DECIMAL_ENV = 'MON_DECIMAL_POINT'
"""Environment variable overriding the locale decimal separator."""

STMTTRNRS_RE = re.compile(r'<STMTTRNRS>(.+?)</STMTTRNRS>', re.S)
ACCTID_RE = re.compile(r'<ACCTID>([^<]+?)\s*<', re.S)
BANKTRANLIST_RE = re.compile(r'<BANKTRANLIST>(.+?)</BANKTRANLIST>', re.S)
STMTTRN_RE = re.compile(r'<STMTTRN>(.+?)</STMTTRN>', re.S)
DTPOSTED_RE = re.compile(r'<DTPOSTED>(\d{4})(\d\d)(\d\d)', re.S)

TEXT_FIELDS = ('fitid', 'trntype', 'checknum', 'name', 'memo')
TEXT_FIELD_RE = dict(
    (f, re.compile(r'<{}>([^\r\n<]+)'.format(f.upper()), re.S))
    for f in TEXT_FIELDS
)

AMOUNT_TEMPLATE = (
    r'<TRNAMT>\s*([-+])?\s*'
    r'(?:(\d+)(?:{sep}(\d\d))?'   # whole part, optional cents
    r'|{sep}(\d\d))'              # cents only
    r'(?!\d)(?!{sep}\d)'
)


class OFXTransaction(namedtuple(
        'OFXTransaction',
        ['amount', 'date', 'fitid', 'trntype', 'checknum', 'name', 'memo'])):
    """One ``<STMTTRN>`` block.

    Attributes:
        amount (str): Amount with two decimal places, ``None`` if the block
            has no readable ``<TRNAMT>``.
        date (str): ``YYYY-MM-DD`` from ``<DTPOSTED>``, ``'--'`` if missing.
        fitid (str): Financial institution transaction id.
        trntype (str): Transaction type (``DEBIT``, ``CREDIT``, ``CHECK``...).
        checknum (str): Check number.
        name (str): Payee name.
        memo (str): Free text memo.
    """

    __slots__ = ()

    def to_dict(self):
        return dict(self._asdict())


class Statement(namedtuple('Statement', ['account_id', 'transactions'])):
    """One ``<STMTTRNRS>`` region.

    Attributes:
        account_id (str): Value of the first ``<ACCTID>`` in the region.
        transactions (tuple): :obj:`OFXTransaction` objects in file order.
    """

    __slots__ = ()

    def to_dict(self):
        return {
            'account_id': self.account_id,
            'transactions': [t.to_dict() for t in self.transactions],
        }


def resolve_decimal_separator(override=None):
    """Find the decimal separator used for ``<TRNAMT>`` values.

    Checked in order: `override`, the ``MON_DECIMAL_POINT`` environment
    variable, the locale monetary decimal point, the locale decimal point,
    and finally ``'.'``.

    The locale is read as currently set. Python starts in the "C" locale,
    so library callers wanting the host settings must call
    ``locale.setlocale(locale.LC_ALL, '')`` themselves; ``ofx-parse`` does.

    Parameters:
        override (str): Explicit separator, wins when not empty.

    Returns:
        str: The separator.
    """
    if override:
        return override

    env = os.environ.get(DECIMAL_ENV)
    if env:
        return env

    conv = locale.localeconv()
    return conv.get('mon_decimal_point') or conv.get('decimal_point') or '.'


def amount_pattern(separator):
    """Compile the ``<TRNAMT>`` pattern for a decimal separator."""
    return re.compile(
        AMOUNT_TEMPLATE.format(sep=re.escape(separator)), re.S
    )


def parse_amount(block, pattern):
    """Read the amount of a transaction block.

    >>> parse_amount('<TRNAMT>-75.00', amount_pattern('.'))
    '-75.00'

    Parameters:
        block (str): Text inside ``<STMTTRN>``.
        pattern: Compiled pattern from :func:`amount_pattern`.

    Returns:
        str: Amount with two decimal places, or ``None`` without a match.
    """
    match = pattern.search(block)
    if match is None:
        return None

    sign, whole, cents, cents_only = match.groups()

    # Count in cents, a float would drop digits on long whole parts.
    total = int(whole or 0) * 100 + int(cents or cents_only or 0)
    if sign == '-' and total:
        total = -total

    return '{}{}.{:02d}'.format(
        '-' if total < 0 else '', abs(total) // 100, abs(total) % 100
    )


def parse_date(block):
    """Return ``YYYY-MM-DD`` for the first ``<DTPOSTED>``, ``'--'`` if none."""
    match = DTPOSTED_RE.search(block)
    year, month, day = match.groups() if match else ('', '', '')

    return '{}-{}-{}'.format(year, month, day)


def parse_text(block, field):
    match = TEXT_FIELD_RE[field].search(block)
    return match.group(1) if match else ''


def parse_transaction(block, pattern):
    """Build an :obj:`OFXTransaction` from the text of one ``<STMTTRN>``."""
    fields = dict((f, parse_text(block, f)) for f in TEXT_FIELDS)

    return OFXTransaction(
        amount=parse_amount(block, pattern),
        date=parse_date(block),
        **fields
    )


def decode(data):
    """Turn file bytes into text.

    OFX 1.x files are often cp1252, so anything that is not UTF-8 is read as
    cp1252. The five bytes cp1252 leaves undefined become U+FFFD.
    """
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError:
        return data.decode('cp1252', 'replace')


class OFXParser(object):
    """Extract statements from OFX text.

    The parser keeps no state between calls; one instance can be shared.

    Attributes:
        decimal_separator (str): Separator override, ``None`` to resolve it
            from the environment and locale on every parse.
    """

    def __init__(self, decimal_separator=None):
        self.decimal_separator = decimal_separator

    def parse_file(self, ofx_file):
        """Read an OFX file and parse it.

        Parameters:
            ofx_file (str): Path to the file.

        Returns:
            list: :obj:`Statement` objects. Empty when no path is given, the
            path is not a regular file, or the file cannot be read.
        """
        if not ofx_file or not os.path.isfile(ofx_file):
            return []

        try:
            with open(ofx_file, 'rb') as f:
                contents = f.read()
        except OSError as e:
            logger.debug('Cannot read {}: {}'.format(ofx_file, e))
            return []

        return self.parse_string(contents)

    def parse_string(self, ofx, decimal_separator=None):
        """Parse OFX data.

        Statement regions without an ``<ACCTID>`` are dropped with a warning.

        Parameters:
            ofx (str): OFX document, ``bytes`` are decoded first.
            decimal_separator (str): Separator for this call only.

        Returns:
            list: :obj:`Statement` objects in file order, empty for empty
            input.
        """
        if not ofx:
            return []

        if isinstance(ofx, bytes):
            ofx = decode(ofx)

        pattern = amount_pattern(resolve_decimal_separator(
            decimal_separator or self.decimal_separator
        ))

        results = []

        for region in STMTTRNRS_RE.finditer(ofx):
            text = region.group(0)

            acct = ACCTID_RE.search(text)
            if acct is None or not acct.group(1).strip():
                logger.warning(Warnings.no_acctid)
                continue

            transactions = []
            for trans_list in BANKTRANLIST_RE.finditer(region.group(1)):
                for trn in STMTTRN_RE.finditer(trans_list.group(1)):
                    transactions.append(
                        parse_transaction(trn.group(1), pattern)
                    )

            results.append(Statement(
                account_id=acct.group(1),
                transactions=tuple(transactions)
            ))

        return results


def parse_string(ofx, decimal_separator=None):
    """Shortcut for ``OFXParser().parse_string()``."""
    return OFXParser(decimal_separator).parse_string(ofx)


def parse_file(ofx_file, decimal_separator=None):
    """Shortcut for ``OFXParser().parse_file()``."""
    return OFXParser(decimal_separator).parse_file(ofx_file)
