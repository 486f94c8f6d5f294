"""Ledger journal objects built from OFX statements."""

from datetime import datetime
from decimal import Decimal
import hashlib
import logging

from ofxsimple.strings import Info

logger = logging.getLogger(__name__)

now = datetime.now
strftime = datetime.strftime

NO_DATE = '--'


def make_meta_string(metadata, indent):
    """Convert list of metadata pairs into a string.

    Parameters:
        metadata (list): List of pairs (key, value)
        indent (str): String used for indentation.

    Returns:
        str: Metadata lines suitable for a ledger-cli journal.

    >>> make_meta_string([('key1', 'value1'), ('key2', 'value2')], '  ')
    '  ; key1: value1\\n  ; key2: value2'
    """
    return '\n'.join(
        '{}; {}: {}'.format(indent, key, value) for key, value in metadata
    )


def transaction_uuid(ofx_tran):
    """md5 hex digest identifying an :obj:`OFXTransaction`.

    Built from the fitid, date, name and amount so that importing the same
    file twice gives the same ids.
    """
    check_hash = '{}{}{}{}'.format(
        ofx_tran.fitid, ofx_tran.date, ofx_tran.name, ofx_tran.amount
    )
    return hashlib.md5(check_hash.encode()).hexdigest()


class Posting(object):
    """One account line of a transaction.

    Attributes:
        account (str): Name of the ledger account for this posting.
        amount (Decimal): Value of the posting.
        currency (str): Commodity string, ``$``, ``USD``, ``EUR`` etc.
    """

    def __init__(self, **kwargs):
        self.account = kwargs['account']
        self.amount = Decimal(kwargs['amount'])
        self.currency = kwargs.get('currency', '$')

    def to_string(self, width=80, indent=4):
        """Posting as a ledger line.

        Keyword Args:
            width (int): Column the decimal point of `amount` is aligned to.
            indent (int): Number of spaces to indent the line.

        Return:
            str: Ledger-cli formatted posting.
        """
        ind = ' ' * indent
        amt = '{} {:.2f}'.format(self.currency, self.amount)

        # Align on the decimal point, keep at least two spaces.
        fill = width - len(ind + self.account + amt.split('.')[0]) - 3

        return ind + self.account + ' ' * max(fill, 2) + amt


class Transaction(object):
    """Ledger transaction.

    Attributes:
        date (str): Transaction date, ``YYYY-MM-DD``.
        flag (str): ``' * '`` for cleared, ``' ! '`` for pending.
        payee (str): Transaction payee value.
        metadata (list): Key/value pairs.
        postings (list): :obj:`Posting` objects.
        account (str): OFX account id the transaction came from.
        uuid (str): Import id, see :func:`transaction_uuid`.
    """

    def __init__(self, **kwargs):
        self.date = kwargs['date']
        self.flag = kwargs.get('flag', ' ')
        self.payee = kwargs['payee']
        self.metadata = kwargs.get('metadata', [])
        self.postings = kwargs.get('postings', [])
        self.account = kwargs.get('account', '')
        self.uuid = kwargs.get('uuid', '')

    def to_string(self, width=80, indent=4):
        """Transaction as ledger text, header line first then postings."""
        outlist = [self.date + self.flag + self.payee]

        if self.metadata:
            outlist.append(make_meta_string(self.metadata, ' ' * indent))

        outlist.extend(
            p.to_string(width=width, indent=indent) for p in self.postings
        )

        return '\n'.join(outlist)


def from_ofx(ofx_tran, account_id, config):
    """Build a :obj:`Transaction` from an :obj:`OFXTransaction`.

    Parameters:
        ofx_tran (OFXTransaction): Parsed transaction, must have an amount.
        account_id (str): ACCTID of the enclosing statement.
        config (dict): Uses ``from`` (ledger account, required) and
            ``currency`` (default ``$``).
    """
    uuid = transaction_uuid(ofx_tran)

    meta = []
    if ofx_tran.checknum:
        meta.append(('check', ofx_tran.checknum))
    meta.append(('UUID', uuid))
    meta.append(('ImportDate', strftime(now(), '%Y-%m-%d')))

    posting = Posting(
        account=config['from'],
        amount=ofx_tran.amount,
        currency=config.get('currency', '$')
    )

    return Transaction(
        date=ofx_tran.date,
        payee=ofx_tran.name or ofx_tran.memo,
        postings=[posting],
        metadata=meta,
        account=account_id,
        uuid=uuid
    )


def statements_to_journal(statements, config):
    """Convert parsed statements to journal transactions.

    OFX transactions without an amount or a date cannot be posted and are
    skipped.

    Parameters:
        statements (list): :obj:`Statement` objects.
        config (dict): See :func:`from_ofx`.

    Returns:
        list: :obj:`Transaction` objects in file order.
    """
    transactions = []

    for statement in statements:
        for ofx_tran in statement.transactions:
            if ofx_tran.amount is None:
                logger.info(Info.no_amount.format(ofx_tran.fitid, ofx_tran.date))
                continue

            if ofx_tran.date == NO_DATE:
                logger.info(Info.no_date.format(ofx_tran.fitid))
                continue

            transactions.append(
                from_ofx(ofx_tran, statement.account_id, config)
            )

    return transactions
