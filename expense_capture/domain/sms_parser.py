"""Bank SMS parsing - turns pasted notification text into transaction candidates"""

import re
from datetime import date
from typing import List, Optional

from expense_capture.domain.categorizer import categorize_merchant
from expense_capture.domain.models import EXPENSE, INCOME, TransactionCandidate
from expense_capture.domain.patterns import match_message
from expense_capture.utils.date_utils import normalize_date_token

# Blank-line runs or a "---" separator line between messages
MESSAGE_SEPARATOR = re.compile(r"\n\n+|\n-{3,}\n")

# Pieces this short are stray lines, not messages
MIN_MESSAGE_LENGTH = 11

DEFAULT_MERCHANTS = {EXPENSE: "Bank Debit", INCOME: "Bank Credit"}


def split_messages(text: str) -> List[str]:
    """Split pasted text into trimmed candidate messages"""
    if not text:
        return []

    pieces = MESSAGE_SEPARATOR.split(text.replace("\r\n", "\n"))
    messages = [piece.strip() for piece in pieces]
    return [msg for msg in messages if len(msg) >= MIN_MESSAGE_LENGTH]


def parse_sms(message: str, today: Optional[date] = None) -> Optional[TransactionCandidate]:
    """
    Parse a single bank SMS.

    Returns None unless both an amount and a debit/credit keyword are found.
    Missing merchant falls back to "Bank Debit"/"Bank Credit"; missing or
    malformed date falls back to `today`.
    """
    if not message:
        return None

    today = today or date.today()
    found = match_message(message)
    if not found.is_transaction:
        return None

    merchant = found.merchant or DEFAULT_MERCHANTS[found.direction]
    txn_date = normalize_date_token(found.date_token, today) if found.date_token else today

    return TransactionCandidate(
        amount=found.amount,
        direction=found.direction,
        merchant=merchant,
        date=txn_date,
        category=categorize_merchant(merchant),
        raw_text=message,
        account=found.account,
    )


def parse_bulk_text(text: str, today: Optional[date] = None) -> List[TransactionCandidate]:
    """
    Parse every message in a pasted blob, keeping input order.

    Messages without a recognizable transaction are dropped silently;
    empty input gives an empty list.
    """
    today = today or date.today()
    candidates = []
    for message in split_messages(text):
        candidate = parse_sms(message, today)
        if candidate is not None:
            candidates.append(candidate)
    return candidates
