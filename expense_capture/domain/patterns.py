"""Regex rules for pulling transaction fields out of bank SMS text"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Sequence

from expense_capture.domain.models import EXPENSE, INCOME


@dataclass(frozen=True)
class Rule:
    """Single extraction rule: a regex whose first group is the value"""

    name: str
    pattern: re.Pattern

    def apply(self, text: str) -> Optional[str]:
        match = self.pattern.search(text)
        return match.group(1) if match else None


@dataclass(frozen=True)
class DirectionRule:
    """Keyword family that marks a message as money out or money in"""

    direction: str
    pattern: re.Pattern

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


@dataclass
class MessageMatch:
    """Raw fields found in one message; any of them may be missing"""

    amount: Optional[Decimal] = None
    direction: Optional[str] = None
    merchant: Optional[str] = None
    date_token: Optional[str] = None
    account: Optional[str] = None

    @property
    def is_transaction(self) -> bool:
        return bool(self.amount) and self.direction is not None


AMOUNT_RULES: List[Rule] = [
    Rule("currency_prefix", re.compile(r"(?:Rs\.?|INR|₹)\s*([0-9,]+(?:\.[0-9]{2})?)", re.IGNORECASE)),
    Rule("currency_suffix", re.compile(r"([0-9,]+(?:\.[0-9]{2})?)\s*(?:Rs\.?|INR|₹)", re.IGNORECASE)),
]

# Debit is checked first: "debited ... refund" style messages count as expenses
DIRECTION_RULES: List[DirectionRule] = [
    DirectionRule(EXPENSE, re.compile(r"debited|spent|withdrawn|paid|deducted|purchase", re.IGNORECASE)),
    DirectionRule(INCOME, re.compile(r"credited|received|deposited|refund|cashback", re.IGNORECASE)),
]

MERCHANT_RULES: List[Rule] = [
    Rule("preposition", re.compile(r"(?:at|to|from)\s+([A-Z][A-Za-z0-9\s&.-]+?)(?:\s+on|\s+at|\s+\(|$)")),
    Rule("debit_at", re.compile(r"(?:spent|debited).*?at\s+([A-Z][A-Za-z0-9\s&.-]+)", re.IGNORECASE)),
    Rule("credit_from", re.compile(r"(?:credited|received).*?(?:from|by)\s+([A-Z][A-Za-z0-9\s&.-]+)", re.IGNORECASE)),
]

DATE_RULES: List[Rule] = [
    Rule("numeric", re.compile(r"(\d{2}[-/]\d{2}[-/]\d{2,4})")),
    Rule("compact", re.compile(r"(\d{2}[A-Za-z]{3}\d{2,4})")),
    Rule("on_day_month", re.compile(r"on\s+(\d{1,2}[-/][A-Za-z]{3}[-/]\d{2,4})", re.IGNORECASE)),
]

ACCOUNT_RULE = Rule("masked_account", re.compile(r"[*X]{2,}(\d{4})"))


def first_match(rules: Sequence[Rule], text: str) -> Optional[str]:
    """Return the value captured by the first rule that matches"""
    for rule in rules:
        value = rule.apply(text)
        if value is not None:
            return value
    return None


def parse_amount(raw: Optional[str]) -> Optional[Decimal]:
    """Strip thousands separators; None when nothing numeric is left"""
    if raw is None:
        return None
    try:
        return Decimal(raw.replace(",", ""))
    except InvalidOperation:
        return None


def detect_direction(text: str) -> Optional[str]:
    for rule in DIRECTION_RULES:
        if rule.matches(text):
            return rule.direction
    return None


def match_message(text: str) -> MessageMatch:
    """Run every rule list against one message"""
    merchant = first_match(MERCHANT_RULES, text)

    return MessageMatch(
        amount=parse_amount(first_match(AMOUNT_RULES, text)),
        direction=detect_direction(text),
        merchant=merchant.strip() if merchant else None,
        date_token=first_match(DATE_RULES, text),
        account=ACCOUNT_RULE.apply(text),
    )
