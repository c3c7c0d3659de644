"""Merchant categorization by ordered keyword families"""

import re
from typing import List, Tuple

OTHER = "Other"

# Order matters: "Uber Eats" must hit Food before "uber" hits Transport
CATEGORY_RULES: List[Tuple[str, re.Pattern]] = [
    ("Food", re.compile(r"swiggy|zomato|uber\s*eats|domino|mcdonald|kfc|pizza|restaurant|cafe|food")),
    ("Transport", re.compile(r"uber|ola|rapido|metro|petrol|fuel|parking")),
    ("Shopping", re.compile(r"amazon|flipkart|myntra|ajio|shopping|mall|store")),
    ("Entertainment", re.compile(r"netflix|prime|hotstar|spotify|bookmyshow|movie|cinema")),
    ("Bills", re.compile(r"electricity|water|gas|mobile|recharge|bill|payment")),
    ("Health", re.compile(r"pharma|medical|hospital|doctor|health")),
]

CATEGORIES: List[str] = [name for name, _ in CATEGORY_RULES] + [OTHER]


def categorize_merchant(merchant: str) -> str:
    """
    Map merchant text to one of the fixed categories.

    Keywords are matched as substrings of the lower-cased merchant and the
    first matching family wins, so "Petrol Pump Cafe" is Food, not
    Transport. No match gives "Other".
    """
    if not merchant:
        return OTHER

    merchant_lower = merchant.lower()
    for category, pattern in CATEGORY_RULES:
        if pattern.search(merchant_lower):
            return category

    return OTHER
