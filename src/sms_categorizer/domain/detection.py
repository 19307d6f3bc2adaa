"""
Decide whether a message describes a money movement worth categorizing.

The keyword test is a plain substring search on the lowercased text, so ``rs``
also matches words such as "users" or "hours". That over-matching is the
established behaviour and is kept as is.
"""

import re
from datetime import date, datetime

from sms_categorizer.errors import ParseError
from sms_categorizer.logger import get_logger

logger = get_logger(__name__)

MANDATE_MARKER = "e-mandate"

FINANCIAL_KEYWORDS: tuple[str, ...] = (
    "rs",
    "inr",
    "₹",
    "debited",
    "credited",
    "spent",
    "paid",
    "sent",
    "received",
    "transaction",
    "payment",
)

# "On 02/12/25", "on 02-12-2025", "on02/12/25"
MANDATE_DATE_PATTERN = re.compile(r"on\s*(\d{2}[/-]\d{2}[/-]\d{2,4})", re.IGNORECASE)


def contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def is_financial(text: str, today: date | None = None) -> bool:
    lower = text.lower()
    if MANDATE_MARKER in lower:
        logger.debug("Detected e-mandate message.")
        return is_mandate_for_today(text, today=today)
    return contains_any(lower, FINANCIAL_KEYWORDS)


def find_mandate_date(text: str) -> str | None:
    match = MANDATE_DATE_PATTERN.search(text)
    if not match:
        return None
    return match.group(1).replace("-", "/")


def parse_mandate_date(date_str: str) -> date:
    # dd/MM/yyyy is 10 characters, dd/MM/yy is 8.
    fmt = "%d/%m/%Y" if len(date_str) > 8 else "%d/%m/%y"
    try:
        return datetime.strptime(date_str, fmt).date()
    except ValueError as exc:
        raise ParseError(f"Unparseable mandate date '{date_str}'") from exc


def is_mandate_for_today(text: str, today: date | None = None) -> bool:
    date_str = find_mandate_date(text)
    if date_str is None:
        logger.debug("Mandate text has no 'on dd/mm/yy' date; rejecting.")
        return False

    try:
        mandate_date = parse_mandate_date(date_str)
    except ParseError as exc:
        logger.debug("Mandate date parse error: %s", exc.message)
        return False

    today = today or date.today()
    is_today = (
        mandate_date.year == today.year
        and mandate_date.month == today.month
        and mandate_date.day == today.day
    )
    logger.debug("Mandate date check for %s. Is today? %s", date_str, is_today)
    return is_today
