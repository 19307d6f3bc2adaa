import re

from sms_categorizer.domain.detection import contains_any
from sms_categorizer.errors import ParseError
from sms_categorizer.logger import get_logger

logger = get_logger(__name__)

# Digits with optional grouping commas and up to two decimals. A lone comma
# also matches; it fails to parse and is skipped.
NUMBER_PATTERN = re.compile(r"[\d,]+\.?\d{0,2}")

CONTEXT_RADIUS = 20

AMOUNT_KEYWORDS: tuple[str, ...] = (
    "rs",
    "inr",
    "₹",
    "debited",
    "credited",
    "spent",
    "paid",
    "sent",
)

DEBIT_KEYWORDS: tuple[str, ...] = ("debited", "spent", "sent", "paid")


def context_window(text: str, start: int, end: int, radius: int = CONTEXT_RADIUS) -> str:
    window_start = max(0, start - radius)
    window_end = min(len(text), end + radius)
    return text[window_start:window_end].lower()


def parse_amount(raw: str) -> float:
    cleaned = raw.replace(",", "")
    try:
        return float(cleaned)
    except ValueError as exc:
        raise ParseError(f"Could not parse amount from '{raw}'") from exc


def extract_amount(text: str) -> float:
    """
    Return the signed amount of the first number that sits next to a money word.

    Debit words (debited, spent, sent, paid) within 20 characters of the number
    make it negative; anything else is treated as money coming in. Returns 0.0
    when no number qualifies.
    """
    for match in NUMBER_PATTERN.finditer(text):
        window = context_window(text, match.start(), match.end())
        if not contains_any(window, AMOUNT_KEYWORDS):
            continue

        try:
            amount = parse_amount(match.group(0))
        except ParseError as exc:
            logger.debug("%s; skipping candidate.", exc.message)
            continue

        if contains_any(window, DEBIT_KEYWORDS):
            logger.debug("Expense found: %s", -amount)
            return -amount
        logger.debug("Income/other found: %s", amount)
        return amount

    logger.debug("No financial amount found in the text.")
    return 0.0
