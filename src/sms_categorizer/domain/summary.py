import re

# Case-sensitive: "Rs." / "Rs" / "INR" / "₹" followed by the number.
CURRENCY_AMOUNT_PATTERN = re.compile(r"(?:Rs\.?|INR|₹)\s*[\d,]+\.?\d{0,2}")

# "To John Doe", "VPA john@okbank"
RECIPIENT_PATTERN = re.compile(r"(?:To|\bVPA\b)\s*([A-Za-z\s]+(?:@[A-Za-z.]+)?)")

# "From ABC Bank"
SENDER_PATTERN = re.compile(r"From\s*([A-Za-z\s]+(?:Bank)?)")


def _party_suffix(pattern: re.Pattern[str], text: str, preposition: str) -> str:
    match = pattern.search(text)
    if not match:
        return ""
    # a blank capture ("To 98765...") still yields the preposition
    return f" {preposition} {match.group(1).strip()}"


def summarize(text: str, amount: float) -> str:
    """
    Build "Sent Rs.500 to John" / "Received Rs.500 from ABC Bank".

    Falls back to the original text when no currency amount is present.
    """
    amount_match = CURRENCY_AMOUNT_PATTERN.search(text)
    if not amount_match:
        return text

    amount_text = amount_match.group(0)
    if amount < 0:
        return f"Sent {amount_text}{_party_suffix(RECIPIENT_PATTERN, text, 'to')}"
    return f"Received {amount_text}{_party_suffix(SENDER_PATTERN, text, 'from')}"
