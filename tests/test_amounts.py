import pytest

from sms_categorizer.domain.amounts import context_window, extract_amount, parse_amount
from sms_categorizer.errors import ParseError


def test_spent_is_negative() -> None:
    assert extract_amount("You spent Rs.1,250.50 at Store") == pytest.approx(-1250.50)


def test_credited_is_positive() -> None:
    assert extract_amount("Rs.2000 credited to your account") == 2000.0


def test_no_financial_context_returns_zero() -> None:
    assert extract_amount("Hello, your OTP 1234") == 0.0


def test_received_with_currency_is_positive() -> None:
    assert extract_amount("INR 500 received from ABC") == 500.0


def test_first_qualifying_candidate_wins() -> None:
    assert extract_amount("Rs.100 debited. Avl bal Rs.5,000") == -100.0


def test_numbers_far_from_keywords_are_skipped() -> None:
    text = "Order 98765 was confirmed by the store today. You paid Rs.250"
    assert extract_amount(text) == -250.0


def test_unparseable_candidate_is_skipped() -> None:
    # The comma after "user" matches the number pattern but cannot be parsed.
    assert extract_amount("Dear user, Rs.300 sent") == -300.0


def test_context_window_is_clamped() -> None:
    assert context_window("Rs.5", 3, 4) == "rs.5"
    text = "x" * 30 + "42" + "y" * 30
    window = context_window(text, 30, 32)
    assert window == "x" * 20 + "42" + "y" * 20


def test_parse_amount() -> None:
    assert parse_amount("1,00,000.75") == pytest.approx(100000.75)
    with pytest.raises(ParseError):
        parse_amount(",")
