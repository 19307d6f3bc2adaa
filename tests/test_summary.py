from sms_categorizer.domain.summary import summarize


def test_debit_with_vpa_recipient() -> None:
    assert summarize("Sent Rs.500 to VPA john@bank", -500) == "Sent Rs.500 to john@bank"


def test_debit_with_to_recipient() -> None:
    text = "INR 1,000.00 spent on your card To Amazon"
    assert summarize(text, -1000.0) == "Sent INR 1,000.00 to Amazon"


def test_debit_without_recipient() -> None:
    assert summarize("Rs.100 debited from a/c XX12", -100.0) == "Sent Rs.100"


def test_credit_with_sender_bank() -> None:
    text = "Rs.2000 credited to your account From ABC Bank"
    assert summarize(text, 2000.0) == "Received Rs.2000 from ABC Bank"


def test_zero_amount_takes_credit_branch() -> None:
    assert summarize("Your bill of ₹ 499 is due", 0.0) == "Received ₹ 499"


def test_without_currency_amount_returns_text() -> None:
    text = "Payment of 300 successful"
    assert summarize(text, -300.0) == text


def test_blank_recipient_keeps_preposition() -> None:
    text = "Rs.500 debited To 9876543210 VPA alice"
    assert summarize(text, -500.0) == "Sent Rs.500 to "
