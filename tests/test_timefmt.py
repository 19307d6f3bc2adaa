import pytest

from sms_categorizer.domain.timefmt import format_duration


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0, "0 ms"),
        (-1.0, "0 ms"),
        (0.00025, "250 µs"),
        (0.0123, "12.3 ms"),
        (2.5, "2.50 s"),
        (125.0, "2 min 5 s"),
    ],
)
def test_format_duration(seconds: float, expected: str) -> None:
    assert format_duration(seconds) == expected
