from sms_categorizer.diagnostics import DiagnosticsChannel


def test_since_returns_newer_lines() -> None:
    channel = DiagnosticsChannel(max_lines=10)
    channel.emit("one")
    channel.emit("two")

    assert [line.message for line in channel.since()] == ["one", "two"]
    assert [line.message for line in channel.since(1)] == ["two"]
    assert channel.last_seq == 2


def test_buffer_is_bounded_and_clearable() -> None:
    channel = DiagnosticsChannel(max_lines=2)
    for message in ("a", "b", "c"):
        channel.emit(message)

    assert [line.seq for line in channel.since()] == [2, 3]

    channel.clear()
    assert channel.since() == []
    channel.emit("d")
    assert channel.since()[0].seq == 4
