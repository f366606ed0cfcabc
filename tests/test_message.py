import pytest

from logserver.message import Message


def test_message_constructor():
    message = Message("Test 1", "Test 2", "Test 3", "Test 4")

    assert message.date == "Test 1"
    assert message.host != "Test 1"
    assert message.host == "Test 2"
    assert message.program == "Test 3"
    assert message.message == "Test 4"


def test_message_constructor_example():
    message = Message(
        "Jul 16 19:11:07",
        "host.local",
        "example_package.desktop[7101]",
        "Example log message: OK",
    )

    assert message.date == "Jul 16 19:11:07"
    assert message.host == "host.local"
    assert message.program == "example_package.desktop[7101]"
    assert message.message == "Example log message: OK"


def test_message_from_text_example():
    text = "<1>Jul 16 19:11:07 host.local example_package.desktop[7101]: Example log message: OK"

    message = Message.from_text(text)

    assert message is not None
    assert message.date == "Jul 16 19:11:07"
    assert message.host == "host.local"
    assert message.program == "example_package.desktop[7101]:"
    assert message.message == "Example log message: OK"


def test_message_from_text_with_truncated_program():
    text = (
        "<14>Jul 17 20:36:17 fedora com.discordapp.Discord.desktop[1 20:36:17.591 › "
        "The resource https://discordapp.com/ass.woff2 was preloaded using link preload "
        "but not used within a few seconds from the window's load event. Please make sure "
        "it has an appropriate `as` value and it is preloaded intentionally."
    )

    message = Message.from_text(text)

    assert message is not None
    assert message.date == "Jul 17 20:36:17"
    assert message.host == "fedora"
    assert message.program == "com.discordapp.Discord.desktop[1"
    assert message.message == (
        "20:36:17.591 › The resource https://discordapp.com/ass.woff2 was preloaded "
        "using link preload but not used within a few seconds from the window's load "
        "event. Please make sure it has an appropriate `as` value and it is preloaded "
        "intentionally."
    )


@pytest.mark.parametrize(
    "text",
    [
        "",
        "this is a test",
        "Jul 16 19:11:07 host.local prog: missing priority",
        "<1>Jul 16 host.local prog: missing time",
        "<x>Jul 16 19:11:07 host.local prog: bad priority",
    ],
)
def test_from_text_rejects_non_syslog_lines(text):
    assert Message.from_text(text) is None


def test_from_payload_parses_utf8_bytes():
    payload = "<1>Jul 16 19:11:07 host.local example_package.desktop[7101]: Example log message: OK".encode()

    message = Message.from_payload(payload)

    assert message == Message(
        "Jul 16 19:11:07",
        "host.local",
        "example_package.desktop[7101]:",
        "Example log message: OK",
    )


def test_from_payload_returns_none_for_unparsable_text():
    assert Message.from_payload(b"this is a test") is None


def test_from_payload_rejects_invalid_utf8():
    with pytest.raises(UnicodeDecodeError):
        Message.from_payload(b"<1>Jul 16 19:11:07 host prog \xff\xfe")


def test_empty_has_blank_fields():
    assert Message.empty() == Message("", "", "", "")


def test_to_dict_round_trip():
    message = Message("Jul 16 19:11:07", "host.local", "prog:", "text")

    data = message.to_dict()

    assert data == {
        "date": "Jul 16 19:11:07",
        "host": "host.local",
        "program": "prog:",
        "message": "text",
    }
    assert Message(**data) == message