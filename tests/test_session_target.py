import pytest

from snochat.chat.session_target import (
    AutoCreateSession,
    ExistingSession,
    parse_session_id,
    parse_session_target,
)
from snochat.util.exceptions import ValidationException


def test_auto_sentinel():
    assert parse_session_target("auto") == AutoCreateSession()
    assert parse_session_target(" AUTO ", title_hint="x") == AutoCreateSession(title_hint="x")


def test_numeric_ids():
    assert parse_session_target("12") == ExistingSession(12)
    assert parse_session_target(7) == ExistingSession(7)


@pytest.mark.parametrize("raw", [None, "", "abc", "0", "-3", True, "1.5"])
def test_invalid_values(raw):
    with pytest.raises(ValidationException):
        parse_session_target(raw)


def test_parse_session_id_rejects_auto():
    assert parse_session_id("5") == 5

    with pytest.raises(ValidationException):
        parse_session_id("auto")
