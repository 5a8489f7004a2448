"""
Session Target

Where a new message should go:

    ExistingSession(session_id)  → append to a session the caller already owns
    AutoCreateSession(title_hint) → open a new session on the first message

The routing layer receives either a numeric id or the literal "auto"
sentinel; parse_session_target() turns that into one of the two types so
nothing downstream compares strings.
"""

# Python Packages
from dataclasses import dataclass
from typing import Optional, Union

# Config
from .config import chat_config

# Exceptions
from ..util.exceptions import ValidationException
from ..util import messages





@dataclass(frozen = True)
class ExistingSession:
    session_id: int


@dataclass(frozen = True)
class AutoCreateSession:
    title_hint: Optional[str] = None


SessionTarget = Union[ExistingSession, AutoCreateSession]


def parse_session_target(raw, title_hint: Optional[str] = None) -> SessionTarget:
    """
    Convert a raw path/body value into a SessionTarget.

    Raises:
        ValidationException: value is neither "auto" nor a positive integer.
    """

    if isinstance(raw, str) and raw.strip().lower() == chat_config.AUTO_SESSION_SENTINEL:
        return AutoCreateSession(title_hint = title_hint)

    try:
        session_id = int(raw)
    except (TypeError, ValueError):
        raise ValidationException(message = messages.ERROR["INVALID_SESSION_ID"])

    if isinstance(raw, bool) or session_id < 1:
        raise ValidationException(message = messages.ERROR["INVALID_SESSION_ID"])

    return ExistingSession(session_id = session_id)


def parse_session_id(raw) -> int:
    """ Like parse_session_target(), but only a concrete id is accepted. """

    target = parse_session_target(raw)

    if not isinstance(target, ExistingSession):
        raise ValidationException(message = messages.ERROR["INVALID_SESSION_ID"])

    return target.session_id
