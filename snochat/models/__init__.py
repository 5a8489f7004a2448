"""
Models Package
Registers all SQLAlchemy ORM models so they are discoverable by Flask-SQLAlchemy.

Import order matters: models with foreign keys must be imported after
the models they reference.
"""

from .sno_user_credit import UserCredit

from .sno_chat_session import ChatSession
from .sno_chat_message import ChatMessage

__all__ = [
    "UserCredit",
    "ChatSession",
    "ChatMessage",
]
