"""
Model: ChatSession
Table: sno_chat_sessions

A titled conversation owned by one user. Sessions are never hard-deleted:
status moves one way from 'active' to 'deleted', and a deleted session is
invisible to every read and write path.

Timestamps are Unix epoch seconds. updated_at is refreshed whenever a
message is appended, so the session list can be sorted by recency.
"""

# Python Packages
import time

# Database
from ..config.database import db


STATUS_ACTIVE  = "active"
STATUS_DELETED = "deleted"


def _epoch_seconds():
    return int(time.time())


class ChatSession(db.Model):
    """A chat session between a user and the SnoChat assistant."""

    __tablename__ = "sno_chat_sessions"

    session_id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    user_id = db.Column(
        db.String(255),
        nullable=False,
        index=True,
        doc="Identifier of the user who owns this session."
    )

    title = db.Column(db.String(255), nullable=False)

    status = db.Column(
        db.String(20),
        nullable=False,
        default=STATUS_ACTIVE,
        doc="'active' or 'deleted'. Deleted is terminal."
    )

    created_at = db.Column(db.Integer, nullable=False, default=_epoch_seconds)

    updated_at = db.Column(db.Integer, nullable=False, default=_epoch_seconds)

    @property
    def is_active(self):
        return self.status == STATUS_ACTIVE

    def to_dict(self):
        return {
            "session_id": self.session_id,
            "user_id":    self.user_id,
            "title":      self.title,
            "status":     self.status,
            "created_at": self.created_at,
            "updated_at": self.updated_at
        }

    def __repr__(self):
        return f"<ChatSession {self.session_id} status={self.status}>"
