"""
Model: ChatMessage
Table: sno_chat_messages

An individual message in a chat session. sender_type is either 'user' or
'assistant'. Messages are append-only.

attachment_ref stores the object-storage key of an uploaded image and
attachment_summary the text the AI extracted from it; both are only set on
user messages that carried an image.
"""

# Python Packages
import time

# Database
from ..config.database import db


SENDER_USER      = "user"
SENDER_ASSISTANT = "assistant"
SENDER_TYPES     = (SENDER_USER, SENDER_ASSISTANT)





def _epoch_seconds():
    return int(time.time())


class ChatMessage(db.Model):
    """ One message (user or assistant turn) in a chat session... """

    # Table Name
    __tablename__ = "sno_chat_messages"

    message_id = db.Column(db.Integer, primary_key = True, autoincrement = True)

    session_id = db.Column(
        db.Integer,
        db.ForeignKey("sno_chat_sessions.session_id", ondelete = "CASCADE"),
        nullable = False,
        index = True
    )

    sender_type = db.Column(
        db.String(20),
        nullable = False,
        doc = "'user' or 'assistant'."
    )

    content = db.Column(db.Text, nullable = False)

    attachment_ref = db.Column(
        db.String(1024),
        nullable = True,
        doc = "Storage key of the image sent with this message."
    )

    attachment_summary = db.Column(
        db.Text,
        nullable = True,
        doc = "AI-extracted text or description of the attached image."
    )

    created_at = db.Column(db.Integer, nullable = False, default = _epoch_seconds)

    # Relationship
    session = db.relationship("ChatSession", backref = "messages")

    def to_dict(self):
        return {
            "message_id":         self.message_id,
            "session_id":         self.session_id,
            "sender_type":        self.sender_type,
            "content":            self.content,
            "attachment_ref":     self.attachment_ref,
            "attachment_summary": self.attachment_summary,
            "created_at":         self.created_at
        }

    def __repr__(self):
        return f"<ChatMessage {self.message_id} sender={self.sender_type}>"
