"""
Service: MessageService

Append-only message log (table sno_chat_messages).

This is a dumb store: it does not look at session status and enforces no
message-count policy. ConversationService decides whether an append is
allowed. Reads are ordered by created_at, with message_id breaking ties so
messages written in the same second keep their insertion order.
"""

# Python Packages
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

# Database
from ...config.database import db

# Models
from ...models.sno_chat_message import ChatMessage, SENDER_TYPES

# Exceptions
from ...util.exceptions import StorageException, ValidationException
from ...util import messages


class MessageService:
    """
    Append and read chat messages.
    """

    def append(
        self,
        session_id: int,
        sender_type: str,
        content: str,
        attachment_ref: Optional[str] = None,
        attachment_summary: Optional[str] = None
    ) -> int:
        """
        Store one message and return its id.

        Raises:
            ValidationException: unknown sender_type.
            StorageException:    the insert failed.
        """
        if sender_type not in SENDER_TYPES:
            raise ValidationException(message=messages.ERROR["INVALID_SENDER_TYPE"])

        try:
            message = ChatMessage(
                session_id         = session_id,
                sender_type        = sender_type,
                content            = content,
                attachment_ref     = attachment_ref,
                attachment_summary = attachment_summary
            )
            db.session.add(message)
            db.session.commit()
            return message.message_id

        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageException(details=str(exc))

    def list_by_session(self, session_id: int) -> List[ChatMessage]:
        """ All messages of a session, oldest first. """
        try:
            return (
                ChatMessage.query
                .filter_by(session_id=session_id)
                .order_by(ChatMessage.created_at.asc(), ChatMessage.message_id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageException(details=str(exc))

    def count_by_session(self, session_id: int) -> int:
        try:
            return ChatMessage.query.filter_by(session_id=session_id).count()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageException(details=str(exc))
