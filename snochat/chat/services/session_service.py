"""
Service: SessionService

Owns chat session records (table sno_chat_sessions).

Design:
  - A session belongs to exactly one user. resolve() fails closed:
    missing or soft-deleted sessions are NotFound, sessions of another
    user are AccessDenied.
  - Deletion is a one-way status flip to 'deleted'; rows are never removed
    so the audit trail survives and messages simply become unreachable.
  - touch() bumps updated_at after every appended message; the session
    list is ordered by it (most recently active first).
"""

# Python Packages
import logging
import time
from typing import List

from sqlalchemy.exc import SQLAlchemyError

# Database
from ...config.database import db

# Models
from ...models.sno_chat_session import ChatSession, STATUS_ACTIVE, STATUS_DELETED

# Config
from ..config import chat_config

# Exceptions
from ...util.exceptions import (
    AuthorizationException,
    NotFoundException,
    StorageException,
    ValidationException
)
from ...util import messages

logger = logging.getLogger(__name__)


class SessionService:
    """
    Create, resolve, rename, touch and soft-delete chat sessions.
    All writes roll back the SQLAlchemy session on failure.
    """

    # ── Titles ─────────────────────────────────────────────────────────────────

    @staticmethod
    def derive_title(text: str) -> str:
        """
        Build a session title from the first message: a bounded prefix,
        suffixed with an ellipsis when the text was cut.
        """
        text = (text or "").strip()
        limit = chat_config.SESSION_TITLE_PREFIX_LENGTH

        if len(text) > limit:
            return text[:limit] + chat_config.SESSION_TITLE_ELLIPSIS
        return text

    # ── Lifecycle ──────────────────────────────────────────────────────────────

    def create(self, user_id: str, title: str) -> int:
        """
        Create an active session and return its id.

        Raises:
            ValidationException: blank or oversized title.
            StorageException:    the insert failed.
        """
        title = self._clean_title(title)

        try:
            session = ChatSession(user_id=user_id, title=title, status=STATUS_ACTIVE)
            db.session.add(session)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageException(details=str(exc))

        logger.info("Chat session %s created for user %s", session.session_id, user_id)
        return session.session_id

    def resolve(self, session_id: int, user_id: str) -> ChatSession:
        """
        Return the active session *session_id* if *user_id* owns it.

        Raises:
            NotFoundException:      no such session, or it was deleted.
            AuthorizationException: the session belongs to another user.
        """
        session = self._get(session_id)

        if session is None:
            raise NotFoundException(messages.ERROR["SESSION_NOT_FOUND"])

        if session.user_id != user_id:
            logger.warning(
                "User %s denied access to chat session %s", user_id, session_id
            )
            raise AuthorizationException()

        if not session.is_active:
            raise NotFoundException(messages.ERROR["SESSION_NOT_FOUND"])

        return session

    def soft_delete(self, session_id: int, user_id: str) -> None:
        """
        Mark an active session as deleted. There is no way back.
        """
        session = self.resolve(session_id, user_id)

        try:
            session.status = STATUS_DELETED
            session.updated_at = int(time.time())
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageException(details=str(exc))

        logger.info("Chat session %s deleted by user %s", session_id, user_id)

    def rename(self, session_id: int, title: str) -> None:
        """ Change the title of an existing session (no ownership check). """
        title = self._clean_title(title)

        session = self._get(session_id)
        if session is None or not session.is_active:
            raise NotFoundException(messages.ERROR["SESSION_NOT_FOUND"])

        try:
            session.title = title
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageException(details=str(exc))

    def rename_for_user(self, session_id: int, user_id: str, title: str) -> ChatSession:
        """ Owner-checked rename used by the API. """
        session = self.resolve(session_id, user_id)
        self.rename(session.session_id, title)
        return session

    def touch(self, session_id: int) -> None:
        """ Set updated_at to now. """
        try:
            db.session.query(ChatSession).filter_by(session_id=session_id).update(
                {"updated_at": int(time.time())},
                synchronize_session=False
            )
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageException(details=str(exc))

    # ── Listing ────────────────────────────────────────────────────────────────

    def list_for_user(self, user_id: str) -> List[ChatSession]:
        """ Active sessions of *user_id*, most recently active first. """
        try:
            return (
                ChatSession.query
                .filter_by(user_id=user_id, status=STATUS_ACTIVE)
                .order_by(ChatSession.updated_at.desc(), ChatSession.session_id.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageException(details=str(exc))

    # ── Private ────────────────────────────────────────────────────────────────

    def _get(self, session_id: int):
        try:
            return db.session.get(ChatSession, session_id)
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageException(details=str(exc))

    def _clean_title(self, title) -> str:
        if not isinstance(title, str) or not title.strip():
            raise ValidationException(message=messages.ERROR["SESSION_TITLE_REQUIRED"])

        title = title.strip()
        if len(title) > chat_config.SESSION_TITLE_MAX_LENGTH:
            raise ValidationException(
                message=messages.ERROR["SESSION_TITLE_TOO_LONG"].format(
                    limit=chat_config.SESSION_TITLE_MAX_LENGTH
                )
            )
        return title
