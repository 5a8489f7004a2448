"""
Service: ConversationService

Runs one chat exchange end to end and exposes the session operations the
routing layer needs.

Exchange pipeline (each step either passes or raises an AppException):

    1. validate      text and/or image summary present, text within limit
    2. credit check  lazily initialized 'sno' balance must cover one exchange
    3. session       AutoCreateSession → new session titled from the text
                     ExistingSession   → owner-checked, active only
    4. limit         stored messages must be below MAX_MESSAGES_PER_SESSION
    5. history       prior turns + new turn, images folded in as text
    6. persist user  stored before the AI call so it survives AI failures
    7. AI call       overloaded → retried with linear backoff; other
                     categories surface immediately; blank reply = failure
    8. persist reply
    9. deduct        exactly one credit, only after the reply is stored

Failures before step 6 leave nothing behind except an auto-created session.
A failure in step 7 leaves the user message without a reply; it is not
rolled back. A crash between steps 8 and 9 gives the user a free exchange;
closing that window would need a transaction spanning the AI provider and
the ledger, which this service does not attempt.

All collaborators are passed in, so tests can swap any of them for fakes.
"""

# Python Packages
import logging
import time
from typing import Callable, Dict, List, Optional

# Services
from .credit_service import CreditService
from .session_service import SessionService
from .message_service import MessageService
from .context_builder import ContextBuilder

# Session Target
from ..session_target import AutoCreateSession, ExistingSession, SessionTarget

# Config
from ..config import chat_config, credit_config, prompts

# Models
from ...models.sno_chat_message import SENDER_ASSISTANT, SENDER_USER

# Vendors
from ...vendors import errors as ai_errors

# Exceptions
from ...util.exceptions import (
    AiConfigException,
    AiOverloadedException,
    AiQuotaException,
    AiRateLimitException,
    AiServiceException,
    AppException,
    InsufficientCreditException,
    MessageLimitException,
    StorageException,
    ValidationException
)
from ...util import messages

logger = logging.getLogger(__name__)





def to_app_exception(error: ai_errors.AIProviderError) -> AppException:
    """
    Map a categorized AI provider failure to the error shown to callers.
    """

    if isinstance(error, ai_errors.AuthError):
        return AiConfigException(details = str(error))

    if isinstance(error, ai_errors.RateLimitError):
        return AiRateLimitException(details = str(error))

    if isinstance(error, ai_errors.QuotaError):
        return AiQuotaException(details = str(error))

    if isinstance(error, ai_errors.OverloadedError):
        return AiOverloadedException(attempts = 1, details = str(error))

    return AiServiceException(details = str(error))





class ConversationService:
    """
    Credit-gated chat orchestrator.
    """

    def __init__(
        self,
        chat_service,
        credit_service: CreditService = None,
        session_service: SessionService = None,
        message_service: MessageService = None,
        context_builder: ContextBuilder = None,
        sleep: Callable[[float], None] = None,
        max_attempts: int = chat_config.AI_MAX_ATTEMPTS,
        backoff_seconds: float = chat_config.AI_RETRY_BACKOFF_SECONDS,
        max_messages: int = chat_config.MAX_MESSAGES_PER_SESSION
    ):
        self.chat_service    = chat_service
        self.credit_service  = credit_service or CreditService()
        self.session_service = session_service or SessionService()
        self.message_service = message_service or MessageService()
        self.context_builder = context_builder or ContextBuilder()
        self.sleep           = sleep or time.sleep
        self.max_attempts    = max_attempts
        self.backoff_seconds = backoff_seconds
        self.max_messages    = max_messages



    # ── Exchange ───────────────────────────────────────────────────────────────

    def send_message(
        self,
        user_id: str,
        target: SessionTarget,
        text: Optional[str] = None,
        attachment_summary: Optional[str] = None,
        attachment_ref: Optional[str] = None
    ) -> Dict:
        """
        Run one exchange.

        Args:
            user_id:            Authenticated caller.
            target:             ExistingSession(id) or AutoCreateSession(title_hint).
            text:               Free text typed by the user (may be empty with an image).
            attachment_summary: AI-extracted text of an uploaded image.
            attachment_ref:     Storage key of that image.

        Returns:
            {"reply", "session_id", "session_title", "remaining_credits"}
        """

        text    = (text or "").strip()
        summary = (attachment_summary or "").strip()

        # Step 1: Validate
        self._validate(text, summary)

        # Step 2: Credit check
        balance = self.credit_service.get_or_initialize_balance(user_id, credit_config.SNO_SERVICE)
        if balance < credit_config.EXCHANGE_COST:
            raise InsufficientCreditException(remaining_credits = balance)

        # Step 3: Session
        session = self._resolve_target(user_id, target, text, summary)
        session_id    = session.session_id
        session_title = session.title

        # Step 4: Message limit
        stored = self.message_service.count_by_session(session_id)
        if stored >= self.max_messages:
            raise MessageLimitException(limit = self.max_messages)

        # Step 5: History
        history = self.context_builder.build_history(
            self.message_service.list_by_session(session_id)
        )
        history.append({
            "role":    "user",
            "content": self.context_builder.compose_user_turn(text, summary)
        })

        # Step 6: Persist user message
        self.message_service.append(
            session_id,
            SENDER_USER,
            text or prompts.IMAGE_ONLY_PLACEHOLDER,
            attachment_ref = attachment_ref or None,
            attachment_summary = summary or None
        )
        self._touch(session_id)

        # Step 7: AI call
        reply = self._converse_with_retry(history)

        # Step 8: Persist reply
        self.message_service.append(session_id, SENDER_ASSISTANT, reply)
        self._touch(session_id)

        # Step 9: Deduct
        remaining = self._deduct_exchange(user_id, session_id)

        return {
            "reply":             reply,
            "session_id":        session_id,
            "session_title":     session_title,
            "remaining_credits": remaining
        }



    # ── Session Operations ─────────────────────────────────────────────────────

    def create_session(self, user_id: str, title: str) -> Dict:
        session_id = self.session_service.create(user_id, title)
        return self.session_service.resolve(session_id, user_id).to_dict()


    def delete_session(self, user_id: str, session_id: int) -> bool:
        self.session_service.soft_delete(session_id, user_id)
        return True


    def rename_session(self, user_id: str, session_id: int, title: str) -> Dict:
        return self.session_service.rename_for_user(session_id, user_id, title).to_dict()


    def list_sessions(self, user_id: str) -> List[Dict]:
        return [session.to_dict() for session in self.session_service.list_for_user(user_id)]


    def get_session_messages(self, user_id: str, session_id: int) -> List[Dict]:
        """ Messages of an owned, active session, oldest first. """
        self.session_service.resolve(session_id, user_id)
        return [message.to_dict() for message in self.message_service.list_by_session(session_id)]


    def get_credits(self, user_id: str) -> Dict:
        balance = self.credit_service.get_or_initialize_balance(user_id, credit_config.SNO_SERVICE)
        return {credit_config.SNO_SERVICE: balance, "total": balance}



    # ── Private ────────────────────────────────────────────────────────────────

    def _validate(self, text: str, summary: str) -> None:
        if not text and not summary:
            raise ValidationException(message = messages.ERROR["EMPTY_MESSAGE"])

        if len(text) > chat_config.MAX_MESSAGE_LENGTH:
            raise ValidationException(
                message = messages.ERROR["MESSAGE_TOO_LONG"].format(limit = chat_config.MAX_MESSAGE_LENGTH)
            )


    def _resolve_target(self, user_id: str, target: SessionTarget, text: str, summary: str):
        if isinstance(target, AutoCreateSession):
            session_id = self.session_service.create(user_id, self._auto_title(target, text, summary))
            return self.session_service.resolve(session_id, user_id)

        if isinstance(target, ExistingSession):
            return self.session_service.resolve(target.session_id, user_id)

        raise ValidationException(message = messages.ERROR["INVALID_SESSION_ID"])


    def _auto_title(self, target: AutoCreateSession, text: str, summary: str) -> str:
        hint = (target.title_hint or "").strip() or text

        if hint:
            return self.session_service.derive_title(hint)
        if summary:
            return prompts.IMAGE_SESSION_TITLE
        return prompts.DEFAULT_SESSION_TITLE


    def _converse_with_retry(self, history: List[Dict[str, str]]) -> str:
        """
        Call the AI collaborator, retrying only while it reports overload.
        Waits attempt * backoff_seconds between attempts (2s, 4s, ...).
        """

        attempt = 0

        while True:
            attempt += 1

            try:
                reply = self.chat_service.converse(history)

            except ai_errors.OverloadedError as error:
                if attempt >= self.max_attempts:
                    logger.error("AI provider still overloaded after %s attempts", attempt)
                    raise AiOverloadedException(attempts = attempt, details = str(error))

                delay = attempt * self.backoff_seconds
                logger.warning(
                    "AI provider overloaded, retrying in %ss (attempt %s of %s)",
                    delay, attempt, self.max_attempts
                )
                self.sleep(delay)
                continue

            except ai_errors.AIProviderError as error:
                logger.error("AI provider failed: %s", error)
                raise to_app_exception(error)

            if not reply or not reply.strip():
                raise AiServiceException(message = messages.ERROR["AI_EMPTY_REPLY"])

            return reply


    def _touch(self, session_id: int) -> None:
        # Best effort: a lost timestamp only affects list ordering
        try:
            self.session_service.touch(session_id)
        except StorageException as exc:
            logger.warning("Could not touch chat session %s: %s", session_id, exc.details)


    def _deduct_exchange(self, user_id: str, session_id: int) -> int:
        deducted = self.credit_service.try_deduct(
            user_id, credit_config.SNO_SERVICE, credit_config.EXCHANGE_COST
        )

        if not deducted:
            # A concurrent exchange spent the last credit after our check
            logger.warning(
                "Credit deduction lost a race for user %s (session %s); reply already delivered",
                user_id, session_id
            )

        return self.credit_service.get_balance(user_id, credit_config.SNO_SERVICE)
