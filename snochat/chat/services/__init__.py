"""
chat/services
=============
  CreditService       — per-user, per-service credit ledger
  SessionService      — chat session lifecycle and ownership
  MessageService      — append-only message log
  ContextBuilder      — stored messages → AI history
  ConversationService — credit-gated exchange orchestrator
  AttachmentService   — image upload analysis
"""

from .credit_service import CreditService
from .session_service import SessionService
from .message_service import MessageService
from .context_builder import ContextBuilder
from .conversation_service import ConversationService
from .attachment_service import AttachmentService
