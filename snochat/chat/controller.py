"""
Chat Controller
Orchestrates between handler and service layer.
"""

# Python Packages
from typing import Optional

# Services
from .services.conversation_service import ConversationService
from .services.attachment_service import AttachmentService

# Session Target
from .session_target import parse_session_id, parse_session_target

# Vendors
from ..vendors import ChatService





class ChatController:

    def __init__(self, conversation_service: ConversationService = None, attachment_service: AttachmentService = None):
        """ Initialize services (injectable for tests)... """

        if conversation_service is None or attachment_service is None:
            chat_service = ChatService()

        self.conversation_service = conversation_service or ConversationService(chat_service = chat_service)
        self.attachment_service   = attachment_service or AttachmentService(chat_service = chat_service)



    def send_message(
        self,
        user_id: str,
        session_ref,
        message: Optional[str] = None,
        image_description: Optional[str] = None,
        image_path: Optional[str] = None
    ) -> dict:
        """
        Send a message to a session (or "auto" to start one) and get the reply.

        Args:
            user_id: The authenticated user.
            session_ref: Numeric session id or the "auto" sentinel.
            message: Typed text.
            image_description: Extracted text of a previously analyzed image.
            image_path: Storage key of that image.

        Returns:
            Dict with reply, session_id, session_title and remaining_credits.
        """

        target = parse_session_target(session_ref)

        return self.conversation_service.send_message(
            user_id            = user_id,
            target             = target,
            text               = message,
            attachment_summary = image_description,
            attachment_ref     = image_path
        )



    def create_session(self, user_id: str, title: str) -> dict:
        return self.conversation_service.create_session(user_id, title)



    def delete_session(self, user_id: str, session_ref) -> dict:
        session_id = parse_session_id(session_ref)
        deleted = self.conversation_service.delete_session(user_id, session_id)
        return {"session_id": session_id, "deleted": deleted}



    def rename_session(self, user_id: str, session_ref, title: str) -> dict:
        return self.conversation_service.rename_session(user_id, parse_session_id(session_ref), title)



    def get_user_sessions(self, user_id: str) -> dict:
        """
        Retrieve all active sessions for a user, most recent first.

        Returns:
            Dict with user_id, sessions list, and total count.
        """

        sessions = self.conversation_service.list_sessions(user_id)

        return {
            "user_id": user_id,
            "sessions": sessions,
            "total": len(sessions)
        }



    def get_session_messages(self, user_id: str, session_ref) -> dict:
        session_id = parse_session_id(session_ref)
        history = self.conversation_service.get_session_messages(user_id, session_id)
        return {"session_id": session_id, "messages": history, "total": len(history)}



    def analyze_image(self, args: dict) -> dict:
        return self.attachment_service.analyze_image(
            user_id   = args["user_id"],
            data      = args["data"],
            mime_type = args["mime_type"],
            filename  = args.get("filename")
        )



    def get_credits(self, user_id: str) -> dict:
        return {"user_id": user_id, "credits": self.conversation_service.get_credits(user_id)}
