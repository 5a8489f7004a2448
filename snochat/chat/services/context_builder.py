"""
Service: ContextBuilder
========================
Turns stored chat messages into the provider-neutral history the AI
collaborator expects:

    [{"role": "user" | "assistant", "content": "..."}, ...]   oldest first

User turns that carried an image are rebuilt with the image's extracted
text folded in, using the same annotation for stored history and for the
new turn:

    summary + text  →  "[Attached image - extracted text: S]\n\nUser message: T"
    summary only    →  "[Attached image - extracted text: S]"
    text only       →  "T"
"""

# Python Packages
from typing import Dict, Iterable, List, Optional

# Models
from ...models.sno_chat_message import SENDER_USER

# Config
from ..config import prompts


class ContextBuilder:
    """
    Holds no state; one instance can serve every request.
    """

    def compose_user_turn(self, text: Optional[str], attachment_summary: Optional[str]) -> str:
        """
        Build the AI-facing text of one user turn.
        The image-only placeholder counts as "no text".
        """
        text    = (text or "").strip()
        summary = (attachment_summary or "").strip()

        if text == prompts.IMAGE_ONLY_PLACEHOLDER:
            text = ""

        if summary and text:
            return prompts.ATTACHMENT_WITH_TEXT_ANNOTATION.format(summary=summary, text=text)
        if summary:
            return prompts.ATTACHMENT_ANNOTATION.format(summary=summary)
        return text


    def build_history(self, messages: Iterable) -> List[Dict[str, str]]:
        """
        Map stored ChatMessage rows to ordered {role, content} turns.
        """
        history = []

        for message in messages:
            if message.sender_type == SENDER_USER:
                content = self.compose_user_turn(message.content, message.attachment_summary)
                role = "user"
            else:
                content = message.content
                role = "assistant"

            history.append({"role": role, "content": content})

        return history
