"""
vendors/anthropic/chat_service.py
===================================
ChatService implementation using Anthropic Claude models.

Implements the same interface as vendors/openai/chat_service.py so the
factory can swap providers transparently.

Anthropic takes the system prompt as a top-level parameter and the
messages array may only contain "user" and "assistant" turns, which is
exactly the shape the conversation history already has.

SDK exceptions are translated into the categories of vendors/errors.py:
  AuthenticationError / PermissionDeniedError  → AuthError
  RateLimitError                               → RateLimitError
  billing / credit-balance errors              → QuotaError
  529 overloaded / 503                         → OverloadedError
  everything else                              → GenericError
"""

# Python Packages
import base64
import logging
from typing import List, Dict, Optional

import anthropic

# Client
from .anthropic_client import AnthropicClient

# Errors
from .. import errors

# Constants
from ...base import constants

# Config
from ...chat.config import llm_config, prompts

logger = logging.getLogger(__name__)





class ChatService:
    """
    Anthropic Claude implementation of ChatService.
    Drop-in replacement for vendors/openai/chat_service.py.
    """

    provider = "anthropic"

    def __init__(self, client: Optional[anthropic.Anthropic] = None, model: str = None):
        self.client        = client or AnthropicClient().get_client()
        self.default_model = model or constants.ANTHROPIC_DEFAULT_MODEL


    def converse(
        self,
        history: List[Dict[str, str]],
        system_prompt: str = None
    ) -> str:
        """
        Generate the next assistant turn for an ordered conversation.

        Args:
            history:       [{"role": "user"|"assistant", "content": "..."}, ...]
                           oldest first, ending with the new user turn.
            system_prompt: Overrides the default chat preamble.

        Returns:
            Reply text (may be blank; the caller decides what blank means).
        """

        client = self._require_client()

        try:
            response = client.messages.create(
                model       = self.default_model,
                max_tokens  = llm_config.LLM_CHAT_MAX_TOKENS,
                temperature = llm_config.LLM_CHAT_TEMPERATURE,
                system      = system_prompt or prompts.CHAT_SYSTEM_PROMPT,
                messages    = [
                    {"role": turn["role"], "content": turn["content"]}
                    for turn in history
                ],
            )
            return self._response_text(response)

        except anthropic.APIError as e:
            logger.error("Anthropic error generating reply: %s", e)
            raise self._categorize(e) from e



    def describe_attachment(self, data: bytes, mime_type: str) -> str:
        """
        Extract text (formulas, code, written text) from an image, or
        describe it in natural language when it holds no text.
        """

        client = self._require_client()

        image_block = {
            "type": "image",
            "source": {
                "type":       "base64",
                "media_type": "image/jpeg" if mime_type == "image/jpg" else mime_type,
                "data":       base64.b64encode(data).decode("ascii"),
            },
        }

        try:
            response = client.messages.create(
                model       = self.default_model,
                max_tokens  = llm_config.LLM_IMAGE_MAX_TOKENS,
                temperature = llm_config.LLM_IMAGE_TEMPERATURE,
                messages    = [
                    {
                        "role": "user",
                        "content": [
                            image_block,
                            {"type": "text", "text": prompts.IMAGE_ANALYSIS_PROMPT},
                        ],
                    }
                ],
            )
            return self._response_text(response).strip()

        except anthropic.APIError as e:
            logger.error("Anthropic error describing image: %s", e)
            raise self._categorize(e) from e



    # ── Private ────────────────────────────────────────────────────────────────
    def _require_client(self) -> anthropic.Anthropic:
        if self.client is None:
            return AnthropicClient().require_client()
        return self.client


    def _response_text(self, response) -> str:
        return "".join(
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        )


    def _categorize(self, error: anthropic.APIError) -> errors.AIProviderError:
        """ Map an SDK exception to a provider-neutral category... """

        message = str(error)
        lowered = message.lower()

        if isinstance(error, (anthropic.AuthenticationError, anthropic.PermissionDeniedError)):
            return errors.AuthError(message, provider = self.provider)

        if isinstance(error, anthropic.RateLimitError):
            return errors.RateLimitError(message, provider = self.provider)

        if "credit balance" in lowered or "billing" in lowered or "quota" in lowered:
            return errors.QuotaError(message, provider = self.provider)

        status_code = getattr(error, "status_code", None)
        if status_code in (503, 529) or "overloaded" in lowered:
            return errors.OverloadedError(message, provider = self.provider)

        return errors.GenericError(message, provider = self.provider)
