"""OpenAI Chat/Vision Service"""

# Python Packages
import base64
import logging
from typing import List, Dict, Optional

import openai

# Client
from .openai_client import OpenAIClient

# Errors
from .. import errors

# Constants
from ...base import constants

# Config
from ...chat.config import llm_config, prompts

logger = logging.getLogger(__name__)


class ChatService:
    """Service for chat completions and image description using OpenAI"""

    provider = "openai"

    def __init__(self, client: Optional[openai.OpenAI] = None, model: str = None):
        """Initialize chat service"""
        self.client = client or OpenAIClient().client
        self.default_model = model or constants.OPENAI_DEFAULT_MODEL

    def converse(
        self,
        history: List[Dict[str, str]],
        system_prompt: str = None
    ) -> str:
        """
        Generate the next assistant turn

        Args:
            history: Ordered user/assistant turns, ending with the new user turn
            system_prompt: Overrides the default chat preamble

        Returns:
            Reply text
        """
        client = self._require_client()

        messages = [{"role": "system", "content": system_prompt or prompts.CHAT_SYSTEM_PROMPT}]
        messages.extend({"role": turn["role"], "content": turn["content"]} for turn in history)

        try:
            response = client.chat.completions.create(
                model=self.default_model,
                messages=messages,
                temperature=llm_config.LLM_CHAT_TEMPERATURE,
                max_tokens=llm_config.LLM_CHAT_MAX_TOKENS
            )
            return response.choices[0].message.content or ""
        except openai.APIError as e:
            logger.error("OpenAI error generating reply: %s", e)
            raise self._categorize(e) from e

    def describe_attachment(self, data: bytes, mime_type: str) -> str:
        """
        Extract the text of an image or describe it

        Args:
            data: Raw image bytes
            mime_type: Image MIME type, e.g. image/png

        Returns:
            Extracted text or description
        """
        client = self._require_client()

        data_url = f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"

        try:
            response = client.chat.completions.create(
                model=self.default_model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompts.IMAGE_ANALYSIS_PROMPT},
                            {"type": "image_url", "image_url": {"url": data_url}}
                        ]
                    }
                ],
                temperature=llm_config.LLM_IMAGE_TEMPERATURE,
                max_tokens=llm_config.LLM_IMAGE_MAX_TOKENS
            )
            return (response.choices[0].message.content or "").strip()
        except openai.APIError as e:
            logger.error("OpenAI error describing image: %s", e)
            raise self._categorize(e) from e

    def _require_client(self) -> openai.OpenAI:
        if self.client is None:
            return OpenAIClient().require_client()
        return self.client

    def _categorize(self, error: openai.APIError) -> errors.AIProviderError:
        message = str(error)

        if isinstance(error, (openai.AuthenticationError, openai.PermissionDeniedError)):
            return errors.AuthError(message, provider=self.provider)

        # OpenAI reports an exhausted quota as a 429 with code "insufficient_quota"
        if getattr(error, "code", None) == "insufficient_quota":
            return errors.QuotaError(message, provider=self.provider)

        if isinstance(error, openai.RateLimitError):
            return errors.RateLimitError(message, provider=self.provider)

        status_code = getattr(error, "status_code", None)
        if status_code == 503 or "overloaded" in message.lower():
            return errors.OverloadedError(message, provider=self.provider)

        return errors.GenericError(message, provider=self.provider)
