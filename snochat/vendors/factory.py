"""
vendors/factory.py — AI Provider Factory
==========================================
Single place that decides which AI provider answers chat turns and
describes uploaded images.

How to switch providers
------------------------
In your .env file, set:

    AI_PROVIDER=anthropic    ← use Claude (default)
    AI_PROVIDER=openai       ← use GPT models

That's the ONLY change needed to switch providers across the entire codebase.
Both implementations expose the same two calls:

    converse(history, system_prompt=None) -> str
    describe_attachment(data, mime_type)  -> str

and raise the categorized errors from vendors/errors.py.
"""

# Python Packages
import logging

# Constants
from ..base import constants

logger = logging.getLogger(__name__)





def get_chat_service():
    """
    Return the correct ChatService instance based on AI_PROVIDER env variable.

    Returns:
        ChatService with converse() and describe_attachment() methods.

    Raises:
        ValueError: If AI_PROVIDER is set to an unsupported value.
    """

    provider = constants.AI_PROVIDER.lower().strip()

    if provider == "anthropic":
        from .anthropic.chat_service import ChatService
        logger.debug("LLM provider: Anthropic (%s)", constants.ANTHROPIC_DEFAULT_MODEL)
        return ChatService()

    elif provider == "openai":
        from .openai.chat_service import ChatService
        logger.debug("LLM provider: OpenAI (%s)", constants.OPENAI_DEFAULT_MODEL)
        return ChatService()

    else:
        raise ValueError(
            f"Unsupported AI_PROVIDER='{provider}'. "
            f"Allowed values: 'anthropic', 'openai'. "
            f"Check your .env file."
        )
