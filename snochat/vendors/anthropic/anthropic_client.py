"""
vendors/anthropic/anthropic_client.py
======================================
Shared Anthropic client.
Reads ANTHROPIC_API_KEY from environment via base/constants.py.
"""

# Python Packages
from anthropic import Anthropic
from typing import Optional

# Constants
from ...base import constants

# Errors
from ..errors import AuthError





class AnthropicClient:
    """
    One shared Anthropic instance reused across all requests.
    Stays uninitialized when no API key is configured; the first call
    then fails with AuthError instead of crashing at import time.
    """

    _instance = None
    _client   = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(AnthropicClient, cls).__new__(cls)
            if constants.ANTHROPIC_API_KEY:
                cls._client = Anthropic(api_key=constants.ANTHROPIC_API_KEY)
        return cls._instance


    def get_client(self) -> Optional[Anthropic]:
        return self._client


    def require_client(self) -> Anthropic:
        if self._client is None:
            raise AuthError(
                "Anthropic client not initialized. "
                "Set ANTHROPIC_API_KEY in your .env file.",
                provider = "anthropic"
            )
        return self._client
