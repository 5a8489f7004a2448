"""
vendors/__init__.py
====================
Public surface of the vendors package.

Services import the provider-agnostic factory:

    from ..vendors import ChatService       ← switches via AI_PROVIDER in .env

and catch the categorized failures:

    from ..vendors.errors import OverloadedError, ...
"""

from .factory import get_chat_service

# Exposed as a class-like name so callers can write `ChatService()`.
# Calling it builds the configured provider instance.
ChatService = get_chat_service
