"""
chat/config/__init__.py
=======================
Public surface of the chat configuration package.

Config files:
  chat_config    — session/message policy limits, retry policy, upload limits
  credit_config  — credit service names and free-plan allotments
  llm_config     — LLM temperatures & max_tokens for every call type
  prompts        — system preamble, image prompt, attachment annotation formats
"""

from . import chat_config
from . import credit_config
from . import llm_config
from . import prompts
