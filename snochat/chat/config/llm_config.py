"""
llm_config.py — LLM Temperature & Token Settings
=================================================
Every LLM call in the chat pipeline is controlled from here.
No temperatures or max_tokens should be hardcoded inside vendor files.
"""

# ── Conversation Reply ─────────────────────────────────────────────────────────
# Friendly, conversational answers. Moderate creativity.
LLM_CHAT_TEMPERATURE = 0.7
LLM_CHAT_MAX_TOKENS  = 2048

# ── Image Description ──────────────────────────────────────────────────────────
# Verbatim extraction of formulas/code/text must be deterministic.
LLM_IMAGE_TEMPERATURE = 0.0
LLM_IMAGE_MAX_TOKENS  = 1500
