"""
chat_config.py — Chat Policy Settings
=====================================
Policy values for sessions, messages, AI retries and image uploads.
These are configuration, not protocol: change them here and every
service picks them up.
"""

# ── Sessions ───────────────────────────────────────────────────────────────────
# Sentinel accepted in place of a session id to start a new chat on first message.
AUTO_SESSION_SENTINEL = "auto"

# Auto-derived titles keep this many characters of the first message.
SESSION_TITLE_PREFIX_LENGTH = 50
SESSION_TITLE_ELLIPSIS      = "..."

# Hard upper bound for any stored title (column is String(255)).
SESSION_TITLE_MAX_LENGTH = 255

# ── Messages ───────────────────────────────────────────────────────────────────
# Total stored messages (user + assistant) allowed in one session.
# Checked before the new user message is appended.
MAX_MESSAGES_PER_SESSION = 13

# Free-text limit per message. Longer input is rejected, never truncated.
MAX_MESSAGE_LENGTH = 2000

# ── AI Retry Policy ────────────────────────────────────────────────────────────
# Only "overloaded" failures are retried. Delay before retry n is
# n * AI_RETRY_BACKOFF_SECONDS (2s, 4s, ...).
# Three calls in total, failing on the third overload. Three retries after
# the first call (2s, 4s, 6s, four calls) would need AI_MAX_ATTEMPTS = 4.
AI_MAX_ATTEMPTS          = 3
AI_RETRY_BACKOFF_SECONDS = 2

# ── Image Uploads ──────────────────────────────────────────────────────────────
ALLOWED_IMAGE_MIME_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
)

MAX_IMAGE_SIZE_BYTES = 10 * 1024 * 1024

# Object-storage key prefix: <prefix>/<user_id>/<epoch-ms><ext>
UPLOAD_KEY_PREFIX = "snochat/uploads"
