"""
vendors/errors.py
=================
Provider-neutral error categories raised by every ChatService.

Callers only look at the category, never at the provider payload:

    AuthError        missing / rejected API key        → never retry
    RateLimitError   too many requests                  → never retry
    QuotaError       account quota or billing exhausted → never retry
    OverloadedError  provider temporarily overloaded    → retry with backoff
    GenericError     anything else                      → never retry
"""





class AIProviderError(Exception):
    """ Base class for all categorized AI provider failures... """

    def __init__(self, message: str = "", provider: str = None):
        self.provider = provider
        super().__init__(message)


class AuthError(AIProviderError):
    pass


class RateLimitError(AIProviderError):
    pass


class QuotaError(AIProviderError):
    pass


class OverloadedError(AIProviderError):
    pass


class GenericError(AIProviderError):
    pass
