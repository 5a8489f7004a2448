""" OpenAI Client Configuration... """

# Python Packages
from openai import OpenAI
from typing import Optional

# Constants
from ...base import constants

# Errors
from ..errors import AuthError





class OpenAIClient:
    """ Shared OpenAI client for the application... """

    _instance = None
    _client = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(OpenAIClient, cls).__new__(cls)
            if constants.OPENAI_API_KEY:
                cls._client = OpenAI(
                    api_key = constants.OPENAI_API_KEY
                )
        return cls._instance



    @property
    def client(self) -> Optional[OpenAI]:
        """ Get the OpenAI client instance (None when no key is set)... """

        return self._client


    def require_client(self) -> OpenAI:
        """ Get the OpenAI client or fail with a configuration error... """

        if self._client is None:
            raise AuthError(
                "OpenAI client not initialized. Set OPENAI_API_KEY environment variable.",
                provider = "openai"
            )

        return self._client
