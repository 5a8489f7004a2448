"""
Chat validation for all chat endpoints.
"""

# Config
from ..config import chat_config

# Exceptions
from ...util.exceptions import AppException, ValidationException

# Messages
from ...util import messages





class ChatValidation:

    @staticmethod
    def validate_body(data):
        if not data or not isinstance(data, dict):
            raise AppException(
                error_code = "INVALID_REQUEST",
                message = messages.ERROR["INVALID_REQUEST"]
            )


    @staticmethod
    def validate_user_id(user_id):
        if not user_id:
            raise AppException(
                error_code = "MISSING_USER_ID",
                message = messages.ERROR["MISSING_USER_ID"]
            )

        if not isinstance(user_id, str) or len(user_id.strip()) == 0:
            raise AppException(
                error_code = "INVALID_USER_ID",
                message = messages.ERROR["INVALID_USER_ID"]
            )


    @staticmethod
    def validate_title(title):
        if not title or not isinstance(title, str) or not title.strip():
            raise ValidationException(message = messages.ERROR["SESSION_TITLE_REQUIRED"])

        if len(title.strip()) > chat_config.SESSION_TITLE_MAX_LENGTH:
            raise ValidationException(
                message = messages.ERROR["SESSION_TITLE_TOO_LONG"].format(
                    limit = chat_config.SESSION_TITLE_MAX_LENGTH
                )
            )


    @staticmethod
    def validate_message(message, image_description):
        """
        At least one of the typed text or the image description must be present.
        Text over the limit is rejected, never truncated.
        """

        for value in (message, image_description):
            if value is not None and not isinstance(value, str):
                raise ValidationException(message = messages.ERROR["INVALID_MESSAGE_TYPE"])

        text = (message or "").strip()
        description = (image_description or "").strip()

        if not text and not description:
            raise ValidationException(message = messages.ERROR["EMPTY_MESSAGE"])

        if len(text) > chat_config.MAX_MESSAGE_LENGTH:
            raise ValidationException(
                message = messages.ERROR["MESSAGE_TOO_LONG"].format(
                    limit = chat_config.MAX_MESSAGE_LENGTH
                )
            )
