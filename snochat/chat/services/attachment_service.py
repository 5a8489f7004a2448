"""
Service: AttachmentService

Handles:
    - Validate an uploaded chat image (type + size)
    - Credit check, then AI extraction / description of the image
    - Deduct one credit for the analysis
    - Store the original bytes in S3

The returned description and storage key are what the client sends back
with its next message (image_description / image_path), where the
description gets folded into the conversation.
"""

# Python Packages
import base64
import logging
import os
import time

from botocore.exceptions import BotoCoreError, ClientError

# Services
from .credit_service import CreditService
from .conversation_service import to_app_exception

# Vendors
from ...vendors import errors as ai_errors
from ...vendors.aws.s3_uploader import S3Uploader

# Config
from ..config import chat_config, credit_config

# Exceptions
from ...util.exceptions import (
    AiServiceException,
    InsufficientCreditException,
    StorageException,
    ValidationException
)
from ...util import messages

logger = logging.getLogger(__name__)





class AttachmentService:

    def __init__(self, chat_service, credit_service: CreditService = None, uploader: S3Uploader = None):
        self.chat_service = chat_service
        self.credit_service = credit_service or CreditService()
        self._uploader = uploader


    @property
    def uploader(self) -> S3Uploader:
        # Built on first use so requests that never upload need no AWS client
        if self._uploader is None:
            self._uploader = S3Uploader()
        return self._uploader



    def analyze_image(self, user_id: str, data: bytes, mime_type: str, filename: str = None) -> dict:
        """
        Analyze one uploaded image

        Args:
            user_id (str): Authenticated caller
            data (bytes): Raw image bytes
            mime_type (str): Declared MIME type
            filename (str): Original file name (only the extension is kept)

        Returns:
            dict: description, image_path, image_url, remaining_credits
        """

        # 🔹 Validate file
        self.validate_image(data, mime_type)

        # 🔹 Credit check
        balance = self.credit_service.get_or_initialize_balance(user_id, credit_config.SNO_SERVICE)
        if balance < credit_config.IMAGE_ANALYSIS_COST:
            raise InsufficientCreditException(remaining_credits = balance)

        # 🔹 Describe with AI
        try:
            description = self.chat_service.describe_attachment(data, mime_type)
        except ai_errors.AIProviderError as error:
            logger.error("Image analysis failed for user %s: %s", user_id, error)
            raise to_app_exception(error)

        if not description or not description.strip():
            raise AiServiceException(message = messages.ERROR["AI_EMPTY_REPLY"])

        # 🔹 Store original
        image_path = self._store(user_id, data, mime_type, filename)

        # 🔹 Deduct once the analysis is stored
        if not self.credit_service.try_deduct(user_id, credit_config.SNO_SERVICE, credit_config.IMAGE_ANALYSIS_COST):
            logger.warning("Image analysis credit deduction lost a race for user %s", user_id)

        return {
            "description": description.strip(),
            "image_path": image_path,
            "image_url": f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}",
            "remaining_credits": self.credit_service.get_balance(user_id, credit_config.SNO_SERVICE)
        }



    @staticmethod
    def validate_image(data: bytes, mime_type: str) -> None:
        """ Reject missing, unsupported or oversized images... """

        if not data:
            raise ValidationException(message = messages.ERROR["IMAGE_REQUIRED"])

        if mime_type not in chat_config.ALLOWED_IMAGE_MIME_TYPES:
            raise ValidationException(message = messages.ERROR["UNSUPPORTED_IMAGE_FORMAT"])

        if len(data) > chat_config.MAX_IMAGE_SIZE_BYTES:
            raise ValidationException(
                message = messages.ERROR["IMAGE_TOO_LARGE"].format(
                    limit_mb = chat_config.MAX_IMAGE_SIZE_BYTES // (1024 * 1024)
                )
            )



    def _store(self, user_id: str, data: bytes, mime_type: str, filename: str = None) -> str:
        ext = os.path.splitext(filename or "")[1].lower() or ".jpg"
        s3_key = f"{chat_config.UPLOAD_KEY_PREFIX}/{user_id}/{int(time.time() * 1000)}{ext}"

        try:
            return self.uploader.upload_bytes(data, s3_key, content_type = mime_type)
        except (BotoCoreError, ClientError) as exc:
            logger.error("Could not store image %s: %s", s3_key, exc)
            raise StorageException(details = str(exc))
