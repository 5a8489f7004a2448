"""
Chat Handler
API endpoints for chat sessions, messages, image analysis and credits.

Authentication is handled upstream; every endpoint receives the caller's
user_id (JSON body for writes, query string for reads).
"""

# Python Packages
import logging

from flask import request
from flask_restx import Namespace, Resource

# Validations
from .validations.chat_validation import ChatValidation

# Request
from .requests.upload_image_request import UploadImageRequest

# Controller
from .controller import ChatController

# Exceptions & messages
from ..util.exceptions import AppException, InternalServerException
from ..util import messages

logger = logging.getLogger(__name__)

# Namespace
chat_namespace = Namespace("chat", description="Chat sessions, messages and credits")


def error_response(error: AppException):
    """ Log the internal details of a handled error and build its response... """

    if error.details:
        logger.warning("%s: %s", error.error_code, error.details)

    return error.to_dict(), error.status_code





# ── GET / POST /chat/sessions ─────────────────────────────────────────────────
@chat_namespace.route("/sessions")
class ChatSessions(Resource):
    """ List or create chat sessions... """

    def get(self):
        """
        Active sessions of a user, most recently active first.

        Request:
        GET /chat/sessions?user_id=user-123

        Response:
        {
            "status": "success",
            "data": {
                "user_id": "user-123",
                "total": 1,
                "sessions": [
                    {
                        "session_id": 7,
                        "user_id": "user-123",
                        "title": "How do I integrate x^2?",
                        "status": "active",
                        "created_at": 1760000000,
                        "updated_at": 1760000450
                    }
                ]
            }
        }
        """

        try:
            user_id = request.args.get("user_id")
            ChatValidation.validate_user_id(user_id)

            result = ChatController().get_user_sessions(user_id.strip())

            return {"status": "success", "data": result}, 200

        except AppException as error:
            return error_response(error)

        except Exception as error:
            logger.exception("Listing chat sessions failed")
            error = InternalServerException()
            return error.to_dict(), error.status_code


    def post(self):
        """
        Create a chat session explicitly.

        Request:
        {
            "user_id": "user-123",
            "title":   "Linear algebra"
        }
        """

        try:
            data = request.get_json(silent = True)
            ChatValidation.validate_body(data)

            user_id = data.get("user_id")
            title   = data.get("title")

            ChatValidation.validate_user_id(user_id)
            ChatValidation.validate_title(title)

            result = ChatController().create_session(user_id.strip(), title)

            return {
                "status": "success",
                "message": messages.SUCCESS["SESSION_CREATED"],
                "data": result
            }, 201

        except AppException as error:
            return error_response(error)

        except Exception as error:
            logger.exception("Creating chat session failed")
            error = InternalServerException()
            return error.to_dict(), error.status_code



# ── PATCH / DELETE /chat/sessions/<session_id> ────────────────────────────────
@chat_namespace.route("/sessions/<session_id>")
class ChatSessionById(Resource):
    """ Rename or soft-delete one session... """

    def patch(self, session_id):
        """
        Rename a session.

        Request:
        {
            "user_id": "user-123",
            "title":   "Calculus homework"
        }
        """

        try:
            data = request.get_json(silent = True)
            ChatValidation.validate_body(data)

            user_id = data.get("user_id")
            title   = data.get("title")

            ChatValidation.validate_user_id(user_id)
            ChatValidation.validate_title(title)

            result = ChatController().rename_session(user_id.strip(), session_id, title)

            return {
                "status": "success",
                "message": messages.SUCCESS["SESSION_RENAMED"],
                "data": result
            }, 200

        except AppException as error:
            return error_response(error)

        except Exception as error:
            logger.exception("Renaming chat session %s failed", session_id)
            error = InternalServerException()
            return error.to_dict(), error.status_code


    def delete(self, session_id):
        """
        Soft-delete a session. The row stays in the DB with status 'deleted'
        and its messages become unreachable.

        Request:
        DELETE /chat/sessions/7?user_id=user-123
        """

        try:
            user_id = request.args.get("user_id")
            ChatValidation.validate_user_id(user_id)

            result = ChatController().delete_session(user_id.strip(), session_id)

            return {
                "status": "success",
                "message": messages.SUCCESS["SESSION_DELETED"],
                "data": result
            }, 200

        except AppException as error:
            return error_response(error)

        except Exception as error:
            logger.exception("Deleting chat session %s failed", session_id)
            error = InternalServerException()
            return error.to_dict(), error.status_code



# ── GET / POST /chat/sessions/<session_id>/messages ───────────────────────────
@chat_namespace.route("/sessions/<session_id>/messages")
class ChatSessionMessages(Resource):
    """ Read the history of a session or send a new message... """

    def get(self, session_id):
        """
        Messages of a session, oldest first.

        Request:
        GET /chat/sessions/7/messages?user_id=user-123
        """

        try:
            user_id = request.args.get("user_id")
            ChatValidation.validate_user_id(user_id)

            result = ChatController().get_session_messages(user_id.strip(), session_id)

            return {"status": "success", "data": result}, 200

        except AppException as error:
            return error_response(error)

        except Exception as error:
            logger.exception("Reading messages of chat session %s failed", session_id)
            error = InternalServerException()
            return error.to_dict(), error.status_code


    def post(self, session_id):
        """
        Send a message and get the AI reply. Costs one SNO credit, charged
        only when a reply was produced.

        Use "auto" as session_id to open a new session titled from the message.

        Request:
        {
            "user_id":           "user-123",
            "message":           "Solve this for x",
            "image_description": "$2x + 3 = 7$",                  // optional, from /chat/upload-image
            "image_path":        "snochat/uploads/user-123/1.png"  // optional, from /chat/upload-image
        }

        Response:
        {
            "status": "success",
            "data": {
                "reply":             "...",
                "session_id":        7,
                "session_title":     "Solve this for x",
                "remaining_credits": 39
            }
        }
        """

        try:
            data = request.get_json(silent = True)
            ChatValidation.validate_body(data)

            user_id           = data.get("user_id")
            message           = data.get("message")
            image_description = data.get("image_description")
            image_path        = data.get("image_path")

            ChatValidation.validate_user_id(user_id)
            ChatValidation.validate_message(message, image_description)

            result = ChatController().send_message(
                user_id           = user_id.strip(),
                session_ref       = session_id,
                message           = message,
                image_description = image_description,
                image_path        = image_path
            )

            return {
                "status": "success",
                "message": messages.SUCCESS["MESSAGE_SENT"],
                "data": result
            }, 200

        except AppException as error:
            return error_response(error)

        except Exception as error:
            logger.exception("Sending message to chat session %s failed", session_id)
            error = InternalServerException()
            return error.to_dict(), error.status_code



# ── POST /chat/upload-image ───────────────────────────────────────────────────
@chat_namespace.route("/upload-image")
class UploadImage(Resource):
    """ Analyze an image so it can be attached to the next message... """

    @UploadImageRequest.apply(chat_namespace)
    def post(self):
        """
        Extract text from (or describe) an uploaded image. Costs one SNO credit.

        Response:
        {
            "status": "success",
            "data": {
                "description":       "$x^2 + y^2 = r^2$",
                "image_path":        "snochat/uploads/user-123/1760000000000.png",
                "image_url":         "data:image/png;base64,...",
                "remaining_credits": 38
            }
        }
        """

        try:
            args = UploadImageRequest.get_data()

            ChatValidation.validate_user_id(args["user_id"])
            args["user_id"] = args["user_id"].strip()

            result = ChatController().analyze_image(args)

            return {
                "status": "success",
                "message": messages.SUCCESS["IMAGE_ANALYZED"],
                "data": result
            }, 200

        except AppException as error:
            return error_response(error)

        except Exception as error:
            logger.exception("Image analysis failed")
            error = InternalServerException()
            return error.to_dict(), error.status_code



# ── GET /chat/credits ─────────────────────────────────────────────────────────
@chat_namespace.route("/credits")
class UserCredits(Resource):
    """ Current SNO balance (initialized with the free plan on first call)... """

    def get(self):

        try:
            user_id = request.args.get("user_id")
            ChatValidation.validate_user_id(user_id)

            result = ChatController().get_credits(user_id.strip())

            return {"status": "success", "data": result}, 200

        except AppException as error:
            return error_response(error)

        except Exception as error:
            logger.exception("Reading credits failed")
            error = InternalServerException()
            return error.to_dict(), error.status_code
