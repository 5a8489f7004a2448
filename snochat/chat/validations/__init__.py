from .chat_validation import ChatValidation
