""" All Error and Success Message declare here... """


# SUCCESS MESSAGES
SUCCESS = {
    "SESSION_CREATED"           :   "Chat session created successfully.",
    "SESSION_DELETED"           :   "Chat session deleted successfully.",
    "SESSION_RENAMED"           :   "Chat session renamed successfully.",
    "MESSAGE_SENT"              :   "Message sent successfully.",
    "IMAGE_ANALYZED"            :   "Image analyzed successfully."
}


# ERROR MESSAGES
ERROR = {
    # Request Errors
    "INVALID_REQUEST"           :   "Request body is required.",
    "MISSING_USER_ID"           :   "user_id is required.",
    "INVALID_USER_ID"           :   "user_id must be a non-empty string.",
    "INVALID_SESSION_ID"        :   "Session ID must be a positive integer or 'auto'.",
    "SESSION_TITLE_REQUIRED"    :   "Session title is required.",
    "SESSION_TITLE_TOO_LONG"    :   "Session title must not exceed {limit} characters.",

    # Message Errors
    "EMPTY_MESSAGE"             :   "Message cannot be empty.",
    "INVALID_MESSAGE_TYPE"      :   "Message and image description must be text.",
    "MESSAGE_TOO_LONG"          :   "Message must not exceed {limit} characters.",
    "MESSAGE_LIMIT_REACHED"     :   "This chat has reached its limit of {limit} messages. Please start a new chat.",
    "INVALID_SENDER_TYPE"       :   "Sender type must be 'user' or 'assistant'.",

    # Session Errors
    "NOT_FOUND"                 :   "Resource not found.",
    "SESSION_NOT_FOUND"         :   "Chat session not found.",
    "ACCESS_DENIED"             :   "You do not have access to this chat session.",

    # Credit Errors
    "INSUFFICIENT_CREDIT"       :   "Not enough SNO credit. At least 1 credit is required to continue.",
    "CREDIT_NOT_INITIALIZED"    :   "No credit balance exists for this user and service.",
    "INVALID_CREDIT_AMOUNT"     :   "Credit amount must be a positive integer.",
    "UNKNOWN_CREDIT_SERVICE"    :   "Unknown credit service: {service_name}.",

    # Upload Errors
    "IMAGE_REQUIRED"            :   "No image file was selected.",
    "UNSUPPORTED_IMAGE_FORMAT"  :   "Unsupported file format. Please upload a JPG, PNG, GIF or WEBP image.",
    "IMAGE_TOO_LARGE"           :   "Image size must not exceed {limit_mb} MB.",

    # AI Errors
    "AI_CONFIG_ERROR"           :   "AI service is misconfigured. Please contact support.",
    "AI_RATE_LIMITED"           :   "Too many requests. Please wait a moment and try again.",
    "AI_QUOTA_EXHAUSTED"        :   "The AI service quota has been exhausted.",
    "AI_OVERLOADED"             :   "The AI service is busy right now. Please try again in a few minutes.",
    "AI_FAILED"                 :   "Could not reach the AI service. Please try again.",
    "AI_EMPTY_REPLY"            :   "The AI service returned an empty reply.",

    # General Errors
    "STORAGE_ERROR"             :   "Could not save your data. Please try again.",
    "INTERNAL_SERVER_ERROR"     :   "Something went wrong. Please try again later."
}
