from typing import Optional


class MessagingError(Exception):
    """Base class for caller-facing messaging failures.

    Every subclass carries a stable ``code`` and the HTTP status the API
    layer renders it with.
    """

    code = "MESSAGING_ERROR"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class InvalidIdentifier(MessagingError):
    code = "INVALID_IDENTIFIER"

    def __init__(self, field: str, value=None):
        super().__init__(f"Invalid {field}: expected 32 hexadecimal characters")
        self.field = field
        self.value = value


class SelfMessageNotAllowed(MessagingError):
    code = "SELF_MESSAGE_NOT_ALLOWED"

    def __init__(self):
        super().__init__("Can't send a message to self")


class EmptyMessage(MessagingError):
    code = "EMPTY_MESSAGE"

    def __init__(self):
        super().__init__("Message can't be empty")


class SenderRequiredForAnonymous(MessagingError):
    code = "SENDER_REQUIRED"

    def __init__(self):
        super().__init__("A sender address is required for anonymous messages")


class MessageNotAssociatedWithViewer(MessagingError):
    code = "MESSAGE_NOT_ASSOCIATED"
    status_code = 403

    def __init__(self, message_id: Optional[str] = None):
        super().__init__("Message ID is not associated with the logged in user.")
        self.message_id = message_id


class NotFound(MessagingError):
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, kind: str, identifier: str):
        super().__init__(f"No {kind} with id: {identifier}")
        self.kind = kind
        self.identifier = identifier


class StorePartialFailure(MessagingError):
    """A single record could not be resolved while aggregating.

    Logged at the point of iteration and never returned to callers.
    """

    code = "STORE_PARTIAL_FAILURE"
    status_code = 500

    def __init__(self, reference: str, cause: Optional[Exception] = None):
        super().__init__(f"no message with id: {reference}")
        self.reference = reference
        self.cause = cause
