from typing import List

from pydantic import ValidationError

NOT_FOUND = "not found"
NOT_FOUND_TO_UPDATE = "not found to update"
NOT_FOUND_TO_DELETE = "not found to delete"
NAME_REQUIRED = "The Name field is required."
BODY_REQUIRED = "A request body is required."


class CatalogError(Exception):
    """Expected business failure. Carries the messages to put in the envelope."""

    def __init__(self, *messages: str):
        self.messages: List[str] = list(messages)
        super().__init__("; ".join(self.messages))


class InvalidPayloadError(CatalogError):
    """One message per failing validation rule"""


class NotFoundError(CatalogError):
    pass


def describe_fault(exc: BaseException) -> str:
    """Single opaque message for an unexpected exception."""
    detail = str(exc)
    return f"{type(exc).__name__}: {detail}" if detail else type(exc).__name__


def validation_messages(exc: ValidationError) -> List[str]:
    """Flatten a pydantic ValidationError into one message per failing field rule."""
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        if err.get("type") == "missing":
            messages.append(f"The {field} field is required.")
        elif field:
            messages.append(f"{field}: {msg}")
        else:
            messages.append(msg)
    return messages
