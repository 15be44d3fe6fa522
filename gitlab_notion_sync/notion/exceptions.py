"""Contains exceptions raised by the Notion adapter."""


class NotionRequestError(ValueError):
    """Raised when Notion rejects a request as invalid (HTTP 400)."""

    def __init__(self, function: str, code: str, message: str, status_code: int = 400) -> None:
        """Initializes the exception with the Notion error code and message."""
        super().__init__(f"Notion {status_code} error in {function}: {code} | {message}")
        self.function = function
        self.code = code
        self.message = message
        self.status_code = status_code
