"""Custom exceptions for the synchronize module."""


class MalformedIssueIdentifierError(ValueError):
    """Raised when a Notion page does not carry a readable GitLab issue identifier."""

    def __init__(self, page_id: str, reason: str, raw_value: str | None = None) -> None:
        super().__init__(f"Page {page_id} has no usable issue identifier: {reason}")
        self.page_id = page_id
        self.reason = reason
        self.raw_value = raw_value
