from __future__ import annotations


class LayoutRequestError(Exception):
    """Client-input error on the layout API; rendered as a 4xx JSON response."""

    def __init__(self, message: str, status: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def to_dict(self) -> dict:
        return {"error": self.message}
