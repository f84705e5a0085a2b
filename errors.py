from __future__ import annotations


class PlaygroundError(Exception):
    """Base error for store operations; carries the HTTP status it maps to."""

    status_code = 500
    default_message = "Unexpected error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PlaygroundError):
    status_code = 400
    default_message = "Missing project data: name, html, css, or js"


class NotFoundError(PlaygroundError):
    status_code = 404
    default_message = "Project not found."


class StorageError(PlaygroundError):
    """Filesystem failure. The message stays generic; details go to the log."""

    status_code = 500
    default_message = "Storage error."
