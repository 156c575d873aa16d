"""
Document-related Exception Classes
Handles errors raised while opening and reading PDF documents.
"""

from typing import Any, Optional

from .base import PageSelectorError


class DocumentError(PageSelectorError):
    """Base class for document-related errors."""

    def __init__(self, message: str, file_path: Optional[str] = None, **kwargs: Any):
        """
        Initialize document error.

        Args:
            message: Error message
            file_path: File path (if applicable)
            **kwargs: Additional arguments for base class
        """
        context = kwargs.pop("context", {})
        if file_path:
            context["file_path"] = file_path
        self.file_path = file_path

        super().__init__(message, context=context, **kwargs)

    def _get_default_user_message(self) -> str:
        return "An error occurred while processing the document."


class DocumentUnreadableError(DocumentError):
    """Raised when a document cannot be opened or parsed. Fatal to the viewing session."""

    def _get_default_user_message(self) -> str:
        if self.file_path:
            return f"The document '{self.file_path}' could not be read."
        return "The document could not be read."
