"""
Service-specific Exception Classes
Handles errors raised by the page rendering and submission services.
"""

from typing import Any, Optional

from .base import ServiceError


class RenderError(ServiceError):
    """Raised when a single page cannot be fetched or drawn."""

    def __init__(self, message: str, page_number: Optional[int] = None, **kwargs: Any):
        context = kwargs.pop("context", {})
        if page_number is not None:
            context["page_number"] = page_number
        self.page_number = page_number

        super().__init__(
            message, service_name="PageRenderer", operation="render", context=context, **kwargs
        )

    def _get_default_user_message(self) -> str:
        if self.page_number is not None:
            return f"Page {self.page_number} could not be displayed."
        return "The page could not be displayed."


class SubmissionError(ServiceError):
    """Raised when the processing endpoint rejects or cannot receive a submission."""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs: Any,
    ):
        """
        Initialize submission error.

        Args:
            message: Error message
            endpoint: URL the payload was posted to
            status_code: HTTP status code, when a response was received
            **kwargs: Additional arguments for base class
        """
        context = kwargs.pop("context", {})
        if endpoint:
            context["endpoint"] = endpoint
        if status_code is not None:
            context["status_code"] = status_code
        self.endpoint = endpoint
        self.status_code = status_code

        super().__init__(
            message, service_name="NougatSubmissionService", operation="submission",
            context=context, **kwargs
        )

    def _get_default_user_message(self) -> str:
        return "The selected pages could not be sent for processing."
