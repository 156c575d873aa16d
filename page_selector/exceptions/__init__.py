"""
Exception Hierarchy for Nougat Page Selector
Provides standardized error handling with consistent exception types.
"""

from .base import (
    ConfigurationError,
    PageSelectorError,
    ServiceError,
    ValidationError,
)
from .document import (
    DocumentError,
    DocumentUnreadableError,
)
from .service import (
    RenderError,
    SubmissionError,
)

__all__ = [
    "PageSelectorError",
    "ValidationError",
    "ConfigurationError",
    "ServiceError",
    "DocumentError",
    "DocumentUnreadableError",
    "RenderError",
    "SubmissionError",
]
