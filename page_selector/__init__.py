"""
Nougat Page Selector

Select a contiguous page range from a PDF, preview it page by page and send
the range to a local Nougat API server.
"""

__version__ = "0.1.0"
