"""
Controllers Module

Controllers sit between the Qt widgets and the state/services layer.
"""

from .selection_controller import SelectionController

__all__ = ["SelectionController"]
