"""
Core Components

- RangeController: page-range selection state machine
- ConfigManager: layered configuration access
"""

from .config_manager import ConfigManager
from .range_controller import RangeBound, RangeController, RangeState

__all__ = ["ConfigManager", "RangeBound", "RangeController", "RangeState"]
