"""
Error kinds raised by the allocation controller.

The core advisors are total in their default mode; these are only raised
for bad configuration or when strict validation is switched on.
"""

from typing import Any, Dict, List, Optional


class AllocationControllerError(Exception):
    """Base class for all controller errors"""


class ConfigurationError(AllocationControllerError):
    """Invalid options, thresholds or environment overrides"""


class InvalidMetricsError(AllocationControllerError):
    """A metrics snapshot failed strict validation"""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class InvalidAllocationError(AllocationControllerError):
    """Pool sizing or cache budgeting input failed strict validation"""
