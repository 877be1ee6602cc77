"""
GeoUTM — Shared Python Package
===============================
Re-exports the shared base class, exception hierarchy, and validator
utilities so every module can import from a single location::

    from shared.python import GeoTool, Validators
    from shared.python.exceptions import InvalidInputError
"""

from shared.python.base_tool import GeoTool, configure_logging
from shared.python.exceptions import (
    ColumnNotFoundError,
    GeoUTMError,
    InputValidationError,
    InvalidInputError,
    OutputWriteError,
    SingularityError,
)
from shared.python.validators import Validators

__all__ = [
    "GeoTool",
    "configure_logging",
    "Validators",
    "GeoUTMError",
    "InputValidationError",
    "ColumnNotFoundError",
    "InvalidInputError",
    "SingularityError",
    "OutputWriteError",
]
