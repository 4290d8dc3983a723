"""Domain models and types for pfv.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from pfv.domain.models import Description, MonthLabel, TransactionId

__all__ = ["Description", "MonthLabel", "TransactionId"]
