"""Domain type definitions for pfv.

These NewTypes provide semantic clarity and help with type checking:
- TransactionId: Unique transaction identity (creation timestamp in milliseconds)
- Description: Transaction description text
- MonthLabel: Display label for a calendar month (e.g., "Jan 2024")
"""

from typing import NewType

# Ids are strings so persisted ledgers from other sources keep their identity
TransactionId = NewType("TransactionId", str)

# Transaction description text
Description = NewType("Description", str)

# Month label is always "Mon YYYY" with English abbreviations
MonthLabel = NewType("MonthLabel", str)
