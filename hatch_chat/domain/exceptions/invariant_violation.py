"""
InvariantViolationError - A message is about to break a routing or identity
invariant (fabricated "system" agent, inconsistent routing fields, ...).
Maps to: INVARIANT_VIOLATION error frame
"""


class InvariantViolationError(Exception):
    def __init__(self, invariant: str, message: str):
        super().__init__(f"Invariant violation ({invariant}): {message}")
        self.invariant = invariant
        self.message = message
