class InvariantViolation(Exception):
    """Raised when a block would be saved in an invalid state."""
