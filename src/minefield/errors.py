"""
Error types raised by the minefield engine.
"""


class InvalidArgument(ValueError):
    """Raised for construction parameters or inputs the engine rejects."""
