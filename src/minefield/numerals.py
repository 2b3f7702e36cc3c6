"""
Roman numeral formatting for adjacency counts.
"""
from .errors import InvalidArgument


# ============================================================================
# Constants
# ============================================================================

ROMAN_LIMIT = 4000

_NUMERALS = (
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
)


# ============================================================================
# Formatting
# ============================================================================

def romanise(num: int) -> str:
    """
    Convert an integer to a Roman numeral.

    Zero is written as "O" and negative numbers get a leading minus sign.

    Args:
        num: Integer in the range [-3999, 3999].

    Returns:
        Roman numeral representation of num.

    Raises:
        InvalidArgument: If abs(num) is 4000 or more.
    """
    if num == 0:
        return "O"
    if num < 0:
        return "-" + romanise(-num)
    if num >= ROMAN_LIMIT:
        raise InvalidArgument(f"Value must be in [-3999, 3999], got {num}")

    parts = []
    for value, symbol in _NUMERALS:
        count, num = divmod(num, value)
        parts.append(symbol * count)
    return "".join(parts)
