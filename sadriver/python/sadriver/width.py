from typing import Optional

from .datatypes import IndexWidth

# Inputs of this length (or tokens of this value) and above need 64-bit
# indices.
NARROW_LIMIT = 2**31 - 1


def select_width(n: int, max_token: Optional[int] = None) -> IndexWidth:
    """Choose the narrowest index width that is safe for an input.

    Args:
      n:
        Length of the sequence.
      max_token:
        The largest token value for integer alphabets; None for byte
        sequences. The integer construction uses the same type for
        positions and symbols, so it has to fit as well.
    Returns:
      Return IndexWidth.WIDE if ``n`` or ``max_token`` is at least
      ``2**31 - 1``; IndexWidth.NARROW otherwise.
    """
    if n >= NARROW_LIMIT:
        return IndexWidth.WIDE
    if max_token is not None and max_token >= NARROW_LIMIT:
        return IndexWidth.WIDE
    return IndexWidth.NARROW
