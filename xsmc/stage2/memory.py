"""Static storage addresses of the single-letter variables."""

BASE_ADDRESS = 4096


def address_of(var: str) -> int:
    """Return the memory word for the variable named by ``var``'s first letter."""
    if not var:
        raise ValueError("empty variable name")
    return BASE_ADDRESS + (ord(var[0]) - ord("a"))