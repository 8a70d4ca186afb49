"""Static storage addresses of the single-letter variables."""

from xsmc.stage3.nodes import STACK_START


def address_of(var: str) -> int:
    """Return the memory word for the variable named by ``var``'s first letter."""
    if not var:
        raise ValueError("empty variable name")
    return STACK_START + (ord(var[0]) - ord("a"))