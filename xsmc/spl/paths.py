"""File name handling for the SPL compiler."""

import os


def expand_path(path: str) -> str:
    """Replace the first path component by an environment variable's value.

    The component's leading character (normally ``$``) is dropped to form the
    variable name; if that variable is unset the component is kept as written.
    """
    first, sep, rest = path.partition("/")
    value = os.environ.get(first[1:]) if first[1:] else None
    return (value if value is not None else first) + sep + rest


def remove_extension(path: str) -> str:
    """Cut ``path`` just after its last dot; with no dot the result is empty."""
    head, dot, _ = path.rpartition(".")
    return head + dot


def output_filename(path: str) -> str:
    """Name of the assembly file produced for the source file ``path``."""
    return remove_extension(path) + "xsm"