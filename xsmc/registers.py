"""Stack-style allocator for the XSM general-purpose registers."""

MAX_REGISTERS = 20


class OutOfRegistersError(RuntimeError):
    """Raised when every general-purpose register is already in use."""


class RegisterAllocator:
    """Hands out registers lowest first and frees them in reverse order."""

    def __init__(self, limit: int = MAX_REGISTERS) -> None:
        self.limit = limit
        self._top = -1

    @property
    def in_use(self) -> int:
        """Number of registers currently allocated."""
        return self._top + 1

    def reset(self) -> None:
        """Mark every register as free."""
        self._top = -1

    def allocate(self) -> int:
        """Allocate the lowest free register and return its index."""
        if self._top >= self.limit - 1:
            raise OutOfRegistersError("Out of registers")
        self._top += 1
        return self._top

    def release(self) -> None:
        """Free the most recently allocated register, if any."""
        if self._top >= 0:
            self._top -= 1