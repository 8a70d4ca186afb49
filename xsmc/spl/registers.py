"""Machine registers addressable from SPL and their assembly names."""

from enum import IntEnum


class Register(IntEnum):
    R0 = 0
    R1 = 1
    R2 = 2
    R3 = 3
    R4 = 4
    R5 = 5
    R6 = 6
    R7 = 7
    R8 = 8
    R9 = 9
    R10 = 10
    R11 = 11
    R12 = 12
    R13 = 13
    R14 = 14
    R15 = 15
    R16 = 16
    R17 = 17
    R18 = 18
    R19 = 19
    P0 = 20
    P1 = 21
    P2 = 22
    P3 = 23
    BP = 24
    IP = 25
    SP = 26
    PTBR = 27
    PTLR = 28
    EIP = 29
    EPN = 30
    EC = 31
    EMA = 32


GENERAL_REGISTERS = 20
PORTS = 4
SPECIAL_REGISTERS = 9
NUM_REGISTERS = GENERAL_REGISTERS + SPECIAL_REGISTERS + PORTS

# Registers from R16 upward are reserved for the compiler's own use.
COMPILER_REGISTER_BASE = 16

_SPECIAL = {
    Register.BP,
    Register.SP,
    Register.IP,
    Register.PTBR,
    Register.PTLR,
    Register.EIP,
    Register.EPN,
    Register.EC,
    Register.EMA,
}


def is_allowed_register(value: int) -> bool:
    """True for registers a program may name directly (R0 to R15)."""
    return Register.R0 <= value < Register.R0 + COMPILER_REGISTER_BASE


def register_name(number: int) -> str:
    """Return the assembly name of a register a program may refer to."""
    if Register.R0 <= number <= Register.R15:
        return f"R{number - Register.R0}"
    if Register.P0 <= number <= Register.P3:
        return f"P{number - Register.P0}"
    if number in _SPECIAL:
        return Register(number).name
    raise ValueError(f"register {number} has no program-visible name")