"""Error types raised while solving a machine."""


class SolveError(Exception):
    """Base class for unrecoverable per-machine failures."""

    kind = "SOLVE_ERROR"


class InvalidInput(SolveError, ValueError):
    """Malformed machine: empty targets or masks, bad indices, negative targets."""

    kind = "INVALID_INPUT"


class NoSolution(SolveError):
    """The system has no non-negative integer solution."""

    kind = "NO_SOLUTION"


class UnsupportedStructure(SolveError):
    """More free variables than the bounded search supports."""

    kind = "UNSUPPORTED_STRUCTURE"


class ArithmeticOverflow(SolveError, OverflowError):
    """An exact-arithmetic value left the signed 64-bit range."""

    kind = "OVERFLOW"


class DivisionByZero(SolveError, ZeroDivisionError):
    """Rational division by a zero-valued operand."""

    kind = "DIVISION_BY_ZERO"
