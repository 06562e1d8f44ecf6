"""
errors.py — Exceptions raised by the simulation kernel.

Deaths and draws are normal round outcomes and never raise.
"""


class SnakeChaseError(Exception):
    """Base class for every error raised by this package."""


class ContractViolation(SnakeChaseError, ValueError):
    """The caller passed something the kernel API does not accept."""


class KernelStateError(SnakeChaseError, RuntimeError):
    """An operation was called while the kernel was in the wrong state."""


class GridSaturatedError(SnakeChaseError, RuntimeError):
    """No free cell is left to place an item on."""
