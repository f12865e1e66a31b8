from __future__ import annotations


class XorCrackerError(Exception):
    """Base class for every error raised by xorcracker."""


class DecodeError(XorCrackerError, ValueError):
    """Hex or base64 text that does not decode (bad alphabet, odd length, bad padding)."""


class NoSolutionFound(XorCrackerError):
    """Every candidate key was rejected, so there is nothing to return."""


class DegenerateInput(NoSolutionFound):
    """Ciphertext too short to propose a single key length."""
