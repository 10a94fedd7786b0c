"""
errors.py – Exception hierarchy for recsig
===========================================
Every failure the library surfaces derives from RecsigError.  Verification
and address predicates never let these escape; they answer False instead.
"""


class RecsigError(Exception):
    """Base class for all recsig failures."""


class RandomSourceFailure(RecsigError, RuntimeError):
    """The injected random source could not produce a key or nonce."""


class InvalidScalarEncoding(RecsigError, ValueError):
    """Scalar bytes have the wrong width or decode outside [1, N-1]."""


class InvalidPointEncoding(RecsigError, ValueError):
    """Point bytes are malformed or describe a point off the curve."""


class NoValidRoot(RecsigError, ArithmeticError):
    """x has no y on the curve.  Unreachable for a genuine signature's R."""


class DegenerateSignature(RecsigError):
    """Nonce produced R == 0, S == 0 or an unrecoverable R.  Caught by sign()."""


class PreconditionViolation(RecsigError, ValueError):
    """A documented input contract was broken by the caller."""


class MalformedSignature(RecsigError, ValueError):
    """Signature fields are out of range for reconstruction."""
