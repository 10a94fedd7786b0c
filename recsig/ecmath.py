"""
ecmath.py – Curve math kernel
=============================
Small pure functions the signer, the reconstructor and the key decoder share.
Group arithmetic itself (addition, scalar multiplication) is python-ecdsa's;
this module only adds what ECDSA libraries usually leave out: solving the
curve equation for both y values of a given x.
"""

import hmac

from ecdsa.ellipticcurve import INFINITY, Point
from ecdsa.numbertheory import SquareRootError, square_root_mod_prime

from recsig import config
from recsig.errors import InvalidPointEncoding, NoValidRoot, PreconditionViolation


def dual_roots(x, curve):
    """
    Returns both solutions y1, y2 of y^2 = x^3 - 3x + B (mod P).

    y1 is whatever root the modular square root yields; y2 = P - y1.  The
    ordering is deterministic, which is all the recovery id relies on.
    """
    p = curve.p
    if not 0 <= x < p:
        raise NoValidRoot(f"x outside the field of {curve.name}")

    rhs = (pow(x, 3, p) - 3 * x + curve.b) % p
    try:
        y1 = int(square_root_mod_prime(rhs, p))
    except SquareRootError:
        raise NoValidRoot(f"x has no square root on {curve.name}") from None

    y2 = (p - y1) % p
    return y1, y2


def negate(point, curve):
    """Additive inverse (x, P - y).  Infinity is its own inverse."""
    if point == INFINITY:
        return INFINITY
    return Point(curve.fp, point.x(), (curve.p - point.y()) % curve.p, curve.n)


def constant_equal(a, b):
    """
    Byte-string equality in constant time.  Mismatched lengths or non-bytes
    input compare unequal rather than raising.
    """
    if not isinstance(a, (bytes, bytearray)) or not isinstance(b, (bytes, bytearray)):
        return False
    return hmac.compare_digest(bytes(a), bytes(b))


# ---------------- Shared helpers ----------------

def hash_to_scalar(message_hash, curve):
    """
    z for ECDSA: the first 32 bytes of the hash as a big-endian integer mod N.
    Shorter input breaks the signing contract and is rejected outright.
    """
    if not isinstance(message_hash, (bytes, bytearray)):
        raise PreconditionViolation("message hash must be bytes")
    if len(message_hash) < config.HASH_PREFIX_LENGTH:
        raise PreconditionViolation(
            f"message hash must be at least {config.HASH_PREFIX_LENGTH} bytes, "
            f"got {len(message_hash)}"
        )
    return int.from_bytes(message_hash[:config.HASH_PREFIX_LENGTH], "big") % curve.n


def is_on_curve(curve, x, y):
    if not (isinstance(x, int) and isinstance(y, int)):
        return False
    if not (0 <= x < curve.p and 0 <= y < curve.p):
        return False
    return curve.fp.contains_point(x, y)


def to_point(curve, x, y):
    """Wraps affine coordinates for python-ecdsa arithmetic."""
    if not is_on_curve(curve, x, y):
        raise InvalidPointEncoding(f"({x}, {y}) is not on {curve.name}")
    return Point(curve.fp, x, y, curve.n)
