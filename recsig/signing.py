"""
signing.py – ECDSA signing and verification with recovery ids
=============================================================
Standard ECDSA over the private scalar D.  Besides (r, s), sign() records the
recovery id v so that recovery.reconstruct_public_key() can rebuild the
signer's key from the signature alone.
"""

import logging

from ecdsa.ellipticcurve import INFINITY
from ecdsa.numbertheory import inverse_mod

from recsig.ecmath import dual_roots, hash_to_scalar
from recsig.errors import DegenerateSignature, RecsigError
from recsig.keys import random_scalar
from recsig.signature import Signature

log = logging.getLogger(__name__)


def _sign_with_nonce(d, z, k, curve):
    n = curve.n
    nonce_point = curve.generator * k
    kx, ky = int(nonce_point.x()), int(nonce_point.y())

    # r must equal Kx exactly, otherwise the nonce point cannot be rebuilt
    if kx >= n:
        raise DegenerateSignature("nonce point x exceeds the group order")

    r = kx
    if r == 0:
        raise DegenerateSignature("r == 0")

    s = (inverse_mod(k, n) * (z + r * d)) % n
    if s == 0:
        raise DegenerateSignature("s == 0")

    y1, _ = dual_roots(r, curve)
    v = 0 if ky == y1 else 1
    return Signature(r, s, v, 0)


def sign(private_key, message_hash, rng=None):
    """
    Signs the first 32 bytes of message_hash with private_key.

    :param private_key: The signer's PrivateKey.
    :param message_hash: Digest of the message, at least 32 bytes.
    :param rng: Random source for the nonce (see keys.random_scalar).
    :return: Signature with o == 0.
    """
    curve = private_key.curve
    z = hash_to_scalar(message_hash, curve)

    while True:
        k = random_scalar(curve, rng)
        try:
            return _sign_with_nonce(private_key.d, z, k, curve)
        except DegenerateSignature as exc:
            log.debug("discarding nonce on %s: %s", curve.name, exc)


def verify(public_key, message_hash, signature):
    """
    Signature Verification:
    u1 = z/s, u2 = r/s, valid iff (u1*G + u2*Q).x mod N == r.
    Any malformed input is simply an invalid signature.
    """
    try:
        curve = public_key.curve
        n = curve.n
        r, s = signature.r, signature.s
        if not (isinstance(r, int) and isinstance(s, int)):
            return False
        if not (1 <= r < n and 1 <= s < n):
            return False
        z = hash_to_scalar(message_hash, curve)
        q = public_key.point()
    except (RecsigError, AttributeError, TypeError) as exc:
        log.debug("verification rejected input: %s", exc)
        return False

    w = inverse_mod(s, n)
    u1 = (z * w) % n
    u2 = (r * w) % n

    point = curve.generator * u1 + q * u2
    if point == INFINITY:
        return False

    return int(point.x()) % n == r
