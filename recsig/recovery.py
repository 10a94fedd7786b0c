"""
recovery.py – Public-key reconstruction
=======================================
Rebuilds the signer's public key from (r, s, v) and the message hash:

    Q = r^-1 * (s*K - z*G)

where K is the nonce point (r, y) and v picks y among the two roots of the
curve equation at x = r.

Reconstruction only says *which* key would have produced the signature.  It
does not say that key is the expected one; compare the result against a
known key or address before trusting it.
"""

import logging

from ecdsa.ellipticcurve import INFINITY
from ecdsa.numbertheory import inverse_mod

from recsig.address import address_of, is_address_compressed, is_address_valid, is_multisig_address
from recsig.ecmath import constant_equal, dual_roots, hash_to_scalar, negate, to_point
from recsig.errors import MalformedSignature, RecsigError
from recsig.keys import PublicKey
from recsig.signing import verify

log = logging.getLogger(__name__)


def reconstruct_public_key(signature, message_hash, curve):
    """
    Recovers the public key that produced signature over message_hash.

    :raises PreconditionViolation: message_hash shorter than 32 bytes.
    :raises MalformedSignature: r, s or v out of range, or a degenerate result.
    :raises NoValidRoot: r is not the x coordinate of any curve point.
    """
    n = curve.n
    r, s, v = signature.r, signature.s, signature.v
    if not (1 <= r < n and 1 <= s < n):
        raise MalformedSignature("r and s must lie in [1, N-1]")
    if v not in (0, 1):
        raise MalformedSignature(f"recovery id must be 0 or 1, got {v}")

    z = hash_to_scalar(message_hash, curve)

    # nonce point K; v says which root was its y
    k_point = to_point(curve, r, dual_roots(r, curve)[v])

    s_k = k_point * s
    z_g = curve.generator * z
    t = s_k + negate(z_g, curve)

    q = t * inverse_mod(r, n)
    if q == INFINITY:
        raise MalformedSignature("signature reconstructs to the point at infinity")

    return PublicKey(int(q.x()), int(q.y()), curve)


def recover_address(signature, message_hash, curve, compressed=True):
    """Single-signer address of whoever produced the signature."""
    return address_of(reconstruct_public_key(signature, message_hash, curve), compressed)


def verify_address(address, message_hash, signature, curve):
    """
    Checks a signature against a single-signer address alone, without the
    signer's public key ever being transmitted.
    """
    if not is_address_valid(address) or is_multisig_address(address):
        return False
    try:
        pub = reconstruct_public_key(signature, message_hash, curve)
    except (RecsigError, AttributeError, TypeError) as exc:
        log.debug("address check failed to reconstruct key: %s", exc)
        return False

    if not verify(pub, message_hash, signature):
        return False
    return constant_equal(address_of(pub, is_address_compressed(address)), bytes(address))
