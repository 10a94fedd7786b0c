"""
multisig.py – Multi-signature coordinator
=========================================
N partners jointly own one address: the Merkle root over their compressed
public keys, in order.  Each partner signs with its own key and stamps the
signature with its order index o.  The verifier never needs the keys; it
reconstructs each one from its signature, slots it at index o, rebuilds the
address and compares.

Public interface
----------------
  generate_multisig_key(curve, order, partners)      -> MultiSigKey
  MultiSigKey.sign(message_hash)                     -> Signature (o = order)
  verify_multisig(sigs, message_hash, addr, curve)   -> bool
  partner_proof(pubs, order)                         -> Merkle path
  verify_partner_proof(addr, pub, order, proof)      -> bool
"""

import logging
from dataclasses import dataclass, replace

from recsig import config
from recsig.address import (
    address_partner_count,
    is_multisig_address,
    multisig_address_of,
)
from recsig.curves import get_curve
from recsig.ecmath import constant_equal
from recsig.errors import PreconditionViolation, RecsigError
from recsig.keys import PrivateKey, generate_key
from recsig.merkle import merkle_proof, root_from_proof
from recsig.recovery import reconstruct_public_key
from recsig.signing import sign, verify

log = logging.getLogger(__name__)


def _check_slot(order, partners):
    if not 1 <= partners <= config.MAX_PARTNERS:
        raise PreconditionViolation(f"partners must be in 1..{config.MAX_PARTNERS}, got {partners}")
    if not 0 <= order < partners:
        raise PreconditionViolation(f"order must be in 0..{partners - 1}, got {order}")


@dataclass(frozen=True)
class MultiSigKey:
    """
    A partner's private key in a multisig group.

    :param private_key: The partner's own PrivateKey.
    :param order: This partner's slot, 0 <= order < partners.
    :param partners: Size of the group.
    """
    private_key: PrivateKey
    order: int
    partners: int

    def __post_init__(self):
        _check_slot(self.order, self.partners)

    @property
    def curve(self):
        return self.private_key.curve

    def public_key(self):
        return self.private_key.public_key()

    def sign(self, message_hash, rng=None):
        sig = sign(self.private_key, message_hash, rng)
        return replace(sig, o=self.order)


def generate_multisig_key(curve=None, order=0, partners=1, rng=None):
    """Creates a fresh partner key for slot `order` of a `partners`-sized group."""
    _check_slot(order, partners)
    return MultiSigKey(generate_key(get_curve(curve), rng), order, partners)


def verify_multisig(signatures, message_hash, address, curve=None):
    """
    Verifies a complete set of partner signatures against a multisig address.

    Every slot 0..N-1 of the address's group must be filled exactly once.
    Duplicate or out-of-range order indices, a count that differs from the
    address, or any signature that fails on its own all give False.
    """
    curve = get_curve(curve)
    signatures = list(signatures)

    if not is_multisig_address(address):
        log.debug("multisig check on a non-multisig address")
        return False

    count = len(signatures)
    if count != address_partner_count(address):
        log.debug("got %d signatures for a %d-partner address",
                  count, address_partner_count(address))
        return False

    partners = [None] * count
    for sig in signatures:
        o = getattr(sig, "o", None)
        if not isinstance(o, int) or not 0 <= o < count:
            log.debug("order index %r outside 0..%d", o, count - 1)
            return False
        if partners[o] is not None:
            log.debug("order index %d signed twice", o)
            return False

        try:
            pub = reconstruct_public_key(sig, message_hash, curve)
        except (RecsigError, AttributeError, TypeError) as exc:
            log.debug("partner %d: reconstruction failed: %s", o, exc)
            return False

        if not verify(pub, message_hash, sig):
            log.debug("partner %d: signature does not verify", o)
            return False

        partners[o] = pub

    return constant_equal(multisig_address_of(partners), bytes(address))


# ---------------- Partner membership ----------------

def partner_proof(public_keys, order):
    """
    Merkle path showing that public_keys[order] belongs to the group's
    address, so one partner can prove membership without revealing the rest.
    """
    return merkle_proof([pub.compressed_bytes() for pub in public_keys], order)


def _proof_depth(partners):
    depth = 0
    while partners > 1:
        partners = (partners + 1) // 2
        depth += 1
    return depth


def verify_partner_proof(address, public_key, order, proof):
    """Checks that public_key sits at slot `order` of the group behind address."""
    count = address_partner_count(address)
    if not 0 <= order < count:
        return False

    try:
        proof = list(proof)
        if len(proof) != _proof_depth(count):
            return False

        # the left/right flags along the path spell out the leaf index
        index = 0
        for level, (_, sibling_is_right) in enumerate(proof):
            if not sibling_is_right:
                index |= 1 << level
        if index != order:
            return False

        root = root_from_proof(public_key.compressed_bytes(), proof)
    except (TypeError, ValueError, AttributeError) as exc:
        log.debug("malformed partner proof: %s", exc)
        return False

    return constant_equal(root[:config.DIGEST_LENGTH], bytes(address[2:]))
