"""
tests/test_keys.py
==================
Curve math kernel and key encodings.

Run with:
    python tests/test_keys.py
or (with pytest):
    python -m pytest tests/test_keys.py -v

Requirements tested
-------------------
K1.  dual_roots(Gx) contains Gy on P-224, P-256 and P-384
K2.  dual_roots returns y and P - y, both on the curve
K3.  dual_roots raises NoValidRoot for a non-residue and for x >= P
K4.  negate() gives the additive inverse; infinity negates to infinity
K5.  constant_equal: equal, unequal, length mismatch, junk input
K6.  hash_to_scalar rejects hashes shorter than 32 bytes
K7.  Private key bytes round-trip at fixed width
K8.  Private key decoding rejects wrong width and out-of-range scalars
K9.  Uncompressed public key bytes round-trip
K10. Compressed public key bytes round-trip for both parities
K11. Public key decoding rejects off-curve points and bad prefixes
K12. Generation draws from the injected random source
K13. A failing random source surfaces as RandomSourceFailure
K14. dict forms round-trip; get_curve resolves aliases
"""

import random

from support import BrokenRandom, check, expect_raises, run_all

from ecdsa.ellipticcurve import INFINITY
from ecdsa.numbertheory import jacobi

from recsig.curves import P224, P256, P384, get_curve, supported_curves
from recsig.ecmath import constant_equal, dual_roots, hash_to_scalar, negate, to_point
from recsig.errors import (
    InvalidPointEncoding,
    InvalidScalarEncoding,
    NoValidRoot,
    PreconditionViolation,
    RandomSourceFailure,
)
from recsig.keys import PrivateKey, PublicKey, generate_key


def _non_residue_x(curve):
    """Smallest x for which x^3 - 3x + B has no square root mod P."""
    for x in range(1, 1000):
        rhs = (x ** 3 - 3 * x + curve.b) % curve.p
        if jacobi(rhs, curve.p) == -1:
            return x
    raise RuntimeError("no non-residue found")


def test_dual_roots_generator():
    print("\n── K1/K2: dual roots at the base point ──")
    for curve in supported_curves():
        y1, y2 = dual_roots(curve.gx, curve)
        check(f"K1: Gy among roots on {curve.name}", curve.gy in (y1, y2))
        check(f"K2: roots are negations of each other on {curve.name}",
              (y1 + y2) % curve.p == 0)
        check(f"K2: both roots on {curve.name}",
              curve.fp.contains_point(curve.gx, y1) and curve.fp.contains_point(curve.gx, y2))


def test_dual_roots_no_root():
    print("\n── K3: dual roots failure ──")
    for curve in (P224, P256):
        x = _non_residue_x(curve)
        check(f"K3a: non-residue x={x} raises on {curve.name}",
              expect_raises(NoValidRoot, dual_roots, x, curve))
    check("K3b: x == P raises", expect_raises(NoValidRoot, dual_roots, P256.p, P256))


def test_negate():
    print("\n── K4: point negation ──")
    key = generate_key(P256, random.Random(4))
    point = key.public_key().point()
    inverse = negate(point, P256)

    check("K4a: x unchanged", inverse.x() == point.x())
    check("K4b: y mirrored", inverse.y() == P256.p - point.y())
    check("K4c: P + (-P) is infinity", point + inverse == INFINITY)
    check("K4d: -infinity is infinity", negate(INFINITY, P256) == INFINITY)


def test_constant_equal():
    print("\n── K5: constant_equal ──")
    check("K5a: equal bytes", constant_equal(b"\x01\x02", b"\x01\x02"))
    check("K5b: unequal bytes", not constant_equal(b"\x01\x02", b"\x01\x03"))
    check("K5c: length mismatch", not constant_equal(b"\x01\x02", b"\x01\x02\x03"))
    check("K5d: bytearray vs bytes", constant_equal(bytearray(b"ab"), b"ab"))
    check("K5e: None and str never match", not constant_equal(None, b"") and not constant_equal("ab", b"ab"))


def test_hash_precondition():
    print("\n── K6: message hash precondition ──")
    check("K6a: 31 bytes rejected",
          expect_raises(PreconditionViolation, hash_to_scalar, bytes(31), P256))
    check("K6b: str rejected",
          expect_raises(PreconditionViolation, hash_to_scalar, "a" * 32, P256))
    z = hash_to_scalar(b"\xff" * 32 + b"ignored tail", P256)
    check("K6c: only 32 bytes used, reduced mod N", z == (2 ** 256 - 1) % P256.n)


def test_private_key_round_trip():
    print("\n── K7/K8: private key bytes ──")
    rng = random.Random(7)
    for curve in supported_curves():
        key = generate_key(curve, rng)
        enc = key.to_bytes()
        check(f"K7a: width {curve.byte_len} on {curve.name}", len(enc) == curve.byte_len)
        check(f"K7b: round-trip on {curve.name}", PrivateKey.from_bytes(enc, curve) == key)

    check("K8a: short encoding rejected",
          expect_raises(InvalidScalarEncoding, PrivateKey.from_bytes, bytes(31), P256))
    check("K8b: zero scalar rejected",
          expect_raises(InvalidScalarEncoding, PrivateKey.from_bytes, bytes(32), P256))
    check("K8c: scalar >= N rejected",
          expect_raises(InvalidScalarEncoding, PrivateKey.from_bytes,
                        P256.n.to_bytes(32, "big"), P256))


def test_public_key_round_trip():
    print("\n── K9/K10: public key bytes ──")
    rng = random.Random(9)
    for curve in supported_curves():
        for _ in range(4):
            pub = generate_key(curve, rng).public_key()

            enc = pub.to_bytes()
            check(f"K9a: uncompressed width on {curve.name}", len(enc) == 2 * curve.byte_len)
            check(f"K9b: uncompressed round-trip on {curve.name}",
                  PublicKey.from_bytes(enc, curve) == pub)

            comp = pub.compressed_bytes()
            check(f"K10a: compressed width on {curve.name}", len(comp) == curve.byte_len + 1)
            check(f"K10b: compressed round-trip on {curve.name}",
                  PublicKey.from_compressed_bytes(comp, curve) == pub)

    # D and N - D give mirrored Y, so one of each parity
    key = generate_key(P256, rng)
    mirrored = PrivateKey(P256.n - key.d, P256)
    for pub in (key.public_key(), mirrored.public_key()):
        check(f"K10c: prefix 0x{pub.compressed_bytes()[0]:02x} round-trips",
              PublicKey.from_compressed_bytes(pub.compressed_bytes(), P256) == pub)
    check("K10d: mirrored keys use both prefixes",
          {key.public_key().compressed_bytes()[0], mirrored.public_key().compressed_bytes()[0]} == {2, 3})


def test_public_key_rejects_bad_input():
    print("\n── K11: public key decoding failures ──")
    pub = generate_key(P256, random.Random(11)).public_key()

    off_curve = pub.x.to_bytes(32, "big") + ((pub.y + 1) % P256.p).to_bytes(32, "big")
    check("K11a: off-curve uncompressed point rejected",
          expect_raises(InvalidPointEncoding, PublicKey.from_bytes, off_curve, P256))
    check("K11b: truncated uncompressed key rejected",
          expect_raises(InvalidPointEncoding, PublicKey.from_bytes, pub.to_bytes()[:-1], P256))

    bad_prefix = b"\x04" + pub.compressed_bytes()[1:]
    check("K11c: bad compressed prefix rejected",
          expect_raises(InvalidPointEncoding, PublicKey.from_compressed_bytes, bad_prefix, P256))

    x = _non_residue_x(P256)
    no_root = b"\x02" + x.to_bytes(32, "big")
    check("K11d: compressed X without a root rejected",
          expect_raises(InvalidPointEncoding, PublicKey.from_compressed_bytes, no_root, P256))
    check("K11e: to_point refuses off-curve coordinates",
          expect_raises(InvalidPointEncoding, to_point, P256, pub.x, pub.y + 1))
    check("K11f: is_on_curve true for derived key", pub.is_on_curve())


def test_generation_uses_injected_rng():
    print("\n── K12/K13: random source ──")
    a = generate_key(P256, random.Random(42))
    b = generate_key(P256, random.Random(42))
    c = generate_key(P256, random.Random(43))
    check("K12a: same seed, same key", a == b)
    check("K12b: different seed, different key", a != c)
    check("K12c: scalar in [1, N-1]", 1 <= a.d < P256.n)
    check("K13: broken source raises RandomSourceFailure",
          expect_raises(RandomSourceFailure, generate_key, P256, BrokenRandom()))


def test_dict_forms_and_lookup():
    print("\n── K14: dict forms and curve lookup ──")
    key = generate_key(P384, random.Random(14))
    pub = key.public_key()
    check("K14a: private key dict round-trip", PrivateKey.from_dict(key.to_dict()) == key)
    check("K14b: public key dict round-trip", PublicKey.from_dict(pub.to_dict()) == pub)
    check("K14c: aliases resolve", get_curve("secp256r1") is P256 and get_curve("nist224p") is P224)
    check("K14d: default curve is P-256", get_curve() is P256)
    check("K14e: unknown curve raises KeyError", expect_raises(KeyError, get_curve, "P-999"))
    check("K14f: private scalar hidden from repr", str(key.d) not in repr(key))


def main():
    return run_all("Curve Kernel & Key Model – Test Suite", [
        test_dual_roots_generator,
        test_dual_roots_no_root,
        test_negate,
        test_constant_equal,
        test_hash_precondition,
        test_private_key_round_trip,
        test_public_key_round_trip,
        test_public_key_rejects_bad_input,
        test_generation_uses_injected_rng,
        test_dict_forms_and_lookup,
    ])


if __name__ == "__main__":
    import sys
    ok = main()
    sys.exit(0 if ok else 1)
