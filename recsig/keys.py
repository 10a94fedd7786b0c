"""
keys.py – Private and public key model
======================================
PrivateKey holds the scalar D, PublicKey the affine point Q = D*G.  Both are
immutable and carry a reference to their Curve.

Byte layouts (big-endian, width = curve.byte_len):

  PrivateKey.to_bytes()          D
  PublicKey.to_bytes()           X || Y
  PublicKey.compressed_bytes()   0x02/0x03 || X
"""

import secrets
from dataclasses import dataclass, field

from recsig import config
from recsig.curves import Curve, get_curve
from recsig.ecmath import dual_roots, is_on_curve, to_point
from recsig.errors import (
    InvalidPointEncoding,
    InvalidScalarEncoding,
    NoValidRoot,
    RandomSourceFailure,
)

_system_random = secrets.SystemRandom()


def random_scalar(curve, rng=None):
    """
    Draws a scalar uniformly from [1, N-1].

    :param rng: Anything with randrange(); defaults to secrets.SystemRandom.
                Tests pass random.Random(seed) for reproducible keys.
    """
    rng = rng or _system_random
    try:
        return rng.randrange(1, curve.n)
    except (OSError, NotImplementedError) as exc:
        raise RandomSourceFailure("random source failed to produce a scalar") from exc


def generate_key(curve=None, rng=None):
    """Creates a fresh PrivateKey on the given curve (default from config)."""
    curve = get_curve(curve)
    return PrivateKey(random_scalar(curve, rng), curve)


@dataclass(frozen=True)
class PublicKey:
    x: int
    y: int
    curve: Curve

    def point(self):
        """The key as a python-ecdsa point; raises if it is off the curve."""
        return to_point(self.curve, self.x, self.y)

    def is_on_curve(self):
        return is_on_curve(self.curve, self.x, self.y)

    # ---------------- Encodings ----------------

    def to_bytes(self):
        width = self.curve.byte_len
        return self.x.to_bytes(width, "big") + self.y.to_bytes(width, "big")

    @classmethod
    def from_bytes(cls, data, curve=None):
        curve = get_curve(curve)
        width = curve.byte_len
        if not isinstance(data, (bytes, bytearray)) or len(data) != 2 * width:
            raise InvalidPointEncoding(
                f"uncompressed {curve.name} key must be {2 * width} bytes"
            )
        x = int.from_bytes(data[:width], "big")
        y = int.from_bytes(data[width:], "big")
        if not is_on_curve(curve, x, y):
            raise InvalidPointEncoding(f"decoded point is not on {curve.name}")
        return cls(x, y, curve)

    def compressed_bytes(self):
        prefix = config.ODD_Y_PREFIX if self.y & 1 else config.EVEN_Y_PREFIX
        return bytes([prefix]) + self.x.to_bytes(self.curve.byte_len, "big")

    @classmethod
    def from_compressed_bytes(cls, data, curve=None):
        """
        Rebuilds Y from X by picking whichever of the two curve roots has the
        parity recorded in the prefix byte.
        """
        curve = get_curve(curve)
        width = curve.byte_len
        if not isinstance(data, (bytes, bytearray)) or len(data) != width + 1:
            raise InvalidPointEncoding(
                f"compressed {curve.name} key must be {width + 1} bytes"
            )
        prefix = data[0]
        if prefix not in (config.EVEN_Y_PREFIX, config.ODD_Y_PREFIX):
            raise InvalidPointEncoding(f"bad compressed key prefix 0x{prefix:02x}")

        x = int.from_bytes(data[1:], "big")
        try:
            y1, y2 = dual_roots(x, curve)
        except NoValidRoot as exc:
            raise InvalidPointEncoding(str(exc)) from exc

        parity = prefix - config.EVEN_Y_PREFIX
        y = y1 if (y1 & 1) == parity else y2
        if not is_on_curve(curve, x, y):
            raise InvalidPointEncoding(f"decoded point is not on {curve.name}")
        return cls(x, y, curve)

    def to_dict(self):
        return {"curve": self.curve.name, "x": format(self.x, "x"), "y": format(self.y, "x")}

    @staticmethod
    def from_dict(data):
        curve = get_curve(data["curve"])
        x, y = int(data["x"], 16), int(data["y"], 16)
        if not is_on_curve(curve, x, y):
            raise InvalidPointEncoding(f"decoded point is not on {curve.name}")
        return PublicKey(x, y, curve)

    # ---------------- Convenience ----------------

    def verify(self, message_hash, signature):
        from recsig.signing import verify
        return verify(self, message_hash, signature)

    def address(self, compressed=True):
        from recsig.address import address_of
        return address_of(self, compressed)


@dataclass(frozen=True)
class PrivateKey:
    d: int = field(repr=False)
    curve: Curve

    def public_key(self):
        q = self.curve.generator * self.d
        return PublicKey(int(q.x()), int(q.y()), self.curve)

    def to_bytes(self):
        return self.d.to_bytes(self.curve.byte_len, "big")

    @classmethod
    def from_bytes(cls, data, curve=None):
        curve = get_curve(curve)
        if not isinstance(data, (bytes, bytearray)) or len(data) != curve.byte_len:
            raise InvalidScalarEncoding(
                f"{curve.name} private key must be {curve.byte_len} bytes"
            )
        d = int.from_bytes(data, "big")
        if not 1 <= d < curve.n:
            raise InvalidScalarEncoding(f"scalar outside [1, N-1] for {curve.name}")
        return cls(d, curve)

    def to_dict(self):
        return {"curve": self.curve.name, "d": self.to_bytes().hex()}

    @staticmethod
    def from_dict(data):
        curve = get_curve(data["curve"])
        return PrivateKey.from_bytes(bytes.fromhex(data["d"]), curve)

    def sign(self, message_hash, rng=None):
        from recsig.signing import sign
        return sign(self, message_hash, rng)

    def address(self, compressed=True):
        return self.public_key().address(compressed)
