"""
signature.py – Recoverable signature value
==========================================
An ECDSA (r, s) pair extended with

  v  recovery id: which of the two curve roots for x = r was the nonce point's y
  o  order index: the signer's slot in a multisig group (0 for single signers)
"""

from dataclasses import dataclass

from recsig.curves import get_curve
from recsig.errors import InvalidScalarEncoding


@dataclass(frozen=True)
class Signature:
    r: int
    s: int
    v: int = 0
    o: int = 0

    def reconstruct_public_key(self, message_hash, curve=None):
        """Recovers the signer's PublicKey; see recovery.reconstruct_public_key."""
        from recsig.recovery import reconstruct_public_key
        return reconstruct_public_key(self, message_hash, get_curve(curve))

    def to_bytes(self, curve=None):
        """R || S || V || O with R and S at the curve's scalar width."""
        width = get_curve(curve).byte_len
        return (
            self.r.to_bytes(width, "big")
            + self.s.to_bytes(width, "big")
            + bytes([self.v, self.o])
        )

    @classmethod
    def from_bytes(cls, data, curve=None):
        curve = get_curve(curve)
        width = curve.byte_len
        if not isinstance(data, (bytes, bytearray)) or len(data) != 2 * width + 2:
            raise InvalidScalarEncoding(
                f"{curve.name} signature must be {2 * width + 2} bytes"
            )
        r = int.from_bytes(data[:width], "big")
        s = int.from_bytes(data[width:2 * width], "big")
        if not (1 <= r < curve.n and 1 <= s < curve.n):
            raise InvalidScalarEncoding("signature scalar outside [1, N-1]")
        return cls(r, s, data[-2], data[-1])

    def to_dict(self):
        """
        Prepares the signature for JSON transport alongside the message it
        signs.
        """
        return {"r": format(self.r, "x"), "s": format(self.s, "x"), "v": self.v, "o": self.o}

    @staticmethod
    def from_dict(data):
        return Signature(
            int(data["r"], 16),
            int(data["s"], 16),
            int(data.get("v", 0)),
            int(data.get("o", 0)),
        )
