import sys
import os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from recsig.curves import get_curve
from recsig.keys import PrivateKey, generate_key


def address_bits(address):
    """
    Returns the 160-bit digest part of an address as a bitstring.
    Flag bytes are left out; they are identical for both keys.
    """
    digest = address[2:]
    return bin(int.from_bytes(digest, "big"))[2:].zfill(8 * len(digest))


def bit_difference(a, b):
    """
    Compares two bitstrings and returns the total number of differing bits.
    """
    return sum(x != y for x, y in zip(a, b))


curve = get_curve("P-256")

# original key
k1 = generate_key(curve)

# neighbouring scalar
k2 = PrivateKey(k1.d % (curve.n - 1) + 1, curve)

for compressed in (True, False):
    a1 = address_bits(k1.address(compressed))
    a2 = address_bits(k2.address(compressed))

    diff = bit_difference(a1, a2)
    percent = (diff / len(a1)) * 100

    label = "compressed  " if compressed else "uncompressed"
    print(f"[{label}] Bits changed: {diff} / {len(a1)}  ({percent:.2f}%)")
