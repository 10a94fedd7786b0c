"""
address.py – Address codec
==========================
Every address is exactly 22 bytes:

  byte 0      compression flag   0x00 uncompressed key, 0x01 compressed / multisig
  byte 1      partner count      0x00 single signer, 1..255 multisig partners
  bytes 2..21 digest

Single signer: digest = SHA-256(key encoding)[:20], where the encoding is the
compressed or uncompressed form named by byte 0.
Multisig: digest = Merkle root over the partners' compressed keys, in order,
truncated to 20 bytes.

Public interface
----------------
  address_of(pub, compressed)          -> bytes
  multisig_address_of(pubs)            -> bytes
  is_address_valid(addr)               -> bool
  is_address_compressed(addr)          -> bool
  is_multisig_address(addr)            -> bool
  address_partner_count(addr)          -> int
  address_to_hex(addr) / address_from_hex(text)
"""

import hashlib

from recsig import config
from recsig.errors import PreconditionViolation
from recsig.merkle import merkle_root


def address_of(public_key, compressed=True):
    """
    Derives the single-signer address of a public key.
    """
    if compressed:
        flag, encoded = config.COMPRESSED_FLAG, public_key.compressed_bytes()
    else:
        flag, encoded = config.UNCOMPRESSED_FLAG, public_key.to_bytes()

    digest = hashlib.sha256(encoded).digest()[:config.DIGEST_LENGTH]
    return bytes([flag, config.SINGLE_SIGNER_COUNT]) + digest


def multisig_address_of(public_keys):
    """
    Derives the address jointly owned by an ordered group of partner keys.

    The list position of each key is its order index; the keys are never
    sorted, so the same keys in another order give another address.
    """
    public_keys = list(public_keys)
    if not 1 <= len(public_keys) <= config.MAX_PARTNERS:
        raise PreconditionViolation(
            f"a multisig group needs 1..{config.MAX_PARTNERS} keys, got {len(public_keys)}"
        )

    root = merkle_root([pub.compressed_bytes() for pub in public_keys])
    return bytes([config.COMPRESSED_FLAG, len(public_keys)]) + root[:config.DIGEST_LENGTH]


# ---------------- Predicates ----------------

def is_address_valid(address):
    if not isinstance(address, (bytes, bytearray)):
        return False
    if len(address) != config.ADDRESS_LENGTH:
        return False

    flag, count = address[0], address[1]
    if flag not in (config.UNCOMPRESSED_FLAG, config.COMPRESSED_FLAG):
        return False
    # multisig addresses are always built over compressed keys
    if count != config.SINGLE_SIGNER_COUNT and flag != config.COMPRESSED_FLAG:
        return False
    return True


def is_address_compressed(address):
    return is_address_valid(address) and address[0] == config.COMPRESSED_FLAG


def is_multisig_address(address):
    return is_address_valid(address) and address[1] != config.SINGLE_SIGNER_COUNT


def address_partner_count(address):
    """Number of partners behind a multisig address, 0 for anything else."""
    if not is_multisig_address(address):
        return 0
    return address[1]


# ---------------- Display ----------------

def address_to_hex(address):
    return "0x" + bytes(address).hex()


def address_from_hex(text):
    """
    Parses a 0x-prefixed hex address.  Raises ValueError for text that is not
    a valid 22-byte address.
    """
    if text.startswith(("0x", "0X")):
        text = text[2:]
    address = bytes.fromhex(text)
    if not is_address_valid(address):
        raise ValueError(f"not a valid address: 0x{text}")
    return address
