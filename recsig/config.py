"""
config.py – Library-wide constants
===================================
Byte layouts and limits shared by the key, address and multisig modules.
Two values can be overridden from the environment:

  RECSIG_CURVE      curve used when a caller passes no curve (default P-256)
  RECSIG_LOG_LEVEL  level used by configure_logging() (default WARNING)
"""

import logging
import os


# Curve picked by curves.get_curve() when no name is given
DEFAULT_CURVE = os.getenv("RECSIG_CURVE", "P-256")

# Only the first 32 bytes of a message hash are signed
HASH_PREFIX_LENGTH = 32

# Address layout: [compression flag][partner count][digest]
ADDRESS_LENGTH = 22
DIGEST_LENGTH  = 20

UNCOMPRESSED_FLAG   = 0x00
COMPRESSED_FLAG     = 0x01
SINGLE_SIGNER_COUNT = 0x00

# Partner count and order index both travel in a single byte
MAX_PARTNERS = 255

# Compressed public key prefixes (even / odd Y)
EVEN_Y_PREFIX = 0x02
ODD_Y_PREFIX  = 0x03

LOG_LEVEL  = os.getenv("RECSIG_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level=None):
    """Root logging setup for the demo and experiment scripts."""
    level = level or LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
