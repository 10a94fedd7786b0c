import hashlib
import logging
from dataclasses import replace

from recsig.address import address_partner_count, address_to_hex, multisig_address_of
from recsig.config import configure_logging
from recsig.curves import get_curve
from recsig.multisig import generate_multisig_key, verify_multisig

configure_logging("INFO")
log = logging.getLogger("demo")

curve = get_curve("P-256")
data = hashlib.sha256(b"100 barrels delivered").digest()

# two partners, slots 0 and 1
key1 = generate_multisig_key(curve, 0, 2)
key2 = generate_multisig_key(curve, 1, 2)

sigs = [key1.sign(data), key2.sign(data)]
addr = multisig_address_of([key1.public_key(), key2.public_key()])

log.info("Multisig address : %s (%d partners)", address_to_hex(addr), address_partner_count(addr))
log.info("Valid            : %s", verify_multisig(sigs, data, addr, curve))

corrupted = [replace(sigs[0], s=sigs[0].s - 1), sigs[1]]
log.info("Corrupted S      : %s", verify_multisig(corrupted, data, addr, curve))
