import sys
import os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from recsig.address import address_to_hex, multisig_address_of
from recsig.curves import get_curve
from recsig.multisig import generate_multisig_key, partner_proof, verify_partner_proof

curve = get_curve()

# 4 partners in fixed slots
keys = [generate_multisig_key(curve, i, 4) for i in range(4)]
pubs = [k.public_key() for k in keys]

addr = multisig_address_of(pubs)

# proof for the 4th partner (index 3)
proof = partner_proof(pubs, 3)

print("Multisig Address:", address_to_hex(addr))
print("\nProof Path:")
for sibling, sibling_is_right in proof:
    print(("R " if sibling_is_right else "L ") + sibling.hex())

print("\nPartner 3 member:", verify_partner_proof(addr, pubs[3], 3, proof))
print("Partner 0 with 3's proof:", verify_partner_proof(addr, pubs[0], 3, proof))
