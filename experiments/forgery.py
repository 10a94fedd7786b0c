import sys
import os
import hashlib
from dataclasses import replace
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from recsig.address import multisig_address_of
from recsig.curves import get_curve
from recsig.keys import generate_key
from recsig.multisig import generate_multisig_key, verify_multisig
from recsig.recovery import recover_address, verify_address


def simulate_forgery():

    curve = get_curve()
    data = hashlib.sha256(b"Payment confirmed: $42000 for INV-1007").digest()
    forged = hashlib.sha256(b"Payment confirmed: $92000 for INV-1007").digest()

    # single signer: only the address is published
    owner = generate_key(curve)
    addr = owner.address()
    sig = owner.sign(data)

    attempts = [
        ("genuine signature", sig, data),
        ("same signature, forged data", sig, forged),
        ("r shifted by one", replace(sig, r=sig.r - 1), data),
        ("recovery id flipped", replace(sig, v=1 - sig.v), data),
        ("outsider signature", generate_key(curve).sign(data), data),
    ]

    print("Single-signer address:", addr.hex())
    for label, attempt, message in attempts:
        ok = verify_address(addr, message, attempt, curve)
        mark = "✅ accepted" if ok else "❌ rejected"
        print(f"  {mark}  {label}")

    print("  Recovered signer:", recover_address(sig, data, curve).hex())

    # 2-of-2 multisig
    k0 = generate_multisig_key(curve, 0, 2)
    k1 = generate_multisig_key(curve, 1, 2)
    maddr = multisig_address_of([k0.public_key(), k1.public_key()])
    s0, s1 = k0.sign(data), k1.sign(data)

    attempts = [
        ("both partners", [s0, s1]),
        ("partner 0 alone", [s0]),
        ("partner 0 twice", [s0, s0]),
        ("partner 0 claims slot 1", [s0, replace(s0, o=1)]),
        ("partner 1 signs forged data", [s0, k1.sign(forged)]),
    ]

    print("\nMultisig address:", maddr.hex())
    for label, sigs in attempts:
        ok = verify_multisig(sigs, data, maddr, curve)
        mark = "✅ accepted" if ok else "❌ rejected"
        print(f"  {mark}  {label}")


if __name__ == "__main__":
    simulate_forgery()
