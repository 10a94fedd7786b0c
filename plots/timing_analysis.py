"""
Timing analysis of sign / verify / reconstruct
===============================================
Measures how long each operation takes on every supported curve and how
multisig verification grows with the number of partners.

Part 1: Per-operation cost:
    For each curve, time NUM_RUNS sign, verify and reconstruct calls and plot
    the mean with a one-standard-deviation error bar.

Part 2: Multisig verification vs group size:
    On the default curve, time verify_multisig for groups of 1..MAX_GROUP
    partners.  Every partner costs one reconstruction plus one verification,
    so the curve should be close to linear.

Run from the project root:
    python3 plots/timing_analysis.py
"""

import sys
import os
import time
import hashlib
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.gridspec as gridspec

from recsig.address import multisig_address_of
from recsig.curves import get_curve, supported_curves
from recsig.keys import generate_key
from recsig.multisig import generate_multisig_key, verify_multisig
from recsig.recovery import reconstruct_public_key
from recsig.signing import sign, verify

# ─────────────────────────────────────────────────────────────────────────────
# Parameters
# ─────────────────────────────────────────────────────────────────────────────

NUM_RUNS  = 20
MAX_GROUP = 8
DIGEST    = hashlib.sha256(b"Tanker MV-Aurora loaded: 5000 barrels crude").digest()


def time_call(fn, *args):
    start = time.perf_counter()
    fn(*args)
    return (time.perf_counter() - start) * 1000.0


def time_operations(curve, runs):
    """Milliseconds per call for sign, verify and reconstruct."""
    key = generate_key(curve)
    pub = key.public_key()
    samples = {"sign": [], "verify": [], "reconstruct": []}
    for _ in range(runs):
        samples["sign"].append(time_call(sign, key, DIGEST))
        sig = sign(key, DIGEST)
        samples["verify"].append(time_call(verify, pub, DIGEST, sig))
        samples["reconstruct"].append(time_call(reconstruct_public_key, sig, DIGEST, curve))
    return {op: np.array(ms) for op, ms in samples.items()}


def time_multisig(curve, partners):
    keys = [generate_multisig_key(curve, i, partners) for i in range(partners)]
    addr = multisig_address_of([k.public_key() for k in keys])
    sigs = [k.sign(DIGEST) for k in keys]
    return time_call(verify_multisig, sigs, DIGEST, addr, curve)


fig = plt.figure(figsize=(15, 6))
fig.suptitle("Recoverable ECDSA: operation cost", fontsize=13, fontweight="bold", y=1.01)
gs = gridspec.GridSpec(1, 2, figure=fig, wspace=0.3)

# ─────────────────────────────────────────────────────────────────────────────
# PART 1: Per-operation cost
# ─────────────────────────────────────────────────────────────────────────────

ax1 = fig.add_subplot(gs[0])

curves = supported_curves()
ops = ["sign", "verify", "reconstruct"]
timings = {curve.name: time_operations(curve, NUM_RUNS) for curve in curves}

width = 0.25
x = np.arange(len(curves))
for i, op in enumerate(ops):
    means = [timings[c.name][op].mean() for c in curves]
    stds  = [timings[c.name][op].std() for c in curves]
    ax1.bar(x + (i - 1) * width, means, width, yerr=stds, capsize=3, label=op)

ax1.set_xticks(x)
ax1.set_xticklabels([c.name for c in curves])
ax1.set_ylabel("milliseconds per call", fontsize=10)
ax1.set_title(f"Part 1: mean of {NUM_RUNS} runs", fontsize=11)
ax1.legend(fontsize=8.5)
ax1.grid(axis="y", linestyle="--", alpha=0.4)

# ─────────────────────────────────────────────────────────────────────────────
# PART 2: Multisig verification vs group size
# ─────────────────────────────────────────────────────────────────────────────

ax2 = fig.add_subplot(gs[1])

default_curve = get_curve()
group_sizes = np.arange(1, MAX_GROUP + 1)
ms_verify = np.array([time_multisig(default_curve, int(n)) for n in group_sizes])

slope, intercept = np.polyfit(group_sizes, ms_verify, 1)
ax2.plot(group_sizes, ms_verify, marker="o", color="#4C72B0", linewidth=2.0,
         label="verify_multisig")
ax2.plot(group_sizes, slope * group_sizes + intercept, color="#C44E52",
         linestyle="--", label=f"fit: {slope:.1f} ms / partner")
ax2.set_xlabel("partners", fontsize=10)
ax2.set_ylabel("milliseconds", fontsize=10)
ax2.set_title(f"Part 2: multisig verification on {default_curve.name}", fontsize=11)
ax2.legend(fontsize=8.5)
ax2.grid(linestyle="--", alpha=0.4)

output_path = os.path.join(os.path.dirname(__file__), "timing_output.png")
plt.savefig(output_path, dpi=150, bbox_inches="tight")
print(f"\nPlot saved to: {output_path}")

print("\n" + "=" * 62)
print("  TIMING SUMMARY (ms)")
print("=" * 62)
print(f"  {'curve':>8} | {'sign':>8} | {'verify':>8} | {'recover':>8}")
print(f"  {'-'*8}-+-{'-'*8}-+-{'-'*8}-+-{'-'*8}")
for c in curves:
    t = timings[c.name]
    print(f"  {c.name:>8} | {t['sign'].mean():>8.2f} | {t['verify'].mean():>8.2f} | {t['reconstruct'].mean():>8.2f}")
print(f"\n  multisig: ~{slope:.2f} ms per extra partner on {default_curve.name}")

plt.show()
