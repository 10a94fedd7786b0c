"""
recovery_id_analysis.py
=======================
Statistical sanity check of the signer's output.

For an honest nonce k drawn uniformly from [1, N-1]:

  1. The recovery id v is the choice between two mirrored y roots, so it
     should behave like a fair coin:  v ~ Bernoulli(0.5).
  2. r = (k*G).x is spread over the whole scalar range, so the normalised
     value r / N should look Uniform(0, 1).

Theory
------
Point negation maps k*G to (N-k)*G with the same x and the mirrored y.
k and N-k are equally likely, so exactly half of all nonces for a given r
give v = 0.  A biased v, or r clustered in a corner of [0, N), would point
at a broken random source.

Run from the project root:
    python3 experiments/recovery_id_analysis.py
"""

import sys
import os
import hashlib
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import numpy as np
import matplotlib.pyplot as plt
from scipy.stats import binomtest, kstest

from recsig.curves import supported_curves
from recsig.keys import generate_key

NUM_SIGNATURES = 400
ALPHA          = 0.01


def collect(curve, n_sigs):
    """Signs n_sigs distinct messages and returns (v values, r / N values)."""
    key = generate_key(curve)
    vs, rs = [], []
    for i in range(n_sigs):
        digest = hashlib.sha256(f"shipment #{i}".encode()).digest()
        sig = key.sign(digest)
        vs.append(sig.v)
        rs.append(sig.r / curve.n)
    return np.array(vs), np.array(rs)


print("=" * 62)
print("  Recovery id & r distribution")
print("=" * 62)

results = {}
for curve in supported_curves():
    vs, rs = collect(curve, NUM_SIGNATURES)
    ones = int(vs.sum())
    p_v = binomtest(ones, len(vs), 0.5).pvalue
    p_r = kstest(rs, "uniform").pvalue
    results[curve.name] = (vs, rs)

    print(f"\n{curve.name}")
    print(f"  v = 1 fraction : {ones / len(vs):.3f}   (binomial p = {p_v:.3f})")
    print(f"  r / N mean     : {rs.mean():.3f}   (KS uniform p = {p_r:.3f})")
    verdict = "consistent" if min(p_v, p_r) > ALPHA else "SUSPICIOUS"
    print(f"  verdict        : {verdict} at alpha = {ALPHA}")

fig, axes = plt.subplots(1, len(results), figsize=(5 * len(results), 4), sharey=True)
for ax, (name, (vs, rs)) in zip(axes, results.items()):
    ax.hist(rs, bins=20, range=(0, 1), color="#4C72B0", edgecolor="white", alpha=0.8)
    ax.axhline(len(rs) / 20, color="#C44E52", linestyle="--", label="uniform expectation")
    ax.set_title(f"{name}: r / N  (v=1 in {vs.mean() * 100:.1f}%)")
    ax.set_xlabel("r / N")
    ax.legend(fontsize=8)
axes[0].set_ylabel("count")

output_path = os.path.join(os.path.dirname(__file__), "recovery_id_output.png")
plt.savefig(output_path, dpi=150, bbox_inches="tight")
print(f"\nPlot saved to: {output_path}")
