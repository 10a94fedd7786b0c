"""
curves.py – Curve parameter objects
===================================
Wraps the NIST prime curves shipped with python-ecdsa in a small immutable
parameter object.  Every curve here satisfies

    y^2 = x^3 - 3x + B   (mod P)

which is the form the recovery kernel in ecmath.py solves.

Public interface
----------------
  get_curve(name=None)   -> Curve   (defaults to config.DEFAULT_CURVE)
  P224, P256, P384                  (ready-made Curve instances)
"""

from dataclasses import dataclass, field

from ecdsa import curves as ecdsa_curves

from recsig import config


@dataclass(frozen=True)
class Curve:
    """
    Read-only parameters of a short Weierstrass curve with a = -3.

    :param name: Canonical name, e.g. 'P-256'.
    :param p: Field prime.
    :param n: Group order of the base point.
    :param b: Curve coefficient B.
    :param gx: Base point X.
    :param gy: Base point Y.
    :param byte_len: Width in bytes of an encoded scalar or coordinate.
    """
    name: str
    p: int
    n: int
    b: int
    gx: int
    gy: int
    byte_len: int
    backend: object = field(compare=False, repr=False, default=None)

    @classmethod
    def from_ecdsa(cls, name, backend):
        fp = backend.curve
        if fp.a() % fp.p() != fp.p() - 3:
            raise ValueError(f"{name}: only curves with a = -3 are supported")
        generator = backend.generator
        return cls(
            name=name,
            p=int(fp.p()),
            n=int(backend.order),
            b=int(fp.b()),
            gx=int(generator.x()),
            gy=int(generator.y()),
            byte_len=backend.baselen,
            backend=backend,
        )

    @property
    def fp(self):
        """The python-ecdsa CurveFp used for point arithmetic."""
        return self.backend.curve

    @property
    def generator(self):
        return self.backend.generator

    def __str__(self):
        return self.name


P224 = Curve.from_ecdsa("P-224", ecdsa_curves.NIST224p)
P256 = Curve.from_ecdsa("P-256", ecdsa_curves.NIST256p)
P384 = Curve.from_ecdsa("P-384", ecdsa_curves.NIST384p)

_REGISTRY = {}
for _curve, _aliases in (
    (P224, ("NIST224p", "secp224r1")),
    (P256, ("NIST256p", "secp256r1", "prime256v1")),
    (P384, ("NIST384p", "secp384r1")),
):
    for _name in (_curve.name,) + _aliases:
        _REGISTRY[_name.lower()] = _curve


def get_curve(name=None):
    """
    Looks a curve up by name (case-insensitive).  Passing a Curve returns it
    unchanged so call sites can accept either form.
    """
    if isinstance(name, Curve):
        return name
    if name is None:
        name = config.DEFAULT_CURVE
    try:
        return _REGISTRY[name.lower()]
    except KeyError:
        raise KeyError(f"unsupported curve: {name!r}") from None


def supported_curves():
    return [P224, P256, P384]
