"""Definitional equality (conversion checking)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from frkernel.errors import KernelError
from frkernel.kernel.ast import App, Ctor, Elim, Lam, NatLit, Pi, Prop, Term, Var
from frkernel.kernel.ctx import Ctx
from frkernel.kernel.tel import decompose_app

from .whnf import whnf

if TYPE_CHECKING:
    from frkernel.kernel.env import Environment

logger = logging.getLogger(__name__)


def is_def_eq(env: Environment, ctx: Ctx, a: Term, b: Term) -> bool:
    """Return ``True`` when ``a`` and ``b`` are definitionally equal in ``ctx``.

    Both sides are reduced to weak-head normal form and compared structurally,
    recursing under binders. Eta for functions and proof irrelevance are
    applied when enabled in ``env.config``.
    """
    if a == b:
        return True
    a1 = whnf(env, a)
    b1 = whnf(env, b)
    if a1 == b1 or _structurally_equal(env, ctx, a1, b1):
        return True
    if env.config.proof_irrelevance:
        return _same_proposition(env, ctx, a1, b1)
    return False


def _structurally_equal(env: Environment, ctx: Ctx, a: Term, b: Term) -> bool:
    match a, b:
        case Pi(d1, c1), Pi(d2, c2):
            return is_def_eq(env, ctx, d1, d2) and is_def_eq(env, ctx.bind(d1), c1, c2)
        case Lam(d1, c1), Lam(d2, c2):
            return is_def_eq(env, ctx, d1, d2) and is_def_eq(env, ctx.bind(d1), c1, c2)
        case Lam(d, body), other if env.config.eta:
            return is_def_eq(env, ctx.bind(d), body, App(other.shift(1), Var(0)))
        case other, Lam(d, body) if env.config.eta:
            return is_def_eq(env, ctx.bind(d), App(other.shift(1), Var(0)), body)
        case NatLit() as lit, other:
            return _numeral_equal(env, lit, other)
        case other, NatLit() as lit:
            return _numeral_equal(env, lit, other)
        case App(), App():
            h1, args1 = decompose_app(a)
            h2, args2 = decompose_app(b)
            return (
                len(args1) == len(args2)
                and is_def_eq(env, ctx, h1, h2)
                and all(is_def_eq(env, ctx, x, y) for x, y in zip(args1, args2))
            )
        case Elim(i1, m1, cs1, s1), Elim(i2, m2, cs2, s2):
            return (
                i1 == i2
                and len(cs1) == len(cs2)
                and is_def_eq(env, ctx, s1, s2)
                and is_def_eq(env, ctx, m1, m2)
                and all(is_def_eq(env, ctx, x, y) for x, y in zip(cs1, cs2))
            )
    return False


def _numeral_equal(env: Environment, lit: NatLit, other: Term) -> bool:
    """Compare a numeral with ``other`` one ``succ`` layer at a time."""
    cfg = env.config
    succ = Ctor(cfg.nat_inductive, cfg.nat_succ)
    zero = Ctor(cfg.nat_inductive, cfg.nat_zero)
    value = lit.value
    while True:
        other = whnf(env, other)
        if isinstance(other, NatLit):
            return other.value == value
        head, args = decompose_app(other)
        if value > 0 and head == succ and len(args) == 1:
            value -= 1
            other = args[0]
            continue
        return value == 0 and other == zero


def _same_proposition(env: Environment, ctx: Ctx, a: Term, b: Term) -> bool:
    """Any two proofs of the same proposition are equal."""
    # Deferred import: typing depends on conversion.
    from frkernel.kernel.typing import infer

    try:
        ty_a = infer(env, ctx, a)
        if whnf(env, infer(env, ctx, ty_a)) != Prop():
            return False
        ty_b = infer(env, ctx, b)
    except KernelError as exc:
        logger.debug("Proof-irrelevance check skipped: %s", exc)
        return False
    return is_def_eq(env, ctx, ty_a, ty_b)


__all__ = ["is_def_eq"]
