"""Iota reduction: eliminators applied to constructor values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from frkernel.errors import NotAFunctionType
from frkernel.kernel.ast import Ctor, Elim, NatLit, Pi, Term
from frkernel.kernel.decls import ConstructorEntry
from frkernel.kernel.tel import ArgList, decompose_app, mk_app, mk_lams

if TYPE_CHECKING:
    from frkernel.kernel.env import Environment


def unfold_nat_lit(env: Environment, lit: NatLit) -> Term:
    """Expose one constructor layer of a numeral: ``3`` becomes ``succ 2``."""
    cfg = env.config
    if lit.value == 0:
        return Ctor(cfg.nat_inductive, cfg.nat_zero)
    return mk_app(Ctor(cfg.nat_inductive, cfg.nat_succ), NatLit(lit.value - 1))


def _peel_pis(env: Environment, ty: Term, count: int) -> list[Term]:
    from .whnf import whnf

    binders: list[Term] = []
    for _ in range(count):
        ty = whnf(env, ty)
        if not isinstance(ty, Pi):
            raise NotAFunctionType(f"Expected {count} binders in a recursive field, got {ty}")
        binders.append(ty.arg_ty)
        ty = ty.return_ty
    return binders


def _inductive_hypotheses(
    env: Environment,
    elim: Elim,
    entry: ConstructorEntry,
    params: ArgList,
    fields: ArgList,
) -> list[Term]:
    ihs: list[Term] = []
    for j, r in entry.recursive:
        field = fields[j]
        if r == 0:
            ihs.append(Elim(elim.inductive, elim.motive, elim.cases, field))
            continue
        field_ty = entry.fields[j].instantiate(params + fields[:j])
        binders = _peel_pis(env, field_ty, r)
        body = Elim(
            elim.inductive,
            elim.motive.shift(r),
            tuple(c.shift(r) for c in elim.cases),
            mk_app(field.shift(r), ArgList.vars(r)),
        )
        ihs.append(mk_lams(*binders, body=body))
    return ihs


def iota_head_step(env: Environment, t: Term) -> Term:
    """Fire ``Elim`` on a fully applied constructor of its inductive.

    The selected case receives the constructor's fields followed by one
    inductive hypothesis per recursive field. Anything else is stuck; the
    scrutinee is still brought to weak-head normal form so that progress
    under it is kept.
    """
    from .whnf import whnf

    if not isinstance(t, Elim):
        return t
    scrutinee = whnf(env, t.scrutinee)
    target = scrutinee
    if isinstance(target, NatLit) and t.inductive == env.config.nat_inductive:
        target = unfold_nat_lit(env, target)
    head, args = decompose_app(target)
    if isinstance(head, Ctor) and head.inductive == t.inductive:
        info = env.inductive(t.inductive)
        entry = env.constructor(head.inductive, head.name)
        if len(args) == info.num_params + entry.arity:
            params = args[: info.num_params]
            fields = args[info.num_params :]
            ihs = _inductive_hypotheses(env, t, entry, params, fields)
            return mk_app(t.cases[entry.position], fields, ArgList.of(*ihs))
    if scrutinee is t.scrutinee:
        return t
    return Elim(t.inductive, t.motive, t.cases, scrutinee)


__all__ = ["iota_head_step", "unfold_nat_lit"]
