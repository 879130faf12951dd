"""Bidirectional type inference and checking for kernel terms."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from frkernel.errors import (
    NotAFunctionType,
    TypeMismatch,
    UnboundVariable,
    UniverseError,
    UnknownConstructor,
    UnknownInductive,
)
from frkernel.kernel.ast import (
    App,
    Const,
    Ctor,
    Elim,
    Ind,
    Lam,
    NatLit,
    Pi,
    Prop,
    Term,
    Univ,
    Var,
    is_sort,
)
from frkernel.kernel.ctx import Ctx
from frkernel.kernel.decls import (
    Axiom,
    ConstructorEntry,
    Definition,
    InductiveEntry,
    UniverseAxiom,
)
from frkernel.kernel.reduce import is_def_eq, whnf
from frkernel.kernel.tel import decompose_app
from frkernel.kernel.universes import Sort, format_sort, pi_sort, sort_of_sort

if TYPE_CHECKING:
    from frkernel.kernel.env import Environment


def infer_sort(env: Environment, ctx: Ctx, ty: Term) -> Sort:
    """Return the sort of ``ty``, raising ``UniverseError`` if it is not a type."""
    sort = whnf(env, infer(env, ctx, ty))
    if not is_sort(sort):
        raise UniverseError(
            "Expected a type:\n"
            f"  term = {ty}\n"
            f"  inferred = {sort}"
        )
    return sort


def _expect_convertible(
    env: Environment, ctx: Ctx, term: Term, expected: Term, inferred: Term
) -> None:
    if is_def_eq(env, ctx, expected, inferred):
        return
    expected_whnf = whnf(env, expected)
    inferred_whnf = whnf(env, inferred)
    if is_sort(expected_whnf) and is_sort(inferred_whnf):
        raise UniverseError(
            "Universe mismatch:\n"
            f"  term = {term}\n"
            f"  expected = {format_sort(expected_whnf)}\n"
            f"  inferred = {format_sort(inferred_whnf)}"
        )
    raise TypeMismatch("Type mismatch", expected, inferred, term)


def _const_type(env: Environment, name: str) -> Term:
    match env.lookup(name):
        case UniverseAxiom(universe=universe):
            return sort_of_sort(universe)
        case Axiom(ty=ty) | Definition(ty=ty) | InductiveEntry(ty=ty) | ConstructorEntry(ty=ty):
            return ty
    raise UnboundVariable(f"Unknown global constant: {name}")


def _nat_lit_type(env: Environment) -> Term:
    """The configured natural-number type, once its shape is confirmed."""
    cfg = env.config
    info = env.inductive(cfg.nat_inductive)
    if info.num_params or info.num_indices:
        raise UnknownInductive(
            f"Numerals need {info.name} without parameters or indices:\n"
            f"  type = {info.ty}"
        )
    nat = Ind(info.name)
    shapes = (
        (env.constructor(info.name, cfg.nat_zero), nat),
        (env.constructor(info.name, cfg.nat_succ), Pi(nat, nat)),
    )
    for entry, expected in shapes:
        if not is_def_eq(env, Ctx(), expected, entry.ty):
            raise TypeMismatch(
                f"Numeral constructor {entry.qualified_name} has the wrong type",
                expected,
                entry.ty,
            )
    return nat


def _motive_sort(env: Environment, ctx: Ctx, motive: Term, binders: int) -> Sort:
    """Sort the motive lands in after taking the indices and the scrutinee."""
    ty = infer(env, ctx, motive)
    for _ in range(binders):
        ty = whnf(env, ty)
        if not isinstance(ty, Pi):
            raise NotAFunctionType(
                "Eliminator motive must take the indices and the scrutinee:\n"
                f"  motive = {motive}\n"
                f"  motive type = {ty}"
            )
        ty = ty.return_ty
    sort = whnf(env, ty)
    if not is_sort(sort):
        raise UniverseError(
            "Eliminator motive must return a sort:\n"
            f"  motive = {motive}\n"
            f"  codomain = {sort}"
        )
    return sort


def _apply_spine(
    env: Environment, ctx: Ctx, fn_ty: Term, args: Sequence[Term], trusted: int
) -> Term:
    """Instantiate the Pi spine ``fn_ty`` with ``args``.

    The first ``trusted`` arguments are known to be well-typed and are only
    substituted.
    """
    ty = fn_ty
    for i, arg in enumerate(args):
        ty = whnf(env, ty)
        if not isinstance(ty, Pi):
            raise NotAFunctionType(
                "Too many arguments:\n"
                f"  argument = {arg}\n"
                f"  type = {ty}"
            )
        if i >= trusted:
            check(env, ctx, arg, ty.arg_ty)
        ty = ty.return_ty.subst(arg)
    return ty


def _infer_elim(env: Environment, ctx: Ctx, elim: Elim) -> Term:
    """Type an eliminator by instantiating its recursor type.

    The parameters and indices are read off the scrutinee's type; the motive
    and cases are checked against the synthesised recursor spine.
    """
    info = env.inductive(elim.inductive)
    p, q = info.num_params, info.num_indices
    if len(elim.cases) != len(info.constructors):
        raise UnknownConstructor(
            f"Eliminator for {info.name} needs one case per constructor:\n"
            f"  constructors = {', '.join(info.constructors) or '(none)'}\n"
            f"  cases given = {len(elim.cases)}"
        )

    scrut_ty = whnf(env, infer(env, ctx, elim.scrutinee))
    head, args = decompose_app(scrut_ty)
    if head != Ind(info.name) or len(args) != p + q:
        raise TypeMismatch(
            "Eliminator scrutinee not of the eliminated inductive type",
            Ind(info.name),
            scrut_ty,
            elim.scrutinee,
        )
    params, indices = args[:p], args[p:]

    sort = _motive_sort(env, ctx, elim.motive, q + 1)
    if not info.large_elimination and sort != Prop():
        raise UniverseError(
            f"Proposition {info.name} can only be eliminated into Prop:\n"
            f"  motive = {elim.motive}\n"
            f"  motive sort = {format_sort(sort)}"
        )

    rec_ty = env.recursor_type(info.name, sort)
    actuals = (*params, elim.motive, *elim.cases, *indices, elim.scrutinee)
    return _apply_spine(env, ctx, rec_ty, actuals, trusted=p)


def infer(env: Environment, ctx: Ctx, term: Term) -> Term:
    """Infer the type of ``term`` in ``ctx``.

    Raises a ``KernelError`` on ill-formed terms instead of returning
    ``None`` so callers never silently accept mistakes.
    """
    match term:
        case Var(k):
            return ctx.type_of(k)
        case Prop():
            return sort_of_sort(term)
        case Univ():
            return sort_of_sort(term)
        case Pi(arg_ty, return_ty, name):
            arg_sort = infer_sort(env, ctx, arg_ty)
            return_sort = infer_sort(env, ctx.bind(arg_ty, name), return_ty)
            return pi_sort(arg_sort, return_sort)
        case Lam(arg_ty, body, name):
            infer_sort(env, ctx, arg_ty)
            body_ty = infer(env, ctx.bind(arg_ty, name), body)
            return Pi(arg_ty, body_ty, name)
        case App(f, a):
            f_ty = whnf(env, infer(env, ctx, f))
            if not isinstance(f_ty, Pi):
                raise NotAFunctionType(
                    "Application of non-function:\n"
                    f"  term = {term}\n"
                    f"  function = {f}\n"
                    f"  inferred f_ty = {f_ty}"
                )
            check(env, ctx, a, f_ty.arg_ty)
            return f_ty.return_ty.subst(a)
        case Const(name):
            return _const_type(env, name)
        case Ind(name):
            return env.inductive(name).ty
        case Ctor(inductive, name):
            return env.constructor(inductive, name).ty
        case NatLit():
            return _nat_lit_type(env)
        case Elim():
            return _infer_elim(env, ctx, term)

    raise TypeError(f"Unexpected term in infer: {term!r}")


def check(env: Environment, ctx: Ctx, term: Term, ty: Term) -> None:
    """Raise a ``KernelError`` unless ``term`` has type ``ty`` in ``ctx``.

    Lambdas are checked against the expected Pi directly; every other term is
    inferred and compared up to definitional equality.
    """
    if isinstance(term, Lam):
        expected = whnf(env, ty)
        if isinstance(expected, Pi):
            infer_sort(env, ctx, term.arg_ty)
            if not is_def_eq(env, ctx, term.arg_ty, expected.arg_ty):
                raise TypeMismatch(
                    "Lambda domain mismatch", expected.arg_ty, term.arg_ty, term
                )
            check(env, ctx.bind(term.arg_ty, term.name), term.body, expected.return_ty)
            return
    inferred = infer(env, ctx, term)
    _expect_convertible(env, ctx, term, ty, inferred)


__all__ = ["infer", "check", "infer_sort"]
