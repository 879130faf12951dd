"""Checking inductive declarations and synthesising their eliminators."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Sequence

from frkernel.errors import MalformedIndices, UniverseError
from frkernel.kernel.ast import Ctor, Ind, Pi, Prop, Term, Var, is_sort, mentions
from frkernel.kernel.ctx import Ctx
from frkernel.kernel.decls import ConstructorEntry, InductiveDecl, InductiveEntry
from frkernel.kernel.positivity import recursive_field
from frkernel.kernel.reduce import whnf
from frkernel.kernel.tel import ArgList, Telescope, decompose_app, decompose_pi, mk_app, mk_pis
from frkernel.kernel.typing import infer_sort
from frkernel.kernel.universes import format_sort, sort_leq

if TYPE_CHECKING:
    from frkernel.kernel.env import Environment


def _named_pis(binders: Sequence[tuple[str, Term]], body: Term) -> Term:
    for name, ty in reversed(binders):
        body = Pi(ty, body, name)
    return body


def _check_telescope(
    env: Environment, ctx: Ctx, binders: Sequence[tuple[str, Term]]
) -> Ctx:
    for name, ty in binders:
        infer_sort(env, ctx, ty)
        ctx = ctx.bind(ty, name)
    return ctx


def _split_fields(env: Environment, ty: Term) -> tuple[list[tuple[str, Term]], Term]:
    """Peel the Pi spine of a constructor type into fields and result."""
    fields: list[tuple[str, Term]] = []
    t = whnf(env, ty)
    while isinstance(t, Pi):
        fields.append((t.name, t.arg_ty))
        t = whnf(env, t.return_ty)
    return fields, t


def _check_result(
    decl: InductiveDecl, ctor_name: str, result: Term, num_fields: int
) -> ArgList:
    p, q = len(decl.params), len(decl.indices)
    head, args = decompose_app(result)
    if head != Ind(decl.name):
        raise MalformedIndices(
            f"Constructor {ctor_name} must return {decl.name}:\n"
            f"  result = {result}"
        )
    if len(args) != p + q:
        raise MalformedIndices(
            f"Constructor {ctor_name} applies {decl.name} to the wrong number of arguments:\n"
            f"  result = {result}\n"
            f"  expected arity = {p + q}\n"
            f"  found arity = {len(args)}"
        )
    if args[:p] != ArgList.vars(p, offset=num_fields):
        raise MalformedIndices(
            f"Constructor {ctor_name} must pass the parameters of {decl.name} unchanged:\n"
            f"  result = {result}"
        )
    indices = args[p:]
    if any(mentions(i, decl.name) for i in indices):
        raise MalformedIndices(
            f"Constructor {ctor_name} mentions {decl.name} in its result indices:\n"
            f"  result = {result}"
        )
    return indices


def _check_constructor(
    env: Environment,
    decl: InductiveDecl,
    params_ctx: Ctx,
    position: int,
) -> tuple[ConstructorEntry, bool]:
    """Check one constructor; also report whether all its fields are proofs."""
    ctor = decl.constructors[position]
    p, q = len(decl.params), len(decl.indices)
    infer_sort(env, params_ctx, ctor.ty)
    raw_fields, result = _split_fields(env, ctor.ty)

    fields: list[Term] = []
    recursive: list[tuple[int, int]] = []
    only_proofs = True
    ctx = params_ctx
    for j, (name, field_ty) in enumerate(raw_fields):
        sort = infer_sort(env, ctx, field_ty)
        if not sort_leq(sort, decl.sort):
            raise UniverseError(
                f"Field {name} of {ctor.name} is too large for {decl.name}:\n"
                f"  field = {field_ty}\n"
                f"  field sort = {format_sort(sort)}\n"
                f"  inductive sort = {format_sort(decl.sort)}"
            )
        only_proofs = only_proofs and sort == Prop()
        rec = recursive_field(env, decl.name, field_ty, p, q, depth=j)
        if rec is not None:
            field_ty, r = rec
            recursive.append((j, r))
        fields.append(field_ty)
        ctx = ctx.bind(field_ty, name)

    result_indices = _check_result(decl, ctor.name, result, len(fields))
    entry = ConstructorEntry(
        name=ctor.name,
        inductive=decl.name,
        position=position,
        fields=Telescope.of(*fields),
        result_indices=result_indices,
        recursive=tuple(recursive),
        ty=_named_pis(decl.params, ctor.ty),
        field_names=tuple(name for name, _ in raw_fields),
    )
    return entry, only_proofs


def check_inductive(
    env: Environment, decl: InductiveDecl
) -> tuple[InductiveEntry, tuple[ConstructorEntry, ...]]:
    """Validate ``decl`` against ``env`` and build its environment entries.

    Steps, each of which aborts the declaration on failure:

    1. parameters and indices are types, the target is a sort;
    2. constructor types are well-typed with the inductive provisionally in
       scope;
    3. every field sort is dominated by the target sort;
    4. the inductive only occurs strictly positively in fields;
    5. constructor results apply the inductive to the unchanged parameters
       followed by indices that do not mention it.

    ``env`` itself is never extended; the caller registers the entries.
    """
    params_ctx = _check_telescope(env, Ctx(), decl.params)
    _check_telescope(env, params_ctx, decl.indices)
    if not is_sort(decl.sort):
        raise UniverseError(
            f"Inductive {decl.name} must live in a sort:\n"
            f"  declared = {decl.sort}"
        )

    info = InductiveEntry(
        name=decl.name,
        param_types=decl.param_types,
        index_types=decl.index_types,
        sort=decl.sort,
        constructors=tuple(c.name for c in decl.constructors),
        ty=_named_pis((*decl.params, *decl.indices), decl.sort),
        param_names=tuple(name for name, _ in decl.params),
        index_names=tuple(name for name, _ in decl.indices),
    )
    provisional = env.with_entries(info)

    ctors: list[ConstructorEntry] = []
    all_proof_fields = True
    for position in range(len(decl.constructors)):
        entry, only_proofs = _check_constructor(provisional, decl, params_ctx, position)
        ctors.append(entry)
        all_proof_fields = all_proof_fields and only_proofs

    if decl.sort == Prop():
        # Only syntactic subsingletons may eliminate into data.
        large = len(ctors) == 0 or (len(ctors) == 1 and all_proof_fields)
        info = replace(info, large_elimination=large)
    return info, tuple(ctors)


def _binders(names: Sequence[str], tys: Sequence[Term]) -> list[tuple[str, Term]]:
    return list(zip(names, tys, strict=True))


def _branch_type(
    ind: InductiveEntry, ctor: ConstructorEntry, k: int
) -> Term:
    """Type of the case for constructor ``k``.

    Scoped under the parameters, the motive and the ``k`` earlier cases.
    """
    p = ind.num_params
    m = ctor.arity
    d = 1 + k
    fields = ctor.fields.shift(d)

    ihs: list[tuple[str, Term]] = []
    for ri, (j, r) in enumerate(ctor.recursive):
        field_ty = fields[j].shift(m - j + ri)
        binders, body = decompose_pi(field_ty)
        _, args = decompose_app(body)
        motive = Var(r + ri + m + k)
        field_var = Var(m - 1 - j + ri + r)
        ih_ty = mk_pis(
            binders,
            return_ty=mk_app(motive, args[p:], mk_app(field_var, ArgList.vars(r))),
        )
        ihs.append((f"ih_{ctor.field_names[j]}", ih_ty))

    n_ihs = len(ihs)
    codomain = mk_app(
        Var(n_ihs + m + k),
        ctor.result_indices.shift(d, cutoff=m).shift(n_ihs),
        mk_app(
            Ctor(ind.name, ctor.name),
            ArgList.vars(p, offset=n_ihs + m + d),
            ArgList.vars(m, offset=n_ihs),
        ),
    )
    return _named_pis([*_binders(ctor.field_names, fields), *ihs], codomain)


def recursor_type(
    ind: InductiveEntry, ctors: Sequence[ConstructorEntry], sort: Term
) -> Term:
    """Closed type of the eliminator of ``ind`` into ``sort``::

        Fn(params,
           motive: Fn(indices, x: I params indices) -> sort,
           cases...,
           indices,
           x: I params indices) -> motive indices x

    Each case quantifies over the constructor fields followed by one induction
    hypothesis per recursive field. Binders reuse the declared parameter,
    index and field names; cases are named after their constructor.
    """
    p, q, n = ind.num_params, ind.num_indices, len(ctors)
    head = Ind(ind.name)
    motive_ty = _named_pis(
        [
            *_binders(ind.index_names, ind.index_types),
            ("x", mk_app(head, ArgList.vars(p, offset=q), ArgList.vars(q))),
        ],
        sort,
    )
    cases = [(ctor.name, _branch_type(ind, ctor, k)) for k, ctor in enumerate(ctors)]
    x_ty = mk_app(head, ArgList.vars(p, offset=q + 1 + n), ArgList.vars(q))
    return _named_pis(
        [
            *_binders(ind.param_names, ind.param_types),
            ("motive", motive_ty),
            *cases,
            *_binders(ind.index_names, ind.index_types.shift(1 + n)),
            ("x", x_ty),
        ],
        mk_app(Var(1 + q + n), ArgList.vars(q, offset=1), Var(0)),
    )


__all__ = ["check_inductive", "recursor_type"]
