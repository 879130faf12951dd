"""Strict positivity of constructor fields."""

from __future__ import annotations

from typing import TYPE_CHECKING

from frkernel.errors import MalformedIndices, PositivityViolation
from frkernel.kernel.ast import Ind, Pi, Term, mentions
from frkernel.kernel.reduce import whnf
from frkernel.kernel.tel import ArgList, decompose_app

if TYPE_CHECKING:
    from frkernel.kernel.env import Environment


def recursive_field(
    env: Environment,
    inductive: str,
    field_ty: Term,
    num_params: int,
    num_indices: int,
    depth: int,
) -> tuple[Term, int] | None:
    """Classify a constructor field with respect to ``inductive``.

    ``field_ty`` lives under the parameters followed by ``depth`` earlier
    fields. Returns ``None`` when the field does not mention the inductive.
    For a recursive field ``Fn(b1, ..., br) -> Self params indices`` returns
    the field type with its Pi spine exposed together with ``r``.

    Raises ``PositivityViolation`` when the inductive occurs to the left of an
    arrow or nested inside another type, and ``MalformedIndices`` when the
    recursive occurrence does not pass the parameters through unchanged.
    """
    binders: list[Pi] = []
    t = whnf(env, field_ty)
    while isinstance(t, Pi):
        if mentions(t.arg_ty, inductive):
            raise PositivityViolation(
                f"{inductive} occurs in a negative position:\n"
                f"  field = {field_ty}\n"
                f"  domain = {t.arg_ty}"
            )
        binders.append(t)
        t = whnf(env, t.return_ty)

    head, args = decompose_app(t)
    if head != Ind(inductive):
        if mentions(t, inductive):
            raise PositivityViolation(
                f"{inductive} occurs nested inside another type:\n"
                f"  field = {field_ty}"
            )
        return None

    if any(mentions(a, inductive) for a in args):
        raise PositivityViolation(
            f"{inductive} occurs in its own arguments:\n"
            f"  field = {field_ty}"
        )
    r = len(binders)
    if len(args) != num_params + num_indices:
        raise MalformedIndices(
            f"Recursive occurrence of {inductive} has the wrong arity:\n"
            f"  field = {field_ty}\n"
            f"  expected arity = {num_params + num_indices}\n"
            f"  found arity = {len(args)}"
        )
    if args[:num_params] != ArgList.vars(num_params, offset=depth + r):
        raise MalformedIndices(
            f"Recursive occurrence of {inductive} must repeat its parameters:\n"
            f"  field = {field_ty}"
        )

    exposed = t
    for b in reversed(binders):
        exposed = Pi(b.arg_ty, exposed, b.name)
    return exposed, r


__all__ = ["recursive_field"]
