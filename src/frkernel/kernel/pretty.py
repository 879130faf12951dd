"""Pretty-printing of kernel terms for error messages and debugging."""

from __future__ import annotations

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
    has_free_var,
)
from frkernel.kernel.universes import format_sort

ATOM_PREC = 3
APP_PREC = 2
PI_PREC = 1
LAM_PREC = 0


def _fresh_name(names: list[str], base: str = "x") -> str:
    """Return a name not already present in ``names``."""

    if base == "_":
        base = "x"
    candidate = base
    suffix = 0
    while candidate in names:
        suffix += 1
        candidate = f"{base}{suffix}"
    return candidate


def _maybe_paren(
    text: str, child_prec: int, parent_prec: int, *, allow_equal: bool
) -> str:
    if child_prec < parent_prec or (child_prec == parent_prec and not allow_equal):
        return f"({text})"
    return text


def pretty(term: Term) -> str:
    """Return a human-friendly string for ``term``.

    Non-dependent products print as arrows; dependent ones use the surface
    ``Fn(x: A) -> B`` form.
    """

    def fmt(t: Term, names: list[str]) -> tuple[str, int]:
        match t:
            case Var(k):
                name = names[k] if k < len(names) else f"#{k}"
                return name, ATOM_PREC

            case Prop() | Univ():
                text = format_sort(t)
                return text, (ATOM_PREC if " " not in text else APP_PREC)

            case Ind(name) | Const(name):
                return name, ATOM_PREC

            case Ctor() as ctor:
                return ctor.qualified_name, ATOM_PREC

            case NatLit(value):
                return str(value), ATOM_PREC

            case App(f, a):
                func_text, func_prec = fmt(f, names)
                arg_text, arg_prec = fmt(a, names)
                func_disp = _maybe_paren(func_text, func_prec, APP_PREC, allow_equal=True)
                arg_disp = _maybe_paren(arg_text, arg_prec, APP_PREC, allow_equal=False)
                return f"{func_disp} {arg_disp}", APP_PREC

            case Lam(arg_ty, body, hint):
                binder = _fresh_name(names, hint)
                arg_text, _ = fmt(arg_ty, names)
                body_text, _ = fmt(body, [binder, *names])
                return f"\\{binder}: {arg_text}. {body_text}", LAM_PREC

            case Pi(arg_ty, body, hint):
                arg_text, arg_prec = fmt(arg_ty, names)
                if not has_free_var(body, 0):
                    body_text, body_prec = fmt(body, ["_", *names])
                    arg_disp = _maybe_paren(arg_text, arg_prec, PI_PREC, allow_equal=False)
                    body_disp = _maybe_paren(body_text, body_prec, PI_PREC, allow_equal=True)
                    return f"{arg_disp} -> {body_disp}", PI_PREC
                binder = _fresh_name(names, hint)
                body_text, body_prec = fmt(body, [binder, *names])
                body_disp = _maybe_paren(body_text, body_prec, PI_PREC, allow_equal=True)
                return f"Fn({binder}: {arg_text}) -> {body_disp}", PI_PREC

            case Elim(inductive, motive, cases, scrutinee):
                motive_text, motive_prec = fmt(motive, names)
                scrutinee_text, scrutinee_prec = fmt(scrutinee, names)
                cases_text = ", ".join(fmt(case, names)[0] for case in cases)
                parts = [
                    f"elim {inductive}",
                    _maybe_paren(motive_text, motive_prec, APP_PREC, allow_equal=False),
                    f"[{cases_text}]",
                    _maybe_paren(scrutinee_text, scrutinee_prec, APP_PREC, allow_equal=False),
                ]
                return " ".join(parts), APP_PREC

        raise TypeError(f"Cannot pretty-print unknown term: {t!r}")

    return fmt(term, [])[0]


__all__ = ["pretty"]
