"""Sort arithmetic for the ``Prop`` / ``Set`` / ``Type n`` hierarchy."""

from __future__ import annotations

from frkernel.kernel.ast import Prop, Term, Univ

Sort = Prop | Univ

SET = Univ(0)


def type_n(n: int) -> Univ:
    """``Type n`` sits directly above ``Set``."""
    return Univ(n + 1)


def sort_of_sort(sort: Sort) -> Univ:
    """The universe a sort inhabits: ``Prop : Set`` and ``Univ(k) : Univ(k + 1)``."""

    match sort:
        case Prop():
            return SET
        case Univ(level):
            return Univ(level + 1)
    raise TypeError(f"Not a sort: {sort!r}")


def pi_sort(domain: Sort, codomain: Sort) -> Sort:
    """Sort of ``Fn(x: A) -> B`` given the sorts of ``A`` and ``B``.

    ``Prop`` is impredicative: any product landing in ``Prop`` is itself a
    proposition, whatever its domain.
    """

    match domain, codomain:
        case _, Prop():
            return codomain
        case Prop(), Univ():
            return codomain
        case Univ(a), Univ(b):
            return Univ(max(a, b))
    raise TypeError(f"Not sorts: {domain!r}, {codomain!r}")


def sort_leq(lower: Sort, upper: Sort) -> bool:
    """Domination order used for constructor fields; ``Prop`` is the bottom."""

    match lower, upper:
        case Prop(), _:
            return True
        case Univ(), Prop():
            return False
        case Univ(a), Univ(b):
            return a <= b
    raise TypeError(f"Not sorts: {lower!r}, {upper!r}")


def format_sort(sort: Term) -> str:
    match sort:
        case Prop():
            return "Prop"
        case Univ(0):
            return "Set"
        case Univ(level):
            return f"Type {level - 1}"
    return repr(sort)


__all__ = ["Sort", "SET", "type_n", "sort_of_sort", "pi_sort", "sort_leq", "format_sort"]
