"""Abstract syntax tree nodes for the kernel's term language."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field, fields, replace, Field
from functools import cache
from typing import Any, Callable, ClassVar


def _map_term_values(value: Any, f: Callable[[Term], Term]) -> Any:
    if isinstance(value, Term):
        return f(value)
    if isinstance(value, tuple):
        return tuple(_map_term_values(v, f) for v in value)
    return value


def _iter_term_values(value: Any) -> Iterator[Term]:
    if isinstance(value, Term):
        yield value
    elif isinstance(value, tuple):
        for v in value:
            yield from _iter_term_values(v)


@dataclass(frozen=True, kw_only=True)
class TermFieldMeta:
    binder_count: int = 0


def meta(f: Field) -> TermFieldMeta:
    return f.metadata.get("") or TermFieldMeta()


def _binder(count: int = 1) -> dict[str, TermFieldMeta]:
    return {"": TermFieldMeta(binder_count=count)}


def _hint() -> Any:
    # Binder names are display hints only; leaving them out of ``==`` makes
    # structural equality coincide with alpha-equivalence.
    return field(default="_", compare=False)


@dataclass(frozen=True)
class Term:
    """Base class for all kernel terms."""

    is_terminal: ClassVar[bool] = False

    @classmethod
    @cache
    def _term_fields(cls) -> tuple[Field, ...]:
        return () if cls.is_terminal else fields(cls)

    def _replace_terms(self, mapper: Callable[[Term, TermFieldMeta], Term]) -> Term:
        updates = {
            f.name: _map_term_values(getattr(self, f.name), lambda t: mapper(t, meta(f)))
            for f in self._term_fields()
        }
        # noinspection PyArgumentList
        return replace(self, **updates) if updates else self

    def children(self) -> Iterator[tuple[Term, int]]:
        """Yield each direct subterm with the number of binders it sits under."""
        for f in self._term_fields():
            for t in _iter_term_values(getattr(self, f.name)):
                yield t, meta(f).binder_count

    def shift(self, by: int, cutoff: int = 0) -> Term:
        """Shift free variables in the term."""
        return self._replace_terms(lambda t, m: t.shift(by, cutoff + m.binder_count))

    def subst(self, sub: Term, j: int = 0) -> Term:
        """Substitute ``sub`` for ``Var(j)`` inside the term."""
        return self._replace_terms(
            lambda t, m: t.subst(sub.shift(m.binder_count), j + m.binder_count)
        )

    def instantiate(self, actuals: Sequence[Term], depth_above: int = 0) -> Term:
        """
        Substitute ``actuals`` for the outer binder block of ``self``.

        Self is assumed written under (actuals)(...) where ``depth_above`` is the
        number of binders *below* the actuals block that remain in scope. For each
        actual, eliminate at de Bruijn index:
            index = depth_above + len(actuals) - i - 1
        """
        t = self
        k = len(actuals)
        for i, a in enumerate(actuals):
            index = depth_above + k - i - 1
            t = t.subst(a.shift(index), index)
        return t

    def __str__(self) -> str:
        # Deferred import avoids cycles when pretty-printing dataclass reprs.
        from frkernel.kernel.pretty import pretty

        return pretty(self)


@dataclass(frozen=True)
class Var(Term):
    """De Bruijn variable pointing to the binder at ``k``."""

    k: int
    is_terminal: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if self.k < 0:
            raise ValueError("De Bruijn indices must be non-negative")

    def shift(self, by: int, cutoff: int = 0) -> Term:
        return Var(self.k + by if self.k >= cutoff else self.k)

    def subst(self, sub: Term, j: int = 0) -> Term:
        if self.k == j:
            return sub
        if self.k > j:
            return Var(self.k - 1)
        return self


@dataclass(frozen=True)
class Prop(Term):
    """The impredicative, proof-irrelevant universe of propositions."""

    is_terminal: ClassVar[bool] = True


@dataclass(frozen=True)
class Univ(Term):
    """A predicative universe: ``Univ(0)`` is ``Set``, ``Univ(n + 1)`` is ``Type n``."""

    level: int = 0
    is_terminal: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if self.level < 0:
            raise ValueError("Universe level must be non-negative")


@dataclass(frozen=True)
class Pi(Term):
    """Dependent function type ``Fn(name: arg_ty) -> return_ty``."""

    arg_ty: Term
    return_ty: Term = field(metadata=_binder())
    name: str = _hint()


@dataclass(frozen=True)
class Lam(Term):
    """Dependent lambda term with an argument type and body."""

    arg_ty: Term
    body: Term = field(metadata=_binder())
    name: str = _hint()


@dataclass(frozen=True)
class App(Term):
    """Function application."""

    func: Term
    arg: Term


@dataclass(frozen=True)
class Const(Term):
    """Reference to a global definition, axiom or universe alias."""

    name: str
    is_terminal: ClassVar[bool] = True


@dataclass(frozen=True)
class Ind(Term):
    """Reference to a declared inductive type (unapplied)."""

    name: str
    is_terminal: ClassVar[bool] = True


@dataclass(frozen=True)
class Ctor(Term):
    """Reference to a constructor, written ``Inductive::name``."""

    inductive: str
    name: str
    is_terminal: ClassVar[bool] = True

    @property
    def qualified_name(self) -> str:
        return qualify(self.inductive, self.name)


@dataclass(frozen=True)
class Elim(Term):
    """Elimination of ``scrutinee`` with ``motive`` and one case per constructor."""

    inductive: str
    motive: Term
    cases: tuple[Term, ...]
    scrutinee: Term


@dataclass(frozen=True)
class NatLit(Term):
    """A natural number literal; unfolds to constructor form when scrutinised."""

    value: int
    is_terminal: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Natural number literals must be non-negative")


def qualify(inductive: str, ctor: str) -> str:
    return f"{inductive}::{ctor}"


def is_sort(term: Term) -> bool:
    return isinstance(term, (Prop, Univ))


def mentions(term: Term, name: str) -> bool:
    """Return ``True`` if the inductive ``name`` occurs anywhere in ``term``."""

    match term:
        case Ind(n):
            return n == name
        case Ctor(inductive, _):
            return inductive == name
        case Elim(inductive, _, _, _) if inductive == name:
            return True
    return any(mentions(child, name) for child, _ in term.children())


def has_free_var(term: Term, target: int, depth: int = 0) -> bool:
    """Return ``True`` if ``Var(target)`` appears free in ``term``."""

    if isinstance(term, Var):
        return term.k == target + depth
    return any(has_free_var(child, target, depth + b) for child, b in term.children())


def free_constants(term: Term) -> frozenset[str]:
    """Global names (definitions, inductives, constructors) ``term`` refers to."""

    match term:
        case Const(name) | Ind(name):
            return frozenset((name,))
        case Ctor(inductive, name):
            return frozenset((inductive, qualify(inductive, name)))
        case Elim(inductive, _, _, _):
            own = frozenset((inductive,))
        case _:
            own = frozenset()
    return own.union(*(free_constants(child) for child, _ in term.children()))


__all__ = [
    "Term",
    "Var",
    "Prop",
    "Univ",
    "Pi",
    "Lam",
    "App",
    "Const",
    "Ind",
    "Ctor",
    "Elim",
    "NatLit",
    "qualify",
    "is_sort",
    "mentions",
    "has_free_var",
    "free_constants",
]
