"""Telescopes, argument spines and helpers for building binder towers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, overload, Self, Sequence, Iterable, Callable

from frkernel.kernel.ast import Term, App, Lam, Pi, Var

T = TypeVar("T")


@dataclass(frozen=True)
class SeqBase(Sequence[T], Generic[T]):
    _data: tuple[T, ...] = ()

    @classmethod
    def of(cls, *items: T) -> Self:
        return cls(items)

    def __len__(self) -> int:
        return len(self._data)

    @overload
    def __getitem__(self, i: int) -> T: ...
    @overload
    def __getitem__(self, s: slice) -> Self: ...

    def __getitem__(self, idx: int | slice) -> T | Self:
        if isinstance(idx, slice):
            return self.of(*self._data[idx])
        return self._data[idx]

    def __add__(self, other: Iterable[T]) -> Self:
        return self.of(*self, *other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._data)!r})"

    def _map(self, f: Callable[[T], T]) -> Self:
        return self.of(*(f(x) for x in self._data))

    def _mapi(self, f: Callable[[int, T], T]) -> Self:
        return self.of(*(f(i, x) for i, x in enumerate(self._data)))


class ArgList(SeqBase[Term]):
    """Arguments of an application spine, all scoped in the same context."""

    @staticmethod
    def vars(count: int, offset: int = 0) -> ArgList:
        return ArgList(tuple(Var(i) for i in reversed(range(offset, offset + count))))

    def shift(self, by: int, cutoff: int = 0) -> ArgList:
        return self._map(lambda e: e.shift(by, cutoff))


class Telescope(SeqBase[Term]):
    """Binder types where entry ``i`` is scoped under entries ``0 .. i - 1``."""

    def shift(self, by: int, cutoff: int = 0) -> Telescope:
        """Shift free variables, keeping each entry's own binder prefix intact."""
        return self._mapi(lambda i, t: t.shift(by, cutoff + i))


def mk_app(fn: Term, *args: Term | ArgList) -> Term:
    """Apply ``fn`` to ``args`` left to right; ``ArgList`` arguments are spliced in.

    ``mk_app(Ind("Vec"), params, ArgList.of(n))`` is ``(Vec T) n``.
    """
    result = fn
    for arg in args:
        spine = arg if isinstance(arg, ArgList) else (arg,)
        for a in spine:
            result = App(result, a)
    return result


def _binder_types(tys: tuple[Term | Telescope, ...]) -> list[Term]:
    flat: list[Term] = []
    for ty in tys:
        if isinstance(ty, Telescope):
            flat.extend(ty)
        else:
            flat.append(ty)
    return flat


def mk_lams(*param_tys: Term | Telescope, body: Term) -> Term:
    """``\\(x0: A0) ... (xn: An). body`` with ``A0`` outermost."""
    for ty in reversed(_binder_types(param_tys)):
        body = Lam(ty, body)
    return body


def mk_pis(*param_tys: Term | Telescope, return_ty: Term) -> Term:
    """``Fn(x0: A0, ..., xn: An) -> return_ty`` with ``A0`` outermost.

    Telescopes are spliced in place, so a recursor type can be written as
    ``mk_pis(params, motive_ty, *cases, indices, x_ty, return_ty=...)``.
    """
    for ty in reversed(_binder_types(param_tys)):
        return_ty = Pi(ty, return_ty)
    return return_ty


def decompose_app(term: Term) -> tuple[Term, ArgList]:
    """Split ``f a0 ... an`` into ``(f, [a0, ..., an])``; the inverse of ``mk_app``."""
    args: list[Term] = []
    while isinstance(term, App):
        args.append(term.arg)
        term = term.func
    args.reverse()
    return term, ArgList.of(*args)


def decompose_pi(term: Term) -> tuple[Telescope, Term]:
    """Peel syntactic Pi binders off ``term``; the body is scoped under them."""
    binders: list[Term] = []
    while isinstance(term, Pi):
        binders.append(term.arg_ty)
        term = term.return_ty
    return Telescope.of(*binders), term


__all__ = [
    "ArgList",
    "Telescope",
    "mk_app",
    "mk_pis",
    "mk_lams",
    "decompose_app",
    "decompose_pi",
]
