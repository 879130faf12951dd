"""Top-level declarations fed to the kernel and the entries it stores for them."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from frkernel.kernel.ast import Term, free_constants, qualify
from frkernel.kernel.tel import ArgList, Telescope
from frkernel.kernel.universes import SET

# ---------------------------------------------------------------------------
# Declarations (kernel input)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UniverseAxiomDecl:
    """Binds ``name`` to a universe literal such as ``Prop`` or ``Set``."""

    name: str
    universe: Term


@dataclass(frozen=True)
class AxiomDecl:
    """Postulates a constant of type ``ty`` without a definition."""

    name: str
    ty: Term


@dataclass(frozen=True)
class DefinitionDecl:
    name: str
    ty: Term
    value: Term


@dataclass(frozen=True)
class ConstructorDecl:
    """A constructor and its type, written under the inductive's parameters.

    For ``Vec (T: Set) : Nat -> Set`` the ``cons`` constructor is::

        Fn(n: Nat, x: T, xs: Vec T n) -> Vec T (Nat::succ n)

    where ``T`` is ``Var`` bound by the parameter block.
    """

    name: str
    ty: Term


@dataclass(frozen=True)
class InductiveDecl:
    """An inductive type: parameters, indices, target sort and constructors.

    ``params`` and ``indices`` are ``(name, type)`` pairs; each type is scoped
    under the binders before it (indices also see all parameters).
    """

    name: str
    params: tuple[tuple[str, Term], ...] = ()
    indices: tuple[tuple[str, Term], ...] = ()
    sort: Term = SET
    constructors: tuple[ConstructorDecl, ...] = ()

    @property
    def param_types(self) -> Telescope:
        return Telescope.of(*(ty for _, ty in self.params))

    @property
    def index_types(self) -> Telescope:
        return Telescope.of(*(ty for _, ty in self.indices))


Declaration = UniverseAxiomDecl | AxiomDecl | DefinitionDecl | InductiveDecl


def declared_names(decl: Declaration) -> tuple[str, ...]:
    """Every global name a declaration introduces."""
    if isinstance(decl, InductiveDecl):
        return (decl.name, *(qualify(decl.name, c.name) for c in decl.constructors))
    return (decl.name,)


def dependencies(decl: Declaration) -> frozenset[str]:
    """Global names ``decl`` refers to, excluding the names it introduces.

    Declarations with disjoint dependency sets can be checked against the same
    environment snapshot independently.
    """
    match decl:
        case UniverseAxiomDecl(_, universe):
            terms: tuple[Term, ...] = (universe,)
        case AxiomDecl(_, ty):
            terms = (ty,)
        case DefinitionDecl(_, ty, value):
            terms = (ty, value)
        case InductiveDecl():
            terms = (
                *(ty for _, ty in decl.params),
                *(ty for _, ty in decl.indices),
                decl.sort,
                *(c.ty for c in decl.constructors),
            )
        case _:
            raise TypeError(f"Unexpected declaration: {decl!r}")
    names = frozenset().union(*(free_constants(t) for t in terms))
    return names - frozenset(declared_names(decl))


# ---------------------------------------------------------------------------
# Environment entries (kernel output)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UniverseAxiom:
    name: str
    universe: Term


@dataclass(frozen=True)
class Axiom:
    name: str
    ty: Term


@dataclass(frozen=True)
class Definition:
    name: str
    ty: Term
    value: Term


@dataclass(frozen=True)
class InductiveEntry:
    """A checked inductive type.

    ``ty`` is the closed type ``Fn(params, indices) -> sort``; ``param_types``
    and ``index_types`` are telescopes, indices scoped under the parameters.
    """

    name: str
    param_types: Telescope
    index_types: Telescope
    sort: Term
    constructors: tuple[str, ...]
    ty: Term
    param_names: tuple[str, ...] = ()
    index_names: tuple[str, ...] = ()
    # Whether the motive may land outside ``Prop``.
    large_elimination: bool = True

    @property
    def num_params(self) -> int:
        return len(self.param_types)

    @property
    def num_indices(self) -> int:
        return len(self.index_types)


@dataclass(frozen=True)
class ConstructorEntry:
    """A checked constructor.

    ``fields`` is scoped under the parameters; ``result_indices`` under the
    parameters followed by every field. ``recursive`` lists the positions of
    fields whose type ends in the owning inductive, with the number of Pi
    binders in front of that occurrence.
    """

    name: str
    inductive: str
    position: int
    fields: Telescope
    result_indices: ArgList
    recursive: tuple[tuple[int, int], ...]
    ty: Term
    field_names: tuple[str, ...] = ()

    @cached_property
    def qualified_name(self) -> str:
        return qualify(self.inductive, self.name)

    @property
    def arity(self) -> int:
        return len(self.fields)


EnvEntry = UniverseAxiom | Axiom | Definition | InductiveEntry | ConstructorEntry


__all__ = [
    "UniverseAxiomDecl",
    "AxiomDecl",
    "DefinitionDecl",
    "ConstructorDecl",
    "InductiveDecl",
    "Declaration",
    "declared_names",
    "dependencies",
    "UniverseAxiom",
    "Axiom",
    "Definition",
    "InductiveEntry",
    "ConstructorEntry",
    "EnvEntry",
]
