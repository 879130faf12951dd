"""The global environment: an append-only, immutable registry of declarations."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping

from frkernel.config import DEFAULT_CONFIG, KernelConfig
from frkernel.errors import (
    DuplicateName,
    KernelError,
    UniverseError,
    UnknownConstructor,
    UnknownInductive,
)
from frkernel.kernel.ast import Term, is_sort, qualify
from frkernel.kernel.ctx import Ctx
from frkernel.kernel.decls import (
    Axiom,
    AxiomDecl,
    ConstructorEntry,
    Declaration,
    Definition,
    DefinitionDecl,
    EnvEntry,
    InductiveDecl,
    InductiveEntry,
    UniverseAxiom,
    UniverseAxiomDecl,
    declared_names,
)
from frkernel.kernel.inductive import check_inductive, recursor_type
from frkernel.kernel.typing import check, infer_sort

logger = logging.getLogger(__name__)


def _entry_name(entry: EnvEntry) -> str:
    if isinstance(entry, ConstructorEntry):
        return entry.qualified_name
    return entry.name


@dataclass(frozen=True)
class Environment:
    """
    Global declarations visible to the type checker and the reduction engine.

    Every ``declare_*`` method returns a *new* environment and leaves the
    receiver untouched, so a rejected declaration never leaves a trace and
    any snapshot can be shared freely.

    Example::

        env = Environment()
        env = env.declare_universe_axiom("Prop", Prop())
        env = env.declare_inductive(InductiveDecl("True", sort=Prop(), ...))
    """

    entries: Mapping[str, EnvEntry] = field(
        default_factory=lambda: MappingProxyType({})
    )
    config: KernelConfig = DEFAULT_CONFIG

    # ---- lookup ----
    def lookup(self, name: str) -> EnvEntry | None:
        return self.entries.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def names(self) -> tuple[str, ...]:
        """Declared names in insertion order."""
        return tuple(self.entries)

    def inductive(self, name: str) -> InductiveEntry:
        entry = self.lookup(name)
        if not isinstance(entry, InductiveEntry):
            raise UnknownInductive(f"Unknown inductive type: {name}")
        return entry

    def constructor(self, inductive: str, name: str) -> ConstructorEntry:
        self.inductive(inductive)
        entry = self.lookup(qualify(inductive, name))
        if not isinstance(entry, ConstructorEntry):
            raise UnknownConstructor(f"Unknown constructor: {qualify(inductive, name)}")
        return entry

    def constructors(self, inductive: str) -> tuple[ConstructorEntry, ...]:
        info = self.inductive(inductive)
        return tuple(self.constructor(inductive, c) for c in info.constructors)

    def recursor_type(self, inductive: str, sort: Term) -> Term:
        """Closed type of the eliminator of ``inductive`` into ``sort``."""
        return recursor_type(self.inductive(inductive), self.constructors(inductive), sort)

    # ---- extension ----
    def with_entries(self, *entries: EnvEntry) -> Environment:
        """Return a copy with ``entries`` appended, without checking them."""
        extended = dict(self.entries)
        for entry in entries:
            extended[_entry_name(entry)] = entry
        return replace(self, entries=MappingProxyType(extended))

    def _ensure_fresh(self, *names: str) -> None:
        seen: set[str] = set()
        for name in names:
            if name in self.entries or name in seen:
                raise DuplicateName(name)
            seen.add(name)

    @contextmanager
    def _declaring(self, kind: str, name: str) -> Iterator[None]:
        try:
            yield
        except KernelError as exc:
            exc.for_declaration(name)
            logger.info("Rejected %s %s: %s", kind, name, exc.kind)
            raise
        logger.debug("Accepted %s %s", kind, name)

    def declare_universe_axiom(self, name: str, universe: Term) -> Environment:
        """Bind ``name`` to a universe literal; references to it unfold to it."""
        with self._declaring("universe", name):
            self._ensure_fresh(name)
            if not is_sort(universe):
                raise UniverseError(f"Not a universe: {universe}")
            return self.with_entries(UniverseAxiom(name, universe))

    def declare_axiom(self, name: str, ty: Term) -> Environment:
        """Postulate ``name : ty``; the constant never reduces."""
        with self._declaring("axiom", name):
            self._ensure_fresh(name)
            infer_sort(self, Ctx(), ty)
            return self.with_entries(Axiom(name, ty))

    def declare_definition(self, name: str, ty: Term, value: Term) -> Environment:
        """Check ``value : ty`` and register ``name`` as a reducible definition."""
        with self._declaring("definition", name):
            self._ensure_fresh(name)
            infer_sort(self, Ctx(), ty)
            check(self, Ctx(), value, ty)
            return self.with_entries(Definition(name, ty, value))

    def declare_inductive(self, decl: InductiveDecl) -> Environment:
        """Check ``decl`` and register it together with its constructors.

        Constructors are registered under ``Inductive::name``. Nothing is
        registered unless every check passes.
        """
        with self._declaring("inductive", decl.name):
            self._ensure_fresh(*declared_names(decl))
            info, ctors = check_inductive(self, decl)
            return self.with_entries(info, *ctors)

    def add(self, decl: Declaration) -> Environment:
        """Dispatch a declaration to the matching ``declare_*`` method."""
        match decl:
            case UniverseAxiomDecl(name, universe):
                return self.declare_universe_axiom(name, universe)
            case AxiomDecl(name, ty):
                return self.declare_axiom(name, ty)
            case DefinitionDecl(name, ty, value):
                return self.declare_definition(name, ty, value)
            case InductiveDecl():
                return self.declare_inductive(decl)
        raise TypeError(f"Unexpected declaration: {decl!r}")

    def add_all(self, decls: Iterable[Declaration]) -> Environment:
        """Add ``decls`` in order, stopping at the first rejection."""
        env = self
        for decl in decls:
            env = env.add(decl)
        return env


__all__ = ["Environment"]
