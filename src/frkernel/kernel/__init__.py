"""The trusted kernel: terms, environment, reduction and type checking."""

from .ast import (
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
)
from .ctx import Ctx
from .decls import (
    AxiomDecl,
    ConstructorDecl,
    DefinitionDecl,
    InductiveDecl,
    UniverseAxiomDecl,
    dependencies,
)
from .env import Environment
from .pretty import pretty
from .reduce import is_def_eq, normalize, whnf
from .typing import check, infer, infer_sort

__all__ = [
    "App",
    "Const",
    "Ctor",
    "Elim",
    "Ind",
    "Lam",
    "NatLit",
    "Pi",
    "Prop",
    "Term",
    "Univ",
    "Var",
    "Ctx",
    "AxiomDecl",
    "ConstructorDecl",
    "DefinitionDecl",
    "InductiveDecl",
    "UniverseAxiomDecl",
    "dependencies",
    "Environment",
    "pretty",
    "is_def_eq",
    "normalize",
    "whnf",
    "check",
    "infer",
    "infer_sort",
]
