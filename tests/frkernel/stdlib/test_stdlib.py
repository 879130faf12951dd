import pytest

from frkernel.errors import DuplicateName
from frkernel.kernel.ast import Prop, Univ
from frkernel.kernel.decls import dependencies, declared_names
from frkernel.kernel.env import Environment
from frkernel.stdlib import DECLARATIONS, load_stdlib


def test_stdlib_loads_in_order() -> None:
    env = load_stdlib()
    assert env.names() == (
        "Prop",
        "Set",
        "Type",
        "id",
        "Nat",
        "Nat::zero",
        "Nat::succ",
        "add",
        "Vec",
        "Vec::nil",
        "Vec::cons",
        "True",
        "True::trivial",
    )


def test_universe_names() -> None:
    env = load_stdlib()
    assert env.lookup("Prop").universe == Prop()
    assert env.lookup("Set").universe == Univ(0)
    assert env.lookup("Type").universe == Univ(1)


def test_every_dependency_is_declared_earlier() -> None:
    seen: set[str] = set()
    for decl in DECLARATIONS:
        assert dependencies(decl) <= seen
        seen.update(declared_names(decl))


def test_reloading_is_rejected() -> None:
    env = load_stdlib()
    with pytest.raises(DuplicateName):
        load_stdlib(env)


def test_loading_onto_existing_environment() -> None:
    env = Environment().declare_axiom("Anything", Univ(0))
    assert load_stdlib(env).names()[0] == "Anything"
