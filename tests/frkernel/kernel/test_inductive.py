import pytest

from frkernel.errors import MalformedIndices, PositivityViolation, UniverseError
from frkernel.kernel.ast import App, Ctor, Elim, Ind, Lam, Pi, Prop, Univ, Var
from frkernel.kernel.ctx import Ctx
from frkernel.kernel.decls import ConstructorDecl, InductiveDecl
from frkernel.kernel.pretty import pretty
from frkernel.kernel.reduce import normalize
from frkernel.kernel.tel import mk_app, mk_lams
from frkernel.kernel.typing import check, infer, infer_sort
from frkernel.stdlib import load_stdlib
from frkernel.stdlib.logic import TrueType, Trivial
from frkernel.stdlib.nat import Nat, Succ, SuccCtor, Zero
from frkernel.stdlib.vec import Vec

ENV = load_stdlib()
SET = Univ(0)


def test_nat_recursor_type() -> None:
    expected = Pi(
        Pi(Nat, SET),
        Pi(
            App(Var(0), Zero),
            Pi(
                Pi(Nat, Pi(App(Var(2), Var(0)), App(Var(3), App(SuccCtor, Var(1))))),
                Pi(Nat, App(Var(3), Var(0))),
            ),
        ),
    )
    assert ENV.recursor_type("Nat", SET) == expected


def test_true_recursor_type() -> None:
    expected = Pi(
        Pi(TrueType, Prop()),
        Pi(App(Var(0), Trivial), Pi(TrueType, App(Var(2), Var(0)))),
    )
    assert ENV.recursor_type("True", Prop()) == expected


def test_recursor_binders_use_declared_names() -> None:
    assert pretty(ENV.recursor_type("Nat", SET)) == (
        "Fn(motive: Nat -> Set) -> motive Nat::zero -> "
        "(Fn(n: Nat) -> motive n -> motive (Nat::succ n)) -> "
        "Fn(x: Nat) -> motive x"
    )
    vec_rec = pretty(ENV.recursor_type("Vec", SET))
    assert vec_rec.startswith("Fn(T: Set) -> Fn(motive: ")
    assert vec_rec.endswith("Fn(n: Nat) -> Fn(x: Vec T n) -> motive n x")


@pytest.mark.parametrize("name", ["Nat", "Vec", "True"])
@pytest.mark.parametrize("sort", [Prop(), SET, Univ(1)])
def test_recursor_types_are_well_typed(name, sort) -> None:
    infer_sort(ENV, Ctx(), ENV.recursor_type(name, sort))


def test_vec_entries() -> None:
    vec = ENV.inductive("Vec")
    assert vec.num_params == 1
    assert vec.num_indices == 1
    assert vec.ty == Pi(SET, Pi(Nat, SET))
    cons = ENV.constructor("Vec", "cons")
    assert cons.arity == 3
    assert cons.recursive == ((2, 0),)
    assert cons.field_names == ("n", "x", "xs")


def test_negative_occurrence_is_rejected() -> None:
    decl = InductiveDecl(
        "Bad",
        constructors=(ConstructorDecl("mk", Pi(Pi(Ind("Bad"), Nat), Ind("Bad"))),),
    )
    with pytest.raises(PositivityViolation, match="negative position") as excinfo:
        ENV.declare_inductive(decl)
    assert excinfo.value.declaration == "Bad"


def test_nested_occurrence_is_rejected() -> None:
    decl = InductiveDecl(
        "Rose",
        constructors=(
            ConstructorDecl("node", Pi(mk_app(Vec, Ind("Rose"), Zero), Ind("Rose"))),
        ),
    )
    with pytest.raises(PositivityViolation, match="nested"):
        ENV.declare_inductive(decl)


def test_constructor_must_return_its_inductive() -> None:
    decl = InductiveDecl("Wrong", constructors=(ConstructorDecl("mk", Nat),))
    with pytest.raises(MalformedIndices, match="must return Wrong"):
        ENV.declare_inductive(decl)


def test_constructor_must_pass_parameters_unchanged() -> None:
    decl = InductiveDecl(
        "Box",
        params=(("T", SET),),
        constructors=(ConstructorDecl("mk", App(Ind("Box"), Nat)),),
    )
    with pytest.raises(MalformedIndices, match="parameters"):
        ENV.declare_inductive(decl)


def test_result_indices_must_not_mention_the_inductive() -> None:
    decl = InductiveDecl(
        "Weird",
        indices=(("A", SET),),
        constructors=(
            ConstructorDecl("mk", App(Ind("Weird"), App(Ind("Weird"), Nat))),
        ),
    )
    with pytest.raises(MalformedIndices, match="result indices"):
        ENV.declare_inductive(decl)


def test_field_universe_must_be_dominated() -> None:
    decl = InductiveDecl(
        "Big",
        constructors=(ConstructorDecl("mk", Pi(SET, Ind("Big"))),),
    )
    with pytest.raises(UniverseError, match="too large"):
        ENV.declare_inductive(decl)


def test_prop_inductive_rejects_data_fields() -> None:
    decl = InductiveDecl(
        "HasNat",
        sort=Prop(),
        constructors=(ConstructorDecl("mk", Pi(Nat, Ind("HasNat"))),),
    )
    with pytest.raises(UniverseError):
        ENV.declare_inductive(decl)


def test_larger_universe_accepts_type_fields() -> None:
    decl = InductiveDecl(
        "Big",
        sort=Univ(1),
        constructors=(ConstructorDecl("mk", Pi(SET, Ind("Big"))),),
    )
    env = ENV.declare_inductive(decl)
    assert infer(env, Ctx(), Ind("Big")) == Univ(1)


def test_declared_sort_must_be_a_sort() -> None:
    with pytest.raises(UniverseError, match="must live in a sort"):
        ENV.declare_inductive(InductiveDecl("Odd", sort=Nat))


EITHER = InductiveDecl(
    "Either",
    sort=Prop(),
    constructors=(
        ConstructorDecl("left", Pi(TrueType, Ind("Either"))),
        ConstructorDecl("right", Pi(TrueType, Ind("Either"))),
    ),
)


def test_large_elimination_is_restricted_to_subsingletons() -> None:
    env = ENV.declare_inductive(EITHER)
    assert not env.inductive("Either").large_elimination
    assert env.inductive("True").large_elimination
    left = App(Ctor("Either", "left"), Trivial)

    into_prop = Elim(
        "Either",
        Lam(Ind("Either"), TrueType),
        (Lam(TrueType, Trivial), Lam(TrueType, Trivial)),
        left,
    )
    check(env, Ctx(), into_prop, TrueType)

    into_set = Elim(
        "Either",
        Lam(Ind("Either"), Nat),
        (Lam(TrueType, Zero), Lam(TrueType, Succ(Zero))),
        left,
    )
    with pytest.raises(UniverseError, match="only be eliminated into Prop"):
        infer(env, Ctx(), into_set)


def test_true_eliminates_into_data() -> None:
    term = Elim("True", Lam(TrueType, Nat), (Succ(Zero),), Trivial)
    assert infer(ENV, Ctx(), term) == App(Lam(TrueType, Nat), Trivial)
    assert normalize(ENV, term) == Succ(Zero)


TREE = InductiveDecl(
    "Tree",
    constructors=(
        ConstructorDecl("leaf", Ind("Tree")),
        # node : Fn(f: Fn(_: Nat) -> Tree) -> Tree
        ConstructorDecl("node", Pi(Pi(Nat, Ind("Tree")), Ind("Tree"), "f")),
    ),
)


def test_functional_recursive_fields() -> None:
    env = ENV.declare_inductive(TREE)
    assert env.constructor("Tree", "node").recursive == ((0, 1),)

    tree = Ind("Tree")
    node = App(Ctor("Tree", "node"), Lam(Nat, Ctor("Tree", "leaf")))
    # depth t = elim t with leaf => 0 | node f ih => succ (ih 0)
    depth = Elim(
        "Tree",
        Lam(tree, Nat),
        (Zero, mk_lams(Pi(Nat, tree), Pi(Nat, Nat), body=Succ(App(Var(0), Zero)))),
        node,
    )
    assert infer(env, Ctx(), depth) == App(Lam(tree, Nat), node)
    assert normalize(env, depth) == Succ(Zero)
