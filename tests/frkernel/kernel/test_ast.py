import pytest

from frkernel.kernel.ast import (
    App,
    Const,
    Ctor,
    Elim,
    Ind,
    Lam,
    NatLit,
    Pi,
    Univ,
    Var,
    free_constants,
    has_free_var,
    mentions,
)
from frkernel.stdlib.nat import Nat, Succ, Zero
from frkernel.stdlib.vec import Cons, Nil

SET = Univ(0)


def test_shift_respects_cutoff() -> None:
    term = App(Var(1), Var(0))
    assert term.shift(2, cutoff=1) == App(Var(3), Var(0))


def test_shift_through_lambda_increments_free_variable() -> None:
    term = Lam(SET, App(Var(1), Var(0)))
    assert term.shift(1) == Lam(SET, App(Var(2), Var(0)))


def test_shift_nested_binders() -> None:
    term = Lam(SET, Pi(SET, Var(2)))
    assert term.shift(1) == Lam(SET, Pi(SET, Var(3)))


def test_subst_replaces_target_and_decrements_greater_indices() -> None:
    term = App(Var(1), Var(0))
    assert term.subst(Succ(Var(0))) == App(Var(0), Succ(Var(0)))


def test_subst_under_lambda_shifts_replacement() -> None:
    term = Lam(SET, App(Var(1), Var(0)))
    assert term.subst(Succ(Var(0))) == Lam(SET, App(Succ(Var(1)), Var(0)))


def test_subst_nested_binder_chain() -> None:
    term = Lam(SET, Lam(SET, Var(2)))
    assert term.subst(Succ(Var(0))) == Lam(SET, Lam(SET, Succ(Var(2))))


def test_subst_leaves_bound_variables_alone() -> None:
    term = Pi(SET, Pi(SET, Var(1)))
    assert term.subst(Succ(Var(0))) == term


def test_subst_reaches_eliminator_fields() -> None:
    term = Elim("Nat", Var(0), (Var(0), Lam(Nat, Var(1))), Var(0))
    assert term.subst(Zero) == Elim("Nat", Zero, (Zero, Lam(Nat, Zero)), Zero)


@pytest.mark.parametrize(
    "term",
    [
        Lam(Nat, App(Var(1), Var(0))),
        Pi(Nat, Pi(Var(1), Var(2))),
        App(Var(0), Lam(Nat, Var(1))),
    ],
)
def test_subst_leaves_no_reference_to_substituted_variable(term) -> None:
    result = term.subst(Zero)
    assert not has_free_var(result, 0)


def test_binder_names_do_not_affect_equality() -> None:
    assert Lam(Nat, Var(0), "x") == Lam(Nat, Var(0), "y")
    assert Pi(Nat, Nat, "a") == Pi(Nat, Nat)
    assert Lam(Nat, Var(0), "x") != Lam(SET, Var(0), "x")


def test_subst_result_is_independent_of_binder_names() -> None:
    left = Lam(Nat, App(Var(1), Var(0)), "x").subst(Zero)
    right = Lam(Nat, App(Var(1), Var(0)), "y").subst(Zero)
    assert left == right


def test_instantiate_outer_block() -> None:
    # Written under (a)(b); instantiate both.
    term = App(Var(1), Var(0))
    assert term.instantiate([Zero, Succ(Zero)]) == App(Zero, Succ(Zero))


def test_instantiate_keeps_inner_binders() -> None:
    # Written under (a)(x) where x stays bound.
    term = App(Var(1), Var(0))
    assert term.instantiate([Zero], depth_above=1) == App(Zero, Var(0))


def test_negative_indices_and_literals_are_rejected() -> None:
    with pytest.raises(ValueError):
        Var(-1)
    with pytest.raises(ValueError):
        NatLit(-3)
    with pytest.raises(ValueError):
        Univ(-1)


def test_mentions_sees_inductive_references() -> None:
    assert mentions(Pi(Ind("Bad"), Nat), "Bad")
    assert mentions(Ctor("Bad", "mk"), "Bad")
    assert not mentions(Pi(Nat, Nat), "Bad")


def test_has_free_var_tracks_depth() -> None:
    assert has_free_var(Lam(Nat, Var(1)), 0)
    assert not has_free_var(Lam(Nat, Var(0)), 0)


def test_free_constants_collects_globals() -> None:
    term = Cons(Nat, Zero, Const("seven"), Nil(Nat))
    assert free_constants(term) == {
        "Vec",
        "Vec::cons",
        "Vec::nil",
        "Nat",
        "Nat::zero",
        "seven",
    }
