import pytest

from frkernel.errors import TypeMismatch
from frkernel.kernel.ast import Const, Lam, NatLit, Pi, Univ, Var
from frkernel.kernel.ctx import Ctx
from frkernel.kernel.reduce import normalize
from frkernel.kernel.tel import mk_lams
from frkernel.kernel.typing import check, infer
from frkernel.stdlib import load_stdlib
from frkernel.stdlib.nat import Nat, Succ, Zero, numeral
from frkernel.stdlib.vec import Cons, ConsCtor, Nil, Vec, VecElim, VecType

ENV = load_stdlib()


def test_vec_type_former() -> None:
    assert infer(ENV, Ctx(), Vec) == Pi(Univ(0), Pi(Nat, Univ(0)))


def test_nil_has_zero_length() -> None:
    check(ENV, Ctx(), Nil(Nat), VecType(Nat, Zero))


def test_cons_increments_length() -> None:
    cons = Cons(Nat, Zero, Zero, Nil(Nat))
    check(ENV, Ctx(), cons, VecType(Nat, Succ(Zero)))
    check(ENV, Ctx(), cons, VecType(Nat, NatLit(1)))


def test_cons_type_depends_on_length_argument() -> None:
    ty = infer(ENV, Ctx(), Cons(Nat, NatLit(1), Zero, Cons(Nat, Zero, Zero, Nil(Nat))))
    assert normalize(ENV, ty) == VecType(Nat, Succ(NatLit(1)))


def test_cons_with_wrong_length_is_rejected() -> None:
    with pytest.raises(TypeMismatch) as excinfo:
        infer(ENV, Ctx(), Cons(Nat, Succ(Zero), Zero, Nil(Nat)))
    assert excinfo.value.expected == VecType(Nat, Succ(Zero))
    assert excinfo.value.inferred == VecType(Nat, Zero)


def test_cons_rejects_unrelated_lengths() -> None:
    env = ENV.declare_axiom("n", Nat).declare_axiom("m", Nat)
    env = env.declare_axiom("v", VecType(Nat, Const("m")))
    check(env, Ctx(), Cons(Nat, Const("m"), Zero, Const("v")), VecType(Nat, Succ(Const("m"))))
    with pytest.raises(TypeMismatch):
        infer(env, Ctx(), Cons(Nat, Const("n"), Zero, Const("v")))


def test_cons_under_binders() -> None:
    # \n. \xs. cons Nat n zero xs  :  Fn(n: Nat, xs: Vec Nat n) -> Vec Nat (succ n)
    term = mk_lams(Nat, VecType(Nat, Var(0)), body=Cons(Nat, Var(1), Zero, Var(0)))
    ty = Pi(Nat, Pi(VecType(Nat, Var(0)), VecType(Nat, Succ(Var(1)))))
    check(ENV, Ctx(), term, ty)


def test_length_by_elimination() -> None:
    motive = Lam(Nat, Lam(VecType(Nat, Var(0)), Nat))
    step = mk_lams(Nat, Nat, VecType(Nat, Var(1)), Nat, body=Succ(Var(0)))
    xs = Cons(Nat, NatLit(1), NatLit(7), Cons(Nat, Zero, NatLit(8), Nil(Nat)))
    length = VecElim(motive, Zero, step, xs)
    check(ENV, Ctx(), length, Nat)
    assert normalize(ENV, length) == numeral(2)


def test_constructor_type() -> None:
    expected = Pi(
        Univ(0),
        Pi(Nat, Pi(Var(1), Pi(VecType(Var(2), Var(1)), VecType(Var(3), Succ(Var(2)))))),
    )
    assert infer(ENV, Ctx(), ConsCtor) == expected
