from frkernel.kernel.ast import App, Const, Lam, Pi, Var
from frkernel.kernel.tel import (
    ArgList,
    Telescope,
    decompose_app,
    decompose_pi,
    mk_app,
    mk_lams,
    mk_pis,
)
from frkernel.stdlib.nat import Nat


def test_vars_count_down_to_offset() -> None:
    assert ArgList.vars(3) == ArgList.of(Var(2), Var(1), Var(0))
    assert ArgList.vars(2, offset=1) == ArgList.of(Var(2), Var(1))
    assert ArgList.vars(0) == ArgList.of()


def test_mk_app_flattens_arg_lists() -> None:
    f = Const("f")
    assert mk_app(f, ArgList.of(Var(0)), Var(1)) == App(App(f, Var(0)), Var(1))


def test_decompose_app_inverts_mk_app() -> None:
    f = Const("f")
    head, args = decompose_app(mk_app(f, Var(0), Var(1)))
    assert head == f
    assert args == ArgList.of(Var(0), Var(1))


def test_mk_pis_and_decompose_pi() -> None:
    ty = mk_pis(Telescope.of(Nat, Nat), return_ty=Var(1))
    assert ty == Pi(Nat, Pi(Nat, Var(1)))
    binders, body = decompose_pi(ty)
    assert binders == Telescope.of(Nat, Nat)
    assert body == Var(1)


def test_mk_lams_binds_first_outermost() -> None:
    assert mk_lams(Nat, Pi(Nat, Nat), body=Var(0)) == Lam(Nat, Lam(Pi(Nat, Nat), Var(0)))


def test_telescope_shift_keeps_own_binders() -> None:
    tel = Telescope.of(Var(0), Var(1))
    # Entry 1 sees entry 0 as Var(0); only its Var(1) is free.
    assert tel.shift(2) == Telescope.of(Var(2), Var(3))
