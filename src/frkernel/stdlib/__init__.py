"""The standard library fragment: universes, ``id``, ``Nat``, ``Vec`` and ``True``."""

from __future__ import annotations

from frkernel.config import KernelConfig
from frkernel.kernel.decls import Declaration
from frkernel.kernel.env import Environment

from . import core, logic, nat, vec

DECLARATIONS: tuple[Declaration, ...] = (
    *core.DECLARATIONS,
    *nat.DECLARATIONS,
    *vec.DECLARATIONS,
    *logic.DECLARATIONS,
)


def load_stdlib(
    env: Environment | None = None, config: KernelConfig | None = None
) -> Environment:
    """Check every standard library declaration in file order.

    Starts from ``env`` when given, otherwise from an empty environment built
    with ``config``.
    """
    if env is None:
        env = Environment() if config is None else Environment(config=config)
    return env.add_all(DECLARATIONS)


__all__ = ["DECLARATIONS", "load_stdlib"]
