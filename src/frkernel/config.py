"""Kernel configuration.

A ``KernelConfig`` travels with every ``Environment`` so that the reduction
engine and the type checker agree on which conversion rules are enabled and
which inductive type interprets numeric literals.

Example::

    config = KernelConfig.from_mapping({"proof_irrelevance": False})
    env = Environment(config=config)
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping


@dataclass(frozen=True)
class KernelConfig:
    """Switches for the definitional equality check and numeral support."""

    # Two proofs of the same proposition are definitionally equal.
    proof_irrelevance: bool = True
    # ``\x. f x`` is definitionally equal to ``f``.
    eta: bool = True
    # Inductive and constructor names that give ``NatLit`` its meaning.
    nat_inductive: str = "Nat"
    nat_zero: str = "zero"
    nat_succ: str = "succ"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> KernelConfig:
        """Build a config from a plain mapping, rejecting unknown keys."""
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ValueError(f"Unknown kernel config keys: {', '.join(unknown)}")
        values: dict[str, Any] = {}
        for key, value in data.items():
            default = getattr(cls, key)
            if isinstance(default, bool):
                if not isinstance(value, bool):
                    raise ValueError(f"Config key {key} expects a bool, got {value!r}")
            elif not isinstance(value, str) or not value:
                raise ValueError(f"Config key {key} expects a name, got {value!r}")
            values[key] = value
        return cls(**values)


DEFAULT_CONFIG = KernelConfig()


__all__ = ["KernelConfig", "DEFAULT_CONFIG"]
