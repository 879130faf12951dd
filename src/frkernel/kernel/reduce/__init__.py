"""Reduction utilities split by rule family (beta, delta, iota, whnf, normalize)."""

from .beta import beta_head_step
from .conversion import is_def_eq
from .delta import delta_head_step
from .iota import iota_head_step, unfold_nat_lit
from .normalize import normalize
from .whnf import whnf, whnf_step

__all__ = [
    "beta_head_step",
    "delta_head_step",
    "iota_head_step",
    "unfold_nat_lit",
    "is_def_eq",
    "normalize",
    "whnf",
    "whnf_step",
]
