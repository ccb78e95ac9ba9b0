"""Fixed-point primitives for Balancer V1 pool math."""

from sampler.math.fixed_point import BONE, MAX_IN_RATIO, MAX_OUT_RATIO, bmul, scale

__all__ = ["BONE", "MAX_IN_RATIO", "MAX_OUT_RATIO", "bmul", "scale"]
