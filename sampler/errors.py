"""Sampler error classes."""


class SamplerError(Exception):
    """Base error for pool sampling operations."""

    pass


class SubgraphError(SamplerError):
    """The pool index returned an error payload or an unparseable response."""

    pass
