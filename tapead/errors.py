# tapead/errors.py
"""Exceptions raised by tapead."""


class ADError(Exception):
    """Base class of all tapead errors."""


class StaleReferenceError(ADError):
    """A handle or adjoint vector refers to a tape that has been reset."""


class TapeMismatchError(StaleReferenceError):
    """Operands of one operation were recorded on different tapes."""


class NoActiveEpisodeError(ADError):
    """A literal was promoted to a handle with no tape given and no episode open."""


class EpisodeError(ADError):
    """Episodes were ended out of order."""


class DomainError(ADError, ValueError):
    """A primitive was evaluated outside of its domain."""


class TapeExhaustedError(ADError, RuntimeError):
    """The tape ran out of indices (Settings.max_slots)."""


class UnknownPrimitiveError(ADError, KeyError):
    """No primitive is registered under the requested name."""


class ConfigError(ADError, ValueError):
    """Invalid configuration value."""
