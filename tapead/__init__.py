# tapead/__init__.py
# Tape-based reverse-mode automatic differentiation

from .version import __version__
from .config import Settings, configure, get_settings, logger
from .errors import (
    ADError,
    StaleReferenceError,
    TapeMismatchError,
    NoActiveEpisodeError,
    EpisodeError,
    DomainError,
    TapeExhaustedError,
    UnknownPrimitiveError,
    ConfigError,
)
from .core.record import Record
from .core.tape import Tape, episode, begin_episode, end_episode, current_tape
from .core.var import ADVar, as_variable, value
from .core.engine import Adjoints, chain, gradient
from .core.seeds import grad, grads, grads_list
from .core.graph_utils import tape_stats, format_tape, print_tape_summary

# Primitives
from . import ops
from .ops import (
    add, sub, mul, div, neg, pow, absolute,
    exp, log, sqrt, sin, cos, tanh, erf,
    norm_cdf, norm_pdf,
    register, get_primitive, primitives,
)

__all__ = [
    '__version__',
    # Config
    'Settings', 'configure', 'get_settings', 'logger',
    # Errors
    'ADError', 'StaleReferenceError', 'TapeMismatchError',
    'NoActiveEpisodeError', 'EpisodeError', 'DomainError',
    'TapeExhaustedError', 'UnknownPrimitiveError', 'ConfigError',
    # Core
    'Record', 'Tape', 'episode', 'begin_episode', 'end_episode', 'current_tape',
    'ADVar', 'as_variable', 'value',
    # Engine
    'Adjoints', 'chain', 'gradient',
    'grad', 'grads', 'grads_list',
    # Inspection
    'tape_stats', 'format_tape', 'print_tape_summary',
    # Primitives
    'ops',
    'add', 'sub', 'mul', 'div', 'neg', 'pow', 'absolute',
    'exp', 'log', 'sqrt', 'sin', 'cos', 'tanh', 'erf', 'norm_cdf', 'norm_pdf',
    'register', 'get_primitive', 'primitives',
]
