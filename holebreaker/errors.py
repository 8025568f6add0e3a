"""Exceptions raised by HoleBreaker.

The simulation itself has no I/O failure modes. The only error the core
raises is a rejected configuration: everything else (losing every ball,
clearing the last brick, reaching the final level) is a state transition.
"""


class ConfigurationError(ValueError):
    """Raised when game configuration or generator input is invalid."""
    pass
