"""Simulation defaults and configuration validation.

There is no configuration file and no environment lookup — every engine
is configured through keyword arguments at construction time.  This
module holds the textbook defaults those arguments fall back to, and
the one error type raised when a value makes no sense.

Defaults:
    - ``DEFAULT_CYLINDERS`` — a 200-cylinder disk (cylinders 0-199),
      the size used by most textbook disk scheduling exercises.
    - ``DEFAULT_FRAMES`` — three physical frames, small enough that
      evictions happen on short reference strings.
    - ``DEFAULT_QUANTUM`` — round-robin time slice in ticks.
"""

DEFAULT_CYLINDERS = 200
DEFAULT_FRAMES = 3
DEFAULT_QUANTUM = 4


class ConfigurationError(ValueError):
    """Raised when an engine is constructed with an impossible setting."""


def require_positive(value: int, *, name: str) -> int:
    """Return *value* unchanged if it is a positive integer.

    Args:
        value: The setting to check.
        name: Human-readable setting name used in the error message.

    Returns:
        The validated value.

    Raises:
        ConfigurationError: If the value is zero or negative.

    """
    if value <= 0:
        msg = f"{name} must be positive (got {value})"
        raise ConfigurationError(msg)
    return value
