"""
Exceptions raised by sprout.

The engine itself is permissive: missing inputs and targets read as 0 and
are never an error. These exceptions only guard construction options and
serialized state coming from outside.
"""


class SproutError(Exception):
    """Base class for all sprout errors."""


class ConfigurationError(SproutError, ValueError):
    """Invalid network or training options (bad hidden sizes, bad rates)."""


class MalformedStateError(SproutError, ValueError):
    """A serialized network tree that cannot be restored."""
