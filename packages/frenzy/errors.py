"""
Exceptions raised by the rules engine.

Gameplay operations never raise for in-domain inputs: invalid transitions
return False, empty buffers return False/None and enemy validation is
advisory. These exceptions cover broken static data and bad configuration.
"""


class FrenzyError(Exception):
    """Base class for engine errors."""


class ElementCycleError(FrenzyError):
    """The strong/weak element tables do not form one complete cycle."""


class ConfigError(FrenzyError, ValueError):
    """A configuration value could not be parsed or is out of range."""

    def __init__(self, key: str, value, reason: str):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"{key}={value!r}: {reason}")
