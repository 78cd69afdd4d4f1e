"""
Exceptions raised by the Invaders simulation.
"""


class ConfigurationError(ValueError):
    """Invalid settings, or a controller used before it was initialised."""
