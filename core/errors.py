"""
core/errors.py — Exception types for Typing Taro.

Only programming and configuration mistakes are exceptions. A wrong
keystroke or a prompt reaching the floor is a game event handled by the
session state machine, never an error.
"""


class ConfigurationError(ValueError):
    """Session or catalog configuration is unusable.

    Raised for an empty stage list, an unknown stage id, a stage with no
    glyphs, a non-positive speed, or a malformed catalog. Fatal to session
    start; callers surface it to the player and do not retry.
    """


class UnknownGlyph(KeyError):
    """A glyph has no entry in the spelling table.

    Indicates a data-integrity bug in the stage catalog. Never caught per
    keystroke.
    """
