"""
Exceptions raised by the stereogram pipeline.

Everything derives from :class:`StereogramError` so callers can catch the
whole family at once. Input problems also subclass ``ValueError``.
"""


class StereogramError(Exception):
    """Base class for every error raised by ``sirds``."""


class MaskDecodeError(StereogramError):
    """The mask source could not be decoded as a raster image."""


class ConfigError(StereogramError, ValueError):
    """A synthesis parameter is outside the range the projection can handle."""


class GeometryError(StereogramError, ValueError):
    """The mask has zero width or zero height."""


class ColorFormatError(StereogramError, ValueError):
    """A color string is not valid ``#RRGGBBAA`` hex."""
