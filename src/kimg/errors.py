"""Exceptions raised while converting GIMP header images."""


class ConversionError(Exception):
    """Base class for every conversion failure."""


class FormatError(ConversionError):
    """Malformed palette or header text."""


class PaletteMismatchError(FormatError):
    """The image color table does not agree with the palette."""


class DimensionMismatchError(ConversionError):
    """Declared width x height differs from the parsed pixel count."""


class CapacityError(ConversionError):
    """Palette or image exceeds what the cards can hold."""


class MissingDataError(ConversionError):
    """A required declaration or marker was never found."""


class IoError(ConversionError):
    """Reading an input or writing the output failed."""
