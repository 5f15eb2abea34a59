"""Custom exceptions for Lantern."""


class LanternException(Exception):
    """Base exception for Lantern errors."""
    pass


class FlatFileError(LanternException):
    """A flat file could not be read, written or mapped onto a record."""
    pass


class FrontMatterError(FlatFileError):
    """Markdown front matter is missing its closing marker or is not valid YAML."""
    pass


class IndexDesyncError(LanternException):
    """Shadow index and flat files are out of sync."""
    pass


class RegistryError(LanternException):
    """Block type registry misconfiguration."""
    pass
