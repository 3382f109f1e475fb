"""Exception hierarchy for tonearm."""


class TonearmError(Exception):
    """Base exception for tonearm."""
    pass


class ScanError(TonearmError):
    """The library root could not be listed."""
    pass


class ResourceError(TonearmError):
    """A file could not be probed, decoded or played on the output device."""
    pass


class EmptyLibraryError(TonearmError):
    """The library has, or would end up with, no tracks."""
    pass


class ConfigurationError(TonearmError):
    """Configuration file could not be read or written."""
    pass
