"""Exceptions raised by the route extraction and rendering pipeline."""


class DocGenError(Exception):
    """Base class for route-docgen errors."""


class SourceParseError(DocGenError):
    """A single source file could not be turned into a syntax tree."""

    def __init__(self, file: str, message: str):
        super().__init__(f"{file}: {message}")
        self.file = file
        self.message = message


class NoSourceFilesError(DocGenError):
    """No source files were given or matched."""

    def __init__(self, message: str = "No route files found"):
        super().__init__(message)


class NoRoutesError(DocGenError):
    """Source files were scanned but no routes were recovered."""

    def __init__(self, message: str = "No routes found"):
        super().__init__(message)


class ConfigError(DocGenError):
    """The configuration file is unreadable or has the wrong shape."""
