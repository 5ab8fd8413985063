"""Exceptions raised by the analysis and graph stages."""


class CcoupleError(Exception):
    """Base class for ccouple errors."""

    pass


class ParseError(CcoupleError):
    """Raised when libclang cannot produce a translation unit for a file."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse {path}: {reason}" if reason else f"Failed to parse {path}")


class UnsupportedConstructError(CcoupleError):
    """Raised when the AST contains a construct the classifiers do not handle.

    Guessing would silently corrupt scope and definition decisions, so the
    current file is aborted instead.
    """

    pass


class UnresolvedBuiltinError(CcoupleError):
    """Raised by the graph builder for a use with no definition that survived filtering."""

    def __init__(self, name: str, location: str):
        self.name = name
        self.location = location
        super().__init__(f"Use of {name!r} at {location} has no definition and is not a known builtin")
