"""Custom exceptions used across sheetmapper."""


class SheetMapperError(RuntimeError):
    """Base error for the package."""


class ConfigurationError(SheetMapperError):
    """Metadata is missing or structurally invalid."""


class CorrespondenceError(SheetMapperError):
    """Data or sheet does not belong to the sheet meta it is processed with."""


class IndexOutOfBoundsError(SheetMapperError, IndexError):
    """Raised when a 1-based positional access falls outside ``[1, size]``."""


class DuplicateIndexError(SheetMapperError, ValueError):
    """Raised when a cell, row or sheet is added at an occupied index."""


class ComposeError(SheetMapperError):
    """Raised when a value extractor fails while composing a sheet."""


class SourceFormatError(SheetMapperError):
    """An input file exists but cannot be read as the expected format."""
