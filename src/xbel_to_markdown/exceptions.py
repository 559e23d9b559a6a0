"""Exceptions raised while converting bookmarks."""


class ConversionError(Exception):
    """Base exception for conversion errors."""


class InputNotFoundError(ConversionError):
    """Raised when the XBEL input file does not exist."""


class ParseError(ConversionError):
    """Raised when the input is not well-formed XML."""


class StorageError(ConversionError):
    """Raised when a storage operation (mkdir, move, delete, write) fails."""


class AlreadyExistsError(StorageError):
    """Raised when a new file would overwrite an existing one."""


class ConfigError(ConversionError):
    """Raised when settings hold invalid values."""
