"""Custom exception classes for stdin2file."""

from typing import Optional


class Stdin2FileError(Exception):
    """
    Base exception class for all stdin2file errors.
    """
    pass


class ConfigError(Stdin2FileError):
    """
    Raised when the run configuration is invalid.
    """
    pass


class ChannelClosedError(Stdin2FileError):
    """
    Raised when sending a completion report after the receiving side has gone away.
    """
    pass


class ProducerError(Stdin2FileError):
    """
    Raised when a chunk cannot be encoded, written, or reported.
    """

    def __init__(self, message: str, file_name: Optional[str] = None):
        super().__init__(message)
        self.file_name = file_name


class RetentionError(Stdin2FileError):
    """
    Raised when an evicted file cannot be deleted.
    """

    def __init__(self, message: str, file_name: Optional[str] = None):
        super().__init__(message)
        self.file_name = file_name
