"""
Exception classes for art-size-reader.

This module defines all custom exceptions used throughout the application.
Each exception states whether it is fatal to the whole run or only to the
file currently being analyzed.

Exception Hierarchy:
    ArtSizeReaderError (base)
        ConfigError - Invalid configuration (FATAL)
            PathNotFound - Target path does not exist
            ParseError - Resolution string cannot be parsed
            OutputError - Logfile or playlist cannot be opened
        ExtractionError - Tag container unreadable (per-file)
        ImageProbeError - Artwork cannot be decoded (per-file)

Constraint violations are not errors. They are the intended output of a
successful scan and are modelled by audit.constraints.Violation.
"""


class ArtSizeReaderError(Exception):
    """
    Base exception for all art-size-reader errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., file path).
        fatal: True if the error must abort the whole run.

    Example:
        try:
            config = builder.build()
        except ArtSizeReaderError as e:
            logger.error(f"Operation failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    fatal = False

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'file_path': Audio file involved in the error
                     - 'field': Configuration field that failed validation
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(ArtSizeReaderError):
    """
    Raised when the run configuration is invalid.

    This is a CRITICAL error: the run aborts before any file is processed.

    Common causes:
        - Target path does not exist
        - Resolution string is not in WIDTHxHEIGHT format
        - Size limit is not a positive number
        - Logfile or playlist directory does not exist
        - YAML defaults file is malformed
    """

    fatal = True


class PathNotFound(ConfigError):
    """
    Raised when the target path is neither an existing file nor a directory.

    Example:
        raise PathNotFound(
            "Invalid target path: /music/missing",
            details={'field': 'target_path', 'path': '/music/missing'}
        )
    """
    pass


class ParseError(ConfigError):
    """
    Raised when a resolution string cannot be parsed.

    The message always contains the offending string so the user can
    spot the typo.

    Example:
        raise ParseError(
            "Can not parse resolution 300y300, must be in format e.g.: 300x300",
            details={'value': '300y300'}
        )
    """
    pass


class OutputError(ConfigError):
    """
    Raised when the logfile or the playlist cannot be created or opened.

    Example:
        raise OutputError(
            "Invalid playlist path: /nonexistent/out.m3u",
            details={'field': 'playlist', 'path': '/nonexistent/out.m3u'}
        )
    """
    pass


class ExtractionError(ArtSizeReaderError):
    """
    Raised when the tag container of an audio file cannot be read.

    This is a NON-CRITICAL error: it is reported inline for the affected
    file and the scan continues with the next one.

    Common causes:
        - File vanished or is unreadable (permissions)
        - Corrupted ID3 header
    """
    pass


class ImageProbeError(ArtSizeReaderError):
    """
    Raised when embedded artwork bytes cannot be decoded.

    This is a NON-CRITICAL error: the file is reported with the underlying
    reason and the scan continues.

    Common causes:
        - Truncated or corrupted image payload
        - Image format unknown to Pillow
    """
    pass
