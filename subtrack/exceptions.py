"""Custom Exceptions for the SubTrack application."""

class SubTrackError(Exception):
    """Base class for exceptions in this module."""
    pass

class ConfigurationError(SubTrackError):
    """Exception raised for errors in configuration loading."""
    pass

class FetchError(SubTrackError):
    """Exception raised when subtitle bytes cannot be fetched from their source."""
    pass

class InvalidSourceError(FetchError):
    """Exception raised for a subtitle source that is neither an http(s) URL nor a public path."""
    pass

class UploadError(SubTrackError):
    """Exception raised when a serialized subtitle file cannot be stored."""
    pass

class FormattingError(SubTrackError):
    """Exception raised for errors during subtitle formatting."""
    pass

class FileSystemError(SubTrackError):
    """Exception raised for file system related errors (permissions, not found etc)."""
    pass

class EditorError(SubTrackError):
    """Exception raised for invalid operations in a subtitle editing session."""
    pass
