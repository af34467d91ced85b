"""
Simple exceptions for archive and upload functionality.
"""


class SneakpeekError(Exception):
    """Base sneakpeek error."""
    pass


class PathValidationError(SneakpeekError):
    """Upload path missing or not a directory."""
    pass


class ConfigurationError(SneakpeekError):
    """Config file could not be loaded."""
    pass


class ArchiveError(SneakpeekError):
    """Writing the zip archive failed."""
    pass


class UrlConstructionError(SneakpeekError):
    """Upload URL could not be built from the revision."""
    pass


class UploadError(SneakpeekError):
    """Base upload error."""

    def __init__(self, message, **kwargs):
        super().__init__(message)
        self.endpoint = kwargs.get('endpoint')
        self.status_code = kwargs.get('status_code')


class APIConnectionError(UploadError):
    """API connection failed."""
    pass


class AuthenticationError(UploadError):
    """Authentication failed."""
    pass
