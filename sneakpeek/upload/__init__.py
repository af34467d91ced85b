"""
Sneakpeek Upload Module

Resolves git revision metadata and uploads zip archives to the
sneakpeek API under the project's branch or tag.
"""

from .api_client import SneakpeekAPIClient, build_upload_url
from .environment_detector import CIEnvironmentDetector
from .repository import RevisionMetadataCollector
from .upload_orchestrator import UploadOrchestrator
from .models import RefType, RevisionInfo, UploadOptions, UploadResult
from .exceptions import (
    SneakpeekError,
    PathValidationError,
    ConfigurationError,
    ArchiveError,
    UrlConstructionError,
    UploadError,
    APIConnectionError,
    AuthenticationError
)

__all__ = [
    'SneakpeekAPIClient',
    'build_upload_url',
    'CIEnvironmentDetector',
    'RevisionMetadataCollector',
    'UploadOrchestrator',
    'RefType',
    'RevisionInfo',
    'UploadOptions',
    'UploadResult',
    'SneakpeekError',
    'PathValidationError',
    'ConfigurationError',
    'ArchiveError',
    'UrlConstructionError',
    'UploadError',
    'APIConnectionError',
    'AuthenticationError'
]
