"""
Data Models for the sneakpeek upload workflow

Immutable values passed between the revision resolver, the archiver
and the API client.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RefType(Enum):
    """Kind of git reference an upload is filed under"""
    TAG = "tag"
    BRANCH = "branch"


@dataclass(frozen=True)
class RevisionInfo:
    """Commit and reference the uploaded directory was built from"""
    sha: Optional[str] = None
    reftype: Optional[RefType] = None
    ref: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return self.reftype is not None and bool(self.ref)


@dataclass(frozen=True)
class UploadOptions:
    """Options for a single upload run"""
    path: str
    project: str
    gitlab_project: str
    api_url: str
    api_key: Optional[str] = None

    def get_headers(self) -> dict:
        """Get authentication headers for API requests"""
        if self.api_key:
            return {"Authorization": self.api_key}
        return {}


@dataclass
class UploadResult:
    """Overall upload operation result"""
    success: bool
    url: Optional[str] = None
    response_body: Optional[str] = None
    error: Optional[str] = None
    status_code: Optional[int] = None
