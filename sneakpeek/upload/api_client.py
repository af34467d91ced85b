"""
Sneakpeek API Client

Builds the upload endpoint for a project and revision and posts the
archive as a multipart form with streaming progress callbacks.
"""

import io
import logging
import os
from typing import Callable, Optional
from urllib.parse import quote

import requests
from urllib3 import encode_multipart_formdata

from .models import RefType, RevisionInfo, UploadOptions
from .exceptions import (
    APIConnectionError,
    AuthenticationError,
    UploadError,
    UrlConstructionError
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

REFTYPE_SEGMENTS = {
    RefType.BRANCH: "branches",
    RefType.TAG: "tags"
}


def _quote_component(value: str) -> str:
    return quote(value, safe="!*'()")


def build_upload_url(api_url: str, project: str, revision: RevisionInfo) -> str:
    """Build {api_url}/projects/{project}/{branches|tags}/{ref}"""
    if not revision.is_resolved:
        if revision.reftype not in REFTYPE_SEGMENTS:
            raise UrlConstructionError("Current project is neither on a tag nor a branch")
        raise UrlConstructionError(f"Could not determine the current {revision.reftype.value} name")

    return "/".join([
        api_url.rstrip("/"),
        "projects",
        _quote_component(project),
        REFTYPE_SEGMENTS[revision.reftype],
        _quote_component(revision.ref)
    ])


class ProgressReader(io.BytesIO):
    """In-memory request body that reports how much of it has been read"""

    def __init__(self, data: bytes, callback: Optional[ProgressCallback] = None):
        super().__init__(data)
        self.total = len(data)
        self.callback = callback

    def read(self, size: int = -1) -> bytes:
        chunk = super().read(size)
        if self.callback and chunk:
            self.callback(self.tell(), self.total)
        return chunk


class SneakpeekAPIClient:
    """Handles all API interactions with the sneakpeek server"""

    def __init__(self, options: UploadOptions):
        self.options = options
        self.session = requests.Session()
        self.session.headers.update(options.get_headers())

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.session.close()

    def upload_url(self, revision: RevisionInfo) -> str:
        return build_upload_url(self.options.api_url, self.options.project, revision)

    def upload_archive(
        self,
        archive_path: str,
        revision: RevisionInfo,
        on_progress: Optional[ProgressCallback] = None
    ) -> requests.Response:
        """POST /projects/{project}/{branches|tags}/{ref}"""
        url = self.upload_url(revision)

        try:
            with open(archive_path, 'rb') as f:
                archive_data = f.read()
        except OSError as e:
            raise UploadError(f"Could not read archive {archive_path}: {e}", endpoint=url)

        body, content_type = encode_multipart_formdata({
            "sha": revision.sha or "",
            "gitlab_project": self.options.gitlab_project,
            "file": (os.path.basename(archive_path), archive_data, "application/zip")
        })
        logger.debug(f"Posting {len(body)} bytes to {url}")

        try:
            response = self.session.post(
                url,
                data=ProgressReader(body, on_progress),
                headers={"Content-Type": content_type}
            )
        except requests.exceptions.RequestException as e:
            raise APIConnectionError(f"Failed to upload archive: {str(e)}", endpoint=url)

        self._handle_response_errors(response, url)
        return response

    def _handle_response_errors(self, response: requests.Response, endpoint: str):
        """Handle common API response errors"""
        if response.status_code == 401:
            raise AuthenticationError(
                "Unauthorized API access",
                status_code=response.status_code,
                endpoint=endpoint
            )
        elif response.status_code >= 400:
            raise APIConnectionError(
                f"HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
                endpoint=endpoint
            )
