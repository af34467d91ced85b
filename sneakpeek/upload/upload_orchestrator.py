"""
Upload Orchestrator for sneakpeek

Resolves the revision an archive belongs to, posts it with a Rich
progress bar and reports the outcome. Upload failures are reported and
returned, never raised.
"""

import json
import logging

from rich.console import Console

from sneakpeek.rich_utils.ui_helpers import TransferProgress

from .api_client import SneakpeekAPIClient
from .exceptions import AuthenticationError, UploadError
from .models import UploadOptions, UploadResult
from .repository import RevisionMetadataCollector

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized API access, try again with a (different) API key"


class UploadOrchestrator:
    """Coordinates revision lookup and archive upload with progress tracking"""

    def __init__(self, options: UploadOptions, console: Console = None, collector: RevisionMetadataCollector = None):
        self.options = options
        self.console = console or Console()
        self.collector = collector or RevisionMetadataCollector()

    def execute_upload(self, archive_path: str) -> UploadResult:
        """Upload archive_path to the project endpoint for the current revision.

        Raises UrlConstructionError when the revision has neither a tag nor
        a branch; no request is made in that case.
        """
        self.console.print(f"Uploading to {self.options.api_url}", style="cyan")

        revision = self.collector.collect()

        with SneakpeekAPIClient(self.options) as client:
            url = client.upload_url(revision)
            logger.info(f"Uploading {archive_path} to {url} (sha {revision.sha})")

            try:
                with TransferProgress(self.console) as progress:
                    response = client.upload_archive(archive_path, revision, on_progress=progress)

            except AuthenticationError as e:
                self.console.print(UNAUTHORIZED_MESSAGE, style="red")
                return UploadResult(success=False, url=url, error=str(e), status_code=e.status_code)

            except UploadError as e:
                self.console.print("Upload failed", style="red")
                self.console.print(str(e), markup=False, soft_wrap=True)
                return UploadResult(success=False, url=url, error=str(e), status_code=e.status_code)

        self._display_response(response.text)

        return UploadResult(
            success=True,
            url=url,
            response_body=response.text,
            status_code=response.status_code
        )

    def _display_response(self, body: str):
        """Print the response body, pretty-printed when it is JSON"""
        try:
            json.loads(body)
        except ValueError:
            self.console.print(body, markup=False, highlight=False)
        else:
            self.console.print_json(body)
