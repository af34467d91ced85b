"""
Upload service for sneakpeek.

Runs the validate, archive and upload pipeline for one directory and
translates its outcome into a process exit code.
"""
import logging
from typing import Optional

from sneakpeek.rich_utils.ui_helpers import get_console
from sneakpeek.core.config_manager import ConfigManager
from sneakpeek.core.file_manager import FileManager
from sneakpeek.upload import SneakpeekError, UploadOrchestrator

logger = logging.getLogger(__name__)


class UploadService:
    """Service for uploading a directory to sneakpeek."""

    def __init__(self):
        self.console = get_console()
        self.config_manager = ConfigManager()
        self.file_manager = FileManager(self.console)

    def execute_upload(
        self,
        path: str,
        project: str,
        gitlab_project: str,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        config_path: Optional[str] = None
    ) -> int:
        """Execute upload workflow and return exit code."""
        try:
            options = self.config_manager.build_upload_options(
                path=path,
                project=project,
                gitlab_project=gitlab_project,
                api_url=api_url,
                api_key=api_key,
                config_path=config_path
            )

            self.file_manager.validate_directory(options.path)

            archive_path = self.file_manager.archive_directory(options.path)

            orchestrator = UploadOrchestrator(options, self.console)
            upload_result = orchestrator.execute_upload(archive_path)

        except SneakpeekError as e:
            logger.debug("Upload aborted", exc_info=True)
            self.console.print(f"❌ {e}", style="bold red", markup=False, soft_wrap=True)
            return 1

        if upload_result.success:
            return 0
        return 1
