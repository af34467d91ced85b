"""
Upload command implementation.

Thin wrapper around UploadService that handles CLI argument parsing
and delegates business logic to the service layer.
"""
import sys
from typing import Optional

import typer

from sneakpeek.core.uploader import UploadService


def upload_command(
    path: str = typer.Argument(..., help="Local path to upload to sneakpeek"),
    project: str = typer.Option(..., "--project", "-p", help="Name of the sneakpeek project"),
    gitlab_project: str = typer.Option(..., "--gitlab-project", "-g", help="group/name of the gitlab project"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="API URL to upload to (overrides SNEAKPEEK_API_URL)"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="API key to use (overrides SNEAKPEEK_API_KEY)"),
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="Path to config YAML")
):
    """Upload a path to sneakpeek."""

    # Delegate to service layer
    upload_service = UploadService()
    exit_code = upload_service.execute_upload(
        path=path,
        project=project,
        gitlab_project=gitlab_project,
        api_url=api_url,
        api_key=api_key,
        config_path=config_path
    )

    # Exit with appropriate code
    if exit_code != 0:
        sys.exit(exit_code)
