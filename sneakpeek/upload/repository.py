"""
Revision Metadata Collector

Resolves the commit SHA and the symbolic reference (tag or branch) an
upload belongs to, either from CI variables or from the local git
checkout. Lookups are best effort: a failing git call leaves the field
empty instead of raising.
"""

import logging
import os
import subprocess
from typing import List, Optional

from .environment_detector import CIEnvironmentDetector
from .models import RefType, RevisionInfo

logger = logging.getLogger(__name__)

# `git rev-parse --abbrev-ref` prints this for a detached head
DETACHED_HEAD = "HEAD"


class RevisionMetadataCollector:
    """Collect revision information for upload metadata"""

    def __init__(self, working_directory: Optional[str] = None, detector: CIEnvironmentDetector = None):
        self.working_directory = working_directory or os.getcwd()
        self.detector = detector or CIEnvironmentDetector()

    def collect(self, rev: str = "HEAD") -> RevisionInfo:
        """Resolve revision info from CI variables or local git"""
        if self.detector.is_ci():
            logger.debug(f"CI environment: {self.detector.get_environment_summary()}")
            revision = self.detector.get_revision()
            logger.debug(f"Resolved revision from CI environment: {revision}")
        else:
            revision = self.collect_git_revision(rev)
            logger.debug(f"Resolved revision from git: {revision}")
        return revision

    def collect_git_revision(self, rev: str = "HEAD") -> RevisionInfo:
        """Resolve revision info from the local git checkout"""
        sha = self._get_commit_sha(rev)

        tag = self._get_exact_tag(rev)
        if tag:
            return RevisionInfo(sha=sha, reftype=RefType.TAG, ref=tag)

        branch = self._get_branch(rev)
        if branch:
            return RevisionInfo(sha=sha, reftype=RefType.BRANCH, ref=branch)

        return RevisionInfo(sha=sha)

    def _get_commit_sha(self, rev: str) -> Optional[str]:
        """Get the full commit SHA of rev"""
        return self._git(['show', '--format=format:%H', '-s', rev])

    def _get_exact_tag(self, rev: str) -> Optional[str]:
        """Get the tag pointing exactly at rev, if any"""
        return self._git(['describe', '--tags', '--exact-match', rev])

    def _get_branch(self, rev: str) -> Optional[str]:
        """Get the branch name of rev"""
        branch = self._git(['rev-parse', '--abbrev-ref', rev])
        if branch == DETACHED_HEAD:
            return None
        return branch

    def _git(self, args: List[str]) -> Optional[str]:
        """Run a git command and return its trimmed output, or None on failure"""
        command = ['git'] + args
        try:
            result = subprocess.run(
                command,
                cwd=self.working_directory,
                capture_output=True,
                text=True
            )
        except (FileNotFoundError, OSError) as e:
            logger.debug(f"Could not run {' '.join(command)}: {e}")
            return None

        if result.returncode != 0:
            logger.debug(f"{' '.join(command)} exited with {result.returncode}: {result.stderr.strip()}")
            return None

        output = result.stdout.strip().strip('"')
        return output or None
