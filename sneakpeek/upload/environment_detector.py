"""
CI Environment Detector

Detects whether the uploader runs inside a CI runner and reads the
revision metadata the runner exposes through environment variables.
"""

import os
from typing import Optional

from .models import RefType, RevisionInfo


class CIEnvironmentDetector:
    """Detects CI execution and extracts CI-provided revision metadata"""

    CI_INDICATOR = "CI"
    SHA_VAR = "CI_BUILD_REF"
    TAG_VAR = "CI_BUILD_TAG"
    BRANCH_VAR = "CI_BUILD_REF_NAME"

    def is_ci(self) -> bool:
        """Check if the CI indicator variable is set"""
        return bool(os.getenv(self.CI_INDICATOR))

    def get_revision(self) -> RevisionInfo:
        """Build revision metadata from CI variables"""
        sha = self._get(self.SHA_VAR)
        tag = self._get(self.TAG_VAR)

        if tag:
            return RevisionInfo(sha=sha, reftype=RefType.TAG, ref=tag)

        return RevisionInfo(
            sha=sha,
            reftype=RefType.BRANCH,
            ref=self._get(self.BRANCH_VAR)
        )

    def get_environment_summary(self) -> dict:
        """Get summary of CI variables for debugging"""
        return {
            var: os.getenv(var)
            for var in (self.CI_INDICATOR, self.SHA_VAR, self.TAG_VAR, self.BRANCH_VAR)
        }

    def _get(self, name: str) -> Optional[str]:
        return os.getenv(name) or None
