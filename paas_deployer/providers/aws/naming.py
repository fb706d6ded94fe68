"""
Elastic Beanstalk naming conventions.

Naming Convention:
    - Archive:      heaven-{sha}.zip (same commit -> same name, uploads overwrite)
    - Bucket key:   {app_name}/heaven-{sha}.zip
    - Environment:  {app_name}-{environment}
    - Version:      heaven-{sha}-{unix_timestamp}-{sequence} (fresh every run)

Usage:
    naming = BeanstalkNaming("myapp", "prod", "abc123")
    naming.bucket_key()        # "myapp/heaven-abc123.zip"
    naming.environment_name()  # "myapp-prod"
"""

import itertools
import time
from typing import Callable, Optional
from urllib.parse import urlencode

from paas_deployer import constants as CONSTANTS

# Process-wide, so two labels built within the same second never collide
_version_sequence = itertools.count(1)


def archive_name(sha: str) -> str:
    """Deterministic archive file name for a commit."""
    return f"{CONSTANTS.ARCHIVE_PREFIX}-{sha}{CONSTANTS.ARCHIVE_EXTENSION}"


def version_label(sha: str, clock: Callable[[], float] = time.time) -> str:
    """Build a version label that is unique per call, even within one second."""
    return f"{CONSTANTS.VERSION_LABEL_PREFIX}-{sha}-{int(clock())}-{next(_version_sequence)}"


def dashboard_url(region: str, application_name: str, environment_id: str) -> str:
    """Console link to an environment dashboard."""
    query = urlencode({"applicationName": application_name, "environmentId": environment_id})
    return (
        f"{CONSTANTS.BEANSTALK_CONSOLE_URL}?region={region}"
        f"#/environment/dashboard?{query}"
    )


class BeanstalkNaming:
    """
    Names for one deployment of one application.

    Attributes:
        app_name: Elastic Beanstalk application name
        environment: Environment suffix from the request (e.g. "prod")
        sha: Commit being deployed
    """

    def __init__(self, app_name: str, environment: str, sha: str):
        self.app_name = app_name
        self.environment = environment
        self.sha = sha

    def archive_name(self) -> str:
        return archive_name(self.sha)

    def bucket_key(self) -> str:
        return f"{self.app_name}/{self.archive_name()}"

    def environment_name(self) -> str:
        return f"{self.app_name}-{self.environment}"

    def version_label(self, clock: Optional[Callable[[], float]] = None) -> str:
        return version_label(self.sha, clock or time.time)

    def dashboard_url(self, region: str, environment_id: str) -> str:
        return dashboard_url(region, self.app_name, environment_id)
