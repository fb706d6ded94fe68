"""
Runtime settings.

Credentials and runtime options come from the process environment (or a
.env file) and never from the deployment request. The provider pipeline
does not read the environment itself: the outer system loads Settings once
and hands an explicit BeanstalkConfig to client construction.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic_settings import BaseSettings

from paas_deployer import constants as CONSTANTS


@dataclass(frozen=True)
class BeanstalkConfig:
    """Region and credentials for the S3 and Elastic Beanstalk clients."""

    region: str
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    connect_timeout: int = CONSTANTS.AWS_CONNECT_TIMEOUT_SECONDS
    read_timeout: int = CONSTANTS.AWS_READ_TIMEOUT_SECONDS

    def __repr__(self) -> str:
        return f"BeanstalkConfig(region={self.region!r}, access_key_id={'***' if self.access_key_id else None})"


class Settings(BaseSettings):
    # AWS
    BEANSTALK_ACCESS_KEY_ID: Optional[str] = None
    BEANSTALK_SECRET_ACCESS_KEY: Optional[str] = None

    # Source control
    GITHUB_TOKEN: Optional[str] = None
    GITHUB_API_URL: str = CONSTANTS.DEFAULT_GITHUB_API_URL

    # Runtime
    WORKING_DIRECTORY: str = CONSTANTS.DEFAULT_WORKING_DIRECTORY
    REQUEST_TIMEOUT_SECONDS: int = CONSTANTS.DEFAULT_REQUEST_TIMEOUT_SECONDS
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        extra = "ignore"

    def beanstalk_config(self, region: str) -> BeanstalkConfig:
        """
        Build the explicit AWS client configuration for a region.

        Empty credentials are passed as None so boto3 falls back to its own
        credential chain (instance profile, shared config).
        """
        return BeanstalkConfig(
            region=region,
            access_key_id=self.BEANSTALK_ACCESS_KEY_ID or None,
            secret_access_key=self.BEANSTALK_SECRET_ACCESS_KEY or None,
        )


def get_settings() -> Settings:
    return Settings()
