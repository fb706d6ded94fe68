"""
Elastic Beanstalk platform client.

Thin wrapper over the three Elastic Beanstalk calls a deployment needs. It
converts API responses into the core models and every SDK failure into a
PlatformApiError that carries the provider's error code.
"""

from typing import Any, List

from botocore.exceptions import BotoCoreError, ClientError

from paas_deployer.core.exceptions import PlatformApiError
from paas_deployer.core.models import ApplicationVersion, EnvironmentUpdate
from paas_deployer.logger import logger

# Elastic Beanstalk rejects longer version descriptions
MAX_DESCRIPTION_LENGTH = 200


def _platform_error(operation: str, error: Exception) -> PlatformApiError:
    code = None
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code")
    return PlatformApiError(operation, error_code=code, original_error=error)


def _malformed_response(operation: str, error: KeyError) -> PlatformApiError:
    return PlatformApiError(
        operation,
        error_code="MalformedResponse",
        message=f"{operation} response is missing {error}",
    )


class BeanstalkPlatformClient:
    """PlatformClient implementation on Elastic Beanstalk."""

    def __init__(self, eb_client: Any):
        self._eb = eb_client

    def list_application_versions(self, application_name: str) -> List[ApplicationVersion]:
        """Existing versions of an application, newest first (API order)."""
        try:
            response = self._eb.describe_application_versions(ApplicationName=application_name)
        except (ClientError, BotoCoreError) as e:
            raise _platform_error("DescribeApplicationVersions", e)

        try:
            versions = [ApplicationVersion.from_api(v) for v in response.get("ApplicationVersions", [])]
        except KeyError as e:
            raise _malformed_response("DescribeApplicationVersions", e)
        logger.debug(f"Found {len(versions)} application versions for {application_name}")
        return versions

    def create_application_version(
        self,
        application_name: str,
        version_label: str,
        bucket: str,
        key: str,
        description: str = ""
    ) -> ApplicationVersion:
        try:
            response = self._eb.create_application_version(
                ApplicationName=application_name,
                VersionLabel=version_label,
                Description=description[:MAX_DESCRIPTION_LENGTH],
                SourceBundle={"S3Bucket": bucket, "S3Key": key},
                AutoCreateApplication=False,
            )
        except (ClientError, BotoCoreError) as e:
            raise _platform_error("CreateApplicationVersion", e)

        try:
            version = ApplicationVersion.from_api(response["ApplicationVersion"])
        except KeyError as e:
            raise _malformed_response("CreateApplicationVersion", e)

        logger.info(f"Created application version: {version_label}")
        return version

    def update_environment(self, environment_name: str, version_label: str) -> EnvironmentUpdate:
        try:
            response = self._eb.update_environment(
                EnvironmentName=environment_name,
                VersionLabel=version_label,
            )
        except (ClientError, BotoCoreError) as e:
            raise _platform_error("UpdateEnvironment", e)

        if "EnvironmentId" not in response:
            raise _malformed_response("UpdateEnvironment", KeyError("EnvironmentId"))

        logger.info(f"Updated environment {environment_name} to {version_label}")
        return EnvironmentUpdate(
            environment_name=response.get("EnvironmentName", environment_name),
            version_label=response.get("VersionLabel", version_label),
            environment_id=response["EnvironmentId"],
        )
