"""
Protocol definitions for the deployment pipeline.

These are the capability contracts the provider pipeline depends on. Using
Python's Protocol (structural subtyping) lets tests hand in plain mocks while
still giving IDE support, and @runtime_checkable allows isinstance() checks.

Protocols:
    ArchiveResolver - commit -> archive URL -> local file
    StorageClient - bucket existence/creation and object upload
    PlatformClient - application versions and environment updates
    DeploymentProvider - the pipeline contract (execute/notify)
"""

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ApplicationVersion, DeploymentRequest, EnvironmentUpdate, Status


@runtime_checkable
class ArchiveResolver(Protocol):
    """Turns a commit reference into a local archive file."""

    def resolve(self, commit_sha: str, repository_identifier: str) -> str:
        """
        Return a downloadable archive URL for the commit.

        Raises:
            SourceNotFoundError: If source control has no archive for the commit
        """
        ...

    def normalize(self, archive_url: str) -> str:
        """Translate the legacy packaging format name. Pure, never fails."""
        ...

    def fetch(self, archive_url: str, destination_path: Path) -> Path:
        """
        Download the archive to destination_path.

        Raises:
            FetchError: On transport failure or non-2xx response
        """
        ...


@runtime_checkable
class StorageClient(Protocol):
    """Object storage capabilities used by the pipeline."""

    def bucket_exists(self, name: str) -> bool:
        ...

    def create_bucket(self) -> str:
        """
        Provision the provider-scoped storage location.

        The remote API infers the bucket from account/region configuration.

        Returns:
            Name of the bucket that now exists.

        Raises:
            StorageProvisionError: If creation fails
        """
        ...

    def put_object(self, bucket: str, key: str, local_path: Path) -> None:
        """
        Upload local_path to bucket/key, overwriting any existing object.

        Raises:
            UploadError: If the upload fails
        """
        ...


@runtime_checkable
class PlatformClient(Protocol):
    """PaaS capabilities used by the pipeline. All raise PlatformApiError."""

    def list_application_versions(self, application_name: str) -> Sequence["ApplicationVersion"]:
        ...

    def create_application_version(
        self,
        application_name: str,
        version_label: str,
        bucket: str,
        key: str,
        description: str = ""
    ) -> "ApplicationVersion":
        ...

    def update_environment(self, environment_name: str, version_label: str) -> "EnvironmentUpdate":
        ...


@runtime_checkable
class DeploymentProvider(Protocol):
    """
    Interface for a deployment target.

    One implementation per target, selected by name through ProviderRegistry.
    Each instance serves exactly one run and owns its request and status.
    """

    @property
    def name(self) -> str:
        ...

    @property
    def status(self) -> "Status":
        ...

    def execute(self) -> None:
        """
        Run the full deploy workflow.

        Raises:
            RemoteOperationError: If any phase fails (no partial continuation)
        """
        ...

    def notify(self) -> None:
        """Finalize status as successful. Safe to call twice."""
        ...
