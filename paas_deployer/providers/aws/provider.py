"""
Elastic Beanstalk provider pipeline.

Deploys one commit to one Elastic Beanstalk environment:

    1. Resolve application metadata (bundle bucket, looked up once per run)
    2. Ensure the bucket exists (create only when the check says it doesn't)
    3. Resolve and fetch the commit archive
    4. Upload it to {app_name}/heaven-{sha}.zip
    5. Register a fresh application version
    6. Point {app_name}-{environment} at that version
    7. Compose the console dashboard link

Every step is safe to redo from scratch: the bucket is checked before it is
created, the object key is derived from the sha, and each run registers a
new version label.

Usage:
    provider = ElasticBeanstalkProvider.from_settings(request, settings)
    provider.execute()
    provider.notify()
    print(provider.status.output)
"""

import threading
import time
from pathlib import Path
from typing import Callable, Optional, TYPE_CHECKING

from paas_deployer import constants as CONSTANTS
from paas_deployer.core.exceptions import ApplicationMetadataError
from paas_deployer.core.models import ApplicationVersion, Archive, DeploymentRequest, EnvironmentUpdate
from paas_deployer.core.protocols import ArchiveResolver, PlatformClient, StorageClient
from paas_deployer.logger import logger
from paas_deployer.providers.base import BaseProvider
from .naming import BeanstalkNaming

if TYPE_CHECKING:
    from paas_deployer.config import Settings

PHASE_RESOLVE_METADATA = "resolve application metadata"
PHASE_ENSURE_STORAGE = "ensure storage location"
PHASE_RESOLVE_ARCHIVE = "resolve source archive"
PHASE_UPLOAD = "upload"
PHASE_REGISTER_VERSION = "register version"
PHASE_UPDATE_ENVIRONMENT = "update environment"


class ElasticBeanstalkProvider(BaseProvider):
    """
    Pipeline for AWS Elastic Beanstalk.

    The collaborators are passed in explicitly; from_settings() wires the
    real S3/Elastic Beanstalk/GitHub ones.
    """

    name = CONSTANTS.BEANSTALK_PROVIDER_NAME
    display_name = CONSTANTS.BEANSTALK_DISPLAY_NAME

    def __init__(
        self,
        request: DeploymentRequest,
        storage: StorageClient,
        platform: PlatformClient,
        archive_resolver: ArchiveResolver,
        working_directory: str = CONSTANTS.DEFAULT_WORKING_DIRECTORY,
        dry_run: bool = False,
        cancel_event: Optional[threading.Event] = None,
        clock: Callable[[], float] = time.time
    ):
        super().__init__(request, dry_run=dry_run, cancel_event=cancel_event)
        self._storage = storage
        self._platform = platform
        self._archive_resolver = archive_resolver
        self._working_directory = Path(working_directory)
        self._clock = clock

        # Fails fast with ConfigurationError before any remote call
        self._naming = BeanstalkNaming(request.app_name, request.environment_name, request.commit_sha)
        self._region = request.aws_region

        # Per-run caches, never shared across runs
        self._app_version: Optional[ApplicationVersion] = None
        self._storage_ready = False

    @classmethod
    def from_settings(
        cls,
        request: DeploymentRequest,
        settings: 'Settings',
        dry_run: bool = False,
        cancel_event: Optional[threading.Event] = None
    ) -> 'ElasticBeanstalkProvider':
        """Build the provider with boto3 clients for the request's region."""
        from paas_deployer.scm.github import GitHubArchiveResolver
        from .clients import create_aws_clients
        from .platform import BeanstalkPlatformClient
        from .storage import S3StorageClient

        clients = create_aws_clients(settings.beanstalk_config(request.aws_region))
        resolver = GitHubArchiveResolver(
            token=settings.GITHUB_TOKEN,
            api_url=settings.GITHUB_API_URL,
            timeout=settings.REQUEST_TIMEOUT_SECONDS,
        )
        return cls(
            request,
            storage=S3StorageClient(clients["s3"], clients["elasticbeanstalk"]),
            platform=BeanstalkPlatformClient(clients["elasticbeanstalk"]),
            archive_resolver=resolver,
            working_directory=settings.WORKING_DIRECTORY,
            dry_run=dry_run,
            cancel_event=cancel_event,
        )

    # ==========================================
    # Naming
    # ==========================================

    @property
    def naming(self) -> BeanstalkNaming:
        return self._naming

    @property
    def region(self) -> str:
        return self._region

    @property
    def archive_name(self) -> str:
        return self._naming.archive_name()

    @property
    def archive_path(self) -> Path:
        return self._working_directory / self._request.identifier / self.archive_name

    @property
    def bucket_key(self) -> str:
        return self._naming.bucket_key()

    @property
    def environment_name(self) -> str:
        return self._naming.environment_name()

    # ==========================================
    # Application metadata (memoized per run)
    # ==========================================

    @property
    def app_version(self) -> ApplicationVersion:
        """
        The application's current version, looked up once per run.

        Raises:
            ApplicationMetadataError: If the application has no versions yet
        """
        if self._app_version is None:
            versions = self._platform.list_application_versions(self._naming.app_name)
            if not versions:
                raise ApplicationMetadataError(self._naming.app_name)
            buckets = {v.source_bundle.bucket for v in versions}
            if len(buckets) > 1:
                logger.warning(
                    f"Application {self._naming.app_name} has bundles in {sorted(buckets)}; "
                    f"using the newest: {versions[0].source_bundle.bucket}"
                )
            self._app_version = versions[0]
        return self._app_version

    @property
    def bucket_name(self) -> str:
        """Bucket holding the application's bundles (explicit config wins)."""
        return self._request.aws_bucket or self.app_version.source_bundle.bucket

    # ==========================================
    # Steps
    # ==========================================

    def ensure_storage_location(self) -> None:
        """Create the bucket only if it does not already exist. At most once per run."""
        if self._storage_ready:
            return
        bucket = self.bucket_name
        if self._storage.bucket_exists(bucket):
            logger.info(f"S3 bucket already exists: {bucket}")
        else:
            created = self._storage.create_bucket()
            if created != bucket:
                logger.warning(f"Storage location {created} differs from bundle bucket {bucket}")
        self._storage_ready = True

    def fetch_source_code(self) -> Archive:
        link = self._archive_resolver.resolve(self._request.commit_sha, self._request.repository_identifier)
        url = self._archive_resolver.normalize(link)
        local_path = self._archive_resolver.fetch(url, self.archive_path)
        return Archive(local_path=Path(local_path), remote_key=self.bucket_key)

    def upload_source_code(self, archive: Archive) -> None:
        self._storage.put_object(self.bucket_name, archive.remote_key, archive.local_path)

    def create_app_version(self, archive: Archive) -> ApplicationVersion:
        return self._platform.create_application_version(
            application_name=self._naming.app_name,
            version_label=self._naming.version_label(self._clock),
            bucket=self.bucket_name,
            key=archive.remote_key,
            description=self.description,
        )

    def update_app(self, version: ApplicationVersion) -> EnvironmentUpdate:
        return self._platform.update_environment(self.environment_name, version.version_label)

    @property
    def description(self) -> str:
        return (
            f"{self._request.repository_identifier}@{self._request.commit_sha} "
            f"(deployment {self._request.identifier})"
        )

    # ==========================================
    # Pipeline
    # ==========================================

    def _reset(self) -> None:
        super()._reset()
        self._app_version = None
        self._storage_ready = False

    def _run(self) -> str:
        with self.phase(PHASE_RESOLVE_METADATA, f"Resolving application metadata: {self._naming.app_name}"):
            bucket = self.bucket_name

        with self.phase(PHASE_ENSURE_STORAGE, f"Configuring S3 bucket: {bucket}"):
            self.ensure_storage_location()

        with self.phase(PHASE_RESOLVE_ARCHIVE, "Fetching source code from GitHub"):
            archive = self.fetch_source_code()

        with self.phase(PHASE_UPLOAD, f"Uploading source code: {archive.local_path} => {archive.remote_key}"):
            self.upload_source_code(archive)

        with self.phase(PHASE_REGISTER_VERSION, f"Creating application version: {self._naming.app_name}"):
            version = self.create_app_version(archive)

        with self.phase(PHASE_UPDATE_ENVIRONMENT, f"Updating application environment: {self.environment_name}"):
            update = self.update_app(version)

        return self._naming.dashboard_url(self._region, update.environment_id)
