"""
Custom exceptions for the deployment pipeline.

Collaborator wrappers (archive resolver, storage client, platform client)
translate SDK and HTTP errors into the specific types below. The provider
pipeline never recovers from them: it wraps the failure into a
RemoteOperationError naming the phase that failed and re-raises.

Exception Hierarchy:
    DeploymentError (base)
    ├── ProviderNotFoundError - Unknown provider name requested
    ├── ConfigurationError - Invalid payload, config or settings
    ├── SourceNotFoundError - No archive available for a commit
    ├── FetchError - Archive download failed
    ├── StorageProvisionError - Bucket lookup/creation failed
    ├── UploadError - Object upload failed
    ├── PlatformApiError - PaaS API call failed
    │   └── ApplicationMetadataError - No bundle bucket could be discovered
    ├── RemoteOperationError - A pipeline phase failed (wraps the above)
    └── DeploymentCancelledError - Cancel hook fired between phases
"""

from typing import Optional


class DeploymentError(Exception):
    """
    Base exception for all deployment-related errors.

    Attributes:
        message: Human-readable error description
        provider: Optional provider name where error occurred
        phase: Optional pipeline phase where error occurred
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        phase: Optional[str] = None
    ):
        self.message = message
        self.provider = provider
        self.phase = phase

        details = []
        if provider:
            details.append(f"provider={provider}")
        if phase:
            details.append(f"phase={phase}")

        if details:
            full_message = f"{message} [{', '.join(details)}]"
        else:
            full_message = message

        super().__init__(full_message)


class ProviderNotFoundError(DeploymentError):
    """
    Raised when an unknown provider name is requested.

    Example:
        >>> ProviderRegistry.get("heroku")
        ProviderNotFoundError: Provider 'heroku' not found. Available: ['elastic_beanstalk']
    """

    def __init__(self, provider_name: str, available_providers: list[str]):
        self.provider_name = provider_name
        self.available_providers = available_providers
        message = (
            f"Provider '{provider_name}' not found. "
            f"Available: {available_providers}"
        )
        super().__init__(message, provider=provider_name)


class ConfigurationError(DeploymentError):
    """
    Raised when a payload, custom config or settings value is invalid.

    Example:
        >>> DeploymentRequest.from_payload("1", {"sha": "abc"})
        ConfigurationError: Deployment payload is missing 'environment'
    """

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{message} (source: {source})"
        super().__init__(message)


class _CollaboratorError(DeploymentError):
    """Shared shape for errors raised by the capability wrappers."""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        provider: Optional[str] = None,
        phase: Optional[str] = None
    ):
        self.original_error = original_error
        if original_error:
            message += f": {original_error}"
        super().__init__(message, provider=provider, phase=phase)


class SourceNotFoundError(_CollaboratorError):
    """Raised when source control reports no archive for a commit."""

    def __init__(
        self,
        repository: str,
        ref: str,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None
    ):
        self.repository = repository
        self.ref = ref
        self.status_code = status_code
        message = f"No archive found for {repository}@{ref}"
        if status_code is not None:
            message += f" (HTTP {status_code})"
        super().__init__(message, original_error, phase="resolve source archive")


class FetchError(_CollaboratorError):
    """Raised when downloading an archive fails (transport error or non-2xx)."""

    def __init__(
        self,
        url: str,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None
    ):
        self.url = url
        self.status_code = status_code
        message = f"Failed to fetch archive {url}"
        if status_code is not None:
            message += f" (HTTP {status_code})"
        super().__init__(message, original_error, phase="resolve source archive")


class StorageProvisionError(_CollaboratorError):
    """Raised when a bucket cannot be looked up or created."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, original_error, phase="ensure storage location")


class UploadError(_CollaboratorError):
    """Raised when writing an object to the bucket fails."""

    def __init__(
        self,
        bucket: str,
        key: str,
        original_error: Optional[Exception] = None
    ):
        self.bucket = bucket
        self.key = key
        super().__init__(
            f"Failed to upload s3://{bucket}/{key}", original_error, phase="upload"
        )


class PlatformApiError(_CollaboratorError):
    """
    Raised when a PaaS API call fails.

    Attributes:
        operation: API operation name (e.g. "CreateApplicationVersion")
        error_code: Provider error code (e.g. "InsufficientPrivilegesException")
    """

    def __init__(
        self,
        operation: str,
        error_code: Optional[str] = None,
        original_error: Optional[Exception] = None,
        message: Optional[str] = None
    ):
        self.operation = operation
        self.error_code = error_code
        text = message or f"{operation} failed"
        if error_code:
            text += f" ({error_code})"
        super().__init__(text, original_error)


class ApplicationMetadataError(PlatformApiError):
    """Raised when no existing application version reveals the bundle bucket."""

    def __init__(self, application_name: str):
        self.application_name = application_name
        super().__init__(
            "DescribeApplicationVersions",
            error_code="NoApplicationVersions",
            message=(
                f"Application '{application_name}' has no existing versions; "
                "deploy it once manually or set 'aws.bucket' in the payload config"
            )
        )


class RemoteOperationError(DeploymentError):
    """
    Raised by a provider pipeline when one of its phases fails.

    Attributes:
        phase: Name of the phase that failed (e.g. "upload")
        cause: The collaborator error that aborted the run
    """

    def __init__(self, phase: str, cause: Exception, provider: Optional[str] = None):
        self.cause = cause
        super().__init__(f"Deployment failed: {cause}", provider=provider, phase=phase)


class DeploymentCancelledError(DeploymentError):
    """Raised when the cancel hook is set at a remote-call boundary."""

    def __init__(self, phase: str, provider: Optional[str] = None):
        super().__init__(f"Deployment cancelled before '{phase}'", provider=provider, phase=phase)
