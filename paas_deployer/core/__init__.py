"""
Core abstractions for the deployment pipeline.

Modules:
    models: DeploymentRequest, Status and the remote record types
    protocols: Capability contracts (ArchiveResolver, StorageClient, PlatformClient)
    registry: ProviderRegistry for provider-name lookup
    exceptions: Error hierarchy rooted at DeploymentError
"""

from .exceptions import (
    ApplicationMetadataError,
    ConfigurationError,
    DeploymentCancelledError,
    DeploymentError,
    FetchError,
    PlatformApiError,
    ProviderNotFoundError,
    RemoteOperationError,
    SourceNotFoundError,
    StorageProvisionError,
    UploadError,
)
from .models import (
    ApplicationVersion,
    Archive,
    DeploymentRequest,
    EnvironmentUpdate,
    SourceBundle,
    Status,
)
from .protocols import ArchiveResolver, DeploymentProvider, PlatformClient, StorageClient
from .registry import ProviderRegistry

__all__ = [
    # Models
    "ApplicationVersion",
    "Archive",
    "DeploymentRequest",
    "EnvironmentUpdate",
    "SourceBundle",
    "Status",
    # Protocols
    "ArchiveResolver",
    "DeploymentProvider",
    "PlatformClient",
    "StorageClient",
    # Registry
    "ProviderRegistry",
    # Exceptions
    "ApplicationMetadataError",
    "ConfigurationError",
    "DeploymentCancelledError",
    "DeploymentError",
    "FetchError",
    "PlatformApiError",
    "ProviderNotFoundError",
    "RemoteOperationError",
    "SourceNotFoundError",
    "StorageProvisionError",
    "UploadError",
]
