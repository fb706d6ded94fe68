"""
Data model for a single deployment run.

DeploymentRequest describes what to deploy and is immutable once built.
Status is the only mutable object: the pipeline appends progress lines to it
and finalizes it once in notify().

Payload Shapes (DeploymentRequest.from_payload):
    GitHub deployment webhook:
        {
            "deployment": {"sha": "...", "environment": "prod",
                           "payload": {"config": {"app_name": "myapp"}}},
            "repository": {"full_name": "owner/repo"}
        }

    Flat form (used by the CLI and tests):
        {"sha": "...", "environment": "prod", "name_with_owner": "owner/repo",
         "config": {"app_name": "myapp"}}
"""

import copy
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from paas_deployer import constants as CONSTANTS
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class DeploymentRequest:
    """
    Immutable description of what to deploy.

    Attributes:
        identifier: Deployment id assigned by the outer system (guid)
        commit_sha: Commit to deploy
        repository_identifier: Repository in "owner/name" form
        environment_name: Target environment suffix (e.g. "prod")
        custom_config: Provider-specific settings; must contain "app_name"
    """

    identifier: str
    commit_sha: str
    repository_identifier: str
    environment_name: str
    custom_config: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Copy so later changes to the caller's payload can't leak into the run
        frozen = MappingProxyType(copy.deepcopy(dict(self.custom_config)))
        object.__setattr__(self, "custom_config", frozen)

    @classmethod
    def from_payload(cls, identifier: str, payload: Dict[str, Any]) -> "DeploymentRequest":
        """
        Build a request from a webhook or flat payload.

        Raises:
            ConfigurationError: If the payload is not an object, a nested
                section has the wrong type, or sha, environment or
                repository is missing
        """
        if not isinstance(payload, dict):
            raise ConfigurationError("Deployment payload must be an object")

        deployment = _section(payload, "deployment")
        repository = _section(payload, "repository")
        inner = _section(deployment, "payload", "deployment.payload")

        sha = deployment.get("sha") or payload.get("sha")
        environment = deployment.get("environment") or payload.get("environment")
        nwo = repository.get("full_name") or payload.get("name_with_owner")
        config = inner.get("config") or payload.get("config") or {}

        for key, value in (("sha", sha), ("environment", environment), ("repository", nwo)):
            if not value:
                raise ConfigurationError(f"Deployment payload is missing '{key}'")
        if not isinstance(config, dict):
            raise ConfigurationError("Deployment payload 'config' must be an object")

        request = cls(
            identifier=str(identifier),
            commit_sha=sha,
            repository_identifier=nwo,
            environment_name=environment,
            custom_config=config,
        )
        # Surface a malformed "aws" section now rather than mid-run
        request.aws_region
        request.aws_bucket
        return request

    @property
    def app_name(self) -> str:
        """Application name from custom config. Required by every provider."""
        name = self.custom_config.get("app_name")
        if not name:
            raise ConfigurationError("Custom config is missing 'app_name'")
        return name

    @property
    def aws_region(self) -> str:
        return self._aws_setting("region") or CONSTANTS.DEFAULT_AWS_REGION

    @property
    def aws_bucket(self) -> Optional[str]:
        """Explicit bundle bucket, if the payload pins one."""
        return self._aws_setting("bucket")

    def _aws_setting(self, key: str) -> Optional[str]:
        """
        Raises:
            ConfigurationError: If "aws" is not an object or the value is not a string
        """
        aws = _section(self.custom_config, "aws", "config.aws")
        value = aws.get(key)
        if value is not None and not isinstance(value, str):
            raise ConfigurationError(f"Custom config 'aws.{key}' must be a string")
        return value


def _section(data: Mapping[str, Any], key: str, label: Optional[str] = None) -> Mapping[str, Any]:
    """Return data[key] as a mapping ({} when absent or empty)."""
    value = data.get(key) or {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Deployment payload '{label or key}' must be an object")
    return value


@dataclass(frozen=True)
class Archive:
    """Local source archive and the object key it is uploaded under."""

    local_path: Path
    remote_key: str


@dataclass(frozen=True)
class SourceBundle:
    bucket: str
    key: str


@dataclass(frozen=True)
class ApplicationVersion:
    """
    A PaaS-tracked, immutable record binding a version label to a bundle.
    """

    application_name: str
    version_label: str
    source_bundle: SourceBundle

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ApplicationVersion":
        """Build from an Elastic Beanstalk ApplicationVersionDescription."""
        bundle = data.get("SourceBundle") or {}
        return cls(
            application_name=data["ApplicationName"],
            version_label=data["VersionLabel"],
            source_bundle=SourceBundle(
                bucket=bundle.get("S3Bucket", ""),
                key=bundle.get("S3Key", ""),
            ),
        )


@dataclass(frozen=True)
class EnvironmentUpdate:
    environment_name: str
    version_label: str
    environment_id: str


@dataclass
class Status:
    """
    Progress log and final outcome of one pipeline run.

    Attributes:
        log: Ordered progress lines, each prefixed with the provider display name
        success: None until the run is finalized
        output: User-facing result (dashboard URL on success)
    """

    log: List[str] = field(default_factory=list)
    success: Optional[bool] = None
    output: str = ""

    def append(self, line: str) -> None:
        self.log.append(line)

    def succeed(self, output: str) -> None:
        """Finalize as successful. Calling again simply overwrites."""
        self.output = output
        self.success = True

    def fail(self, output: str = "") -> None:
        if output:
            self.output = output
        self.success = False

    @property
    def finalized(self) -> bool:
        return self.success is not None
