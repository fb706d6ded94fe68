import os
import pytest
from unittest.mock import MagicMock

from paas_deployer.core.models import ApplicationVersion, DeploymentRequest, EnvironmentUpdate, SourceBundle


@pytest.fixture(scope="function", autouse=True)
def mock_env_vars(monkeypatch):
    """Set mock environment variables to prevent accidental cloud calls."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("BEANSTALK_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("BEANSTALK_SECRET_ACCESS_KEY", "testing")


@pytest.fixture
def deployment_request():
    """Request for commit abc123 of myapp to the prod environment."""
    return DeploymentRequest(
        identifier="42",
        commit_sha="abc123",
        repository_identifier="acme/myapp",
        environment_name="prod",
        custom_config={"app_name": "myapp"},
    )


@pytest.fixture
def storage():
    """StorageClient double: bucket exists, uploads succeed."""
    client = MagicMock(name="storage")
    client.bucket_exists.return_value = True
    client.create_bucket.return_value = "myapp-bucket"
    return client


@pytest.fixture
def platform():
    """PlatformClient double with one existing version in myapp-bucket."""
    client = MagicMock(name="platform")
    client.list_application_versions.return_value = [
        ApplicationVersion("myapp", "heaven-old-1", SourceBundle("myapp-bucket", "myapp/heaven-old.zip")),
    ]

    def create_version(application_name, version_label, bucket, key, description=""):
        return ApplicationVersion(application_name, version_label, SourceBundle(bucket, key))

    def update_environment(environment_name, version_label):
        return EnvironmentUpdate(environment_name, version_label, environment_id="e-abc123")

    client.create_application_version.side_effect = create_version
    client.update_environment.side_effect = update_environment
    return client


@pytest.fixture
def archive_resolver(tmp_path):
    """ArchiveResolver double that writes a small file on fetch."""
    resolver = MagicMock(name="archive_resolver")
    resolver.resolve.return_value = "https://codeload.github.com/acme/myapp/legacy.tar.gz/abc123"
    resolver.normalize.side_effect = lambda url: url.replace("legacy.tar.gz", "legacy.zip")

    def fetch(url, destination_path):
        destination_path.parent.mkdir(parents=True, exist_ok=True)
        destination_path.write_bytes(b"PK\x03\x04")
        return destination_path

    resolver.fetch.side_effect = fetch
    return resolver
