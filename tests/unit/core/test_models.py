"""
Unit tests for the deployment data model.
"""

import dataclasses

import pytest

from paas_deployer.core.exceptions import ConfigurationError
from paas_deployer.core.models import ApplicationVersion, DeploymentRequest, Status


WEBHOOK_PAYLOAD = {
    "deployment": {
        "sha": "abc123",
        "environment": "prod",
        "payload": {"config": {"app_name": "myapp", "aws": {"region": "eu-west-1"}}},
    },
    "repository": {"full_name": "acme/myapp"},
}


class TestDeploymentRequest:

    def test_from_webhook_payload(self):
        request = DeploymentRequest.from_payload(42, WEBHOOK_PAYLOAD)

        assert request.identifier == "42"
        assert request.commit_sha == "abc123"
        assert request.repository_identifier == "acme/myapp"
        assert request.environment_name == "prod"
        assert request.app_name == "myapp"
        assert request.aws_region == "eu-west-1"

    def test_from_flat_payload(self):
        request = DeploymentRequest.from_payload("1", {
            "sha": "def456",
            "environment": "staging",
            "name_with_owner": "acme/other",
            "config": {"app_name": "other"},
        })

        assert request.commit_sha == "def456"
        assert request.repository_identifier == "acme/other"
        assert request.environment_name == "staging"

    @pytest.mark.parametrize("missing", ["sha", "environment", "name_with_owner"])
    def test_missing_required_field_raises(self, missing):
        payload = {"sha": "abc", "environment": "prod", "name_with_owner": "a/b", "config": {}}
        del payload[missing]

        with pytest.raises(ConfigurationError):
            DeploymentRequest.from_payload("1", payload)

    def test_non_object_config_raises(self):
        with pytest.raises(ConfigurationError):
            DeploymentRequest.from_payload(
                "1", {"sha": "a", "environment": "p", "name_with_owner": "a/b", "config": ["x"]}
            )

    def test_region_defaults_to_us_east_1(self, deployment_request):
        assert deployment_request.aws_region == "us-east-1"
        assert deployment_request.aws_bucket is None

    def test_missing_app_name_raises(self):
        request = DeploymentRequest("1", "abc", "a/b", "prod", {})
        with pytest.raises(ConfigurationError):
            request.app_name

    def test_request_is_immutable(self, deployment_request):
        with pytest.raises(dataclasses.FrozenInstanceError):
            deployment_request.commit_sha = "other"
        with pytest.raises(TypeError):
            deployment_request.custom_config["app_name"] = "other"

    def test_caller_mutation_does_not_leak(self):
        config = {"app_name": "myapp"}
        request = DeploymentRequest("1", "abc", "a/b", "prod", config)

        config["app_name"] = "changed"

        assert request.app_name == "myapp"

    @pytest.mark.parametrize("payload", [["abc123"], "abc123", None])
    def test_non_object_payload_raises(self, payload):
        with pytest.raises(ConfigurationError):
            DeploymentRequest.from_payload("1", payload)

    @pytest.mark.parametrize("section", ["deployment", "repository"])
    def test_non_object_webhook_section_raises(self, section):
        payload = dict(WEBHOOK_PAYLOAD, **{section: "oops"})

        with pytest.raises(ConfigurationError):
            DeploymentRequest.from_payload("1", payload)

    def test_non_object_aws_config_raises_from_payload(self):
        with pytest.raises(ConfigurationError) as exc_info:
            DeploymentRequest.from_payload("1", {
                "sha": "a", "environment": "p", "name_with_owner": "a/b",
                "config": {"app_name": "myapp", "aws": "eu-west-1"},
            })

        assert "config.aws" in str(exc_info.value)

    def test_non_object_aws_config_raises_from_accessors(self):
        request = DeploymentRequest("1", "abc", "a/b", "prod", {"app_name": "myapp", "aws": "eu-west-1"})

        with pytest.raises(ConfigurationError):
            request.aws_region
        with pytest.raises(ConfigurationError):
            request.aws_bucket

    def test_non_string_region_raises(self):
        request = DeploymentRequest("1", "abc", "a/b", "prod", {"app_name": "myapp", "aws": {"region": 5}})

        with pytest.raises(ConfigurationError):
            request.aws_region


class TestApplicationVersion:

    def test_from_api(self):
        version = ApplicationVersion.from_api({
            "ApplicationName": "myapp",
            "VersionLabel": "v1",
            "SourceBundle": {"S3Bucket": "myapp-bucket", "S3Key": "myapp/v1.zip"},
        })

        assert version.application_name == "myapp"
        assert version.version_label == "v1"
        assert version.source_bundle.bucket == "myapp-bucket"
        assert version.source_bundle.key == "myapp/v1.zip"


class TestStatus:

    def test_new_status_is_unfinalized(self):
        status = Status()
        assert status.log == []
        assert status.success is None
        assert status.finalized is False

    def test_succeed_overwrites(self):
        status = Status()
        status.succeed("first")
        status.succeed("second")

        assert status.success is True
        assert status.output == "second"

    def test_fail_keeps_output_when_none_given(self):
        status = Status(output="partial")
        status.fail()

        assert status.success is False
        assert status.output == "partial"

    def test_statuses_do_not_share_logs(self):
        a, b = Status(), Status()
        a.append("line")
        assert b.log == []
