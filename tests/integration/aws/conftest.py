import pytest
import boto3
from unittest.mock import MagicMock
from moto import mock_aws


@pytest.fixture(scope="function")
def s3_client():
    """Real boto3 S3 client backed by moto."""
    with mock_aws():
        yield boto3.client("s3", region_name="us-east-1")


@pytest.fixture(scope="function")
def eb_client():
    """Elastic Beanstalk client double (moto lacks storage locations and versions)."""
    client = MagicMock()
    client.create_storage_location.return_value = {"S3Bucket": "elasticbeanstalk-us-east-1-123456789012"}
    return client
