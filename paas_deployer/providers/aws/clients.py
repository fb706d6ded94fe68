"""
AWS SDK client initialization.

Returns a dictionary of boto3 clients rather than module-level globals, so
the provider controls their lifetime and tests can swap in moto-backed or
MagicMock clients.

Usage:
    from paas_deployer.providers.aws.clients import create_aws_clients

    clients = create_aws_clients(settings.beanstalk_config("eu-central-1"))
    # clients["s3"], clients["elasticbeanstalk"]
"""

from typing import Any, Dict

import boto3
from botocore.config import Config

from paas_deployer.config import BeanstalkConfig


def create_aws_clients(config: BeanstalkConfig) -> Dict[str, Any]:
    """
    Create the boto3 clients needed for an Elastic Beanstalk deployment.

    Retries are disabled: a failed call aborts the run and the caller decides
    whether to re-run the whole pipeline.

    Client Keys:
        - s3: Simple Storage Service (bundle upload)
        - elasticbeanstalk: Elastic Beanstalk (storage location, versions, environments)
    """
    botocore_config = Config(
        region_name=config.region,
        connect_timeout=config.connect_timeout,
        read_timeout=config.read_timeout,
        retries={"mode": "standard", "total_max_attempts": 1},
    )
    credentials = {
        "aws_access_key_id": config.access_key_id,
        "aws_secret_access_key": config.secret_access_key,
        "region_name": config.region,
        "config": botocore_config,
    }

    return {
        "s3": boto3.client("s3", **credentials),
        "elasticbeanstalk": boto3.client("elasticbeanstalk", **credentials),
    }
