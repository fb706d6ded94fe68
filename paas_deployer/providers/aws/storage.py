"""
S3 storage client for source bundles.

Wraps the two boto3 clients the storage phase needs: S3 for existence checks
and uploads, Elastic Beanstalk for provisioning its per-region storage
location. SDK errors are translated into StorageProvisionError/UploadError.
"""

from pathlib import Path
from typing import Any

from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError

from paas_deployer.core.exceptions import StorageProvisionError, UploadError
from paas_deployer.logger import logger

_MISSING_BUCKET_CODES = ("404", "NoSuchBucket", "NotFound")


class S3StorageClient:
    """
    StorageClient implementation on S3.

    Holds only client configuration; safe to share across runs.
    """

    def __init__(self, s3_client: Any, eb_client: Any):
        self._s3 = s3_client
        self._eb = eb_client

    def bucket_exists(self, name: str) -> bool:
        """
        Check whether the bucket exists.

        Raises:
            StorageProvisionError: If the check fails for any reason other than a missing bucket
        """
        try:
            self._s3.head_bucket(Bucket=name)
            logger.debug(f"S3 bucket exists: {name}")
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] in _MISSING_BUCKET_CODES:
                return False
            raise StorageProvisionError(f"Failed to check S3 bucket '{name}'", e)
        except BotoCoreError as e:
            raise StorageProvisionError(f"Failed to check S3 bucket '{name}'", e)

    def create_bucket(self) -> str:
        """
        Provision the Elastic Beanstalk storage location for the account/region.

        Returns:
            Name of the bucket Elastic Beanstalk created (or already had).
        """
        try:
            response = self._eb.create_storage_location()
        except (ClientError, BotoCoreError) as e:
            raise StorageProvisionError("Failed to create Elastic Beanstalk storage location", e)

        bucket = response.get("S3Bucket")
        if not bucket:
            raise StorageProvisionError("CreateStorageLocation response has no S3Bucket")
        logger.info(f"Created storage location: {bucket}")
        return bucket

    def put_object(self, bucket: str, key: str, local_path: Path) -> None:
        try:
            self._s3.upload_file(str(local_path), bucket, key)
        except (ClientError, BotoCoreError, S3UploadFailedError, OSError) as e:
            raise UploadError(bucket, key, e)
        logger.info(f"Uploaded {local_path} to s3://{bucket}/{key}")
