"""
AWS Elastic Beanstalk provider.

Importing this package registers ElasticBeanstalkProvider with the
ProviderRegistry under "elastic_beanstalk".
"""

from paas_deployer import constants as CONSTANTS
from paas_deployer.core.registry import ProviderRegistry
from .platform import BeanstalkPlatformClient
from .provider import ElasticBeanstalkProvider
from .storage import S3StorageClient

ProviderRegistry.register(CONSTANTS.BEANSTALK_PROVIDER_NAME, ElasticBeanstalkProvider)

__all__ = ["BeanstalkPlatformClient", "ElasticBeanstalkProvider", "S3StorageClient"]
