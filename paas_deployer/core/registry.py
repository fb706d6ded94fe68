"""
Provider registry for dynamic provider lookup.

This module is the provider-name lookup table the outer system uses to pick
a pipeline implementation for a deployment request.

How Registration Works:
    Each provider package registers its class when imported:

        # In providers/aws/__init__.py
        from paas_deployer.core.registry import ProviderRegistry
        from .provider import ElasticBeanstalkProvider
        ProviderRegistry.register("elastic_beanstalk", ElasticBeanstalkProvider)

    Importing paas_deployer.providers triggers registration of all of them.
"""

from typing import Any, Dict, Type, TYPE_CHECKING

from .exceptions import ProviderNotFoundError

if TYPE_CHECKING:
    from paas_deployer.config import Settings
    from .models import DeploymentRequest
    from .protocols import DeploymentProvider


class ProviderRegistry:
    """
    Central registry for deployment provider implementations.

    Class-level state, since providers register themselves at import time.
    Every lookup returns a fresh instance: a provider owns the request and
    status of exactly one run and must never be shared between runs.

    Example Usage:
        provider = ProviderRegistry.create("elastic_beanstalk", request, settings)
        provider.execute()
        provider.notify()
    """

    _providers: Dict[str, Type['DeploymentProvider']] = {}

    @classmethod
    def register(cls, name: str, provider_class: Type['DeploymentProvider']) -> None:
        """
        Register a provider class under a name.

        Registering the same class twice is allowed; a different class under
        an existing name raises.

        Raises:
            ValueError: If name is already registered with a different class
        """
        if name in cls._providers:
            existing_class = cls._providers[name]
            if existing_class is not provider_class:
                raise ValueError(
                    f"Provider '{name}' is already registered with {existing_class.__name__}. "
                    f"Cannot re-register with {provider_class.__name__}."
                )
            return

        cls._providers[name] = provider_class

    @classmethod
    def get(cls, name: str, **kwargs: Any) -> 'DeploymentProvider':
        """
        Instantiate the named provider with explicit constructor arguments.

        Raises:
            ProviderNotFoundError: If no provider is registered with that name.
        """
        return cls._lookup(name)(**kwargs)

    @classmethod
    def create(
        cls,
        name: str,
        request: 'DeploymentRequest',
        settings: 'Settings',
        **options: Any
    ) -> 'DeploymentProvider':
        """
        Build the named provider with its remote clients wired from settings.

        Args:
            name: Provider identifier (e.g. "elastic_beanstalk")
            request: The deployment request for this run
            settings: Credentials and runtime configuration
            **options: Passed through (dry_run, cancel_event)

        Raises:
            ProviderNotFoundError: If no provider is registered with that name.
        """
        return cls._lookup(name).from_settings(request, settings, **options)

    @classmethod
    def list_providers(cls) -> list[str]:
        """Registered provider names, sorted alphabetically."""
        return sorted(cls._providers.keys())

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._providers

    @classmethod
    def clear(cls) -> None:
        """
        Clear all registered providers.

        Used by tests to reset state between cases.
        """
        cls._providers.clear()

    @classmethod
    def _lookup(cls, name: str) -> Type['DeploymentProvider']:
        if name not in cls._providers:
            raise ProviderNotFoundError(name, cls.list_providers())
        return cls._providers[name]
