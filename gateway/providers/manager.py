"""
Provider management and factory functions.

This module provides the main interface for creating and managing search
providers. It handles provider selection based on configuration and
provides a factory function for easy provider instantiation.
"""

import logging
from typing import Optional, Dict, Type
from .base import SearchProvider, ProviderType

logger = logging.getLogger(__name__)


class SearchProviderManager:
    """
    Manages search provider instances and configuration.

    Provider instances are created lazily and reused, so every aggregation
    shares one HTTP client per provider.
    """

    def __init__(self):
        self._providers: Dict[ProviderType, SearchProvider] = {}
        self._provider_classes: Dict[ProviderType, Type[SearchProvider]] = {}

    def register_provider(self, provider_type: ProviderType, provider_class: Type[SearchProvider]):
        """
        Register a provider class for a given provider type.

        Args:
            provider_type: The provider type identifier
            provider_class: The provider class to register
        """
        self._provider_classes[provider_type] = provider_class
        logger.info(f"Registered provider class for {provider_type.value}")

    def get_provider(self, provider_type: Optional[ProviderType] = None) -> SearchProvider:
        """
        Get a provider instance for the specified type.

        Args:
            provider_type: Provider type to get. If None, uses configured default.

        Returns:
            Configured provider instance

        Raises:
            ValueError: If provider type is not supported
            ProviderConfigurationError: If provider credentials are missing
        """
        if provider_type is None:
            provider_type = self._get_default_provider_type()

        if provider_type in self._providers:
            return self._providers[provider_type]

        if provider_type not in self._provider_classes:
            raise ValueError(f"Provider type {provider_type.value} is not registered")

        provider_instance = self._provider_classes[provider_type]()
        self._providers[provider_type] = provider_instance

        logger.info(f"Created new provider instance: {provider_type.value}")
        return provider_instance

    def _get_default_provider_type(self) -> ProviderType:
        """
        Get the default provider type from settings configuration.

        Raises:
            ValueError: If no valid provider is configured
        """
        from .settings import get_settings
        settings = get_settings()
        provider_name = settings.search_provider.lower()

        try:
            return ProviderType(provider_name)
        except ValueError:
            available = [p.value for p in ProviderType]
            raise ValueError(
                f"Invalid provider '{provider_name}'. "
                f"Available providers: {', '.join(available)}"
            )

    async def close(self) -> None:
        """Close every provider instance created so far."""
        for provider_type, provider in list(self._providers.items()):
            await provider.aclose()
            logger.info(f"Closed provider instance: {provider_type.value}")
        self._providers.clear()


# Global provider manager instance
_global_manager: Optional[SearchProviderManager] = None


def get_manager() -> SearchProviderManager:
    """
    Get the global provider manager instance.

    Returns:
        Global SearchProviderManager instance
    """
    global _global_manager
    if _global_manager is None:
        _global_manager = SearchProviderManager()
        _register_built_in_providers(_global_manager)
    return _global_manager


def reset_manager() -> None:
    """Drop the global manager (useful for testing)."""
    global _global_manager
    _global_manager = None


def create_provider(provider_type: Optional[ProviderType] = None) -> SearchProvider:
    """
    Factory function to create a search provider.

    Example:
        ```python
        provider = create_provider()
        records = await provider.search(query)
        ```
    """
    manager = get_manager()
    return manager.get_provider(provider_type)


def _register_built_in_providers(manager: SearchProviderManager):
    """
    Register all built-in provider classes.

    Args:
        manager: Manager instance to register providers with
    """
    from .tomtom.provider import TomTomProvider
    manager.register_provider(ProviderType.TOMTOM, TomTomProvider)

    logger.info("Finished registering built-in providers")
