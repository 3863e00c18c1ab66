"""
================================================================================
SERVICE CONTAINER - STORE PROVIDER DISCOVERY & INITIALIZATION
================================================================================

Main dependency injection container.

Layer 1: .env determines which PROVIDER FILE to import
  Example: STORE_PROVIDER=redis  →  Import todo_api.providers.store.redis

Layer 2: Provider file exposes create_provider(settings)
  ServiceContainer calls it and initializes the returned store

USAGE:

  container = ServiceContainer(settings)
  await container.initialize()
  store = container.get_store()
  todo_id = await store.post_todo(ctx, item)
"""

import logging
import importlib
from typing import Optional

from todo_api.config.settings import Settings
from todo_api.core.exceptions import ServiceInitializationError
from todo_api.providers.store.base import ITodoStore

logger = logging.getLogger(__name__)

STORE_MODULE_PATH = "todo_api.providers.store"


class ServiceContainer:
    """Dependency injection container for the todo store provider."""

    def __init__(self, settings: Settings, store: Optional[ITodoStore] = None) -> None:
        """
        Initialize container with settings.

        Args:
            settings: Configuration object (from .env)
            store: Optional store instance to use instead of loading the
                   configured provider (initialized on initialize()).
        """
        self.settings = settings
        self._store: Optional[ITodoStore] = store
        self._store_initialized = False

        logger.info("ServiceContainer instantiated")

    async def initialize(self) -> None:
        """Load (if needed) and initialize the store provider."""
        try:
            if self._store is None:
                self._store = self._load_store(self.settings.store_provider)

            await self._store.initialize()
            self._store_initialized = True
            logger.info(
                f"✓ ServiceContainer initialized (store={self._store.__class__.__name__})"
            )

        except ServiceInitializationError:
            raise
        except Exception as e:
            logger.error(
                f"ServiceContainer initialization failed: {str(e)}",
                exc_info=True,
            )
            raise ServiceInitializationError(
                f"Failed to initialize store provider "
                f"'{self.settings.store_provider}': {str(e)}"
            ) from e

    def _load_store(self, provider_name: str) -> ITodoStore:
        """
        Import todo_api.providers.store.<provider_name> and build its store.

        Raises:
            ServiceInitializationError: If the module or factory is missing
        """
        full_path = f"{STORE_MODULE_PATH}.{provider_name}"
        logger.info(f"Loading store provider: {full_path}")

        try:
            provider_module = importlib.import_module(full_path)
        except ImportError as e:
            raise ServiceInitializationError(
                f"Failed to import store provider '{provider_name}' "
                f"from {full_path}: {str(e)}"
            ) from e

        factory = getattr(provider_module, "create_provider", None)
        if factory is None:
            raise ServiceInitializationError(
                f"Provider module {full_path} does not export 'create_provider'"
            )

        store = factory(self.settings)
        if not isinstance(store, ITodoStore):
            raise ServiceInitializationError(
                f"Provider module {full_path} returned {type(store).__name__}, "
                f"expected an ITodoStore"
            )
        return store

    async def shutdown(self) -> None:
        """Shutdown the store provider."""
        logger.info("Shutting down ServiceContainer...")

        if self._store is not None and self._store_initialized:
            try:
                await self._store.shutdown()
                logger.info("✓ Store shutdown complete")
            except Exception as e:
                logger.error(f"Error shutting down store: {str(e)}")

        self._store_initialized = False
        logger.info("✓ ServiceContainer shutdown complete")

    # ========================================================================
    # ACCESSOR METHODS
    # ========================================================================

    def get_store(self) -> ITodoStore:
        """Get store provider instance."""
        if self._store is None or not self._store_initialized:
            raise RuntimeError("Store provider not initialized")
        return self._store

    @property
    def store_initialized(self) -> bool:
        return self._store_initialized

    @property
    def store_name(self) -> str:
        if self._store is not None:
            return self._store.name
        return self.settings.store_provider
