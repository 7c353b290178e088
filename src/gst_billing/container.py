"""Dependency injection container for GST Billing.

Document flows and the CLI obtain the calculation service from here so that
settings (quantity policy, split granularity, organization state) are
injected in one place.

Usage:
    from gst_billing.container import get_container

    container = get_container()
    payload = container.calculation_service.calculate_payload(document)
"""

from functools import cached_property, lru_cache
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from gst_billing.config import Settings, get_settings
from gst_billing.exceptions import ConfigurationError
from gst_billing.logging_config import get_logger

if TYPE_CHECKING:
    from gst_billing.services.calculator import DocumentCalculationServiceImpl

logger = get_logger(__name__)


class Container:
    """Dependency injection container.

    Services are instantiated on first access and cached for reuse. Tests
    can pass their own settings:

        container = Container(settings=Settings(quantity_policy="allow_zero"))
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the container.

        Args:
            settings: Application settings. If None, loads from environment.

        Raises:
            ConfigurationError: If settings cannot be loaded from the environment.
        """
        if settings is None:
            try:
                settings = get_settings()
            except PydanticValidationError as e:
                raise ConfigurationError(f"Invalid settings: {e}") from e
        self._settings = settings
        logger.debug(
            "container_created",
            environment=self._settings.environment.value,
            quantity_policy=self._settings.quantity_policy.value,
            split_granularity=self._settings.split_granularity.value,
        )

    @property
    def settings(self) -> Settings:
        """Get application settings."""
        return self._settings

    @cached_property
    def calculation_service(self) -> "DocumentCalculationServiceImpl":
        """Get the document calculation service."""
        from gst_billing.services.calculator import DocumentCalculationServiceImpl

        return DocumentCalculationServiceImpl(self._settings)


@lru_cache
def get_container() -> Container:
    """Get the global container singleton.

    For testing, create a Container directly with custom settings instead
    of using this function.
    """
    return Container()


def reset_container() -> None:
    """Reset the global container and cached settings."""
    get_container.cache_clear()
    get_settings.cache_clear()
