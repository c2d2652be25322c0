"""
Jurisdiction factory.

Centralizes jurisdiction selection logic.
"""

from typing import Dict, List, Optional, Union

from retirement_planner.config import settings
from retirement_planner.core.logging_config import get_logger
from retirement_planner.models.account import JurisdictionCode

from .base_jurisdiction import JurisdictionProvider
from .canada_jurisdiction import CanadaJurisdiction
from .us_jurisdiction import USJurisdiction

logger = get_logger(__name__)


class UnsupportedJurisdictionError(ValueError):
    """Raised for a jurisdiction code with no registered rule set."""


class JurisdictionFactory:
    """Factory for jurisdiction providers."""

    _providers: Dict[JurisdictionCode, type] = {
        JurisdictionCode.US: USJurisdiction,
        JurisdictionCode.CA: CanadaJurisdiction,
    }
    _instances: Dict[JurisdictionCode, JurisdictionProvider] = {}

    @classmethod
    def get_provider(
        cls, code: Optional[Union[JurisdictionCode, str]] = None
    ) -> JurisdictionProvider:
        """
        Get jurisdiction provider instance.

        Args:
            code: Jurisdiction code (US, CA). If None, uses DEFAULT_JURISDICTION.

        Returns:
            JurisdictionProvider instance (one shared instance per code)

        Raises:
            UnsupportedJurisdictionError: If the code is not supported
        """
        if code is None:
            code = settings.DEFAULT_JURISDICTION

        try:
            code = JurisdictionCode(str(getattr(code, "value", code)).upper())
        except ValueError:
            raise UnsupportedJurisdictionError(
                f"Unsupported jurisdiction: {code}. "
                f"Supported: {', '.join(c.value for c in cls._providers)}"
            )

        provider = cls._instances.get(code)
        if provider is None:
            provider = cls._providers[code]()
            cls._instances[code] = provider
            logger.debug("jurisdiction_provider_created", jurisdiction=code.value)

        return provider

    @classmethod
    def supported_codes(cls) -> List[JurisdictionCode]:
        return list(cls._providers)


def get_jurisdiction(
    code: Optional[Union[JurisdictionCode, str]] = None,
) -> JurisdictionProvider:
    """
    Convenience function to get a jurisdiction provider.

    Args:
        code: Optional jurisdiction code

    Returns:
        JurisdictionProvider instance
    """
    return JurisdictionFactory.get_provider(code)
