"""
Jurisdiction rules - tax tables, mandatory distributions and benefits.

Supports:
- United States (federal brackets, flat state rate, RMDs, Social Security)
- Canada (federal + provincial brackets, RRIF minimums, CPP, OAS)
"""

from .base_jurisdiction import JurisdictionProvider
from .canada_jurisdiction import CanadaJurisdiction
from .jurisdiction_factory import JurisdictionFactory, UnsupportedJurisdictionError, get_jurisdiction
from .us_jurisdiction import USJurisdiction

__all__ = [
    "JurisdictionProvider",
    "USJurisdiction",
    "CanadaJurisdiction",
    "JurisdictionFactory",
    "UnsupportedJurisdictionError",
    "get_jurisdiction",
]
