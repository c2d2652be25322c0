"""Shared enums for accounts, filing status and jurisdictions."""

from retirement_planner.models.account import AccountType, FilingStatus, JurisdictionCode, TaxTreatment

__all__ = [
    "AccountType",
    "FilingStatus",
    "JurisdictionCode",
    "TaxTreatment",
]
