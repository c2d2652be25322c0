"""Pytest configuration and shared fixtures."""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from retirement_planner.main import app
from retirement_planner.models.account import AccountType, FilingStatus, JurisdictionCode
from retirement_planner.schemas.retirement import Account, Assumptions, Profile
from retirement_planner.services.retirement.jurisdictions import CanadaJurisdiction, USJurisdiction


@pytest.fixture
def us_provider() -> USJurisdiction:
    return USJurisdiction()


@pytest.fixture
def ca_provider() -> CanadaJurisdiction:
    return CanadaJurisdiction()


@pytest.fixture
def us_profile() -> Profile:
    """Married 40-year-old retiring at 65, planning to 95, no benefits."""
    return Profile(
        current_age=40,
        retirement_age=65,
        life_expectancy=95,
        filing_status=FilingStatus.MARRIED_FILING_JOINTLY,
        state_tax_rate=0.05,
    )


@pytest.fixture
def ca_profile() -> Profile:
    """Ontario resident retiring at 65 with CPP from 65 and default OAS."""
    return Profile(
        current_age=40,
        retirement_age=65,
        life_expectancy=95,
        filing_status=FilingStatus.SINGLE,
        state_tax_rate=0.05,
        social_security_benefit=12000,
        social_security_start_age=65,
        jurisdiction=JurisdictionCode.CA,
        region="ON",
    )


@pytest.fixture
def assumptions() -> Assumptions:
    return Assumptions(inflation_rate=0.03, safe_withdrawal_rate=0.04, retirement_return_rate=0.05)


@pytest.fixture
def us_accounts() -> list[Account]:
    """One account per US tax treatment."""
    return [
        Account(
            id="401k",
            name="Work 401(k)",
            account_type=AccountType.TRADITIONAL_401K,
            balance=200000,
            annual_contribution=20000,
            return_rate=0.07,
            employer_match_percent=0.5,
            employer_match_limit=5000,
        ),
        Account(id="roth", name="Roth IRA", account_type=AccountType.ROTH_IRA, balance=50000, return_rate=0.07),
        Account(id="brokerage", name="Brokerage", account_type=AccountType.TAXABLE, balance=100000, return_rate=0.06),
        Account(id="hsa", name="HSA", account_type=AccountType.HSA, balance=10000, return_rate=0.05),
    ]


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client."""
    with TestClient(app) as test_client:
        yield test_client
