"""Account, filing-status and jurisdiction enums shared by every projection."""

import enum


class JurisdictionCode(str, enum.Enum):
    """Supported tax jurisdictions."""
    US = "US"
    CA = "CA"


class FilingStatus(str, enum.Enum):
    """Filing statuses (only two are modelled)."""
    SINGLE = "single"
    MARRIED_FILING_JOINTLY = "married_filing_jointly"


class TaxTreatment(str, enum.Enum):
    """How contributions and withdrawals are taxed."""
    PRE_TAX = "pre_tax"          # Deferred: withdrawals are ordinary income
    TAX_EXEMPT = "tax_exempt"    # Roth / TFSA: withdrawals are tax-free
    TAXABLE = "taxable"          # Brokerage: only realised gains are taxed
    MEDICAL_EXEMPT = "medical_exempt"  # HSA: tax-free for medical spending


class AccountType(str, enum.Enum):
    """Savings account categories."""
    # United States
    TRADITIONAL_401K = "traditional_401k"
    ROTH_401K = "roth_401k"
    TRADITIONAL_IRA = "traditional_ira"
    ROTH_IRA = "roth_ira"
    TAXABLE = "taxable"
    HSA = "hsa"

    # Canada
    RRSP = "rrsp"
    EMPLOYER_RRSP = "employer_rrsp"
    RRIF = "rrif"
    TFSA = "tfsa"
    NON_REGISTERED = "non_registered"

    @property
    def jurisdiction(self) -> JurisdictionCode:
        """Jurisdiction whose rules define this account type."""
        canadian = {
            AccountType.RRSP,
            AccountType.EMPLOYER_RRSP,
            AccountType.RRIF,
            AccountType.TFSA,
            AccountType.NON_REGISTERED,
        }
        return JurisdictionCode.CA if self in canadian else JurisdictionCode.US
