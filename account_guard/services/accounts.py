"""Account submission: cleaning, validating and saving the account form."""

import logging
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..db.models import Account
from ..utils.normalization import normalize_company_name
from ..utils.validation import is_valid_email
from .checker import CheckResult, check_company_name
from .directory import OwnerDirectory

logger = logging.getLogger(__name__)

INDUSTRY_OPTIONS = [
    'ACCOMMODATION_AND_FOOD_SERVICE_ACTIVITIES',
    'ACTIVITIES_OF_EXTRATERRITORIAL_ORGANIZATIONS_AND_BODIES',
    'ACTIVITIES_OF_HOUSEHOLDS_AS_EMPLOYERS_UNDIFFERENTIATED_GOODS_AND_SERVICES_PRODUCING_ACTIVITIES_OF_HOUSEHOLDS_FOR_OWN_USE',
    'ADMINISTRATIVE_AND_SUPPORT_SERVICE_ACTIVITIES',
    'ADVERTISING_AND_MARKETING',
    'AGRICULTURE_FORESTRY_AND_FISHING',
    'ARTS_ENTERTAINMENT_AND_RECREATION',
    'AUTOMOTIVE',
    'B2C_BUSINESS_TO_CONSUMER',
    'B2G_BUSINESS_TO_GOVERNMENT',
    'CEMETERY_SERVICES',
    'COMMUNITY_MANAGEMENT',
    'CONSTRUCTION',
    'EDUCATION',
    'EDUCATION_AND_HUMAN_HEALTH_AND_SOCIAL_WORK_ACTIVITIES',
    'EDUCATION_AND_TRAINING',
    'ELECTRICITY_GAS_STEAM_AND_AIR_CONDITIONING_SUPPLY',
    'ENGINEERING',
    'FINANCIAL_AND_INSURANCE_ACTIVITIES',
    'FOOD_AND_BEVERAGE',
    'FORMATION_AND_COMMUNICATIO',
    'FUNERAL_SERVICES',
    'HEALTHCARE_AND_SERVICES',
    'HUMAN_HEALTH_AND_SOCIAL_WORK_ACTIVITIES',
    'INDIVIDUAL',
    'INDUSTRIAL_SAFETY',
    'INDUSTRY',
    'INFORMATION_AND_COMMUNICATION',
    'INSURANCE',
    'LOGISTICS_AND_TRANSPORTATION',
    'MANUFACTURING',
    'MINING_AND_QUARRYING',
    'OTHER_SERVICE_ACTIVITIES',
    'PAINTS_USED_IN_BUILDING',
    'PROFESSIONAL_SCIENTIFIC_AND_TECHNICAL_ACTIVITIES',
    'PUBLIC_ADMINISTRATION_AND_DEFENSE_COMPULSORY_SOCIAL_SECURITY',
    'REAL_ESTATE_ACTIVITIES',
    'RENEWABLE_ENERGY_HYDROPOWER',
    'SUPPORT_SERVICE_ACTIVITIES_OR_PROFESSIONAL_TECHNICAL_SERVICES',
    'TECHNICAL_ACTIVITIES',
    'TRADING',
    'TRANSPORTATION_AND_STORAGE',
    'WATER_SUPPLY_SEWERAGE_WASTE_MANAGEMENT_AND_REMEDIATION_ACTIVITIES',
    'WHOLESALE_AND_RETAIL_TRADE',
    'OTHER',
]

TYPE_CLIENT_OPTIONS = ['TSA CLIENT']

REGION_OPTIONS = [
    'Region I - Ilocos Region',
    'Region II - Cagayan Valley',
    'Region III - Central Luzon',
    'Region IV - CALABARZON',
    'Region V - Bicol Region',
    'Region VI - Western Visayas',
    'Region VII - Central Visayas',
    'Region VIII - Eastern Visayas',
    'Region IX - Zamboanga Peninsula',
    'Region X - Northern Mindanao',
    'Region XI - Davao Region',
    'Region XII - SOCCSKSARGEN',
    'NCR',
    'CAR',
    'BARMM',
    'Region XIII - Caraga',
    'MIMAROPA Region',
]

# Unselected values of the option fields
INDUSTRY_PLACEHOLDER = 'Choose Industry'
TYPE_CLIENT_PLACEHOLDER = 'Choose Type Client'


class AccountValidationError(ValueError):
    """Raised when an account form cannot be submitted."""


@dataclass
class UserDetails:
    """The agent submitting the form and their reporting line."""
    referenceid: str
    tsm: str = ''
    manager: str = ''


@dataclass
class AccountForm:
    """Values entered on the account form."""
    company_name: str = ''
    contact_person: List[str] = field(default_factory=lambda: [''])
    contact_number: List[str] = field(default_factory=lambda: [''])
    email_address: List[str] = field(default_factory=lambda: [''])
    address: str = ''
    delivery_address: str = ''
    region: str = ''
    type_client: str = TYPE_CLIENT_PLACEHOLDER
    industry: str = INDUSTRY_PLACEHOLDER
    company_group: str = ''
    status: str = 'Pending'
    id: Optional[str] = None


def _clean_list(values: List[str]) -> List[str]:
    return [value.strip() for value in values if value and value.strip()]


def _check_option(value: str, options: List[str], placeholder: str, label: str) -> None:
    if value and value != placeholder and value not in options:
        raise AccountValidationError(f"Invalid {label}: {value}")


def prepare_submission(form: AccountForm, user: UserDetails, mode: str = 'create') -> Dict[str, Any]:
    """Clean an account form into the record that gets saved.

    Args:
        form: Values entered on the form
        user: Agent submitting the form
        mode: 'create' for a new account, 'edit' for an existing one

    Returns:
        Dictionary of account fields ready for Account.create

    Raises:
        AccountValidationError: If an email address or option value is invalid
    """
    for email in form.email_address:
        if email.strip() and not is_valid_email(email):
            raise AccountValidationError(f"Invalid email address: {email}")

    _check_option(form.industry, INDUSTRY_OPTIONS, INDUSTRY_PLACEHOLDER, 'industry')
    _check_option(form.type_client, TYPE_CLIENT_OPTIONS, TYPE_CLIENT_PLACEHOLDER, 'client type')
    _check_option(form.region, REGION_OPTIONS, '', 'region')

    data = asdict(form)
    if data['id'] is None:
        del data['id']

    data.update(
        company_name=normalize_company_name(form.company_name),
        contact_person=_clean_list(form.contact_person),
        contact_number=_clean_list(form.contact_number),
        email_address=_clean_list(form.email_address),
        referenceid=user.referenceid,
        tsm=user.tsm,
        manager=user.manager,
        status='Pending' if mode == 'create' else form.status
    )
    return data


def save_account(
    session: Session,
    form: AccountForm,
    user: UserDetails,
    search,
    directory: Optional[OwnerDirectory] = None,
    mode: str = 'create'
) -> Account:
    """Check and persist an account.

    The company name check runs first; any blocking message (rule failure,
    duplicate or failed search) stops the save.

    Args:
        session: Database session the account is added to
        form: Values entered on the form
        user: Agent submitting the form
        search: Candidate search used for the duplicate check
        directory: Optional owner directory for duplicate messages
        mode: 'create' or 'edit'

    Returns:
        The account added to the session (flushed, not committed)

    Raises:
        AccountValidationError: If the name check or form validation fails
    """
    result: CheckResult = check_company_name(
        form.company_name, search, user.referenceid, directory, mode
    )
    if result.blocks_submission:
        raise AccountValidationError(result.error)

    data = prepare_submission(form, user, mode)

    if mode == 'edit':
        account = session.get(Account, form.id) if form.id else None
        if account is None:
            raise AccountValidationError(f"Account not found: {form.id}")
        for key, value in data.items():
            setattr(account, key, value)
        logger.info(f"Updated account {account.id}: {account.company_name}")
    else:
        account = Account.create(data)
        session.add(account)
        logger.info(f"Created account {account.id}: {account.company_name}")

    session.flush()
    return account
