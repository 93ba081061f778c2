"""SQLAlchemy models."""

from studentstay.models.alias_suggestion import CompanyAliasSuggestion
from studentstay.models.company import Company
from studentstay.models.company_alias import CompanyAlias
from studentstay.models.user import User

__all__ = [
    "Company",
    "CompanyAlias",
    "CompanyAliasSuggestion",
    "User",
]
