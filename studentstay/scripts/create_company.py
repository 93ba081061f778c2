"""Create a company record (and its official-name alias) for StudentStay.

Usage:
    python -m studentstay.scripts.create_company --name "Instituto Politécnico da Guarda" [--type university] [--verified] ...
"""

from __future__ import annotations

import argparse
import sys

from sqlalchemy import func

from studentstay.db.session import SessionLocal
from studentstay.models.company import Company
from studentstay.schemas.company import CompanyCreate, CompanyType, VerificationStatus
from studentstay.services.company import create_company


def _clean(value: str | None) -> str | None:
    return value.strip() or None if value else None


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a StudentStay company")
    parser.add_argument("--name", required=True, help="Official company name (required)")
    parser.add_argument(
        "--type",
        default=CompanyType.landlord.value,
        choices=[t.value for t in CompanyType],
        help="Company type",
    )
    parser.add_argument("--email", default=None, help="Contact email")
    parser.add_argument("--website", default=None, help="Company website URL")
    parser.add_argument("--city", default=None, help="City")
    parser.add_argument("--country", default=None, help="Country")
    parser.add_argument(
        "--verified",
        action="store_true",
        help="Mark the company as verified (default: pending)",
    )
    args = parser.parse_args()

    name = args.name.strip()
    if not name:
        print("Error: company name cannot be empty.")
        sys.exit(1)

    db = SessionLocal()
    try:
        existing = (
            db.query(Company).filter(func.lower(Company.name) == func.lower(name)).first()
        )
        if existing:
            print(f"Company '{name}' already exists (id={existing.id}).")
            sys.exit(1)

        data = CompanyCreate(
            name=name,
            company_type=CompanyType(args.type),
            verification_status=(
                VerificationStatus.verified if args.verified else VerificationStatus.pending
            ),
            email=_clean(args.email),
            website=_clean(args.website),
            city=_clean(args.city),
            country=_clean(args.country),
        )
        result = create_company(db, data)
        print(f"Company '{result.company.name}' created successfully (id={result.company.id}).")
        for warning in result.warnings:
            print(f"Warning: {warning}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
