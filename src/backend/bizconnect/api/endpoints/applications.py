"""
Application endpoints.

Vendors submit interest in an opportunity; agencies review the applicants
for their postings. A vendor can apply to an opportunity only once.
"""

from typing import Any

from fastapi import APIRouter, Query, status
from sqlalchemy import Select, delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import aliased

from bizconnect.api.deps import DB
from bizconnect.core.exceptions import DuplicateEntityException, EntityNotFoundException
from bizconnect.core.logging import get_logger
from bizconnect.models import Application, Opportunity, User
from bizconnect.schemas.application import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStatusUpdate,
    OpportunityApplicant,
)
from bizconnect.schemas.common import SuccessResponse

logger = get_logger(__name__)
router = APIRouter()

Agency = aliased(User, name="agency")
Vendor = aliased(User, name="vendor")


def _joined_applications() -> Select[Any]:
    """Applications with opportunity title and both parties' names."""
    return (
        select(
            Application,
            Opportunity.title.label("opportunity_title"),
            Opportunity.district_name,
            Opportunity.due_date,
            Agency.organization_name.label("agency_name"),
            Vendor.business_name.label("vendor_name"),
        )
        .join(Opportunity, Application.opportunity_id == Opportunity.id)
        .outerjoin(Agency, Opportunity.posted_by == Agency.id)
        .join(Vendor, Application.vendor_id == Vendor.id)
        .order_by(Application.applied_date.desc(), Application.id.desc())
    )


def _to_response(row: Any) -> ApplicationResponse:
    application = row.Application
    return ApplicationResponse(
        **ApplicationResponse.model_validate(application).model_dump(
            exclude={"opportunity_title", "district_name", "due_date", "agency_name", "vendor_name"}
        ),
        opportunity_title=row.opportunity_title,
        district_name=row.district_name,
        due_date=row.due_date,
        agency_name=row.agency_name,
        vendor_name=row.vendor_name,
    )


@router.get("", response_model=list[ApplicationResponse])
async def list_applications(
    db: DB,
    vendor_id: int | None = Query(default=None, alias="vendorId"),
    agency_id: int | None = Query(default=None, alias="agencyId"),
) -> list[ApplicationResponse]:
    """List applications, optionally for one vendor or one agency."""
    query = _joined_applications()
    if vendor_id is not None:
        query = query.where(Application.vendor_id == vendor_id)
    if agency_id is not None:
        query = query.where(Application.agency_id == agency_id)

    result = await db.execute(query)
    return [_to_response(row) for row in result.all()]


@router.get("/opportunity/{opportunity_id}", response_model=list[OpportunityApplicant])
async def list_opportunity_applicants(db: DB, opportunity_id: str) -> list[OpportunityApplicant]:
    """Agency view: every applicant for one opportunity with contact details."""
    result = await db.execute(
        select(Application, Vendor)
        .join(Vendor, Application.vendor_id == Vendor.id)
        .where(Application.opportunity_id == opportunity_id)
        .order_by(Application.applied_date.desc(), Application.id.desc())
    )

    applicants = []
    for application, vendor in result.all():
        applicants.append(
            OpportunityApplicant(
                **ApplicationResponse.model_validate(application).model_dump(exclude={"vendor_name"}),
                vendor_name=vendor.business_name,
                business_name=vendor.business_name,
                contact_name=vendor.contact_name,
                email=vendor.email,
                phone=vendor.phone,
                certification_number=vendor.certification_number,
                capability_statement=vendor.capability_statement,
                districts=vendor.districts,
                categories=vendor.categories,
            )
        )
    return applicants


@router.get("/vendor/{vendor_id}", response_model=list[ApplicationResponse])
async def list_vendor_applications(db: DB, vendor_id: int) -> list[ApplicationResponse]:
    """Vendor view: the vendor's own applications."""
    result = await db.execute(_joined_applications().where(Application.vendor_id == vendor_id))
    return [_to_response(row) for row in result.all()]


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(db: DB, application_id: int) -> ApplicationResponse:
    result = await db.execute(_joined_applications().where(Application.id == application_id))
    row = result.first()
    if row is None:
        raise EntityNotFoundException("Application", application_id)
    return _to_response(row)


@router.post("", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
async def submit_application(db: DB, data: ApplicationCreate) -> SuccessResponse:
    """
    Submit interest in an opportunity.

    The opportunity's poster is recorded as the reviewing agency.

    Raises:
        EntityNotFoundException: unknown opportunity or vendor
        DuplicateEntityException: the vendor already applied
    """
    opportunity = await db.get(Opportunity, data.opportunity_id)
    if opportunity is None:
        raise EntityNotFoundException("Opportunity", data.opportunity_id)

    if await db.get(User, data.vendor_id) is None:
        raise EntityNotFoundException("User", data.vendor_id)

    existing = await db.scalar(
        select(Application.id).where(
            Application.opportunity_id == data.opportunity_id,
            Application.vendor_id == data.vendor_id,
        )
    )
    if existing is not None:
        raise DuplicateEntityException(
            "Application", "opportunityId", data.opportunity_id, message="Already applied"
        )

    application = Application(
        opportunity_id=data.opportunity_id,
        vendor_id=data.vendor_id,
        agency_id=opportunity.posted_by,
        notes=data.notes or None,
    )
    db.add(application)
    try:
        await db.flush()
    except IntegrityError as e:
        raise DuplicateEntityException(
            "Application", "opportunityId", data.opportunity_id, message="Already applied"
        ) from e

    logger.info(
        "Application submitted",
        application_id=application.id,
        opportunity_id=data.opportunity_id,
        vendor_id=data.vendor_id,
    )
    return SuccessResponse(message="Interest submitted successfully", data={"id": application.id})


@router.put("/{application_id}/status", response_model=SuccessResponse)
async def update_application_status(
    db: DB,
    application_id: int,
    data: ApplicationStatusUpdate,
) -> SuccessResponse:
    application = await db.get(Application, application_id)
    if application is None:
        raise EntityNotFoundException("Application", application_id)

    application.status = data.status.value
    await db.flush()

    logger.info("Application status updated", application_id=application_id, status=data.status.value)
    return SuccessResponse(
        message="Application status updated",
        data={"id": application_id, "status": data.status.value},
    )


@router.delete("/{application_id}", response_model=SuccessResponse)
async def withdraw_application(db: DB, application_id: int) -> SuccessResponse:
    result = await db.execute(delete(Application).where(Application.id == application_id))
    if result.rowcount == 0:
        raise EntityNotFoundException("Application", application_id)

    logger.info("Application withdrawn", application_id=application_id)
    return SuccessResponse(message="Application withdrawn", data={"id": application_id})
