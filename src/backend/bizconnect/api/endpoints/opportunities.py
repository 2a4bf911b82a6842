"""
Opportunity management endpoints.

Agencies post and edit opportunities, administrators approve pending ones,
and vendors browse the published listing and keep bookmarks.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Query, status
from sqlalchemy import delete, select

from bizconnect.api.deps import DB, AdminUser
from bizconnect.core.exceptions import (
    DuplicateEntityException,
    EntityNotFoundException,
    ValidationException,
)
from bizconnect.core.logging import get_logger
from bizconnect.models import Opportunity, OpportunityStatus, SavedOpportunity, User
from bizconnect.schemas.common import SuccessResponse
from bizconnect.schemas.opportunity import (
    OpportunityCreate,
    OpportunityResponse,
    OpportunitySummary,
    OpportunityUpdate,
    PublishedOpportunity,
    SavedOpportunityResponse,
    SaveRequest,
)
from bizconnect.services.list_fields import serialize_list_field
from bizconnect.services.opportunity_filters import (
    OpportunityFilters,
    days_until_due,
    due_date_label,
    filter_published,
    is_closed,
    is_due_soon,
)

logger = get_logger(__name__)
router = APIRouter()


def _to_published(opportunity: Opportunity, now: datetime) -> PublishedOpportunity:
    days = days_until_due(opportunity.due_date, now)
    item = OpportunityResponse.model_validate(opportunity)
    return PublishedOpportunity(
        **item.model_dump(),
        days_until_due=days,
        due_date_label=due_date_label(opportunity.due_date),
        is_due_soon=is_due_soon(days),
        is_closed=is_closed(days),
    )


async def _get_or_404(db: DB, opportunity_id: str) -> Opportunity:
    opportunity = await db.get(Opportunity, opportunity_id)
    if opportunity is None:
        raise EntityNotFoundException("Opportunity", opportunity_id)
    return opportunity


@router.get("", response_model=list[OpportunityResponse])
async def list_opportunities(db: DB) -> list[OpportunityResponse]:
    """List every opportunity regardless of status, newest first."""
    result = await db.execute(
        select(Opportunity).order_by(Opportunity.posted_date.desc(), Opportunity.id)
    )
    opportunities = result.scalars().all()
    logger.info("Fetched all opportunities", count=len(opportunities))
    return [OpportunityResponse.model_validate(opp) for opp in opportunities]


@router.get("/published", response_model=list[PublishedOpportunity])
async def list_published_opportunities(
    db: DB,
    district: str | None = None,
    category: str | None = None,
    due_within: int | None = Query(default=None, alias="dueWithin", ge=0),
    keyword: str | None = Query(default=None, max_length=200),
) -> list[PublishedOpportunity]:
    """
    Vendor-facing listing.

    Only published opportunities are returned. Filters are conjunctive and
    applied in order: district, category, days until due, keyword.
    """
    result = await db.execute(
        select(Opportunity)
        .where(Opportunity.status == OpportunityStatus.PUBLISHED)
        .order_by(Opportunity.posted_date.desc(), Opportunity.id)
    )
    filters = OpportunityFilters(
        district=district or None,
        category=category or None,
        due_within=due_within,
        keyword=keyword or None,
    )
    now = datetime.now(timezone.utc)
    visible = filter_published(result.scalars().all(), filters, now)
    return [_to_published(opp, now) for opp in visible]


@router.get("/agency/{agency_id}", response_model=list[OpportunityResponse])
async def list_agency_opportunities(db: DB, agency_id: int) -> list[OpportunityResponse]:
    """Opportunities posted by one agency user."""
    result = await db.execute(
        select(Opportunity)
        .where(Opportunity.posted_by == agency_id)
        .order_by(Opportunity.posted_date.desc(), Opportunity.id)
    )
    return [OpportunityResponse.model_validate(opp) for opp in result.scalars().all()]


@router.get("/saved/{vendor_id}", response_model=list[SavedOpportunityResponse])
async def list_saved_opportunities(db: DB, vendor_id: int) -> list[SavedOpportunityResponse]:
    """Bookmarked opportunities, most recently saved first."""
    result = await db.execute(
        select(Opportunity, SavedOpportunity.saved_at)
        .join(SavedOpportunity, SavedOpportunity.opportunity_id == Opportunity.id)
        .where(SavedOpportunity.vendor_id == vendor_id)
        .order_by(SavedOpportunity.saved_at.desc(), SavedOpportunity.id.desc())
    )
    return [
        SavedOpportunityResponse(
            **OpportunityResponse.model_validate(opp).model_dump(),
            saved_at=saved_at,
        )
        for opp, saved_at in result.all()
    ]


@router.post("/save", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
async def save_opportunity(db: DB, data: SaveRequest) -> SuccessResponse:
    """Bookmark an opportunity. Saving the same pair twice is a no-op."""
    existing = await db.scalar(
        select(SavedOpportunity.id).where(
            SavedOpportunity.vendor_id == data.vendor_id,
            SavedOpportunity.opportunity_id == data.opportunity_id,
        )
    )
    if existing is None:
        await _get_or_404(db, data.opportunity_id)
        if await db.get(User, data.vendor_id) is None:
            raise EntityNotFoundException("User", data.vendor_id)

        db.add(SavedOpportunity(vendor_id=data.vendor_id, opportunity_id=data.opportunity_id))
        await db.flush()
        logger.info(
            "Opportunity saved",
            vendor_id=data.vendor_id,
            opportunity_id=data.opportunity_id,
        )

    return SuccessResponse(message="Opportunity saved successfully")


@router.post("/unsave", response_model=SuccessResponse)
async def unsave_opportunity(db: DB, data: SaveRequest) -> SuccessResponse:
    """Remove a bookmark if it exists."""
    await db.execute(
        delete(SavedOpportunity).where(
            SavedOpportunity.vendor_id == data.vendor_id,
            SavedOpportunity.opportunity_id == data.opportunity_id,
        )
    )
    return SuccessResponse(message="Opportunity unsaved successfully")


@router.delete("/unsave/{vendor_id}/{opportunity_id}", response_model=SuccessResponse)
async def remove_saved_opportunity(db: DB, vendor_id: int, opportunity_id: str) -> SuccessResponse:
    result = await db.execute(
        delete(SavedOpportunity).where(
            SavedOpportunity.vendor_id == vendor_id,
            SavedOpportunity.opportunity_id == opportunity_id,
        )
    )
    if result.rowcount == 0:
        raise EntityNotFoundException("Saved opportunity", f"{vendor_id}/{opportunity_id}")
    return SuccessResponse(message="Opportunity removed from saved list")


@router.get("/{opportunity_id}", response_model=OpportunityResponse)
async def get_opportunity(db: DB, opportunity_id: str) -> OpportunityResponse:
    """Get a single opportunity."""
    return OpportunityResponse.model_validate(await _get_or_404(db, opportunity_id))


@router.post("", response_model=OpportunitySummary, status_code=status.HTTP_201_CREATED)
async def create_opportunity(db: DB, data: OpportunityCreate) -> OpportunitySummary:
    """
    Post a new opportunity.

    ``postedBy`` must reference an existing user. Without an explicit
    status the opportunity is published immediately.
    """
    if await db.get(User, data.posted_by) is None:
        raise ValidationException(
            "Invalid postedBy User ID",
            {"postedBy": [f"user {data.posted_by} does not exist"]},
        )

    if await db.get(Opportunity, data.id) is not None:
        raise DuplicateEntityException("Opportunity", "id", data.id)

    fields = data.model_dump(exclude={"attachments", "status"})
    opportunity = Opportunity(
        **fields,
        status=data.status or OpportunityStatus.PUBLISHED,
        attachments=serialize_list_field(data.attachments),
    )
    db.add(opportunity)
    await db.flush()

    logger.info(
        "Opportunity created",
        opportunity_id=opportunity.id,
        posted_by=opportunity.posted_by,
        status=opportunity.status.value,
    )
    return OpportunitySummary.model_validate(opportunity)


@router.put("/{opportunity_id}", response_model=OpportunitySummary)
async def update_opportunity(
    db: DB,
    opportunity_id: str,
    data: OpportunityUpdate,
) -> OpportunitySummary:
    """Replace the editable fields. An omitted status keeps the stored one."""
    opportunity = await _get_or_404(db, opportunity_id)

    for field, value in data.model_dump(exclude={"attachments", "status"}).items():
        setattr(opportunity, field, value)
    opportunity.attachments = serialize_list_field(data.attachments)
    if data.status is not None:
        opportunity.status = data.status

    await db.flush()
    logger.info("Opportunity updated", opportunity_id=opportunity_id)
    return OpportunitySummary.model_validate(opportunity)


@router.delete("/{opportunity_id}", response_model=SuccessResponse)
async def delete_opportunity(db: DB, opportunity_id: str) -> SuccessResponse:
    """Delete an opportunity together with its bookmarks and applications."""
    result = await db.execute(delete(Opportunity).where(Opportunity.id == opportunity_id))
    if result.rowcount == 0:
        raise EntityNotFoundException("Opportunity", opportunity_id)

    logger.info("Opportunity deleted", opportunity_id=opportunity_id)
    return SuccessResponse(message="Opportunity deleted successfully", data={"id": opportunity_id})


@router.post("/{opportunity_id}/approve", response_model=OpportunitySummary)
async def approve_opportunity(db: DB, admin: AdminUser, opportunity_id: str) -> OpportunitySummary:
    """Publish a pending opportunity. Admin only."""
    opportunity = await _get_or_404(db, opportunity_id)
    opportunity.status = OpportunityStatus.PUBLISHED
    await db.flush()

    logger.info("Opportunity approved", opportunity_id=opportunity_id, admin_id=admin.id)
    return OpportunitySummary.model_validate(opportunity)
