"""
Schema initialization and lazy column migration.

Tables are created when missing. Columns added after a table first shipped
are appended with ``ALTER TABLE ... ADD COLUMN`` on startup, so databases
created by older releases keep working without a migration tool.
"""

from sqlalchemy import Connection, func, inspect, select, text
from sqlalchemy.ext.asyncio import AsyncEngine

from bizconnect.core.config import get_settings
from bizconnect.core.logging import get_logger
from bizconnect.db.base import Base
from bizconnect.models import Opportunity, OpportunityStatus

logger = get_logger(__name__)

# (table, column, DDL) for every column added after the initial schema
LAZY_COLUMNS: tuple[tuple[str, str, str], ...] = (
    ("users", "status", "TEXT DEFAULT 'active'"),
    ("users", "capability_statement", "TEXT"),
    ("users", "business_description", "TEXT"),
    ("users", "website", "TEXT"),
    ("users", "address", "TEXT"),
    ("users", "city", "TEXT"),
    ("users", "state", "TEXT"),
    ("users", "zip", "TEXT"),
    ("users", "years_in_business", "TEXT"),
    ("users", "certifications", "TEXT"),
    ("users", "districts", "TEXT"),
    ("users", "categories", "TEXT"),
    ("opportunities", "attachments", "TEXT"),
    ("opportunities", "duration", "TEXT"),
    ("opportunities", "requirements", "TEXT"),
    ("opportunities", "certifications", "TEXT"),
    ("opportunities", "experience", "TEXT"),
)

SAMPLE_OPPORTUNITIES: tuple[dict[str, str], ...] = (
    {
        "id": "opp-001",
        "title": "District 4 Bridge Maintenance Support",
        "scope_summary": (
            "Provide specialized technical assistance for ongoing bridge "
            "maintenance projects in the Bay Area."
        ),
        "district": "04",
        "district_name": "D04 - Bay Area / Oakland",
        "category": "services",
        "category_name": "Support Services",
        "subcategory": "Technical Assistance",
        "estimated_value": "$150,000 - $300,000",
        "due_date": "2026-03-15",
        "due_time": "14:00",
        "submission_method": "Electronic Submission",
    },
    {
        "id": "opp-002",
        "title": "Statewide SBE Supportive Services Program",
        "scope_summary": (
            "Comprehensive supportive services including training workshops "
            "and technical assistance for certified SBEs."
        ),
        "district": "74",
        "district_name": "D74 - Headquarters",
        "category": "services",
        "category_name": "Support Services",
        "subcategory": "Training",
        "estimated_value": "$500,000+",
        "due_date": "2026-04-01",
        "due_time": "10:00",
        "submission_method": "Caltrans Portal",
    },
    {
        "id": "opp-003",
        "title": "District 7 Guardrail Repair Contract",
        "scope_summary": (
            "Emergency and scheduled guardrail repair services across various "
            "locations in Los Angeles county."
        ),
        "district": "07",
        "district_name": "D07 - Los Angeles",
        "category": "construction",
        "category_name": "Construction",
        "subcategory": "Specialty Contracting",
        "estimated_value": "$2,000,000",
        "due_date": "2026-02-28",
        "due_time": "16:00",
        "submission_method": "Hard Copy / In-Person",
    },
)


def add_missing_columns(connection: Connection) -> list[str]:
    """
    Append every column in LAZY_COLUMNS that the live table lacks.

    Returns:
        The ``table.column`` names that were added.
    """
    added: list[str] = []
    existing: dict[str, set[str]] = {}

    for table, column, ddl in LAZY_COLUMNS:
        if table not in existing:
            existing[table] = {col["name"] for col in inspect(connection).get_columns(table)}
        if column in existing[table]:
            continue

        logger.info("Adding missing column", table=table, column=column)
        connection.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {ddl}"))
        existing[table].add(column)
        added.append(f"{table}.{column}")

    return added


async def seed_sample_opportunities(engine: AsyncEngine) -> int:
    """Insert the sample opportunities when the table is empty."""
    async with engine.begin() as conn:
        count = await conn.scalar(select(func.count()).select_from(Opportunity))
        if count:
            return 0

        await conn.execute(
            Opportunity.__table__.insert(),
            [{**row, "status": OpportunityStatus.PUBLISHED} for row in SAMPLE_OPPORTUNITIES],
        )

    logger.info("Seeded sample opportunities", count=len(SAMPLE_OPPORTUNITIES))
    return len(SAMPLE_OPPORTUNITIES)


async def init_database(engine: AsyncEngine) -> None:
    """
    Create tables, migrate missing columns and seed sample data.

    Safe to run on every startup.
    """
    settings = get_settings()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        added = await conn.run_sync(add_missing_columns)

    if added:
        logger.info("Schema migrated", columns=added)

    if settings.seed_sample_opportunities:
        await seed_sample_opportunities(engine)

    logger.info("Schema initialized and verified")
