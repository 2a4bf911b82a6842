"""
Capability statement upload and download.
"""

from fastapi import APIRouter, File, Form, UploadFile
from fastapi.responses import FileResponse

from bizconnect.api.deps import DB
from bizconnect.core.config import get_settings
from bizconnect.core.exceptions import EntityNotFoundException
from bizconnect.core.logging import get_logger
from bizconnect.models import User
from bizconnect.schemas.files import UploadResponse
from bizconnect.services.capability_statements import CapabilityStatementStore

logger = get_logger(__name__)
router = APIRouter()


@router.post("/upload-cs", response_model=UploadResponse)
async def upload_capability_statement(
    db: DB,
    file: UploadFile = File(...),
    user_id: int | None = Form(default=None, alias="userId"),
) -> UploadResponse:
    """
    Store a PDF, DOC or DOCX capability statement.

    When ``userId`` is sent, the file becomes that user's capability
    statement.
    """
    user = None
    if user_id is not None:
        user = await db.get(User, user_id)
        if user is None:
            raise EntityNotFoundException("User", user_id)

    store = CapabilityStatementStore.from_settings(get_settings())
    stored = await store.save(file)

    if user is not None:
        user.capability_statement = stored.path
        await db.flush()
        logger.info("Capability statement attached", user_id=user.id, path=stored.path)

    return UploadResponse(
        file_name=stored.file_name,
        original_name=stored.original_name,
        path=stored.path,
        size=stored.size,
    )


@router.get("/vendors/{vendor_id}/capability-statement", response_class=FileResponse)
async def download_capability_statement(db: DB, vendor_id: int) -> FileResponse:
    vendor = await db.get(User, vendor_id)
    if vendor is None:
        raise EntityNotFoundException("User", vendor_id)

    store = CapabilityStatementStore.from_settings(get_settings())
    path = store.resolve(vendor.capability_statement)
    if path is None:
        logger.warning(
            "Capability statement missing",
            vendor_id=vendor_id,
            stored_path=vendor.capability_statement,
        )
        raise EntityNotFoundException("Capability statement", vendor_id)

    return FileResponse(path, filename=path.name)
