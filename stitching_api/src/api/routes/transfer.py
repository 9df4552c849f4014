from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile

from src.core.deps import require_auth_if_enabled
from src.db.config import get_settings
from src.db.session import WorkbookSession, get_session
from src.schemas.common import MessageResponse
from src.services.exceptions import PayloadTooLargeError
from src.services.transfer import IMPORT_TYPES, ImportService

router = APIRouter(
    prefix="/import",
    tags=["Import"],
    dependencies=[Depends(require_auth_if_enabled)],
)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=MessageResponse,
    summary="Import spreadsheet",
    description=(
        "Upload an .xlsx (or .csv) file with a header row and a `type` form field "
        f"({', '.join(IMPORT_TYPES)}). Headers are matched case-insensitively and camelCase "
        "is accepted. The import is all-or-nothing."
    ),
)
async def import_spreadsheet(
    file: UploadFile = File(..., description="Spreadsheet to import"),
    import_type: str = Form(..., alias="type", description="Target table"),
    session: WorkbookSession = Depends(get_session),
) -> MessageResponse:
    """
    Import rows into one table.

    Errors:
        400 on unknown type, unreadable file, empty file, missing columns or bad rows;
        413 when the file exceeds MAX_UPLOAD_BYTES.
    """
    max_bytes = get_settings().MAX_UPLOAD_BYTES
    # read one byte past the limit so oversized uploads are detected without loading them whole
    content = await file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise PayloadTooLargeError(f"File exceeds the {max_bytes} byte upload limit")

    count = await ImportService(session).import_file(import_type, content, filename=file.filename, max_bytes=max_bytes)
    return MessageResponse(
        message=f"Successfully imported {count} records",
        details={"type": import_type, "imported": count},
    )
