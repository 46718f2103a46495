"""SOP document endpoints."""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from officeops.api.deps import get_db, get_current_user, verify_approver
from officeops.schemas import (
    SopCreate,
    SopUpdate,
    SopFileUpload,
    SopFileDetail,
    SopDetail,
    SopUploadResponse,
    SuccessResponse,
)
from officeops.services.sop import (
    create_document,
    delete_document,
    get_document,
    get_lineage_entry,
    list_documents,
    list_lineage,
    serialize_document,
    serialize_lineage_entry,
    update_document,
    upload_file,
)
from officeops.core.rate_limit import limiter, RATE_LIMITS

router = APIRouter(dependencies=[Depends(get_current_user)])


def _document_with_lineage(db: Session, sop_id: int) -> dict:
    sop = get_document(db, sop_id)
    if not sop:
        raise HTTPException(status_code=404, detail="SOP not found")
    return serialize_document(sop, list_lineage(db, sop_id))


@router.get("/sops", response_model=List[SopDetail])
async def list_sops_endpoint(
    wing_id: Optional[int] = None,
    subw_id: Optional[int] = None,
    visibility: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """List documents, newest first (without their lineage)."""
    return [
        serialize_document(sop)
        for sop in list_documents(db, wing_id=wing_id, subw_id=subw_id, visibility=visibility)
    ]


@router.post("/sops", response_model=SopDetail, status_code=201)
@limiter.limit(RATE_LIMITS["upload"])
async def create_sop_endpoint(
    request: Request,
    payload: SopCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """
    Create a document. When a file_url is given it becomes the first lineage
    entry, at the given version (default 1.0).
    """
    sop, _ = create_document(
        db,
        title=payload.title,
        file_url=payload.file_url,
        version=payload.version,
        wing_id=payload.wing_id,
        subw_id=payload.subw_id,
        visibility=payload.visibility,
        created_by=user["id"],
    )
    return _document_with_lineage(db, sop.id)


@router.get("/sops/{sop_id}", response_model=SopDetail)
async def get_sop_endpoint(sop_id: int, db: Session = Depends(get_db)):
    """A document with its full lineage, newest first."""
    return _document_with_lineage(db, sop_id)


@router.put("/sops/{sop_id}", response_model=SopDetail)
@limiter.limit(RATE_LIMITS["write"])
async def update_sop_endpoint(
    request: Request,
    sop_id: int,
    payload: SopUpdate,
    db: Session = Depends(get_db),
):
    """Edit title, org unit or visibility. Files change through /sops/{id}/files."""
    update_document(db, sop_id, payload.model_dump(exclude_unset=True))
    return _document_with_lineage(db, sop_id)


@router.delete("/sops/{sop_id}", response_model=SuccessResponse, dependencies=[Depends(verify_approver)])
async def delete_sop_endpoint(sop_id: int, db: Session = Depends(get_db)):
    """Delete a document with every version (approvers only)."""
    if not delete_document(db, sop_id):
        raise HTTPException(status_code=404, detail="SOP not found")
    return {"success": True}


@router.get("/sops/{sop_id}/files", response_model=List[SopFileDetail])
async def list_sop_files_endpoint(sop_id: int, db: Session = Depends(get_db)):
    if not get_document(db, sop_id):
        raise HTTPException(status_code=404, detail="SOP not found")
    return [serialize_lineage_entry(entry) for entry in list_lineage(db, sop_id)]


@router.post("/sops/{sop_id}/files", response_model=SopUploadResponse, status_code=201)
@limiter.limit(RATE_LIMITS["upload"])
async def upload_sop_file_endpoint(
    request: Request,
    sop_id: int,
    payload: SopFileUpload,
    db: Session = Depends(get_db),
):
    """
    Upload a file for a document.

    Without a version the major number is bumped (2.0 -> 3.0). Re-sending the
    current file creates no new version; ``created_version`` is false then.

    Example:
        Request:
            POST /api/v1/sops/4/files
            {"file_url": "https://files.example.org/sop/fire-drill-v3.pdf"}

        Response (201):
            {
                "created_version": true,
                "sop": {"id": 4, "version": "3.0", ..., "files": [{"version": "3.0", ...}, ...]}
            }
    """
    entry = upload_file(db, sop_id, payload.file_url, version=payload.version, title=payload.title)
    return {
        "created_version": entry is not None,
        "sop": _document_with_lineage(db, sop_id),
    }


@router.get("/sop-files/{file_id}", response_model=None)
async def get_sop_file_endpoint(file_id: int, db: Session = Depends(get_db)):
    """
    Fetch one version of a document.

    Files stored at an absolute http(s) URL are redirected to; other
    references are returned as the lineage record.
    """
    entry = get_lineage_entry(db, file_id)
    if entry.file_url.startswith(("http://", "https://")):
        return RedirectResponse(url=entry.file_url, status_code=302)
    return serialize_lineage_entry(entry)
