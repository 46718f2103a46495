"""
SOP document version lineage.

A document row (``sops``) caches the version and file of its newest lineage
entry (``sop_files``). Lineage entries are append-only: each upload of a new
file adds one, and the cached pointer is rewritten in the same transaction so
the two can never disagree.

Versions are ``"major.minor"`` strings. Uploads without an explicit version
bump the major component: 1.0 -> 2.0 -> 3.0.
"""
import re
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from officeops.core.constants import DEFAULT_SOP_VERSION, DEFAULT_SOP_VISIBILITY, SOP_VISIBILITIES
from officeops.core.exceptions import NotFoundError, PersistenceError, ValidationError
from officeops.core.logging_config import get_logger
from officeops.core.utils import epoch_seconds, isoformat_utc, utcnow
from officeops.db.models import Sop, SopFile

logger = get_logger(__name__)

VERSION_PATTERN = re.compile(r"(\d+)(?:\.(\d+))?")

# Metadata editable through update_document(); version and file_url are not
DOCUMENT_FIELDS = ("title", "wing_id", "subw_id", "visibility")


def normalize_version(value: Any) -> str:
    """
    Normalize a version string to ``"major.minor"``.

    Only the first run of digits (and an optional ``.minor``) is used, so
    ``"v2"`` becomes ``"2.0"`` and ``"3.4-beta"`` becomes ``"3.4"``. Anything
    without digits becomes ``"1.0"``.
    """
    if value is None:
        return DEFAULT_SOP_VERSION

    match = VERSION_PATTERN.search(str(value))
    if not match:
        return DEFAULT_SOP_VERSION

    major = int(match.group(1))
    minor = int(match.group(2) or 0)
    return f"{major}.{minor}"


def next_major_version(value: Any) -> str:
    """The version after ``value``: major + 1, minor reset to 0."""
    major = int(normalize_version(value).split(".")[0])
    return f"{major + 1}.0"


def _get_sop(db: Session, sop_id: int) -> Sop:
    sop = db.get(Sop, sop_id)
    if not sop:
        raise NotFoundError("SOP", sop_id)
    return sop


def _lineage_title(sop: Sop, version: str, title: Optional[str]) -> str:
    if title and title.strip():
        return title.strip()
    return f"{sop.title} v{version}"


def create_document(
    db: Session,
    title: str,
    file_url: Optional[str] = None,
    version: Optional[str] = None,
    wing_id: Optional[int] = None,
    subw_id: Optional[int] = None,
    visibility: str = DEFAULT_SOP_VISIBILITY,
    created_by: Optional[int] = None,
) -> Tuple[Sop, Optional[SopFile]]:
    """
    Create a document and, when it comes with a file, its first lineage entry.

    Returns:
        Tuple of (document, lineage entry or None when no file was given)
    """
    if visibility not in SOP_VISIBILITIES:
        raise ValidationError(
            f"Invalid visibility '{visibility}'",
            details={"visibility": f"must be one of: {', '.join(SOP_VISIBILITIES)}"},
        )

    now = utcnow()
    normalized = normalize_version(version)
    sop = Sop(
        title=title,
        version=normalized,
        file_url=file_url,
        wing_id=wing_id,
        subw_id=subw_id,
        visibility=visibility,
        created_by=created_by,
        created_at=now,
        updated_at=now,
    )

    entry = None
    try:
        db.add(sop)
        db.flush()
        if file_url:
            entry = SopFile(
                sop_id=sop.id,
                title=_lineage_title(sop, normalized, None),
                file_url=file_url,
                version=normalized,
                timestamp=epoch_seconds(now),
                created_at=now,
            )
            db.add(entry)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("sop_create_failed", title=title, error=str(exc))
        raise PersistenceError("Failed to create SOP") from exc

    db.refresh(sop)
    logger.info("sop_created", sop_id=sop.id, version=normalized, has_file=bool(file_url))
    return sop, entry


def latest_lineage_entry(db: Session, sop_id: int) -> Optional[SopFile]:
    return (
        db.query(SopFile)
        .filter(SopFile.sop_id == sop_id)
        .order_by(SopFile.timestamp.desc(), SopFile.id.desc())
        .first()
    )


def list_lineage(db: Session, sop_id: int) -> List[SopFile]:
    """Every lineage entry of a document, newest first."""
    return (
        db.query(SopFile)
        .filter(SopFile.sop_id == sop_id)
        .order_by(SopFile.timestamp.desc(), SopFile.id.desc())
        .all()
    )


def get_lineage_entry(db: Session, file_id: int) -> SopFile:
    entry = db.get(SopFile, file_id)
    if not entry:
        raise NotFoundError("SOP file", file_id)
    return entry


def upload_new_version(
    db: Session,
    sop_id: int,
    file_url: str,
    version: Optional[str] = None,
    title: Optional[str] = None,
) -> SopFile:
    """
    Record a new file for a document.

    An explicit ``version`` is normalized and used as given. Otherwise the
    major component of the newest lineage entry (or of the cached version
    when the document has no lineage yet) is bumped.

    The cached pointer on the document and the new lineage entry are
    committed together; on failure both are rolled back.

    Raises:
        NotFoundError: Unknown document
        PersistenceError: The write failed (nothing was changed)
    """
    sop = _get_sop(db, sop_id)

    if version is not None and str(version).strip():
        new_version = normalize_version(version)
    else:
        latest = latest_lineage_entry(db, sop_id)
        new_version = next_major_version(latest.version if latest else sop.version)

    previous_version = sop.version
    now = utcnow()

    try:
        sop.version = new_version
        sop.file_url = file_url
        sop.updated_at = now
        entry = SopFile(
            sop_id=sop_id,
            title=_lineage_title(sop, new_version, title),
            file_url=file_url,
            version=new_version,
            timestamp=epoch_seconds(now),
            created_at=now,
        )
        db.add(entry)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(
            "sop_version_upload_failed",
            sop_id=sop_id,
            previous_version=previous_version,
            attempted_version=new_version,
            error=str(exc),
        )
        raise PersistenceError("Failed to record the new SOP version") from exc

    db.refresh(entry)
    logger.info("sop_version_uploaded", sop_id=sop_id, version=new_version, previous_version=previous_version)
    return entry


def upload_same_file(db: Session, sop_id: int) -> Sop:
    """Re-submission of the current file: no new version, only updated_at moves."""
    sop = _get_sop(db, sop_id)
    sop.updated_at = utcnow()
    db.commit()
    db.refresh(sop)
    return sop


def upload_file(
    db: Session,
    sop_id: int,
    file_url: str,
    version: Optional[str] = None,
    title: Optional[str] = None,
) -> Optional[SopFile]:
    """
    Upload a file for a document.

    Returns:
        The new lineage entry, or None when ``file_url`` is already the
        document's current file
    """
    sop = _get_sop(db, sop_id)
    if sop.file_url == file_url:
        upload_same_file(db, sop_id)
        logger.info("sop_same_file_uploaded", sop_id=sop_id, version=sop.version)
        return None
    return upload_new_version(db, sop_id, file_url, version=version, title=title)


def get_document(db: Session, sop_id: int) -> Optional[Sop]:
    return db.get(Sop, sop_id)


def list_documents(
    db: Session,
    wing_id: Optional[int] = None,
    subw_id: Optional[int] = None,
    visibility: Optional[str] = None,
) -> List[Sop]:
    query = db.query(Sop)
    if wing_id is not None:
        query = query.filter(Sop.wing_id == wing_id)
    if subw_id is not None:
        query = query.filter(Sop.subw_id == subw_id)
    if visibility is not None:
        query = query.filter(Sop.visibility == visibility)
    return query.order_by(Sop.created_at.desc(), Sop.id.desc()).all()


def update_document(db: Session, sop_id: int, changes: Dict[str, Any]) -> Sop:
    """Edit document metadata. Versions only change through uploads."""
    sop = _get_sop(db, sop_id)

    blocked = set(changes) & {"version", "file_url"}
    if blocked:
        raise ValidationError(
            "Version and file can only change through an upload",
            details={field: "upload a new file instead" for field in sorted(blocked)},
        )

    visibility = changes.get("visibility")
    if visibility is not None and visibility not in SOP_VISIBILITIES:
        raise ValidationError(
            f"Invalid visibility '{visibility}'",
            details={"visibility": f"must be one of: {', '.join(SOP_VISIBILITIES)}"},
        )

    for field, value in changes.items():
        if field in DOCUMENT_FIELDS:
            setattr(sop, field, value)
    sop.updated_at = utcnow()

    db.commit()
    db.refresh(sop)
    return sop


def delete_document(db: Session, sop_id: int) -> bool:
    """Delete a document and its whole lineage in one transaction."""
    sop = db.get(Sop, sop_id)
    if not sop:
        return False

    try:
        db.query(SopFile).filter(SopFile.sop_id == sop_id).delete()
        db.delete(sop)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("sop_delete_failed", sop_id=sop_id, error=str(exc))
        raise PersistenceError("Failed to delete SOP") from exc

    logger.info("sop_deleted", sop_id=sop_id)
    return True


def serialize_lineage_entry(entry: SopFile) -> Dict:
    return {
        "id": entry.id,
        "sop_id": entry.sop_id,
        "title": entry.title,
        "file_url": entry.file_url,
        "version": entry.version,
        "timestamp": entry.timestamp,
        "created_at": isoformat_utc(entry.created_at),
    }


def serialize_document(sop: Sop, lineage: Optional[List[SopFile]] = None) -> Dict:
    result = {
        "id": sop.id,
        "title": sop.title,
        "version": sop.version,
        "file_url": sop.file_url,
        "wing_id": sop.wing_id,
        "subw_id": sop.subw_id,
        "visibility": sop.visibility,
        "created_by": sop.created_by,
        "created_at": isoformat_utc(sop.created_at),
        "updated_at": isoformat_utc(sop.updated_at),
    }
    if lineage is not None:
        result["files"] = [serialize_lineage_entry(entry) for entry in lineage]
    return result
