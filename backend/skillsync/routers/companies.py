import uuid

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from skillsync.database import get_db
from skillsync.dependencies import Identity, get_identity, require_recruiter
from skillsync.models.company import Company
from skillsync.schemas.company import CompanyResponse
from skillsync.services.storage_service import IMAGE_EXTENSIONS, delete_local, save_upload
from skillsync.utils.file_refs import FileRef, RemoteURL, parse_file_ref, public_url
from skillsync.utils.timestamps import utc_now

router = APIRouter(prefix="/companies", tags=["companies"])


def _company_to_response(company: Company) -> CompanyResponse:
    return CompanyResponse(
        id=company.id,
        name=company.name,
        location=company.location,
        website=company.website,
        description=company.description,
        logo=public_url(company.logo),
        recruiter_id=company.recruiter_id,
        created_at=company.created_at,
    )


def _get_owned_company(db: Session, company_id: str, identity: Identity) -> Company:
    company = db.query(Company).filter(Company.id == company_id).first()
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    if not identity.can_manage(company.recruiter_id):
        raise HTTPException(status_code=403, detail="User not authorized")
    return company


async def _resolve_logo(logo: UploadFile | None, logo_url: str | None) -> FileRef | None:
    """A logo is either uploaded or given as an externally hosted URL."""
    if logo is not None and logo.filename:
        return await save_upload(logo, "logos", IMAGE_EXTENSIONS, "Logo")
    if logo_url:
        ref = parse_file_ref(logo_url)
        if not isinstance(ref, RemoteURL):
            raise HTTPException(status_code=400, detail="logo_url must be an http(s) URL")
        return ref
    return None


@router.get("", response_model=list[CompanyResponse])
async def list_companies(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    query = db.query(Company)
    if not identity.is_admin:
        query = query.filter(Company.recruiter_id == identity.user_id)
    return [_company_to_response(c) for c in query.order_by(Company.created_at.desc()).all()]


@router.post("", response_model=CompanyResponse, status_code=201)
async def create_company(
    name: str = Form(...),
    location: str = Form(...),
    website: str | None = Form(None),
    description: str | None = Form(None),
    logo: UploadFile | None = File(None),
    logo_url: str | None = Form(None),
    identity: Identity = Depends(require_recruiter),
    db: Session = Depends(get_db),
):
    if not name.strip() or not location.strip():
        raise HTTPException(status_code=400, detail="Name and location are required")

    company = Company(
        id=str(uuid.uuid4()),
        name=name.strip(),
        location=location.strip(),
        website=website.strip() if website else None,
        description=description.strip() if description else None,
        logo=await _resolve_logo(logo, logo_url),
        recruiter_id=identity.user_id,
        created_at=utc_now(),
    )
    db.add(company)
    db.commit()
    db.refresh(company)
    return _company_to_response(company)


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(company_id: str, identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    return _company_to_response(_get_owned_company(db, company_id, identity))


@router.put("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: str,
    name: str | None = Form(None),
    location: str | None = Form(None),
    website: str | None = Form(None),
    description: str | None = Form(None),
    logo: UploadFile | None = File(None),
    logo_url: str | None = Form(None),
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    company = _get_owned_company(db, company_id, identity)
    new_logo = await _resolve_logo(logo, logo_url)

    if name and name.strip():
        company.name = name.strip()
    if location and location.strip():
        company.location = location.strip()
    if website is not None:
        company.website = website.strip() or None
    if description is not None:
        company.description = description.strip() or None

    old_logo = company.logo
    if new_logo is not None:
        company.logo = new_logo

    db.commit()
    db.refresh(company)

    if new_logo is not None and old_logo is not None and old_logo != new_logo:
        delete_local(old_logo)
    return _company_to_response(company)
