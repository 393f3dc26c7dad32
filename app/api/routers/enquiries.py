from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.rate_limiter import limiter
from app.database import get_db
from app.domain.errors import EnquiryCreationError, InvalidStatusTransitionError
from app.models import EnquiryStatus
from app.schemas.enquiry import (
    EnquiryCreate,
    EnquiryOut,
    EnquiryStatusUpdate,
    EnquirySummaryOut,
)
from app.services.enquiry_service import EnquiryService

router = APIRouter(prefix="/api/enquiries", tags=["enquiries"])


@router.get("", response_model=list[EnquiryOut])
async def list_enquiries(
    property_id: Optional[int] = Query(None, alias="propertyId"),
    status_filter: Optional[EnquiryStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    return await EnquiryService.list_enquiries(db, property_id=property_id, status=status_filter)


@router.get("/summary", response_model=EnquirySummaryOut)
async def enquiry_summary(
    property_id: Optional[int] = Query(None, alias="propertyId"),
    db: AsyncSession = Depends(get_db),
):
    counts = await EnquiryService.status_summary(db, property_id=property_id)
    return EnquirySummaryOut(total=sum(counts.values()), by_status=counts)


@router.post("", response_model=EnquiryOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.rate_limit_enquiries)
async def create_enquiry(
    request: Request,
    payload: EnquiryCreate,
    db: AsyncSession = Depends(get_db),
):
    try:
        return await EnquiryService.create_enquiry(db, payload)
    except EnquiryCreationError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("/{enquiry_id}", response_model=EnquiryOut)
async def get_enquiry(enquiry_id: int, db: AsyncSession = Depends(get_db)):
    enquiry = await EnquiryService.get_enquiry(db, enquiry_id)
    if not enquiry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Enquiry not found")
    return enquiry


@router.patch("/{enquiry_id}/status", response_model=EnquiryOut)
async def update_enquiry_status(
    enquiry_id: int,
    payload: EnquiryStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    try:
        enquiry = await EnquiryService.update_status(db, enquiry_id, payload.status)
    except InvalidStatusTransitionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if not enquiry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Enquiry not found")
    return enquiry
