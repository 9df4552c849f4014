from __future__ import annotations

from fastapi import APIRouter, Depends

from src.core.deps import require_auth_if_enabled
from src.db.seed import seed_sample_gst_data
from src.db.session import WorkbookSession, get_session
from src.schemas.gst import (
    GstCalculationRequest,
    GstCalculationResponse,
    GstCategoryRead,
    GstReferenceData,
    HsnCodeRead,
    SampleDataResponse,
)
from src.services import gst

router = APIRouter(
    prefix="/gst",
    tags=["GST"],
    dependencies=[Depends(require_auth_if_enabled)],
)

sample_router = APIRouter(
    tags=["GST"],
    dependencies=[Depends(require_auth_if_enabled)],
)


# PUBLIC_INTERFACE
@router.get(
    "/reference",
    response_model=GstReferenceData,
    summary="GST reference data",
    description="GST slabs, common HSN codes and default rates per expense/revenue category.",
)
def gst_reference() -> GstReferenceData:
    return GstReferenceData(
        rates=list(gst.GST_RATES),
        hsn_codes=[
            HsnCodeRead(code=code, description=desc, default_rate=rate)
            for code, (desc, rate) in gst.HSN_CODES.items()
        ],
        expense_categories=[
            GstCategoryRead(name=name, kind="expense", default_rate=rate, default_hsn=hsn)
            for name, (rate, hsn) in gst.EXPENSE_CATEGORIES.items()
        ],
        revenue_categories=[
            GstCategoryRead(name=name, kind="revenue", default_rate=rate, default_hsn=hsn)
            for name, (rate, hsn) in gst.REVENUE_CATEGORIES.items()
        ],
    )


# PUBLIC_INTERFACE
@router.post(
    "/calculate",
    response_model=GstCalculationResponse,
    summary="Calculate GST",
    description="Split a GST-inclusive amount, or gross up a taxable value, at the given rate.",
)
def calculate_gst(payload: GstCalculationRequest) -> GstCalculationResponse:
    if payload.inclusive:
        base = gst.base_from_total(payload.amount, payload.gst_rate)
        tax = gst.gst_from_total(payload.amount, payload.gst_rate)
        total = round(payload.amount, 2)
    else:
        base = round(payload.amount, 2)
        tax = gst.gst_from_base(payload.amount, payload.gst_rate)
        total = gst.total_from_base(payload.amount, payload.gst_rate)
    return GstCalculationResponse(
        base_amount=base,
        gst_amount=tax,
        total_amount=total,
        gst_rate=payload.gst_rate,
        formatted_total=gst.format_inr(total),
    )


# PUBLIC_INTERFACE
@sample_router.post(
    "/sample-gst-data",
    response_model=SampleDataResponse,
    summary="Load sample GST data",
    description="Create sample GST expenses and revenues (and a sample production unit when none exists).",
)
async def load_sample_gst_data(session: WorkbookSession = Depends(get_session)) -> SampleDataResponse:
    result = await seed_sample_gst_data(session)
    return SampleDataResponse(message="Sample GST data added successfully", **result)
