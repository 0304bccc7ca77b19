# hospital/api/v1/admin_dashboard_router.py
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from hospital.auth import require_admin
from hospital.db import get_db
from hospital.db.schemas import OverviewStats, UploadResponse
from hospital.services.v1 import AssetUploadClient, RecordStore, build_overview
from .deps import get_asset_upload_client

admin_dashboard_router = APIRouter(
    prefix="/admin",
    tags=["Admin: Dashboard"],
    dependencies=[Depends(require_admin)],
)


@admin_dashboard_router.get(
    "/overview",
    response_model=OverviewStats,
    summary="Dashboard counters",
)
async def get_overview(db: AsyncSession = Depends(get_db)):
    return await build_overview(RecordStore(db))


@admin_dashboard_router.post(
    "/uploads",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload an image to the asset host",
    description="""
    Returns the public URL to store in a doctor's or service's `image`.
    Nothing is written to the record store here.
    """,
    responses={502: {"description": "Asset host rejected or unreachable"}},
)
async def upload_image(
    file: UploadFile = File(...),
    client: AssetUploadClient = Depends(get_asset_upload_client),
):
    content = await file.read()
    url = await client.upload(
        content,
        filename=file.filename or "upload",
        content_type=file.content_type or "application/octet-stream",
    )
    return UploadResponse(url=url)


__all__ = ["admin_dashboard_router"]
