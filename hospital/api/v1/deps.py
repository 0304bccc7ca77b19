# hospital/api/v1/deps.py
from fastapi import Request

from common.api_error import AssetUploadError
from hospital.services.v1 import AssetUploadClient


def get_asset_upload_client(request: Request) -> AssetUploadClient:
    client = getattr(request.app.state, "asset_client", None)
    if client is None:
        raise AssetUploadError("Image uploads are not configured (ASSET_CLOUD_NAME)")
    return client


__all__ = ["get_asset_upload_client"]
