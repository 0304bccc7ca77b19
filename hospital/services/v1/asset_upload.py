# hospital/services/v1/asset_upload.py
"""
Upload client for the hosted image service.

One unsigned multipart POST per file, authorised only by the upload
preset name. No retry and no type/size checks; the caller reports the
failure and leaves the image field unset.
"""

from typing import Optional
import httpx

from common import AssetUploadConfig, get_app_logger
from common.api_error import AssetUploadError

logger = get_app_logger(__name__)


class AssetUploadClient:
    def __init__(
        self,
        config: AssetUploadConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._client = httpx.AsyncClient(timeout=config.timeout, transport=transport)

    async def upload(
        self,
        file_bytes: bytes,
        filename: str = "upload",
        content_type: str = "application/octet-stream",
    ) -> str:
        """
        Returns:
            The public (secure) URL of the stored image

        Raises:
            AssetUploadError: transport failure, non-2xx answer, or no URL in the body
        """
        try:
            response = await self._client.post(
                self.config.upload_endpoint,
                data={"upload_preset": self.config.upload_preset},
                files={"file": (filename, file_bytes, content_type)},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Asset upload rejected",
                status_code=e.response.status_code,
                filename=filename,
            )
            raise AssetUploadError(
                f"Asset host answered {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error("Asset upload failed", error=str(e), filename=filename)
            raise AssetUploadError(f"Asset host unreachable: {e}") from e
        except ValueError as e:
            raise AssetUploadError("Asset host returned a non-JSON body") from e

        secure_url = payload.get("secure_url") if isinstance(payload, dict) else None
        if not secure_url:
            raise AssetUploadError("Asset host response has no secure_url")

        logger.info("Asset uploaded", filename=filename, url=secure_url)
        return secure_url

    def build_url(self, public_id: str, transformations: Optional[str] = None) -> str:
        """Delivery URL for an uploaded asset, optionally with a transformation path."""
        base = f"{self.config.delivery_url.rstrip('/')}/{self.config.cloud_name}"
        if transformations:
            return f"{base}/{transformations}/{public_id}"
        return f"{base}/image/upload/{public_id}"

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["AssetUploadClient"]
