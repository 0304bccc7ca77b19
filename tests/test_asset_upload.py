import asyncio

import httpx
import pytest

from common import AssetUploadConfig
from common.api_error import AssetUploadError
from hospital.services.v1 import AssetUploadClient

CONFIG = AssetUploadConfig(cloud_name="demo", upload_preset="hospital_unsigned")


def upload_with(handler, content=b"\x89PNG"):
    async def main():
        client = AssetUploadClient(CONFIG, transport=httpx.MockTransport(handler))
        try:
            return await client.upload(content, filename="doctor.png", content_type="image/png")
        finally:
            await client.aclose()

    return asyncio.run(main())


def test_upload_posts_preset_and_file():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.read()
        return httpx.Response(
            200, json={"secure_url": "https://res.cloudinary.com/demo/image/upload/doctor.png"}
        )

    url = upload_with(handler)

    assert url == "https://res.cloudinary.com/demo/image/upload/doctor.png"
    assert seen["url"] == "https://api.cloudinary.com/v1_1/demo/image/upload"
    assert b'name="upload_preset"' in seen["body"]
    assert b"hospital_unsigned" in seen["body"]
    assert b'filename="doctor.png"' in seen["body"]


def test_rejected_upload_raises():
    with pytest.raises(AssetUploadError) as exc:
        upload_with(lambda request: httpx.Response(400, json={"error": {"message": "bad"}}))
    assert exc.value.status_code == 502


def test_unreachable_host_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AssetUploadError):
        upload_with(handler)


def test_response_without_url_raises():
    with pytest.raises(AssetUploadError):
        upload_with(lambda request: httpx.Response(200, json={"public_id": "x"}))


def test_delivery_url():
    client = AssetUploadClient(CONFIG)
    try:
        assert client.build_url("doctor.png") == (
            "https://res.cloudinary.com/demo/image/upload/doctor.png"
        )
        assert client.build_url("doctor.png", "image/upload/w_200") == (
            "https://res.cloudinary.com/demo/image/upload/w_200/doctor.png"
        )
    finally:
        asyncio.run(client.aclose())
