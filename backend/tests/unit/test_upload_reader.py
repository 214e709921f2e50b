"""Unit tests for reading multipart uploads into UploadedFile."""

from io import BytesIO

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from memberhub.middleware import UploadReadError, read_upload


def make_upload(content: bytes, content_type: str = "image/png") -> UploadFile:
    return UploadFile(
        file=BytesIO(content),
        filename="avatar.png",
        headers=Headers({"content-type": content_type}),
    )


@pytest.mark.asyncio
async def test_reads_payload_and_metadata():
    upload = make_upload(b"\x89PNG\r\n\x1a\nrest", "image/png")

    uploaded = await read_upload(upload, max_bytes=1024)

    assert uploaded.data == b"\x89PNG\r\n\x1a\nrest"
    assert uploaded.declared_content_type == "image/png"
    assert uploaded.declared_size == 12


@pytest.mark.asyncio
async def test_rewinds_file_pointer():
    upload = make_upload(b"abcdef")

    await read_upload(upload, max_bytes=1024)

    assert await upload.read() == b"abcdef"


@pytest.mark.asyncio
async def test_stops_buffering_past_limit():
    upload = make_upload(b"x" * 5000)

    uploaded = await read_upload(upload, max_bytes=100)

    assert len(uploaded.data) == 101
    assert uploaded.declared_size > 100


@pytest.mark.asyncio
async def test_empty_upload():
    uploaded = await read_upload(make_upload(b""), max_bytes=100)
    assert uploaded.data == b""
    assert uploaded.declared_size == 0


@pytest.mark.asyncio
async def test_read_failure_raises_upload_read_error():
    class BrokenFile(BytesIO):
        def read(self, *args):
            raise OSError("connection reset")

    upload = UploadFile(file=BrokenFile(), filename="avatar.png")

    with pytest.raises(UploadReadError):
        await read_upload(upload, max_bytes=100)
