from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from ....schemas.auth import UploadURLResponse
from ....services.uploads import get_upload_broker


router = APIRouter()


@router.get("/get-upload-url", response_model=UploadURLResponse)
async def get_upload_url(broker: Any = Depends(get_upload_broker)) -> UploadURLResponse:
    url = await run_in_threadpool(broker.get_upload_url)
    return UploadURLResponse(uploadURL=url)
