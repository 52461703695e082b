"""
Upload API Endpoints.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, File, Query, UploadFile

from lanmic_site.core.models.io.misc import UploadResponse
from lanmic_site.server.services.deps import UploadServiceDep, VerifiedUser

router = APIRouter()


@router.post(
    "/image",
    response_model=UploadResponse,
    summary="Upload Image",
    description=(
        "Store an image (jpeg, png, gif or webp) and return its public URL. "
        "The `type` parameter selects the target directory, e.g. `blogImage`."
    ),
    responses={
        400: {"description": "No file, or not an image"},
        413: {"description": "File too large"},
    },
)
async def upload_image(
    user: VerifiedUser,
    uploads: UploadServiceDep,
    file: Annotated[Optional[UploadFile], File()] = None,
    upload_type: Annotated[Optional[str], Query(alias="type")] = None,
) -> UploadResponse:
    stored = await uploads.store_image(file, upload_type)
    return UploadResponse(
        message="File uploaded successfully",
        filename=stored.filename,
        original_name=stored.original_name,
        size=stored.size,
        url=stored.url,
    )
