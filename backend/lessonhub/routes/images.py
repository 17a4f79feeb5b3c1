"""
LessonHub Backend — Static Image Route
========================================

What:  GET /images/{path} serves lesson images from IMAGES_DIR.
How:   ImageService resolves and checks the path; FileResponse streams the
       file and guesses the media type from its extension. A miss is logged
       and answered with a 404 JSON error.
"""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from lessonhub.schemas.documents import ErrorResponse
from lessonhub.services.image_service import image_service

router = APIRouter(tags=["Images"])


@router.get(
    "/images/{file_path:path}",
    response_class=FileResponse,
    responses={
        200: {"description": "Image file"},
        400: {"description": "Path outside the images directory", "model": ErrorResponse},
        404: {"description": "File not found", "model": ErrorResponse},
    },
    summary="Serve a lesson image",
)
async def serve_image(file_path: str) -> FileResponse:
    full_path = image_service.resolve(file_path)
    return FileResponse(
        path=str(full_path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
