"""Upload form and the upload -> resize -> publish endpoint."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, PlainTextResponse
from starlette.datastructures import UploadFile

from resizepost.config import PREDEFINED_SIZES
from resizepost.handlers.pages import INTERNAL_ERROR_MESSAGE, SUCCESS_HTML, UPLOAD_FORM_HTML
from resizepost.models import UploadedFile
from resizepost.services.publisher import Publisher
from resizepost.services.resizer import resize_all
from resizepost.services.validator import UploadRejected, validate_upload

router = APIRouter()
logger = logging.getLogger(__name__)


def get_publisher(request: Request) -> Publisher:
    return request.app.state.publisher


async def _read_upload(request: Request) -> UploadedFile | None:
    form = await request.form()
    image = form.get("image")
    # A plain text "image" field is treated the same as no file at all
    if not isinstance(image, UploadFile):
        return None
    content = await image.read()
    return UploadedFile(
        content=content,
        content_type=image.content_type or "",
        filename=image.filename or None,
    )


# ---------------------------------------------------------------------------
# Form
# ---------------------------------------------------------------------------


@router.get("/", response_class=HTMLResponse)
async def upload_form():
    return HTMLResponse(UPLOAD_FORM_HTML)


# ---------------------------------------------------------------------------
# POST upload
# ---------------------------------------------------------------------------


@router.post("/upload")
async def upload_image(request: Request, publisher: Publisher = Depends(get_publisher)):
    try:
        upload = validate_upload(await _read_upload(request))
    except UploadRejected as exc:
        return PlainTextResponse(exc.message, status_code=400)

    try:
        variants = await run_in_threadpool(resize_all, upload.content, PREDEFINED_SIZES)
        report = await publisher.publish(variants)
    except Exception:  # pylint: disable=broad-except
        logger.exception("Upload pipeline failed for %r", upload.filename)
        return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=500)

    logger.info(
        "Published %d/%d variants of %r (post=%s)",
        report.uploaded,
        len(variants),
        upload.filename,
        report.post_id,
    )
    headers = {"X-Media-Uploaded": str(report.uploaded)}
    if report.post_id:
        headers["X-Post-Id"] = report.post_id
    return HTMLResponse(SUCCESS_HTML, headers=headers)
