"""
Router for asking questions about an uploaded contract.

Checks run in a fixed order: file, question, payment, extraction, answer.
Unpaid requests never reach extraction or OpenAI.

The multipart body is read directly; a field of the wrong kind (a text
value for ``contract``, a file for ``question``) is treated as missing.
"""

import logging
import shutil
import uuid
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from ..config import Settings, get_settings
from ..exceptions import ExtractionError, PaymentRequiredError, ValidationError
from ..models import ErrorResponse, QueryResponse
from ..services.answer_service import AnswerService, get_answer_service
from ..services.document_service import DocumentService, get_document_service
from ..services.payment_service import PaymentService, get_payment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["query"])

QUERY_FORM_SCHEMA = {
    "requestBody": {
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "contract": {"type": "string", "format": "binary"},
                        "question": {"type": "string"},
                        "sessionId": {"type": "string"},
                    },
                }
            }
        },
    }
}


def _save_upload(upload: UploadFile, path: Path) -> bytes:
    """Write the upload to ``path`` and return the bytes read back from it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as fh:
        shutil.copyfileobj(upload.file, fh)
    return path.read_bytes()


def _remove_upload(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove temporary upload %s: %s", path, e)


@router.post(
    "/query",
    response_model=QueryResponse,
    responses={
        400: {"model": ErrorResponse},
        402: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    openapi_extra=QUERY_FORM_SCHEMA,
)
async def query_contract(
    request: Request,
    settings: Settings = Depends(get_settings),
    payment_service: PaymentService = Depends(get_payment_service),
    document_service: DocumentService = Depends(get_document_service),
    answer_service: AnswerService = Depends(get_answer_service),
) -> QueryResponse:
    """
    Answer a question about an uploaded contract.

    Form fields: ``contract`` (file), ``question`` (text) and ``sessionId``
    (a Checkout session previously verified as paid through
    /api/checkout-session).
    """
    form = await request.form()
    contract = form.get("contract")
    question = form.get("question")
    session_id = form.get("sessionId")

    if not isinstance(contract, UploadFile) or not contract.filename:
        raise ValidationError("No contract file uploaded.")

    if not isinstance(question, str) or not question.strip():
        raise ValidationError("A question is required.")

    # Only the server-side registry decides; the client never sends a paid flag
    if (
        not isinstance(session_id, str)
        or not session_id
        or not payment_service.is_session_paid(session_id)
    ):
        raise PaymentRequiredError(
            "Payment required. Please purchase access to ask questions."
        )

    upload_path = Path(settings.upload_dir) / uuid.uuid4().hex
    try:
        try:
            file_bytes = await run_in_threadpool(_save_upload, contract, upload_path)
        except OSError as e:
            logger.exception("Failed to store uploaded file")
            raise ExtractionError("Failed to read uploaded file.") from e

        logger.info("Processing contract: %s (%d bytes)", contract.filename, len(file_bytes))
        contract_text = await run_in_threadpool(
            document_service.extract_text, file_bytes, contract.filename
        )
    finally:
        _remove_upload(upload_path)
        await contract.close()

    answer = await run_in_threadpool(answer_service.answer, contract_text, question)
    logger.info("Answered question (%d chars)", len(answer))
    return QueryResponse(answer=answer)
