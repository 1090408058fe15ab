from __future__ import annotations

import logging
import random
import time
import uuid
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Body, Depends, File, Request, UploadFile, status
from fastapi.responses import JSONResponse

from docqa.config import Settings
from docqa.errors import ValidationError
from docqa.indexing.parser import SUPPORTED_EXTENSIONS, file_extension, is_supported
from docqa.indexing.pipeline import DocumentProcessor
from docqa.models.schemas import (
    CollectionInfo,
    DeleteDocumentResponse,
    ErrorResponse,
    QAResponse,
    UploadErrorResponse,
    UploadResponse,
)
from docqa.rag.pipeline import QAService
from docqa.retrieval.service import RetrievalService

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_retrieval_service(request: Request) -> RetrievalService:
    return request.app.state.retrieval


def get_document_processor(request: Request) -> DocumentProcessor:
    return request.app.state.document_processor


def get_qa_service(request: Request) -> QAService:
    return request.app.state.qa


def _upload_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=UploadErrorResponse(message=message).model_dump(by_alias=True),
    )


def _stored_filename(original_name: str) -> str:
    suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"document-{suffix}{file_extension(original_name)}"


@router.post("/upload", response_model=UploadResponse, summary="Upload and index a PDF or TXT document")
def upload_document(
    document: UploadFile | None = File(default=None),
    settings: Settings = Depends(get_settings),
    processor: DocumentProcessor = Depends(get_document_processor),
    retrieval: RetrievalService = Depends(get_retrieval_service),
):
    if document is None or not document.filename:
        return _upload_error(status.HTTP_400_BAD_REQUEST, "No file uploaded")

    original_name = document.filename
    if not is_supported(original_name):
        logger.info("Rejected upload", extra={"document_name": original_name, "reason": "extension"})
        allowed = " and ".join(ext.lstrip(".").upper() for ext in SUPPORTED_EXTENSIONS)
        return _upload_error(status.HTTP_400_BAD_REQUEST, f"Only {allowed} files are allowed")

    data = document.file.read(settings.max_file_size + 1)
    if len(data) > settings.max_file_size:
        logger.info("Rejected upload", extra={"document_name": original_name, "reason": "size"})
        return _upload_error(
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            f"File too large: limit is {settings.max_file_size} bytes",
        )

    document_id = str(uuid.uuid4())
    try:
        upload_dir = Path(settings.upload_dir)
        upload_dir.mkdir(parents=True, exist_ok=True)
        stored_name = _stored_filename(original_name)
        stored_path = upload_dir / stored_name
        stored_path.write_bytes(data)

        processed = processor.process_document(stored_path, original_name)
        retrieval.add_document_chunks(
            document_id,
            processed.chunks,
            {"filename": stored_name, "originalName": original_name},
        )
    except ValidationError as exc:
        return _upload_error(status.HTTP_400_BAD_REQUEST, str(exc))
    except Exception as exc:
        logger.exception("Upload processing error", extra={"document_id": document_id})
        return _upload_error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Failed to process document")

    chunk_count = len(processed.chunks)
    logger.info("Document uploaded", extra={"document_id": document_id, "chunks": chunk_count})
    return UploadResponse(
        document_id=document_id,
        filename=original_name,
        chunks=chunk_count,
        message=f"Document processed successfully. Created {chunk_count} chunks.",
    )


@router.post("/qa", response_model=QAResponse, summary="Ask a question about uploaded documents")
def ask(
    payload: Any = Body(default=None),
    qa: QAService = Depends(get_qa_service),
):
    try:
        query = payload.get("query") if isinstance(payload, dict) else None
        if not query or not isinstance(query, str):
            raise ValidationError("Query is required and must be a string")
        return qa.answer_question(query)
    except ValidationError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(error=str(exc)).model_dump(),
        )
    except Exception as exc:
        logger.exception("QA processing error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=str(exc) or "Failed to process query").model_dump(),
        )


@router.delete("/documents/{document_id}", response_model=DeleteDocumentResponse, summary="Delete a document")
def delete_document(
    document_id: str,
    retrieval: RetrievalService = Depends(get_retrieval_service),
) -> DeleteDocumentResponse:
    removed = retrieval.delete_document(document_id)
    return DeleteDocumentResponse(document_id=document_id, deleted=removed)


@router.get("/collection", response_model=CollectionInfo, summary="Chunk count of the collection")
def collection_info(retrieval: RetrievalService = Depends(get_retrieval_service)) -> CollectionInfo:
    return retrieval.get_collection_info()


__all__ = ["router"]
