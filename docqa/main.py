import logging
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from docqa.api.routes import router as api_router
from docqa.config import Settings, load_settings, public_settings, setup_logging
from docqa.indexing.pipeline import DocumentProcessor
from docqa.llm.client import LLMClient
from docqa.rag.pipeline import CompletionProvider, QAService
from docqa.retrieval.service import RetrievalService

logger = logging.getLogger("docqa")


def create_app(
    settings: Settings | None = None,
    retrieval: RetrievalService | None = None,
    llm_client: CompletionProvider | None = None,
) -> FastAPI:
    """
    Composition root: every service is built here, once, and shared by the
    route handlers through `app.state`.
    """
    settings = settings or load_settings()
    retrieval = retrieval or RetrievalService.from_settings(settings)
    llm_client = llm_client or LLMClient.from_settings(settings)

    app = FastAPI(title="Document QA Backend")
    app.state.settings = settings
    app.state.retrieval = retrieval
    app.state.document_processor = DocumentProcessor.from_settings(settings)
    app.state.qa = QAService(retrieval, llm_client, top_k=settings.default_top_k)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.include_router(api_router)

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Serving uploads", extra={"upload_dir": str(upload_dir.resolve())})
    app.mount("/uploads", StaticFiles(directory=upload_dir, check_dir=False), name="uploads")

    logger.info("Application starting")
    logger.info("Loaded settings: %s", public_settings(settings))
    return app


def run() -> None:
    import uvicorn

    setup_logging()
    settings = load_settings()
    uvicorn.run(create_app(settings), host=settings.app_host, port=settings.app_port)


if __name__ == "__main__":
    run()
