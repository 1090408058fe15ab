"""
Smoke test of the whole pipeline against local files.

Indexes the given PDF/TXT files into a fresh in-memory store, then asks one question.

Example:
    python -m scripts.ask_files --question "What is the refund policy?" docs/terms.pdf docs/faq.txt
"""

from __future__ import annotations

import argparse
import logging
import sys
import uuid
from pathlib import Path

from tqdm import tqdm

from docqa.config import load_settings, setup_logging
from docqa.indexing.pipeline import DocumentProcessor
from docqa.llm.client import LLMClient
from docqa.rag.pipeline import QAService
from docqa.retrieval.service import RetrievalService


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Index local documents and ask a question about them.")
    parser.add_argument("files", nargs="+", type=Path, help="PDF or TXT files to index")
    parser.add_argument("--question", "-q", required=True, help="Question to ask")
    parser.add_argument("--top-k", type=int, default=None, help="How many chunks to use as context")
    parser.add_argument("--snippet", type=int, default=200, help="Length of the source snippets to print")
    return parser.parse_args()


def main() -> None:
    setup_logging()
    logger = logging.getLogger(__name__)
    args = parse_args()

    settings = load_settings()
    retrieval = RetrievalService.from_settings(settings)
    processor = DocumentProcessor.from_settings(settings)
    qa = QAService(retrieval, LLMClient.from_settings(settings), top_k=args.top_k or settings.default_top_k)

    try:
        for path in tqdm(args.files, desc="Indexing", unit="file"):
            processed = processor.process_document(path, path.name)
            retrieval.add_document_chunks(
                str(uuid.uuid4()),
                processed.chunks,
                {"filename": str(path), "originalName": path.name},
            )
        response = qa.answer_question(args.question)
    except Exception:
        logger.exception("Smoke run failed")
        sys.exit(1)

    info = retrieval.get_collection_info()
    print(f"\nIndexed chunks: {info.count} (collection {info.collection_name})")
    print(f"\nAnswer:\n{response.answer}")
    print("\nSources:")
    if not response.sources:
        print("  <none>")
    for idx, source in enumerate(response.sources, start=1):
        snippet = source.content[: args.snippet].replace("\n", " ")
        print(f"#{idx} score={source.score:.3f} id={source.id}")
        print("   ", snippet + ("..." if len(source.content) > args.snippet else ""))


if __name__ == "__main__":
    main()
