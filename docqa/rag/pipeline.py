"""
RAG pipeline: retrieve context, build the prompt, ask the LLM.
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from docqa.models.schemas import QAResponse, ResultChunk
from docqa.retrieval.service import RetrievalService
from docqa.vector_store.similarity import DEFAULT_TOP_K

logger = logging.getLogger(__name__)

NO_RESULTS_ANSWER = (
    "I couldn't find any relevant information in the uploaded documents to answer your question."
)
EMPTY_COMPLETION_ANSWER = "I couldn't generate a response."

SYSTEM_PROMPT_TEMPLATE = """You are a helpful AI assistant that answers questions based on the provided context from uploaded documents.

Instructions:
- Use only the information provided in the context to answer questions
- If the context doesn't contain enough information to answer the question, say so
- Be concise but thorough in your responses
- Reference the source information when possible

Context:
{context}"""


class CompletionProvider(Protocol):
    def complete(self, system_prompt: str, user_query: str) -> str:
        ...


def build_context(chunks: Sequence[ResultChunk]) -> str:
    return "\n\n".join(f"[{idx}] {chunk.content}" for idx, chunk in enumerate(chunks, start=1))


def build_system_prompt(chunks: Sequence[ResultChunk]) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(context=build_context(chunks))


class QAService:
    """Answers questions over the uploaded documents."""

    def __init__(
        self,
        retrieval: RetrievalService,
        llm_client: CompletionProvider,
        top_k: int = DEFAULT_TOP_K,
        logger_: logging.Logger | None = None,
    ) -> None:
        self.retrieval = retrieval
        self.llm_client = llm_client
        self.top_k = top_k
        self.logger = logger_ or logger

    def answer_question(self, query: str) -> QAResponse:
        info = self.retrieval.get_collection_info()
        self.logger.info("QA request", extra={"query_len": len(query), "collection_count": info.count})

        relevant = self.retrieval.search_similar_chunks(query, self.top_k)
        if not relevant:
            self.logger.info("No relevant chunks found, skipping LLM")
            return QAResponse(answer=NO_RESULTS_ANSWER, sources=[], query=query)

        answer = self.llm_client.complete(build_system_prompt(relevant), query)
        if not answer:
            self.logger.warning("LLM returned empty completion")
            answer = EMPTY_COMPLETION_ANSWER

        return QAResponse(answer=answer, sources=relevant, query=query)


__all__ = [
    "QAService",
    "CompletionProvider",
    "build_context",
    "build_system_prompt",
    "NO_RESULTS_ANSWER",
    "EMPTY_COMPLETION_ANSWER",
    "SYSTEM_PROMPT_TEMPLATE",
]
