"""
Shared test fixtures: deterministic embedding/LLM fakes and wired services.

No test talks to a real provider.
"""

import pytest

from docqa.config import Settings, load_settings
from docqa.errors import CompletionProviderError, EmbeddingProviderError
from docqa.retrieval.service import RetrievalService
from docqa.vector_store.memory_store import InMemoryChunkStore

from tests.fakes import FakeEmbeddings, FakeLLM


@pytest.fixture
def fake_embeddings() -> FakeEmbeddings:
    return FakeEmbeddings(
        vectors={
            "cats are mammals": [1.0, 0.0],
            "the stock market fell": [0.0, 1.0],
            "are cats mammals?": [1.0, 0.0],
            "what happened to stocks?": [0.0, 1.0],
        }
    )


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def store() -> InMemoryChunkStore:
    return InMemoryChunkStore()


@pytest.fixture
def retrieval(fake_embeddings: FakeEmbeddings, store: InMemoryChunkStore) -> RetrievalService:
    return RetrievalService(embeddings=fake_embeddings, store=store)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return load_settings(upload_dir=str(tmp_path / "uploads"), max_file_size=1024)


@pytest.fixture
def embedding_failure() -> EmbeddingProviderError:
    return EmbeddingProviderError("Embedding request failed: Request timed out.")


@pytest.fixture
def completion_failure() -> CompletionProviderError:
    return CompletionProviderError("Completion request failed: rate limited")
