"""
Tests for RetrievalService: batch embedding, atomic inserts, ranking and result shaping.
"""

import pytest

from docqa.errors import DimensionMismatch, EmbeddingProviderError
from docqa.retrieval.service import DEFAULT_COLLECTION_NAME, RetrievalService
from docqa.vector_store.memory_store import InMemoryChunkStore

from tests.fakes import FakeEmbeddings

META = {"filename": "document-1.txt", "originalName": "notes.txt"}


class TestAddDocumentChunks:
    def test_embeds_all_chunks_in_one_call(self, retrieval: RetrievalService, fake_embeddings: FakeEmbeddings) -> None:
        # Act
        added = retrieval.add_document_chunks("doc1", ["cats are mammals", "the stock market fell"], META)

        # Assert
        assert added == 2
        assert fake_embeddings.document_calls == [["cats are mammals", "the stock market fell"]]
        assert retrieval.get_collection_info().count == 2

    def test_stores_positional_metadata(self, retrieval: RetrievalService, store: InMemoryChunkStore) -> None:
        retrieval.add_document_chunks("doc1", ["cats are mammals", "the stock market fell"], META)

        stored = store.all()
        assert [chunk.metadata["chunkIndex"] for chunk in stored] == [0, 1]
        assert stored[1].metadata["source"] == "notes.txt#chunk-1"
        assert stored[0].embedding == [1.0, 0.0]

    def test_failed_embedding_leaves_store_unchanged(
        self,
        retrieval: RetrievalService,
        store: InMemoryChunkStore,
        fake_embeddings: FakeEmbeddings,
        embedding_failure: EmbeddingProviderError,
    ) -> None:
        # Arrange
        retrieval.add_document_chunks("doc1", ["cats are mammals"], META)
        before = [(chunk.id, chunk.content) for chunk in store.all()]
        fake_embeddings.fail_with = embedding_failure

        # Act & Assert
        with pytest.raises(EmbeddingProviderError, match="timed out"):
            retrieval.add_document_chunks("doc1", ["replacement", "extra"], META)

        assert [(chunk.id, chunk.content) for chunk in store.all()] == before

    def test_foreign_provider_error_is_wrapped(
        self, retrieval: RetrievalService, store: InMemoryChunkStore, fake_embeddings: FakeEmbeddings
    ) -> None:
        # Arrange
        retrieval.add_document_chunks("doc1", ["cats are mammals"], META)
        cause = TimeoutError("read timed out")
        fake_embeddings.fail_with = cause

        # Act & Assert
        with pytest.raises(EmbeddingProviderError, match="read timed out") as exc_info:
            retrieval.add_document_chunks("doc2", ["the stock market fell"], META)

        assert exc_info.value.__cause__ is cause
        assert [chunk.id for chunk in store.all()] == ["doc1-chunk-0"]

    def test_short_embedding_response_is_a_provider_error(self, store: InMemoryChunkStore) -> None:
        class ShortEmbeddings(FakeEmbeddings):
            def embed_documents(self, texts):
                return super().embed_documents(texts)[:-1]

        service = RetrievalService(embeddings=ShortEmbeddings(), store=store)

        with pytest.raises(EmbeddingProviderError):
            service.add_document_chunks("doc1", ["a", "b", "c"], META)
        assert store.size() == 0

    def test_reupload_replaces_document(self, retrieval: RetrievalService) -> None:
        retrieval.add_document_chunks("other", ["x"], META)
        retrieval.add_document_chunks("doc1", ["a", "b", "c"], META)

        retrieval.add_document_chunks("doc1", ["a2", "b2", "c2"], META)

        assert retrieval.get_collection_info().count == 4

    def test_shorter_reupload_leaves_no_stale_chunks(self, retrieval: RetrievalService) -> None:
        # Arrange
        retrieval.add_document_chunks("other", ["x"], META)
        retrieval.add_document_chunks("doc1", ["a", "b", "c"], META)

        # Act
        retrieval.add_document_chunks("doc1", ["cats are mammals", "the stock market fell"], META)

        # Assert
        assert retrieval.get_collection_info().count == 2 + 1
        results = retrieval.search_similar_chunks("are cats mammals?", top_k=10)
        assert {r.id for r in results} == {"other-chunk-0", "doc1-chunk-0", "doc1-chunk-1"}
        assert "c" not in [r.content for r in results]


class TestSearchSimilarChunks:
    def test_ranks_matching_chunk_first(self, retrieval: RetrievalService) -> None:
        # Arrange
        retrieval.add_document_chunks("doc1", ["cats are mammals", "the stock market fell"], META)

        # Act
        results = retrieval.search_similar_chunks("are cats mammals?")

        # Assert
        assert [r.id for r in results] == ["doc1-chunk-0", "doc1-chunk-1"]
        assert results[0].score == pytest.approx(1.0, abs=1e-6)
        assert results[-1].score == pytest.approx(0.0, abs=1e-6)

    def test_result_shape(self, retrieval: RetrievalService) -> None:
        retrieval.add_document_chunks("doc1", ["cats are mammals"], META)

        result = retrieval.search_similar_chunks("are cats mammals?")[0]

        assert result.content == "cats are mammals"
        assert result.metadata.document_id == "doc1"
        assert result.metadata.chunk_index == 0
        assert result.metadata.start_index == 0
        assert result.metadata.end_index == len("cats are mammals")
        assert "embedding" not in result.model_dump(by_alias=True)
        assert result.model_dump(by_alias=True)["metadata"] == {
            "documentId": "doc1",
            "chunkIndex": 0,
            "startIndex": 0,
            "endIndex": 16,
        }

    def test_empty_store_returns_nothing_without_embedding(
        self, retrieval: RetrievalService, fake_embeddings: FakeEmbeddings
    ) -> None:
        assert retrieval.search_similar_chunks("anything") == []
        assert fake_embeddings.query_calls == []

    @pytest.mark.parametrize("top_k, expected", [(1, 1), (2, 2), (3, 3), (10, 3)])
    def test_returns_at_most_min_k_and_size(self, retrieval: RetrievalService, top_k: int, expected: int) -> None:
        retrieval.add_document_chunks("doc1", ["cats are mammals", "the stock market fell", "dogs"], META)

        results = retrieval.search_similar_chunks("are cats mammals?", top_k=top_k)

        assert len(results) == expected
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)

    def test_default_top_k_is_five(self, retrieval: RetrievalService) -> None:
        retrieval.add_document_chunks("doc1", [f"chunk {i}" for i in range(8)], META)

        assert len(retrieval.search_similar_chunks("are cats mammals?")) == 5

    def test_query_embedding_failure_propagates(
        self,
        retrieval: RetrievalService,
        fake_embeddings: FakeEmbeddings,
        embedding_failure: EmbeddingProviderError,
    ) -> None:
        retrieval.add_document_chunks("doc1", ["cats are mammals"], META)
        fake_embeddings.fail_with = embedding_failure

        with pytest.raises(EmbeddingProviderError):
            retrieval.search_similar_chunks("are cats mammals?")

    def test_foreign_query_error_is_wrapped(self, retrieval: RetrievalService, fake_embeddings: FakeEmbeddings) -> None:
        retrieval.add_document_chunks("doc1", ["cats are mammals"], META)
        fake_embeddings.fail_with = ConnectionError("connection reset")

        with pytest.raises(EmbeddingProviderError, match="connection reset") as exc_info:
            retrieval.search_similar_chunks("are cats mammals?")
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_dimension_mismatch_propagates(self, store: InMemoryChunkStore) -> None:
        embeddings = FakeEmbeddings(vectors={"stored": [1.0, 0.0], "query": [1.0, 0.0, 0.0]})
        service = RetrievalService(embeddings=embeddings, store=store)
        service.add_document_chunks("doc1", ["stored"], META)

        with pytest.raises(DimensionMismatch):
            service.search_similar_chunks("query")


class TestDeleteAndInfo:
    def test_delete_document(self, retrieval: RetrievalService) -> None:
        retrieval.add_document_chunks("doc1", ["a", "b"], META)
        retrieval.add_document_chunks("doc2", ["c"], META)

        assert retrieval.delete_document("doc1") == 2
        assert retrieval.get_collection_info().count == 1

    def test_delete_unknown_document(self, retrieval: RetrievalService) -> None:
        assert retrieval.delete_document("nope") == 0

    def test_collection_info(self, retrieval: RetrievalService) -> None:
        info = retrieval.get_collection_info()

        assert info.count == 0
        assert info.collection_name == DEFAULT_COLLECTION_NAME
        assert info.model_dump(by_alias=True) == {"count": 0, "collectionName": "rag-documents"}
