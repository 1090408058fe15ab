from docqa.config import load_settings, public_settings


def test_defaults(monkeypatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    settings = load_settings(_env_file=None)

    assert settings.embedding_model_name == "text-embedding-3-small"
    assert settings.default_top_k == 5
    assert settings.collection_name == "rag-documents"
    assert settings.max_file_size == 10485760
    assert settings.chunk_size_chars == 1000
    assert settings.chunk_overlap_chars == 200


def test_reads_environment_aliases(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("MAX_FILE_SIZE", "2048")
    monkeypatch.setenv("LLM_MODEL_NAME", "gpt-4o-mini")

    settings = load_settings(_env_file=None)

    assert settings.openai_api_key.get_secret_value() == "sk-test"
    assert settings.max_file_size == 2048
    assert settings.llm_model_name == "gpt-4o-mini"


def test_public_settings_hide_the_api_key(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    exposed = public_settings(load_settings(_env_file=None))

    assert "openai_api_key" not in exposed
    assert "sk-test" not in str(exposed)
    assert exposed["collection_name"] == "rag-documents"
