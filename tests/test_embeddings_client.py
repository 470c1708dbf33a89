from types import SimpleNamespace

import pytest
from openai import OpenAIError

from app.config import settings
from app.embeddings.client import EmbeddingsClient
from app.errors import ConfigurationError, EmbeddingServiceError


class _FakeEmbeddingsAPI:
    def __init__(self, exc: Exception | None = None, data=None):
        self.exc = exc
        self.data = data
        self.calls = []

    def create(self, model, input):
        self.calls.append((model, list(input)))
        if self.exc is not None:
            raise self.exc
        if self.data is not None:
            return SimpleNamespace(data=self.data)
        return SimpleNamespace(data=[SimpleNamespace(embedding=[float(len(t)), 1.0]) for t in input])


class _FakeOpenAI:
    def __init__(self, **kwargs):
        self.embeddings = _FakeEmbeddingsAPI(**kwargs)


def test_embed_text_returns_vector_and_uses_model():
    fake = _FakeOpenAI()
    client = EmbeddingsClient(model="text-embedding-ada-002", client=fake)

    vector = client.embed_text("hello")

    assert vector == [5.0, 1.0]
    assert fake.embeddings.calls == [("text-embedding-ada-002", ["hello"])]


def test_embed_texts_batches_requests():
    fake = _FakeOpenAI()
    client = EmbeddingsClient(batch_size=2, client=fake)

    vectors = client.embed_texts(["a", "bb", "ccc", "dddd", "eeeee"])

    assert [v[0] for v in vectors] == [1.0, 2.0, 3.0, 4.0, 5.0]
    assert len(fake.embeddings.calls) == 3
    assert client.embed_texts([]) == []


def test_remote_failure_is_wrapped():
    client = EmbeddingsClient(client=_FakeOpenAI(exc=OpenAIError("quota exceeded")))

    with pytest.raises(EmbeddingServiceError, match="quota exceeded"):
        client.embed_text("hello")


@pytest.mark.parametrize(
    "data",
    [
        [],
        [SimpleNamespace(embedding=[])],
        [SimpleNamespace(embedding=[1.0]), SimpleNamespace(embedding=[2.0])],
        [SimpleNamespace(embedding=[1.0, float("nan")])],
        [SimpleNamespace(embedding=[float("inf"), 0.0])],
    ],
)
def test_malformed_response_is_rejected(data):
    client = EmbeddingsClient(client=_FakeOpenAI(data=data))

    with pytest.raises(EmbeddingServiceError):
        client.embed_text("hello")


def test_missing_api_key_fails_on_first_call(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", None)

    client = EmbeddingsClient()

    with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
        client.embed_text("hello")


def test_openai_client_gets_timeout_and_retries(monkeypatch):
    from pydantic import SecretStr

    monkeypatch.setattr(settings, "openai_api_key", SecretStr("sk-test"))

    client = EmbeddingsClient(timeout=5.0, max_retries=1).client

    assert client.api_key == "sk-test"
    assert client.timeout == 5.0
    assert client.max_retries == 1


def test_non_finite_query_vector_is_an_embedding_error():
    client = EmbeddingsClient(client=_FakeOpenAI(data=[SimpleNamespace(embedding=[0.1, float("nan"), 0.3])]))

    with pytest.raises(EmbeddingServiceError, match="non-finite"):
        client.embed_text("When is the midterm?")
