import pytest
from fastapi.testclient import TestClient

from app.api.routes import get_llm_client, get_retrieval_service
from app.corpus.json_store import JsonCorpusStore
from app.main import app
from app.models.schemas import ChatMessage
from app.rag.chat import ChatService
from app.rag.pipeline import RetrievalService
from app.rag.prompts import SYSTEM_PROMPT, build_context_suffix
from tests.conftest import MIDTERM_QUERY_VECTOR


class _FakeEmbedder:
    def __init__(self, exc: Exception | None = None):
        self.exc = exc
        self.calls = []

    def embed_text(self, text: str):
        self.calls.append(text)
        if self.exc is not None:
            raise self.exc
        return list(MIDTERM_QUERY_VECTOR)


class _FakeLLM:
    def __init__(self, answer: str = "Week 8."):
        self.answer = answer
        self.calls = []

    def chat(self, messages, model=None):
        self.calls.append({"messages": messages, "model": model})
        return self.answer


def _chat_service(corpus_path, embedder=None, llm=None) -> ChatService:
    retrieval = RetrievalService(corpus_store=JsonCorpusStore(corpus_path), embedder=embedder or _FakeEmbedder())
    return ChatService(retrieval_service=retrieval, llm_client=llm or _FakeLLM())


def _messages(*texts: str):
    return [ChatMessage(role="user", content=t) for t in texts]


def test_context_is_appended_to_system_prompt(corpus_path):
    llm = _FakeLLM()

    reply = _chat_service(corpus_path, llm=llm).reply(_messages("When is the midterm?"))

    assert reply.answer == "Week 8."
    assert reply.context_used is True
    assert reply.rag_error is None
    system = llm.calls[0]["messages"][0]
    assert system["role"] == "system"
    assert system["content"].startswith(SYSTEM_PROMPT + "\n\nIMPORTANT: Use the following course information")
    assert "The midterm is held in week 8." in system["content"]
    assert llm.calls[0]["messages"][1:] == [{"role": "user", "content": "When is the midterm?"}]


def test_retrieval_uses_last_user_message(corpus_path):
    embedder = _FakeEmbedder()
    messages = [
        ChatMessage(role="user", content="Hi"),
        ChatMessage(role="assistant", content="Hello! How can I help?"),
        ChatMessage(role="user", content="When is the midterm?"),
    ]

    _chat_service(corpus_path, embedder=embedder).reply(messages)

    assert embedder.calls == ["When is the midterm?"]


def test_retrieval_failure_degrades_to_plain_chat(tmp_path):
    llm = _FakeLLM()

    reply = _chat_service(tmp_path / "missing.json", llm=llm).reply(_messages("When is the midterm?"))

    assert reply.answer == "Week 8."
    assert reply.context_used is False
    assert reply.rag_error == "corpus_unavailable"
    assert llm.calls[0]["messages"][0]["content"] == SYSTEM_PROMPT


def test_blank_message_skips_retrieval(corpus_path):
    embedder = _FakeEmbedder()

    reply = _chat_service(corpus_path, embedder=embedder).reply(_messages("   "))

    assert embedder.calls == []
    assert reply.context_used is False
    assert reply.rag_error is None


def test_unexpected_errors_are_not_swallowed(corpus_path):
    service = _chat_service(corpus_path, embedder=_FakeEmbedder(exc=RuntimeError("boom")))

    with pytest.raises(RuntimeError):
        service.reply(_messages("When is the midterm?"))


def test_context_suffix_is_empty_without_context():
    assert build_context_suffix("") == ""


def test_chat_endpoint(corpus_path):
    llm = _FakeLLM(answer="The midterm is in week 8.")
    app.dependency_overrides[get_retrieval_service] = lambda: RetrievalService(
        corpus_store=JsonCorpusStore(corpus_path), embedder=_FakeEmbedder()
    )
    app.dependency_overrides[get_llm_client] = lambda: llm
    try:
        resp = TestClient(app).post(
            "/api/v1/chat",
            json={"messages": [{"role": "user", "content": "When is the midterm?"}], "model": "gpt-4.1-mini"},
        )
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 200
    assert resp.json() == {"answer": "The midterm is in week 8.", "context_used": True, "rag_error": None}
    assert llm.calls[0]["model"] == "gpt-4.1-mini"
