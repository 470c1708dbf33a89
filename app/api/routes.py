from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, Header

from app.corpus import get_corpus_store
from app.embeddings.client import EmbeddingsClient
from app.llm.client import LLMClient
from app.models.schemas import ChatRequest, ChatResponse, CorpusStatus, ErrorResponse, RagRequest, RagResponse
from app.rag.chat import ChatService
from app.rag.pipeline import RetrievalService

router = APIRouter()
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    500: {"model": ErrorResponse, "description": "Corpus or configuration failure"},
    502: {"model": ErrorResponse, "description": "Embedding service failure"},
}


def get_retrieval_service(
    x_request_id: str | None = Header(default=None, alias="X-Request-ID"),
) -> RetrievalService:
    return RetrievalService(
        corpus_store=get_corpus_store(),
        embedder=EmbeddingsClient(),
        request_id=x_request_id or uuid.uuid4().hex,
    )


def get_llm_client() -> LLMClient:
    return LLMClient()


def get_chat_service(
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
    llm_client: LLMClient = Depends(get_llm_client),
) -> ChatService:
    return ChatService(retrieval_service=retrieval_service, llm_client=llm_client)


@router.post(
    "/api/rag",
    response_model=RagResponse,
    responses=ERROR_RESPONSES,
    summary="Retrieve syllabus context for a question",
)
def rag(request: RagRequest, service: RetrievalService = Depends(get_retrieval_service)) -> RagResponse:
    logger.info("RAG request", extra={"len": len(request.question), "top_k": request.top_k})
    return service.retrieve(request.question, top_k=request.top_k)


@router.get("/api/rag/status", response_model=CorpusStatus, summary="Corpus availability")
def rag_status() -> CorpusStatus:
    return CorpusStatus(**get_corpus_store().describe())


@router.post("/api/v1/chat", response_model=ChatResponse, summary="Answer a chat turn with syllabus context")
def chat(request: ChatRequest, service: ChatService = Depends(get_chat_service)) -> ChatResponse:
    logger.info("Chat request", extra={"messages": len(request.messages), "model": request.model})
    reply = service.reply(request.messages, model=request.model)
    return ChatResponse(answer=reply.answer, context_used=reply.context_used, rag_error=reply.rag_error)


__all__ = ["router", "get_retrieval_service", "get_llm_client", "get_chat_service"]
