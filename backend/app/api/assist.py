"""
Query Assist API Routes

LLM helpers that turn patient free text into ingest terms.
"""
from fastapi import APIRouter, Depends, Request

from app.core.dependencies import get_summarizer
from app.core.rate_limit import ASSIST_LIMIT, limiter
from app.schemas.search import EnhanceQueryRequest, ExtractDiseaseRequest, KeywordsRequest
from app.services.query_assist import enhance_search_query, extract_disease, generate_keywords

router = APIRouter(prefix="/api/assist", tags=["assist"])


@router.post("/extract-disease")
@limiter.limit(ASSIST_LIMIT)
async def extract_disease_route(request: Request, body: ExtractDiseaseRequest, llm=Depends(get_summarizer)):
    return {"disease": await extract_disease(llm, body.text)}


@router.post("/keywords")
@limiter.limit(ASSIST_LIMIT)
async def keywords_route(request: Request, body: KeywordsRequest, llm=Depends(get_summarizer)):
    return {"keywords": await generate_keywords(llm, body.disease, body.context)}


@router.post("/enhance-query")
@limiter.limit(ASSIST_LIMIT)
async def enhance_query_route(request: Request, body: EnhanceQueryRequest, llm=Depends(get_summarizer)):
    return {"query": await enhance_search_query(llm, body.query, body.disease)}
