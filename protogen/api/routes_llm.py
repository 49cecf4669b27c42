"""Single-shot LLM helpers: code, review, research, summaries, insights and SVG."""
from fastapi import APIRouter, Depends

from protogen.llm.client import GenAIClient, get_llm_client
from protogen.schemas.base import ok
from protogen.schemas.llm import (
    CodeGenerationRequest,
    ContentValidationRequest,
    InsightDerivationRequest,
    SummarizationRequest,
    SvgGenerationRequest,
    TopicResearchRequest,
)

router = APIRouter(prefix="/api")


@router.post("/generate/code")
async def generate_code(req: CodeGenerationRequest, llm: GenAIClient = Depends(get_llm_client)):
    result = await llm.generate_code(
        prompt=req.prompt,
        language=req.language,
        comments=req.comments,
        max_tokens=req.max_tokens,
        stream=req.stream,
    )
    return ok(result)


@router.post("/validate/content")
async def validate_content(req: ContentValidationRequest, llm: GenAIClient = Depends(get_llm_client)):
    return ok(await llm.validate_content(req.content, req.criteria, req.detailed))


@router.post("/research/topic")
async def research_topic(req: TopicResearchRequest, llm: GenAIClient = Depends(get_llm_client)):
    return ok(await llm.research_topic(req.topic, req.depth, req.format))


@router.post("/summarize")
async def summarize(req: SummarizationRequest, llm: GenAIClient = Depends(get_llm_client)):
    return ok(await llm.summarize_content(req.content, req.length, req.style))


@router.post("/derive/insights")
async def derive_insights(req: InsightDerivationRequest, llm: GenAIClient = Depends(get_llm_client)):
    return ok(await llm.derive_insights(req.content, req.perspective, req.focus_areas))


@router.post("/generate/svg")
async def generate_svg(req: SvgGenerationRequest, llm: GenAIClient = Depends(get_llm_client)):
    return ok(await llm.generate_svg(req.description, req.style, req.size.model_dump(), req.colors))
