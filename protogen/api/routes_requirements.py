from fastapi import APIRouter, Depends

from protogen.generators.requirements import enhance_structured_requirements, generate_structured_requirements
from protogen.llm.client import GenAIClient, get_llm_client
from protogen.schemas.base import ok
from protogen.schemas.generation import EnhanceRequirementsRequest, StructuredRequirementsRequest

router = APIRouter(prefix="/api/generate/requirements")


@router.post("/structured")
async def structured_requirements(
    req: StructuredRequirementsRequest,
    llm: GenAIClient = Depends(get_llm_client),
):
    return ok(await generate_structured_requirements(llm, req.basic_requirements, req.model_name))


@router.post("/enhance")
async def enhance_requirements(
    req: EnhanceRequirementsRequest,
    llm: GenAIClient = Depends(get_llm_client),
):
    data = await enhance_structured_requirements(
        llm, req.structured_requirements, req.enhancement_prompt, req.model_name
    )
    return ok(data)
