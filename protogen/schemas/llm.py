from typing import List, Literal

from pydantic import Field

from protogen.schemas.base import ApiModel


class CodeGenerationRequest(ApiModel):
    prompt: str = Field(..., max_length=4000, examples=["Write a debounce helper"])
    language: str = "javascript"
    comments: bool = True
    max_tokens: int = Field(2048, ge=1, le=8192)
    stream: bool = False


class ContentValidationRequest(ApiModel):
    content: str = Field(..., max_length=8000)
    criteria: List[str] = ["accuracy", "clarity", "coherence"]
    detailed: bool = True


class TopicResearchRequest(ApiModel):
    topic: str = Field(..., max_length=500)
    depth: Literal["basic", "intermediate", "advanced"] = "intermediate"
    format: Literal["outline", "detailed", "comprehensive"] = "detailed"


class SummarizationRequest(ApiModel):
    content: str = Field(..., max_length=16000)
    length: Literal["short", "medium", "long"] = "medium"
    style: Literal["bullet", "paragraph", "structured"] = "paragraph"


class InsightDerivationRequest(ApiModel):
    content: str = Field(..., max_length=16000)
    perspective: str = "analytical"
    focus_areas: List[str] = []


class SvgSize(ApiModel):
    width: int = Field(300, ge=16, le=2000)
    height: int = Field(300, ge=16, le=2000)


class SvgGenerationRequest(ApiModel):
    description: str = Field(..., max_length=1000)
    style: str = "minimal"
    size: SvgSize = SvgSize()
    colors: List[str] = []
