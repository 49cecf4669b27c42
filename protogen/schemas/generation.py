from typing import Any, Dict, List, Optional

from pydantic import Field

from protogen.schemas.base import ApiModel


# JDL and db.json

class JdlOptions(ApiModel):
    include_application_config: bool = False
    microservice_names: List[str] = []
    database_type: Optional[str] = None


class JdlGenerationRequest(ApiModel):
    requirements: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    options: JdlOptions = JdlOptions()


class JsonOptions(ApiModel):
    records_per_entity: int = Field(10, ge=1, le=100)


class JdlToJsonRequest(ApiModel):
    jdl_content: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    options: JsonOptions = JsonOptions()


class JdlFileToJsonRequest(ApiModel):
    options: JsonOptions = JsonOptions()


class RequirementsToJsonRequest(ApiModel):
    requirements: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    jdl_options: JdlOptions = JdlOptions()
    json_options: JsonOptions = JsonOptions()


# HTML prototypes

class PrototypeRequest(ApiModel):
    scenario: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    features: List[str] = []


class Section(ApiModel):
    id: str = Field(..., pattern=r"^[a-zA-Z0-9_-]+$")
    type: str
    description: str


class PrototypeBuilderRequest(PrototypeRequest):
    sections: List[Section] = Field(..., min_length=1)


class SectionGenerationRequest(PrototypeRequest):
    section: Section


class PrototypeOptions(ApiModel):
    json_options: JsonOptions = JsonOptions()
    features: List[str] = []


class JsonServerPrototypeRequest(ApiModel):
    jdl_content: str = Field(..., min_length=1)
    scenario: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    options: PrototypeOptions = PrototypeOptions()


class JsonServerFromJdlFileRequest(ApiModel):
    scenario: str = Field(..., min_length=1)
    name: Optional[str] = None
    options: PrototypeOptions = PrototypeOptions()


class JsonServerFromRequirementsRequest(ApiModel):
    requirements: str = Field(..., min_length=1)
    scenario: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    options: PrototypeOptions = PrototypeOptions()


# Projects

class ProjectRequest(ApiModel):
    project_name: str = Field(..., min_length=1, max_length=50, pattern=r"^[a-zA-Z0-9_-]+$")
    requirements_text: str = Field(..., min_length=10, max_length=5000)
    port: int = Field(3002, ge=1024, le=65535)
    host: str = "localhost"
    static_folder: str = Field("static", pattern=r"^[a-zA-Z0-9_-]+$")
    use_llm: bool = Field(False, alias="useLLM")


class EntityConfigsRequest(ApiModel):
    requirements_text: str = Field(..., min_length=10, max_length=5000)
    port: int = Field(3002, ge=1024, le=65535)
    host: str = "localhost"
    use_llm: bool = Field(False, alias="useLLM")


class MockDataRequest(ApiModel):
    count: int = Field(25, ge=1, le=1000)
    seed: Optional[int] = None


# Structured requirements

class StructuredRequirementsRequest(ApiModel):
    basic_requirements: str = Field(..., min_length=10, max_length=5000)
    model_name: str = "deepseek-r1:8b"


class EnhanceRequirementsRequest(ApiModel):
    structured_requirements: Dict[str, Any]
    enhancement_prompt: str = Field(..., min_length=5, max_length=1000)
    model_name: str = "deepseek-r1:8b"


# api.js

class ApiJsRequest(ApiModel):
    primary_entities: List[Dict[str, Any]] = Field(..., min_length=1)
    relation_handlers: Optional[List[Dict[str, Any]]] = None
    forms: Optional[List[Dict[str, Any]]] = None
    search_config: Optional[List[Dict[str, Any]]] = None
    default_tab: Optional[str] = None
    related_sections: Optional[List[str]] = None
    render_functions: Optional[Dict[str, Dict[str, Any]]] = None
    base_url: Optional[str] = None
    output_path: Optional[str] = None
