"""FastAPI dependencies wiring generators to settings and the LLM client."""
from pathlib import Path

from fastapi import Depends

from protogen.core.config import settings
from protogen.generators.db_json import DbJsonGenerator
from protogen.generators.jdl.generator import JdlGenerator
from protogen.generators.project.generator import ProjectGenerator
from protogen.generators.prototype.builder import PrototypeBuilder
from protogen.generators.prototype.json_server import JsonServerPrototypeGenerator
from protogen.llm.client import GenAIClient, get_llm_client


def get_public_dir() -> Path:
    return settings.public_path


def get_projects_dir() -> Path:
    return settings.projects_path


def get_jdl_generator(
    llm: GenAIClient = Depends(get_llm_client),
    public_dir: Path = Depends(get_public_dir),
) -> JdlGenerator:
    return JdlGenerator(llm, public_dir)


def get_db_json_generator(
    llm: GenAIClient = Depends(get_llm_client),
    public_dir: Path = Depends(get_public_dir),
) -> DbJsonGenerator:
    return DbJsonGenerator(llm, public_dir)


def get_prototype_builder(
    llm: GenAIClient = Depends(get_llm_client),
    public_dir: Path = Depends(get_public_dir),
) -> PrototypeBuilder:
    return PrototypeBuilder(llm, public_dir)


def get_json_server_generator(
    llm: GenAIClient = Depends(get_llm_client),
    public_dir: Path = Depends(get_public_dir),
) -> JsonServerPrototypeGenerator:
    return JsonServerPrototypeGenerator(llm, public_dir, settings.json_server_port)


def get_project_generator(
    llm: GenAIClient = Depends(get_llm_client),
    projects_dir: Path = Depends(get_projects_dir),
) -> ProjectGenerator:
    return ProjectGenerator(llm, projects_dir)
