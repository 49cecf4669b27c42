from fastapi import APIRouter, Depends

from protogen.api.deps import get_json_server_generator, get_prototype_builder
from protogen.generators.prototype.builder import PrototypeBuilder
from protogen.generators.prototype.json_server import JsonServerPrototypeGenerator
from protogen.schemas.base import ok
from protogen.schemas.generation import (
    JsonServerFromJdlFileRequest,
    JsonServerFromRequirementsRequest,
    JsonServerPrototypeRequest,
    PrototypeBuilderRequest,
    PrototypeRequest,
    SectionGenerationRequest,
)

router = APIRouter(prefix="/api/generate")


def _prototype_options(options) -> dict:
    return options.model_dump(by_alias=True)


@router.post("/prototype")
async def generate_prototype(req: PrototypeRequest, builder: PrototypeBuilder = Depends(get_prototype_builder)):
    return ok(await builder.generate_single_page(req.scenario, req.name, req.features))


@router.post("/prototype-builder")
async def build_prototype(req: PrototypeBuilderRequest, builder: PrototypeBuilder = Depends(get_prototype_builder)):
    sections = [s.model_dump() for s in req.sections]
    return ok(await builder.build_prototype(req.scenario, req.name, sections, req.features))


@router.post("/prototype-builder/section")
async def generate_section(req: SectionGenerationRequest, builder: PrototypeBuilder = Depends(get_prototype_builder)):
    return ok(await builder.generate_section(req.scenario, req.name, req.section.model_dump(), req.features))


@router.get("/prototype-builder/{name}/sections")
def list_sections(name: str, builder: PrototypeBuilder = Depends(get_prototype_builder)):
    return ok(builder.list_sections(name))


@router.post("/prototype-json-server")
async def json_server_prototype(
    req: JsonServerPrototypeRequest,
    generator: JsonServerPrototypeGenerator = Depends(get_json_server_generator),
):
    result = await generator.generate_prototype(req.jdl_content, req.scenario, req.name, _prototype_options(req.options))
    return ok(result)


@router.post("/prototype-json-server/from-jdl-file/{jdl_name}")
async def json_server_prototype_from_jdl_file(
    jdl_name: str,
    req: JsonServerFromJdlFileRequest,
    generator: JsonServerPrototypeGenerator = Depends(get_json_server_generator),
):
    result = await generator.generate_prototype_from_jdl_file(jdl_name, req.scenario, req.name, _prototype_options(req.options))
    return ok(result)


@router.post("/prototype-json-server/from-requirements")
async def json_server_prototype_from_requirements(
    req: JsonServerFromRequirementsRequest,
    generator: JsonServerPrototypeGenerator = Depends(get_json_server_generator),
):
    result = await generator.generate_prototype_from_requirements(
        req.requirements, req.scenario, req.name, _prototype_options(req.options)
    )
    return ok(result)


@router.post("/prototype-json-server/start/{name}")
def start_json_server(name: str, generator: JsonServerPrototypeGenerator = Depends(get_json_server_generator)):
    return ok(generator.start_json_server(name))


@router.get("/prototype-json-server/{name}")
def describe_prototype(name: str, generator: JsonServerPrototypeGenerator = Depends(get_json_server_generator)):
    return ok(generator.describe_prototype(name))
