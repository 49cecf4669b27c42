from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from protogen.generators.db_json import DbJsonGenerator
from protogen.generators.jdl.generator import JdlGenerator
from protogen.generators.jdl.parser import validate_jdl
from protogen.api.deps import get_db_json_generator, get_jdl_generator
from protogen.schemas.base import ok
from protogen.schemas.generation import (
    JdlFileToJsonRequest,
    JdlGenerationRequest,
    JdlToJsonRequest,
    RequirementsToJsonRequest,
)

router = APIRouter(prefix="/api/generate")


@router.post("/jdl")
async def generate_jdl(req: JdlGenerationRequest, jdl: JdlGenerator = Depends(get_jdl_generator)):
    result = await jdl.generate_jdl(req.requirements, req.name, req.options.model_dump(by_alias=True))
    result["validation"] = validate_jdl(result["content"]).to_dict()
    return ok(result)


@router.get("/jdl/list/all")
def list_jdl_files(jdl: JdlGenerator = Depends(get_jdl_generator)):
    return ok({"files": jdl.list_jdl_files()})


@router.get("/jdl/{name}", response_class=PlainTextResponse)
def get_jdl(name: str, jdl: JdlGenerator = Depends(get_jdl_generator)):
    return PlainTextResponse(jdl.read_jdl(name))


@router.post("/jdl-to-json")
async def jdl_to_json(req: JdlToJsonRequest, db_json: DbJsonGenerator = Depends(get_db_json_generator)):
    result = await db_json.generate_json_from_jdl(req.jdl_content, req.name, req.options.model_dump(by_alias=True))
    return ok(result)


@router.post("/jdl-to-json/from-jdl-file/{jdl_name}")
async def jdl_file_to_json(
    jdl_name: str,
    req: Optional[JdlFileToJsonRequest] = None,
    jdl: JdlGenerator = Depends(get_jdl_generator),
    db_json: DbJsonGenerator = Depends(get_db_json_generator),
):
    req = req or JdlFileToJsonRequest()
    content = jdl.read_jdl(jdl_name)
    result = await db_json.generate_json_from_jdl(content, jdl_name, req.options.model_dump(by_alias=True))
    return ok(result)


@router.post("/jdl-to-json/from-requirements")
async def requirements_to_json(
    req: RequirementsToJsonRequest,
    jdl: JdlGenerator = Depends(get_jdl_generator),
    db_json: DbJsonGenerator = Depends(get_db_json_generator),
):
    jdl_result = await jdl.generate_jdl(req.requirements, req.name, req.jdl_options.model_dump(by_alias=True))
    result = await db_json.generate_json_from_jdl(jdl_result["content"], req.name, req.json_options.model_dump(by_alias=True))
    result["jdl"] = {"filePath": jdl_result["filePath"], "url": jdl_result["url"]}
    return ok(result)


@router.get("/jdl-to-json/{name}")
def get_db_json(name: str, db_json: DbJsonGenerator = Depends(get_db_json_generator)):
    return db_json.read_db_json(name)
