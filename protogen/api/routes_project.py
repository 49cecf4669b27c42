import logging
import shutil
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import FileResponse

from protogen.api.deps import get_project_generator
from protogen.core.errors import ApiError
from protogen.core.workflow import GenerationStage, log_extra
from protogen.generators.project.generator import ProjectGenerator
from protogen.llm.client import run_with_timeout
from protogen.schemas.base import ok
from protogen.schemas.generation import EntityConfigsRequest, MockDataRequest, ProjectRequest

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/generate/project")

PROJECT_TIMEOUT_SECONDS = 60


@router.post("")
async def generate_project(req: ProjectRequest, projects: ProjectGenerator = Depends(get_project_generator)):
    log.info('Starting project generation for "%s"', req.project_name, extra=log_extra(req.project_name, GenerationStage.SCAFFOLD_PROJECT))
    try:
        result = await run_with_timeout(
            projects.create_project(
                req.project_name,
                req.requirements_text,
                port=req.port,
                static_folder=req.static_folder,
                host=req.host,
                use_llm=req.use_llm,
            ),
            PROJECT_TIMEOUT_SECONDS,
            message="Project generation timed out",
            code="PROJECT_GENERATION_TIMEOUT",
        )
    except ApiError as e:
        if e.status_code == 504:
            raise
        raise ApiError(f"Failed to generate project: {e.message}", 500, "PROJECT_GENERATION_ERROR") from e
    except Exception as e:
        log.exception("Error generating project", extra=log_extra(req.project_name, GenerationStage.FAILED))
        raise ApiError(f"Failed to generate project: {e}", 500, "PROJECT_GENERATION_ERROR") from e
    return ok(result)


@router.get("/list")
def list_projects(projects: ProjectGenerator = Depends(get_project_generator)):
    return ok({"projects": projects.list_projects()})


@router.get("/test")
def test_project_api():
    return {"success": True, "message": "Project generation API is working"}


@router.get("/download/{project_name}")
def download_project(
    project_name: str,
    background_tasks: BackgroundTasks,
    projects: ProjectGenerator = Depends(get_project_generator),
):
    archive = projects.archive_project(project_name)
    background_tasks.add_task(shutil.rmtree, archive.parent, ignore_errors=True)
    return FileResponse(archive, media_type="application/zip", filename=f"{project_name}.zip")


@router.post("/entity-configs")
async def entity_configs(req: EntityConfigsRequest, projects: ProjectGenerator = Depends(get_project_generator)):
    try:
        code, entities = await projects.entity_configs_code(req.requirements_text, req.port, req.host, req.use_llm)
    except Exception as e:
        log.exception("Error generating entity configurations")
        raise ApiError(
            f"Failed to generate entity configurations: {e}", 500, "ENTITY_CONFIG_GENERATION_ERROR"
        ) from e
    return ok({"entityConfigs": code, "entities": entities})


@router.post("/{project_name}/mock-data")
def populate_mock_data(
    project_name: str,
    req: Optional[MockDataRequest] = None,
    projects: ProjectGenerator = Depends(get_project_generator),
):
    req = req or MockDataRequest()
    return ok(projects.populate_mock_data(project_name, count=req.count, seed=req.seed))
