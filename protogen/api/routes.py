from fastapi import APIRouter

from protogen.api.routes_api_js import router as api_js_router
from protogen.api.routes_health import router as health_router
from protogen.api.routes_jdl import router as jdl_router
from protogen.api.routes_llm import router as llm_router
from protogen.api.routes_project import router as project_router
from protogen.api.routes_prototype import router as prototype_router
from protogen.api.routes_requirements import router as requirements_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(llm_router, tags=["llm"])
router.include_router(jdl_router, tags=["jdl"])
router.include_router(prototype_router, tags=["prototype"])
router.include_router(project_router, tags=["project"])
router.include_router(requirements_router, tags=["requirements"])
router.include_router(api_js_router, tags=["api-js"])
