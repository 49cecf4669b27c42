from pathlib import Path

from fastapi import APIRouter, Depends

from protogen.api.deps import get_public_dir
from protogen.generators.api_js import generate_api_js, save_api_js, template_info
from protogen.schemas.generation import ApiJsRequest

router = APIRouter(prefix="/api/generate/api-js")


@router.post("")
def create_api_js(req: ApiJsRequest, public_dir: Path = Depends(get_public_dir)):
    options = req.model_dump(by_alias=True, exclude_none=True, exclude={"output_path"})
    content = generate_api_js(options)

    if req.output_path:
        saved = save_api_js(content, req.output_path, public_dir)
        return {
            "success": True,
            "message": "API.js file generated and saved successfully",
            "path": saved["path"],
            "url": saved["url"],
        }

    return {"success": True, "message": "API.js content generated successfully", "content": content}


@router.get("/template")
def get_template_info():
    return {"success": True, "data": template_info()}
