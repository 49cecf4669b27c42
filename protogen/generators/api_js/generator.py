"""Generate api.js front-end glue from the packaged jQuery template."""
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional

from protogen.core.errors import ApiError
from protogen.generators.utils import is_within, public_url

log = logging.getLogger(__name__)

TEMPLATE_PATH = Path(__file__).parent / "templates" / "api-template.js"
DEFAULT_BASE_URL = "http://localhost:3001"

CONFIG_BLOCK_RE = re.compile(r"const blogAppConfig = \{[\s\S]*?\};", re.MULTILINE)
RENDER_BLOCK_RE = re.compile(r"const renderFunctions = \{[\s\S]*?\};", re.MULTILINE)
TEMPLATE_BASE_URL = f"const baseUrl = '{DEFAULT_BASE_URL}';"

DEFAULT_OPTIONS: Dict[str, Any] = {
    "baseUrl": DEFAULT_BASE_URL,
    "primaryEntities": [],
    "relationHandlers": [],
    "forms": [],
    "searchConfig": [],
    "defaultTab": "content",
    "relatedSections": [],
}

ENTITY_STRUCTURES = {
    "blogs": {"fields": ["id", "name", "description", "createdAt"], "relations": ["comments", "author"]},
    "authors": {"fields": ["id", "name", "email", "bio"], "relations": ["blogs"]},
    "comments": {"fields": ["id", "content", "createdAt", "blogId"], "relations": ["blog"]},
}


def _singular(entity_type: str) -> str:
    return entity_type[:-1] if entity_type.endswith("s") else entity_type


def generate_entity_template(entity_type: str, config: Optional[Dict[str, Any]] = None) -> str:
    """HTML template literal body for one entity card; `v` is the JS variable name."""
    v = _singular(entity_type)
    config = config or {}

    if entity_type == "blogs":
        return f"""
          <div class="blog-item bg-white rounded-lg shadow-md overflow-hidden mb-4 hover:shadow-lg" data-id="${{{v}.id}}">
            <div class="p-5">
              <h3 class="text-xl font-semibold text-gray-800 mb-2">${{{v}.name}}</h3>
              ${{{v}.description ? `<p class="text-gray-600 mb-3">${{{v}.description.substring(0, 100)}}${{{v}.description.length > 100 ? '...' : ''}}</p>` : ''}}
              <div class="flex justify-between items-center">
                <button class="btn-view-comments px-4 py-2 text-sm font-medium rounded-md text-white bg-indigo-600 hover:bg-indigo-700">View Comments</button>
                ${{{v}.createdAt ? `<span class="text-sm text-gray-500">${{new Date({v}.createdAt).toLocaleDateString()}}</span>` : ''}}
              </div>
            </div>
          </div>
        """
    if entity_type == "authors":
        return f"""
          <div class="author-item bg-white rounded-lg shadow-md overflow-hidden mb-4 hover:shadow-lg" data-id="${{{v}.id}}">
            <div class="p-5 flex items-center">
              <div class="h-12 w-12 rounded-full bg-indigo-100 flex items-center justify-center">
                <span class="text-xl font-medium text-indigo-800">${{{v}.name.charAt(0)}}</span>
              </div>
              <div class="ml-4">
                <h3 class="text-lg font-semibold text-gray-800">${{{v}.name}}</h3>
                ${{{v}.email ? `<p class="text-sm text-gray-500">${{{v}.email}}</p>` : ''}}
              </div>
            </div>
            ${{{v}.bio ? `<p class="px-5 pb-5 text-gray-600">${{{v}.bio}}</p>` : ''}}
          </div>
        """
    if entity_type == "comments":
        return f"""
          <div class="comment-item bg-gray-50 rounded-lg p-4 mb-3 border-l-4 border-indigo-300" data-id="${{{v}.id}}">
            <p class="text-gray-700">${{{v}.content}}</p>
            ${{{v}.createdAt ? `<p class="text-xs text-gray-500 mt-1">${{new Date({v}.createdAt).toLocaleString()}}</p>` : ''}}
          </div>
        """

    field_lines = "\n              ".join(
        f"${{{v}.{f} ? `<p class=\"text-gray-600 mb-2\">${{{v}.{f}}}</p>` : ''}}"
        for f in config.get("fields") or []
        if f not in ("id", "name", "title")
    )
    return f"""
          <div class="{v}-item bg-white rounded-lg shadow-md overflow-hidden mb-4 hover:shadow-lg" data-id="${{{v}.id}}">
            <div class="p-5">
              <h3 class="text-xl font-semibold text-gray-800 mb-2">${{{v}.name || {v}.title || 'Untitled'}}</h3>
              {field_lines}
              <div class="flex justify-end mt-2">
                <button class="btn-view-details px-3 py-1.5 text-sm font-medium rounded-md text-indigo-700 bg-indigo-100 hover:bg-indigo-200">View Details</button>
              </div>
            </div>
          </div>
        """


def generate_render_functions(render_functions: Dict[str, Dict[str, Any]]) -> str:
    parts = ["const renderFunctions = {"]
    for entity_type, config in render_functions.items():
        v = _singular(entity_type)
        parts.append(f"\n  {entity_type}: function({v}) {{")
        parts.append("\n    return `" + generate_entity_template(entity_type, config) + "`;")
        parts.append("\n  },")
    parts.append("\n};")
    return "".join(parts)


def generate_api_js(options: Dict[str, Any]) -> str:
    """
    Fill the api.js template with an app configuration.

    Options mirror the template config: primaryEntities, relationHandlers,
    forms, searchConfig, defaultTab, relatedSections, baseUrl and optional
    renderFunctions keyed by entity type.
    """
    template = TEMPLATE_PATH.read_text(encoding="utf-8")

    render_functions = options.get("renderFunctions")
    config = {**DEFAULT_OPTIONS, **{k: v for k, v in options.items() if v is not None and k != "renderFunctions"}}

    if render_functions:
        code = generate_render_functions(render_functions)
        template = RENDER_BLOCK_RE.sub(lambda _: code, template, count=1)

    config_code = f"const appConfig = {json.dumps(config, indent=2)};"
    template = CONFIG_BLOCK_RE.sub(lambda _: config_code, template, count=1)
    template = template.replace("initializeApp(blogAppConfig);", "initializeApp(appConfig);")

    if options.get("baseUrl"):
        template = template.replace(TEMPLATE_BASE_URL, f"const baseUrl = '{options['baseUrl']}';")

    return template


def save_api_js(content: str, output_path: str, public_dir: Path) -> Dict[str, str]:
    """Write api.js below the public directory; paths outside it are rejected."""
    relative = Path(output_path)
    if relative.parts and relative.parts[0] == public_dir.name:
        relative = Path(*relative.parts[1:])
    target = (public_dir / relative).resolve()

    if relative.is_absolute() or target == public_dir.resolve() or not is_within(public_dir, target):
        raise ApiError("Output path must be within the public directory", 400, "INVALID_OUTPUT_PATH")

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    log.info("Saved api.js to %s", target)
    return {"path": str(target), "url": public_url(public_dir, target)}


def template_info() -> Dict[str, Any]:
    return {
        "availableEntities": list(ENTITY_STRUCTURES),
        "entityStructure": ENTITY_STRUCTURES,
        "exampleConfig": {
            "primaryEntities": [{"type": "blogs"}, {"type": "authors"}],
            "relationHandlers": [
                {
                    "parentType": "blog",
                    "parentContainer": "blogs-list",
                    "triggerClass": ".btn-view-comments",
                    "relatedType": "comments",
                }
            ],
            "forms": [
                {
                    "id": "comment-form",
                    "parentType": "blog",
                    "itemType": "comments",
                    "contentField": "comment-content",
                }
            ],
            "searchConfig": [{"inputId": "search-blogs", "itemClass": "blog-item"}],
            "defaultTab": "blogs-content",
            "relatedSections": ["comments"],
        },
    }
