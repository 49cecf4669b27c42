"""Scaffold runnable json-server projects with a configurable CRUD front-end."""
import json
import logging
import re
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from protogen.core.config import settings
from protogen.core.errors import ApiError
from protogen.core.workflow import GenerationStage, log_extra
from protogen.generators.mock_data.faker_data import generate_mock_data
from protogen.generators.project.entity_config import (
    build_entity_configs,
    extract_entity_names,
    generate_entity_configs_code,
)
from protogen.generators.project.render import (
    ENTITY_CONFIGS_PLACEHOLDER,
    render_mock_bat,
    render_mock_sh,
    render_package_json,
    render_readme,
    render_start_bat,
    render_start_sh,
)
from protogen.generators.types import GeneratedFile
from protogen.generators.utils import capitalize_first, is_within
from protogen.generators.writer import copy_tree, write_files
from protogen.llm.client import GenAIClient, run_with_timeout

log = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
ENTITY_CONFIGS_TIMEOUT_SECONDS = 30
DEFAULT_REQUIREMENTS = "# Add your requirements here"
CONFIG_VAR_RE = re.compile(r"const\s+(\w+)Config\s*=")


def build_entity_configs_prompt(requirements_text: str, port: int, host: str) -> str:
    return f"""Generate JavaScript code for entity configurations based on these requirements: {requirements_text}

The output should be in this format:
const entityConfig = {{
  entityName: 'entityNamePlural in lowercase',
  title: 'Entity Title',
  apiBaseUrl: 'http://{host}:{port}',
  itemsPerPage: 10,
  attributes: [
    {{
      name: 'attributeName',
      label: 'Attribute Label',
      type: 'text|number|email|date|select|checkbox|textarea',
      required: true|false,
      // Additional properties based on type:
      // For number: min, max, step, prefix
      // For select: options array with value/label pairs
      // For checkbox: checkboxLabel
      // For any: helpText, hideInTable
    }}
  ]
}};

Finally, export all configs in an array like this:
const configuredEntities = [{{name: 'entityName', config: entityConfig}}, ...];
"""


def entity_names_from_code(code: str) -> List[str]:
    """Entity names declared as `const fooConfig = ...` in generated code."""
    return [capitalize_first(m.group(1)) for m in CONFIG_VAR_RE.finditer(code)]


def render_project_files(
    project_name: str,
    requirements_text: Optional[str],
    port: int,
    static_folder: str,
    api_url: str,
) -> List[GeneratedFile]:
    return [
        GeneratedFile(path="db/db.json", content="{}"),
        GeneratedFile(path="requirements/requirements.txt", content=requirements_text or DEFAULT_REQUIREMENTS),
        GeneratedFile(path=f"{static_folder}/entity-configs.js", content=ENTITY_CONFIGS_PLACEHOLDER),
        GeneratedFile(path="start.sh", content=render_start_sh(port, static_folder), executable=True),
        GeneratedFile(path="start.bat", content=render_start_bat(port, static_folder)),
        GeneratedFile(path="mock/generate-mock-data.sh", content=render_mock_sh(project_name, api_url), executable=True),
        GeneratedFile(path="mock/generate-mock-data.bat", content=render_mock_bat(project_name, api_url)),
        GeneratedFile(path="package.json", content=render_package_json(project_name, port, static_folder)),
        GeneratedFile(path="README.md", content=render_readme(project_name, port)),
    ]


@dataclass
class ProjectGenerator:
    llm: GenAIClient
    base_dir: Path

    def project_path(self, project_name: str) -> Path:
        path = (self.base_dir / project_name).resolve()
        if path == self.base_dir.resolve() or not is_within(self.base_dir, path):
            raise ApiError(f'Project "{project_name}" not found', 404, "PROJECT_NOT_FOUND")
        return path

    def existing_project_path(self, project_name: str) -> Path:
        path = self.project_path(project_name)
        if not path.is_dir():
            raise ApiError(f'Project "{project_name}" not found', 404, "PROJECT_NOT_FOUND")
        return path

    def generate_project(
        self,
        project_name: str,
        requirements_text: Optional[str] = None,
        port: int = 3002,
        static_folder: str = "static",
        host: str = "localhost",
    ) -> Path:
        """
        Create the project skeleton below `base_dir`.

        Layout: db/db.json, <static>/ (CRUD templates), requirements/,
        mock/ scripts, start.sh, start.bat, package.json and README.md.
        Existing files are overwritten.
        """
        project_path = self.project_path(project_name)
        extra = log_extra(project_name, GenerationStage.SCAFFOLD_PROJECT)

        if project_path.exists():
            log.warning("Project directory %s already exists. Files may be overwritten.", project_name, extra=extra)
        project_path.mkdir(parents=True, exist_ok=True)

        copy_tree(TEMPLATES_DIR / "static", project_path / static_folder)

        api_url = f"http://localhost:{settings.api_port}"
        write_files(render_project_files(project_name, requirements_text, port, static_folder, api_url), project_path)

        log.info("Project structure created at %s (api host %s)", project_path, host, extra=extra)
        return project_path

    async def entity_configs_code(
        self,
        requirements_text: str,
        port: int = 3002,
        host: str = "localhost",
        use_llm: bool = False,
    ) -> Tuple[str, List[str]]:
        """Return `(javascript, entity names)`, preferring the model when asked."""
        if use_llm:
            try:
                result = await run_with_timeout(
                    self.llm.generate_code(
                        prompt=build_entity_configs_prompt(requirements_text, port, host),
                        language="javascript",
                        comments=False,
                        max_tokens=4096,
                    ),
                    ENTITY_CONFIGS_TIMEOUT_SECONDS,
                    message="AI service timeout",
                    code="ENTITY_CONFIG_TIMEOUT",
                )
                code = result["code"]
                if not code.strip():
                    raise ValueError("Unable to extract valid code from AI response")
                names = entity_names_from_code(code) or extract_entity_names(requirements_text)
                return code, names
            except Exception:
                log.warning("LLM entity configs failed, falling back to rule-based generator", exc_info=True)

        return (
            generate_entity_configs_code(requirements_text, port, host),
            extract_entity_names(requirements_text),
        )

    async def generate_entity_configs(
        self,
        project_path: Path,
        requirements_text: str,
        port: int = 3002,
        host: str = "localhost",
        use_llm: bool = False,
        static_folder: str = "static",
    ) -> Path:
        code, _ = await self.entity_configs_code(requirements_text, port, host, use_llm)
        target = project_path / static_folder / "entity-configs.js"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(code, encoding="utf-8")
        log.info("Entity configs generated at %s", target, extra=log_extra(project_path.name, GenerationStage.ENTITY_CONFIGS))
        return target

    async def create_project(
        self,
        project_name: str,
        requirements_text: str,
        port: int = 3002,
        static_folder: str = "static",
        host: str = "localhost",
        use_llm: bool = False,
    ) -> Dict[str, Any]:
        """Scaffold a project and fill in its entity configs."""
        project_path = self.generate_project(project_name, requirements_text, port, static_folder, host)
        try:
            await self.generate_entity_configs(project_path, requirements_text, port, host, use_llm, static_folder)
        except OSError:
            log.exception("Error generating entity configs", extra=log_extra(project_name, GenerationStage.ENTITY_CONFIGS))
        return {
            "message": f'Project "{project_name}" has been generated successfully.',
            "projectPath": str(project_path),
            "projectName": project_name,
        }

    def populate_mock_data(self, project_name: str, count: int = 25, seed: Optional[int] = None) -> Dict[str, Any]:
        """Fill db/db.json with Faker records for the entities in requirements.txt."""
        project_path = self.existing_project_path(project_name)
        requirements_file = project_path / "requirements" / "requirements.txt"
        requirements_text = requirements_file.read_text(encoding="utf-8") if requirements_file.is_file() else ""

        configs = build_entity_configs(requirements_text)
        data = generate_mock_data(configs, count=count, seed=seed)

        db_json_path = project_path / "db" / "db.json"
        db_json_path.parent.mkdir(parents=True, exist_ok=True)
        db_json_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        log.info("Wrote mock data for %d entities", len(data), extra=log_extra(project_name, GenerationStage.MOCK_DATA))

        return {
            "message": f'Mock data for "{project_name}" has been generated successfully.',
            "projectName": project_name,
            "dbJsonPath": str(db_json_path),
            "entities": {name: len(records) for name, records in data.items()},
        }

    def list_projects(self) -> List[Dict[str, str]]:
        if not self.base_dir.is_dir():
            return []
        projects = []
        for item in sorted(self.base_dir.iterdir()):
            if not item.is_dir():
                continue
            if (item / "package.json").is_file() and (item / "db").is_dir():
                projects.append({"name": item.name, "path": str(item)})
        return projects

    def archive_project(self, project_name: str) -> Path:
        """Zip the project into a temporary directory and return the archive path."""
        project_path = self.existing_project_path(project_name)
        out_dir = Path(tempfile.mkdtemp(prefix="protogen-"))
        try:
            archive = shutil.make_archive(
                str(out_dir / project_name),
                "zip",
                root_dir=project_path.parent,
                base_dir=project_path.name,
            )
        except OSError as e:
            shutil.rmtree(out_dir, ignore_errors=True)
            log.exception("Error creating project zip", extra=log_extra(project_name, GenerationStage.FAILED))
            raise ApiError(f"Failed to create project zip: {e}", 500, "ZIP_CREATION_ERROR") from e
        log.info("Created archive %s", archive, extra=log_extra(project_name, GenerationStage.DONE))
        return Path(archive)
