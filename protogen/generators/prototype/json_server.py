"""Assemble a runnable JSON Server prototype: JDL, db.json, HTML, api.js and a start script."""
import json
import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from protogen.core.config import settings
from protogen.core.errors import ApiError
from protogen.core.workflow import GenerationStage, log_extra
from protogen.generators.db_json import DbJsonGenerator
from protogen.generators.jdl.generator import JdlGenerator
from protogen.generators.prototype.builder import PrototypeBuilder
from protogen.generators.prototype.render import (
    API_URL,
    render_fallback_api_js,
    render_fallback_html,
    render_start_script,
)
from protogen.generators.types import GeneratedFile
from protogen.generators.utils import public_url, sanitize_name
from protogen.generators.writer import write_files
from protogen.llm.client import GenAIClient

log = logging.getLogger(__name__)

STATIC_FOLDER = "static"

_servers: Dict[str, subprocess.Popen] = {}


def _terminate(process: subprocess.Popen, timeout: float = 5) -> None:
    if process.poll() is not None:
        return
    process.terminate()
    try:
        process.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        process.kill()
        process.wait()


def reap_json_servers() -> None:
    """Forget json-server processes that have already exited."""
    for key, process in list(_servers.items()):
        if process.poll() is not None:
            del _servers[key]


def stop_json_servers() -> None:
    """Terminate every json-server started by this process."""
    for key, process in list(_servers.items()):
        log.info("Stopping JSON Server with pid %s", process.pid)
        _terminate(process)
        del _servers[key]


def json_server_command(port: int, static_folder: str = STATIC_FOLDER) -> List[str]:
    return ["npx", "json-server", "db.json", "-p", str(port), "-s", static_folder]


def sections_for_entities(entities: List[str]) -> List[Dict[str, str]]:
    """Plan the header, main, footer and one management section per entity."""
    joined = ", ".join(entities)
    sections = [
        {
            "id": "header",
            "type": "header",
            "description": f"A responsive navigation header with logo, menu items for each entity ({joined}), and a theme toggle button.",
        },
        {
            "id": "main",
            "type": "main",
            "description": f"Main content area with tabs for each entity ({joined}). Each tab should display a table of the entity data with CRUD operations.",
        },
        {
            "id": "footer",
            "type": "footer",
            "description": "Footer with copyright, links to JSON Server documentation, and contact information.",
        },
    ]
    for entity in entities:
        sections.append({
            "id": f"{entity.lower()}-section",
            "type": "entity-section",
            "description": (
                f"A section for managing {entity} data with a table view, search, filter, and CRUD operations. "
                f"This should include forms for creating and editing {entity} records."
            ),
        })
    return sections


def build_api_js_prompt(entities: List[str], name: str) -> str:
    return f"""
Generate JavaScript code for integrating with a JSON Server API for a prototype named "{name}".
The API is available at {API_URL} and provides endpoints for these entities: {', '.join(entities)}.

The code should:
1. Include functions for fetching, creating, updating, and deleting records for each entity
2. Handle form submissions for creating and editing records
3. Display data in tables with sorting and filtering capabilities
4. Include error handling and loading states
5. Use modern JavaScript (ES6+) with fetch API
6. Be well-commented and organized by entity
7. Include a function to initialize the UI when the page loads
8. Support pagination if available in the API

The code will be included in a separate api.js file that will be loaded in the HTML prototype.
Return ONLY the JavaScript code without any explanations or markdown formatting.
"""


def build_requirements_jdl_prompt(requirements: str) -> str:
    return f"""
Generate JHipster Domain Language (JDL) for the following requirements:

{requirements}

The JDL should:
1. Define entities with appropriate fields and types
2. Include validations for fields (required, min, max, pattern, etc.)
3. Define relationships between entities
4. Use standard JHipster JDL syntax

Return ONLY the JDL code without any explanations or markdown formatting.
"""


def entities_from_db_json(path: Path) -> List[str]:
    data = json.loads(path.read_text(encoding="utf-8"))
    return [key for key, value in data.items() if isinstance(value, list)]


@dataclass
class JsonServerPrototypeGenerator:
    llm: GenAIClient
    public_dir: Path
    port: int = settings.json_server_port

    def base_dir(self, name: str) -> Path:
        return self.public_dir / sanitize_name(name)

    def start_command(self, base_dir: Path) -> str:
        return f"cd {base_dir} && " + " ".join(json_server_command(self.port))

    async def _prepare_data(self, jdl_content: str, name: str, base_dir: Path, options: Dict[str, Any]) -> List[str]:
        jdl_path = base_dir / "data.jdl"
        db_json_path = base_dir / "db.json"

        if jdl_path.is_file() and db_json_path.is_file():
            log.info("Existing JDL and db.json found, reusing them", extra=log_extra(name, GenerationStage.REUSE_EXISTING))
            return entities_from_db_json(db_json_path)

        jdl_path.write_text(jdl_content, encoding="utf-8")
        log.info("Saved JDL", extra=log_extra(name, GenerationStage.SAVE_JDL))

        db_json = DbJsonGenerator(self.llm, self.public_dir)
        result = await db_json.generate_json_from_jdl(jdl_content, name, options.get("jsonOptions") or {})
        if Path(result["filePath"]).resolve() != db_json_path.resolve():
            shutil.copyfile(result["filePath"], db_json_path)
        return list(result["content"])

    async def _generate_api_js(self, entities: List[str], name: str) -> str:
        try:
            result = await self.llm.generate_code(
                prompt=build_api_js_prompt(entities, name),
                language="javascript",
                comments=True,
                max_tokens=4096,
            )
            return result["code"]
        except Exception:
            log.warning("api.js generation failed, using fallback", exc_info=True, extra=log_extra(name, GenerationStage.GENERATE_API_JS))
            return render_fallback_api_js(entities, name)

    async def generate_prototype(
        self,
        jdl_content: str,
        scenario: str,
        name: str,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        options = options or {}
        base_dir = self.base_dir(name)
        static_dir = base_dir / STATIC_FOLDER
        try:
            static_dir.mkdir(parents=True, exist_ok=True)
            entities = await self._prepare_data(jdl_content, name, base_dir, options)

            files: List[GeneratedFile] = []
            try:
                builder = PrototypeBuilder(self.llm, self.public_dir)
                built = await builder.build_prototype(
                    scenario=(
                        f"{scenario} with JSON Server API integration. The API is available at {API_URL} "
                        f"and provides endpoints for these entities: {', '.join(entities)}"
                    ),
                    name=name,
                    sections=sections_for_entities(entities),
                    features=options.get("features") or [],
                )
                index_html = Path(built["filePath"]).read_text(encoding="utf-8")
                api_js = await self._generate_api_js(entities, name)
                files.append(GeneratedFile(path=f"{STATIC_FOLDER}/api.js", content=api_js))
            except Exception:
                log.warning("HTML build failed, using fallback page", exc_info=True, extra=log_extra(name, GenerationStage.BUILD_HTML))
                index_html = render_fallback_html(entities, name, scenario)

            files.append(GeneratedFile(path=f"{STATIC_FOLDER}/index.html", content=index_html))
            files.append(GeneratedFile(path="start-server.sh", content=render_start_script(self.port, STATIC_FOLDER), executable=True))
            write_files(files, base_dir)
            log.info("Prototype generation completed", extra=log_extra(name, GenerationStage.DONE))
        except Exception as e:
            log.exception("Error generating prototype with JSON Server", extra=log_extra(name, GenerationStage.FAILED))
            raise ApiError("Failed to generate prototype with JSON Server", 500, "PROTOTYPE_GENERATION_ERROR") from e

        index_path = static_dir / "index.html"
        return {
            "message": f'Prototype with JSON Server integration for "{name}" has been generated successfully.',
            "name": name,
            "scenario": scenario,
            "entities": entities,
            "directoryPath": str(base_dir),
            "staticPath": str(static_dir),
            "jdlPath": str(base_dir / "data.jdl"),
            "dbJsonPath": str(base_dir / "db.json"),
            "indexHtmlPath": str(index_path),
            "startScriptPath": str(base_dir / "start-server.sh"),
            "url": public_url(self.public_dir, index_path),
            "startCommand": self.start_command(base_dir),
        }

    async def generate_prototype_from_jdl_file(
        self,
        jdl_name: str,
        scenario: str,
        name: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        jdl_content = JdlGenerator(self.llm, self.public_dir).read_jdl(jdl_name)
        return await self.generate_prototype(jdl_content, scenario, name or jdl_name, options)

    async def generate_prototype_from_requirements(
        self,
        requirements: str,
        scenario: str,
        name: str,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        try:
            result = await self.llm.generate_code(
                prompt=build_requirements_jdl_prompt(requirements),
                language="jdl",
                comments=True,
                max_tokens=4096,
            )
        except ApiError as e:
            raise ApiError("Failed to generate prototype from requirements", 500, "PROTOTYPE_GENERATION_ERROR") from e
        return await self.generate_prototype(result["code"], scenario, name, options)

    def describe_prototype(self, name: str) -> Dict[str, Any]:
        base_dir = self.base_dir(name)
        if not base_dir.is_dir():
            raise ApiError(f'Prototype "{name}" not found', 404, "PROTOTYPE_NOT_FOUND")

        db_json_path = base_dir / "db.json"
        index_path = base_dir / STATIC_FOLDER / "index.html"
        paths = {
            "jdlPath": base_dir / "data.jdl",
            "dbJsonPath": db_json_path,
            "indexHtmlPath": index_path,
            "apiJsPath": base_dir / STATIC_FOLDER / "api.js",
            "startScriptPath": base_dir / "start-server.sh",
        }
        info: Dict[str, Any] = {"name": name, "directoryPath": str(base_dir)}
        info.update({key: str(path) for key, path in paths.items() if path.is_file()})
        info["entities"] = entities_from_db_json(db_json_path) if db_json_path.is_file() else []
        if index_path.is_file():
            info["url"] = public_url(self.public_dir, index_path)
        info["startCommand"] = self.start_command(base_dir)
        return info

    def start_json_server(self, name: str) -> Dict[str, Any]:
        """Launch json-server in the background for a generated prototype."""
        base_dir = self.base_dir(name)
        if not base_dir.is_dir():
            raise ApiError(f'Prototype "{name}" not found', 404, "PROTOTYPE_NOT_FOUND")
        if not (base_dir / "db.json").is_file():
            raise ApiError(f'db.json for prototype "{name}" not found', 404, "DB_JSON_NOT_FOUND")

        reap_json_servers()
        previous = _servers.pop(str(base_dir), None)
        if previous is not None:
            log.info("Stopping previous JSON Server with pid %s", previous.pid, extra=log_extra(name, GenerationStage.START_SERVER))
            _terminate(previous)

        command = json_server_command(self.port)
        try:
            process = subprocess.Popen(
                command,
                cwd=base_dir,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            log.exception("Error starting JSON Server", extra=log_extra(name, GenerationStage.FAILED))
            raise ApiError("Failed to start JSON Server", 500, "JSON_SERVER_ERROR") from e

        _servers[str(base_dir)] = process
        log.info("Started JSON Server with pid %s", process.pid, extra=log_extra(name, GenerationStage.DONE))
        return {
            "message": f'JSON Server for "{name}" started successfully.',
            "name": name,
            "pid": process.pid,
            "command": self.start_command(base_dir),
        }
