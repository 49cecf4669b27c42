"""Convert JDL into a JSON Server db.json fixture with mock records."""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from protogen.core.errors import ApiError
from protogen.core.workflow import GenerationStage, log_extra
from protogen.generators.jdl.parser import parse_jdl
from protogen.generators.mock_data.fallback import generate_fallback_json
from protogen.generators.types import Entity
from protogen.generators.utils import public_url, sanitize_name
from protogen.llm.client import GenAIClient
from protogen.llm.parser import strip_json_fences

log = logging.getLogger(__name__)

DEFAULT_RECORDS_PER_ENTITY = 10

DB_JSON_RULES = """The JSON should:
1. Include all entities as top-level keys in the JSON
2. Generate {count} records for each entity
3. Use appropriate data types for each field based on its type
4. Handle relationships correctly (e.g., include foreign keys)
5. Ensure referential integrity in the data

For example, if there's a OneToMany relationship between Author and Book, each Book should have an authorId that references an existing Author id.

Return ONLY the JSON content without any explanations or markdown formatting. Do not include backticks (```) or any other markdown syntax.
"""


def records_per_entity(options: Optional[Dict[str, Any]]) -> int:
    return int((options or {}).get("recordsPerEntity") or DEFAULT_RECORDS_PER_ENTITY)


def parse_db_json(code: str) -> Dict[str, Any]:
    data = json.loads(strip_json_fences(code))
    if not isinstance(data, dict):
        raise ValueError("db.json must be a JSON object")
    return data


@dataclass
class DbJsonGenerator:
    llm: GenAIClient
    public_dir: Path

    def db_json_path(self, name: str) -> Path:
        return self.public_dir / sanitize_name(name) / "db.json"

    async def _ask_for_json(self, prompt: str) -> str:
        result = await self.llm.generate_code(
            prompt=prompt,
            language="json",
            comments=False,
            max_tokens=4096,
        )
        return result["code"]

    async def generate_content(self, entities: List[Entity], options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        count = records_per_entity(options)
        entity_json = json.dumps([e.to_dict() for e in entities], indent=2)
        prompt = (
            "\nGenerate a JSON Server db.json file with mock data based on the following entity information:\n\n"
            f"{entity_json}\n\n" + DB_JSON_RULES.format(count=count)
        )
        code = await self._ask_for_json(prompt)
        try:
            return parse_db_json(code)
        except ValueError:
            log.warning("Generated JSON could not be parsed, falling back to placeholder records")
            return generate_fallback_json(entities, count)

    async def generate_json_from_jdl(self, jdl_content: str, name: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            file_path = self.db_json_path(name)
            file_path.parent.mkdir(parents=True, exist_ok=True)

            entities = parse_jdl(jdl_content)
            content = await self.generate_content(entities, options)

            file_path.write_text(json.dumps(content, indent=2), encoding="utf-8")
            log.info("Saved db.json with %d entities", len(content), extra=log_extra(name, GenerationStage.GENERATE_DB_JSON))
        except Exception as e:
            log.exception("Error generating JSON from JDL", extra=log_extra(name, GenerationStage.GENERATE_DB_JSON))
            raise ApiError("Failed to generate JSON from JDL", 500, "JSON_GENERATION_ERROR") from e

        return {
            "message": f'JSON Server db.json for "{name}" has been generated successfully.',
            "name": name,
            "filePath": str(file_path),
            "url": public_url(self.public_dir, file_path),
            "entityCount": len(content),
            "content": content,
        }

    async def generate_json_directly(self, jdl_content: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Ask the model to convert raw JDL without scanning it first."""
        count = records_per_entity(options)
        prompt = (
            "\nConvert the following JHipster Domain Language (JDL) to a JSON Server db.json file with mock data:\n\n"
            f"{jdl_content}\n\n" + DB_JSON_RULES.format(count=count)
        )
        code = await self._ask_for_json(prompt)
        try:
            return parse_db_json(code)
        except ValueError:
            log.warning("Generated JSON could not be parsed, falling back to scanned JDL entities")
            return generate_fallback_json(parse_jdl(jdl_content), count)

    def read_db_json(self, name: str) -> Dict[str, Any]:
        file_path = self.db_json_path(name)
        if not file_path.is_file():
            raise ApiError(f'JSON file for "{name}" not found', 404, "JSON_FILE_NOT_FOUND")
        return json.loads(file_path.read_text(encoding="utf-8"))
