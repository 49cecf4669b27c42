"""Generate JDL entity models from natural-language requirements."""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from protogen.core.errors import ApiError
from protogen.core.workflow import GenerationStage, log_extra
from protogen.generators.utils import public_url, sanitize_name
from protogen.llm.client import GenAIClient

log = logging.getLogger(__name__)

JDL_EXAMPLE = """entity Blog {
  name String required,
  handle String required minlength(2),
  description TextBlob
}

entity Post {
  title String required,
  content TextBlob required,
  date ZonedDateTime required
}

relationship OneToMany {
  Blog{post} to Post{blog(name)}
}"""


def build_jdl_prompt(requirements: str, options: Optional[Dict[str, Any]] = None) -> str:
    options = options or {}
    extras = []
    if options.get("includeApplicationConfig"):
        extras.append("Also include application configuration.")
    if options.get("microserviceNames"):
        extras.append(f"Define these entities for microservices: {', '.join(options['microserviceNames'])}")
    if options.get("databaseType"):
        extras.append(f"Use {options['databaseType']} as the database type.")

    return f"""
Generate JHipster Domain Language (JDL) code based on the following requirements:

{requirements}

The JDL should include:
1. Entity definitions with appropriate fields and types
2. Relationships between entities (OneToOne, OneToMany, ManyToOne, ManyToMany)
3. Field validations where appropriate
4. Enumerations if needed
5. Entity options (pagination, service, dto, etc.) if specified in the requirements

{chr(10).join(extras)}

Follow these JDL best practices:
- Use proper naming conventions (PascalCase for entities, camelCase for fields)
- Include comments to explain complex relationships or business rules
- Group related entities together
- Specify appropriate field types (String, Integer, Long, BigDecimal, LocalDate, ZonedDateTime, Boolean, Enumeration, etc.)
- Add validations like required, minlength, maxlength, min, max, pattern where appropriate
- Use meaningful relationship names

Use the standard JHipster JDL syntax, for example:

{JDL_EXAMPLE}

Return ONLY the JDL code without any explanations or markdown formatting.
"""


@dataclass
class JdlGenerator:
    llm: GenAIClient
    public_dir: Path

    @property
    def jdl_dir(self) -> Path:
        return self.public_dir / "jdl"

    def jdl_path(self, name: str) -> Path:
        return self.jdl_dir / f"{sanitize_name(name)}.jdl"

    async def generate_content(self, requirements: str, options: Optional[Dict[str, Any]] = None) -> str:
        result = await self.llm.generate_code(
            prompt=build_jdl_prompt(requirements, options),
            language="jdl",
            comments=True,
            max_tokens=4096,
        )
        return result["code"]

    async def generate_jdl(self, requirements: str, name: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            self.jdl_dir.mkdir(parents=True, exist_ok=True)
            content = await self.generate_content(requirements, options)

            file_path = self.jdl_path(name)
            file_path.write_text(content, encoding="utf-8")
            log.info("Saved JDL to %s", file_path, extra=log_extra(name, GenerationStage.SAVE_JDL))
        except Exception as e:
            log.exception("Error generating JDL", extra=log_extra(name, GenerationStage.SAVE_JDL))
            raise ApiError("Failed to generate JDL", 500, "JDL_GENERATION_ERROR") from e

        return {
            "message": f'JDL for "{name}" has been generated successfully.',
            "name": name,
            "filePath": str(file_path),
            "url": public_url(self.public_dir, file_path),
            "content": content,
        }

    def read_jdl(self, name: str) -> str:
        file_path = self.jdl_path(name)
        if not file_path.is_file():
            raise ApiError(f'JDL file "{name}" not found', 404, "JDL_FILE_NOT_FOUND")
        return file_path.read_text(encoding="utf-8")

    def list_jdl_files(self) -> List[Dict[str, str]]:
        self.jdl_dir.mkdir(parents=True, exist_ok=True)
        return [
            {"name": p.stem, "url": public_url(self.public_dir, p)}
            for p in sorted(self.jdl_dir.glob("*.jdl"))
        ]
