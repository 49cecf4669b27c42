"""Build HTML prototypes in one shot or section by section."""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from protogen.core.errors import ApiError
from protogen.core.workflow import GenerationStage, log_extra
from protogen.generators.utils import public_url, sanitize_name
from protogen.llm.client import GenAIClient

log = logging.getLogger(__name__)

STACK_LINE = "- Use HTML5, jQuery, Tailwind CSS v4, and Font Awesome icons"
PLACEHOLDER = "<!-- SECTION_ID:{} -->"
DEFAULT_PLACEHOLDERS = ("header", "main", "features", "footer")


def _features_line(features: Optional[List[str]], verb: str = "Support these features") -> str:
    return f"- {verb}: {', '.join(features)}" if features else ""


def build_page_prompt(scenario: str, features: Optional[List[str]] = None) -> str:
    return f"""
Create a professional-looking HTML prototype for the following scenario: {scenario}

The prototype should:
{_features_line(features, "Include these specific features")}
{STACK_LINE}
- Be responsive and mobile-friendly
- Have a clean, modern design
- Include realistic placeholder content
- Be fully functional with interactive elements
- Use best practices for accessibility

The HTML should include:
1. Proper HTML5 document structure
2. CDN links for jQuery, Tailwind CSS v4, and Font Awesome
3. Responsive navigation
4. Appropriate sections based on the scenario
5. Interactive elements (forms, buttons, etc.) with jQuery functionality
6. Footer with copyright and links

Return ONLY the complete HTML code for the prototype.
"""


def build_base_prompt(scenario: str, features: Optional[List[str]] = None) -> str:
    placeholders = "\n".join(PLACEHOLDER.format(p) for p in DEFAULT_PLACEHOLDERS)
    return f"""
Generate the base HTML structure for a web page based on this scenario: {scenario}

The page should:
{_features_line(features)}
{STACK_LINE}
- Be responsive and mobile-friendly
- Have a clean, modern design

Include:
1. Proper HTML5 document structure
2. All necessary CDN links for jQuery, Tailwind CSS v4, and Font Awesome
3. A responsive navigation bar
4. A footer with copyright and links
5. Basic CSS and JavaScript setup

Return ONLY the HTML structure with placeholders for content sections marked as:
{placeholders}

These placeholders will be replaced with actual content later.
"""


def build_section_prompt(section: Dict[str, str], scenario: str, features: Optional[List[str]] = None) -> str:
    return f"""
Generate HTML code for a {section['type']} section of a web page based on this scenario: {scenario}

Section description: {section['description']}

The section should:
{_features_line(features)}
{STACK_LINE}
- Be responsive and mobile-friendly
- Have a clean, modern design
- Include realistic placeholder content
- Be fully functional with interactive elements
- Use best practices for accessibility

Return ONLY the HTML code for this specific section, without <!DOCTYPE>, <html>, <head>, or <body> tags.
"""


def assemble_html(base_html: str, sections: Dict[str, str]) -> str:
    """Replace the first placeholder of each section id with its generated HTML."""
    html = base_html
    for section_id, content in sections.items():
        html = html.replace(PLACEHOLDER.format(section_id), content, 1)
    return html


@dataclass
class PrototypeBuilder:
    llm: GenAIClient
    public_dir: Path

    def prototype_dir(self, name: str) -> Path:
        return self.public_dir / sanitize_name(name)

    async def _html(self, prompt: str, comments: bool, max_tokens: int) -> Dict[str, Any]:
        return await self.llm.generate_code(
            prompt=prompt,
            language="html",
            comments=comments,
            max_tokens=max_tokens,
        )

    async def generate_single_page(self, scenario: str, name: str, features: Optional[List[str]] = None) -> Dict[str, Any]:
        result = await self._html(build_page_prompt(scenario, features), comments=False, max_tokens=4096)

        dir_path = self.prototype_dir(name)
        dir_path.mkdir(parents=True, exist_ok=True)
        file_path = dir_path / "index.html"
        file_path.write_text(result["code"], encoding="utf-8")
        log.info("Saved single page prototype", extra=log_extra(name, GenerationStage.BUILD_HTML))

        return {
            "message": f'HTML prototype for "{name}" has been generated successfully.',
            "scenario": scenario,
            "filePath": str(file_path),
            "url": public_url(self.public_dir, file_path),
            "model": result["model"],
        }

    async def _generate_section_html(self, section: Dict[str, str], scenario: str, features: Optional[List[str]]) -> str:
        result = await self._html(build_section_prompt(section, scenario, features), comments=False, max_tokens=2048)
        return result["code"]

    async def build_prototype(
        self,
        scenario: str,
        name: str,
        sections: List[Dict[str, str]],
        features: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        try:
            dir_path = self.prototype_dir(name)
            dir_path.mkdir(parents=True, exist_ok=True)

            base = await self._html(build_base_prompt(scenario, features), comments=True, max_tokens=2048)

            generated: Dict[str, str] = {}
            for section in sections:
                log.info("Generating section %s", section["id"], extra=log_extra(name, GenerationStage.BUILD_HTML))
                generated[section["id"]] = await self._generate_section_html(section, scenario, features)

            file_path = dir_path / "index.html"
            file_path.write_text(assemble_html(base["code"], generated), encoding="utf-8")
        except Exception as e:
            log.exception("Error building prototype", extra=log_extra(name, GenerationStage.FAILED))
            raise ApiError("Failed to build prototype", 500, "PROTOTYPE_BUILD_ERROR") from e

        return {
            "message": f'HTML prototype for "{name}" has been generated successfully.',
            "scenario": scenario,
            "sections": list(generated),
            "filePath": str(file_path),
            "url": public_url(self.public_dir, file_path),
        }

    async def generate_section(
        self,
        scenario: str,
        name: str,
        section: Dict[str, str],
        features: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        try:
            dir_path = self.prototype_dir(name)
            dir_path.mkdir(parents=True, exist_ok=True)

            html = await self._generate_section_html(section, scenario, features)
            file_path = dir_path / f"{section['id']}.html"
            file_path.write_text(html, encoding="utf-8")
        except Exception as e:
            log.exception("Error generating section", extra=log_extra(name, GenerationStage.FAILED))
            raise ApiError("Failed to generate section", 500, "SECTION_GENERATION_ERROR") from e

        return {
            "message": f'Section "{section["id"]}" for "{name}" has been generated successfully.',
            "scenario": scenario,
            "section": section["id"],
            "filePath": str(file_path),
        }

    def list_sections(self, name: str) -> Dict[str, Any]:
        dir_path = self.prototype_dir(name)
        if not dir_path.is_dir():
            raise ApiError(f'Prototype "{name}" not found', 404, "PROTOTYPE_NOT_FOUND")
        sections = sorted(p.stem for p in dir_path.glob("*.html") if p.name != "index.html")
        return {"name": name, "sections": sections}
