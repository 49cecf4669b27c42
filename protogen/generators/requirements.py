"""Turn free-text requirements into structured JSON requirements and refine them."""
import dataclasses
import json
import logging
from typing import Any, Dict

from protogen.core.errors import ApiError
from protogen.llm.client import GenAIClient, run_with_timeout
from protogen.llm.parser import extract_json_object, remove_think_tags

log = logging.getLogger(__name__)

REQUIREMENTS_TIMEOUT_SECONDS = 60
SECTIONS = ("personas", "goals", "coreFeatures", "keyData", "workflows", "constraints")

RESPONSE_FORMAT = """Format your response as a JSON object with the following structure:
{
  "personas": [
    { "name": "Persona Name", "description": "Detailed description of this persona's characteristics, needs and goals" }
  ],
  "goals": [
    { "title": "Goal Title", "description": "Detailed description of this goal" }
  ],
  "coreFeatures": [
    { "title": "Feature Title", "description": "Detailed description of this feature", "priority": "High/Medium/Low" }
  ],
  "keyData": [
    { "entity": "Entity Name", "attributes": ["attribute1", "attribute2"], "description": "Description of this data entity" }
  ],
  "workflows": [
    { "name": "Workflow Name", "steps": ["Step 1", "Step 2", "Step 3"], "description": "Description of this workflow" }
  ],
  "constraints": [
    { "type": "Technical/Business/Legal/etc.", "description": "Detailed description of this constraint" }
  ]
}

Ensure your response is only the JSON without any additional text."""


def build_structured_prompt(basic_requirements: str) -> str:
    return f"""You are a requirements engineer helping to convert basic user requirements into structured requirements.
Take the following basic requirements and convert them into a well-structured format.

Basic Requirements:
{basic_requirements}

Your task is to generate structured requirements covering all of the following sections:
1. Personas - Key user types who will interact with the system
2. Goals - The main objectives the project aims to achieve
3. Core Features - Essential functionalities required for the system
4. Key Data - Important data entities and their attributes
5. Workflows - Main user journeys and process flows
6. Constraints - Technical, business, or other limitations to consider

{RESPONSE_FORMAT}"""


def build_enhance_prompt(current: Dict[str, Any], enhancement_prompt: str) -> str:
    return f"""You are a requirements engineer helping to enhance structured requirements based on user feedback.

Current Structured Requirements:
{json.dumps(current, indent=2)}

User's Enhancement Request:
{enhancement_prompt}

Your task is to enhance the structured requirements based on the user's feedback while maintaining the same JSON structure. Return the complete enhanced requirements JSON object.

{RESPONSE_FORMAT}"""


def parse_structured_requirements(text: str) -> Dict[str, Any]:
    """Parse model output and make sure every section is present."""
    data = extract_json_object(remove_think_tags(text))
    missing = [s for s in SECTIONS if data.get(s) is None]
    if missing:
        raise ValueError(f"Invalid JSON structure: missing required sections ({', '.join(missing)})")
    return data


async def _ask_for_requirements(llm: GenAIClient, model_name: str, system_prompt: str, prompt: str, temperature: float) -> Dict[str, Any]:
    client = dataclasses.replace(llm, model=model_name) if model_name else llm
    completion = await client.generate_completion(
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": prompt},
        ],
        temperature=temperature,
        max_tokens=2048,
    )
    return parse_structured_requirements(completion.content)


async def generate_structured_requirements(llm: GenAIClient, basic_requirements: str, model_name: str = "deepseek-r1:8b") -> Dict[str, Any]:
    log.info("Generating structured requirements using model %s", model_name)
    try:
        return await run_with_timeout(
            _ask_for_requirements(
                llm,
                model_name,
                "You are an AI assistant that specializes in generating structured software requirements.",
                build_structured_prompt(basic_requirements),
                0.2,
            ),
            REQUIREMENTS_TIMEOUT_SECONDS,
            message="Structured requirements generation timed out",
            code="REQUIREMENTS_GENERATION_TIMEOUT",
        )
    except ApiError as e:
        if e.status_code == 504:
            raise
        raise ApiError(e.message, 500, "REQUIREMENTS_GENERATION_FAILED") from e
    except ValueError as e:
        log.error("Error parsing structured requirements: %s", e)
        raise ApiError(
            "Failed to parse the structured requirements. The model did not return valid JSON. Please try again.",
            500,
            "REQUIREMENTS_GENERATION_FAILED",
        ) from e


async def enhance_structured_requirements(
    llm: GenAIClient,
    structured_requirements: Dict[str, Any],
    enhancement_prompt: str,
    model_name: str = "deepseek-r1:8b",
) -> Dict[str, Any]:
    log.info("Enhancing structured requirements using model %s", model_name)
    try:
        return await run_with_timeout(
            _ask_for_requirements(
                llm,
                model_name,
                "You are an AI assistant that specializes in enhancing software requirements based on user feedback.",
                build_enhance_prompt(structured_requirements, enhancement_prompt),
                0.3,
            ),
            REQUIREMENTS_TIMEOUT_SECONDS,
            message="Structured requirements enhancement timed out",
            code="REQUIREMENTS_ENHANCEMENT_TIMEOUT",
        )
    except ApiError as e:
        if e.status_code == 504:
            raise
        raise ApiError(e.message, 500, "REQUIREMENTS_ENHANCEMENT_FAILED") from e
    except ValueError as e:
        log.error("Error parsing enhanced requirements: %s", e)
        raise ApiError(
            "Failed to parse the enhanced requirements. The model did not return valid JSON.",
            500,
            "REQUIREMENTS_ENHANCEMENT_FAILED",
        ) from e
