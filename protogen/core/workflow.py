from enum import Enum

class GenerationStage(str, Enum):
    SAVE_JDL = "SAVE_JDL"
    GENERATE_DB_JSON = "GENERATE_DB_JSON"
    REUSE_EXISTING = "REUSE_EXISTING"
    BUILD_HTML = "BUILD_HTML"
    GENERATE_API_JS = "GENERATE_API_JS"
    SCAFFOLD_PROJECT = "SCAFFOLD_PROJECT"
    ENTITY_CONFIGS = "ENTITY_CONFIGS"
    MOCK_DATA = "MOCK_DATA"
    START_SERVER = "START_SERVER"
    DONE = "DONE"
    FAILED = "FAILED"

    def __str__(self) -> str:
        return self.value


def log_extra(project: str, stage: GenerationStage) -> dict:
    """Build the `extra` mapping understood by ContextFormatter."""
    return {"project": project, "stage": str(stage)}
