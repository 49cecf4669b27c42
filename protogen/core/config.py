from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_name: str = "protogen"
    api_host: str = "0.0.0.0"
    api_port: int = 3005

    ollama_base_url: str = "http://127.0.0.1:11434"
    ollama_model: str = "deepseek-r1:8b"
    llm_timeout_seconds: float = 300.0
    check_model_on_startup: bool = True

    public_dir: str = "public"
    projects_dir: str = "."
    json_server_port: int = 3001

    cors_origins: list[str] = ["*"]

    @property
    def public_path(self) -> Path:
        return Path(self.public_dir).resolve()

    @property
    def projects_path(self) -> Path:
        return Path(self.projects_dir).resolve()

settings = Settings()
