from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"

    llm_provider: str = "groq"  # | "openai" | "openai_compat" | "ollama"

    groq_api_key: str = ""
    groq_base_url: str = "https://api.groq.com/openai/v1"
    groq_model: str = "llama-3.3-70b-versatile"

    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"

    openai_compat_base_url: str = "http://localhost:8000/v1"
    openai_compat_api_key: str = "NONEEDKEY"
    openai_compat_model: str = "local-model"

    ollama_model: str = "llama3.2"
    ollama_base_url: str = "http://localhost:11434"

    submission_capacity: int = 100
    concurrent_generation: bool = True
    generation_timeout: float | None = None  # seconds per model call, None = wait forever

    prompt_packs_dir: Path = PACKAGE_DIR / "domain" / "prompts" / "packs"
    prompt_pack: str = "default"
    allowed_prompt_packs_raw: str = ""

    @property
    def allowed_prompt_packs(self) -> tuple[str, ...] | None:
        raw = (self.allowed_prompt_packs_raw or "").strip()
        if not raw:
            return None
        return tuple([x.strip() for x in raw.split(",") if x.strip()])


settings = Settings()
