from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    anthropic_api_key: str
    agent_model: str = "claude-sonnet-4-20250514"
    agent_timeout_seconds: float = 30.0
    agent_max_web_searches: int = 5
    cache_ttl_hours: float = 24.0
    fetch_timeout_seconds: float = 10.0
    heuristic_fallback: bool = False
    log_level: str = "INFO"
