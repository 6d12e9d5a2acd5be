from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    data_api_url: str
    data_api_token: str = ""
    redis_url: str = "redis://localhost:6379/0"
    log_level: str = "INFO"
    timezone: str = "UTC"

    max_results_limit: int = 100
    availability_batch_size: int = 40
    pricing_batch_size: int = 40

    search_rate_limit: int = 60
    location_search_rate_limit: int = 20

    search_timeout_seconds: float = 25.0
    http_timeout_seconds: float = 10.0
