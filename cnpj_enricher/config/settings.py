from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    lookup_provider: str = "minhareceita"
    lookup_base_url: str = "https://minhareceita.org"
    lookup_timeout_seconds: int = 30
    sample_cnpj: str = "49752997000125"

    output_dir: str = "."
    output_suffix: str = "-enriquecido"
