from pydantic_settings import BaseSettings

from diagnostic.models.enums import StorageBackend


class Settings(BaseSettings):
    allowed_origins: list[str] = ["http://localhost:3000"]
    storage_backend: StorageBackend = StorageBackend.MEMORY
    storage_dir: str = ".diagnostics"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    class Config:
        env_file = ".env"
