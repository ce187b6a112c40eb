from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.home() / "SkillSync"
    api_prefix: str = "/api/v1"
    host: str = "127.0.0.1"
    port: int = 5000
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    log_level: str = "INFO"

    jwt_secret: str = "change-me-in-production-0123456789abcdef"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 30
    # Registration cannot self-assign the admin role unless explicitly enabled.
    allow_admin_signup: bool = False

    max_upload_bytes: int = 10 * 1024 * 1024  # 10 MiB

    recommendation_limit: int = 20
    public_feed_limit: int = 6
    public_search_limit: int = 12

    # Email is disabled while smtp_host is unset.
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = True
    mail_from_name: str = "SkillSync Team"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "db.sqlite"

    @property
    def upload_dir(self) -> Path:
        return self.data_dir / "uploads"

    model_config = {"env_prefix": "SKILLSYNC_"}


settings = Settings()
