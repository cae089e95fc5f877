from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class StudyhubEnv(BaseSettings):
    """
    Deployment settings read from the environment.

    STUDYHUB_* variables map onto the fields below; the Django ones keep
    their usual DJANGO_* names.
    """

    model_config = SettingsConfigDict(env_prefix="STUDYHUB_", extra="ignore")

    secret_key: str = Field(default="studyhub-dev-only-secret", validation_alias="DJANGO_SECRET_KEY")
    debug: bool = Field(default=True, validation_alias="DJANGO_DEBUG")
    allowed_hosts: str = Field(
        default="localhost,127.0.0.1,testserver", validation_alias="DJANGO_ALLOWED_HOSTS"
    )

    db_path: Path = BASE_DIR / "db.sqlite3"
    time_zone: str = "America/Sao_Paulo"
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def allowed_host_list(self) -> list[str]:
        return [h.strip() for h in self.allowed_hosts.split(",") if h.strip()]
