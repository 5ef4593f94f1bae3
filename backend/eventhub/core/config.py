from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List, Optional
from pathlib import Path

class Settings(BaseSettings):
    app_name: str = Field(default="EventHub API", alias="APP_NAME")
    env: str = Field(default="dev", alias="ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    secret_key: str = Field(default="devsecret", alias="SECRET_KEY")
    algorithm: str = Field(default="HS256", alias="ALGORITHM")
    token_expire_hours: int = Field(default=24, alias="TOKEN_EXPIRE_HOURS")
    # No DATABASE_URL -> in-memory store (development mock server)
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")
    api_prefix: str = Field(default="", alias="API_PREFIX")
    # Raw env values (strings), we parse them to lists via properties to avoid JSON decoding errors
    admin_emails_raw: Optional[str] = Field(default=None, alias="ADMIN_EMAILS")
    cors_origins_raw: Optional[str] = Field(default=None, alias="CORS_ORIGINS", description="Comma or space separated list of allowed CORS origins")
    # Seed data (dev/demo convenience)
    seed_demo_data: bool = Field(default=True, alias="SEED_DEMO_DATA")
    seed_admin_email: Optional[str] = Field(default=None, alias="SEED_ADMIN_EMAIL")
    seed_admin_password: Optional[str] = Field(default=None, alias="SEED_ADMIN_PASSWORD")

    class Config:
        # Load env from backend/.env regardless of CWD
        env_file = str(Path(__file__).resolve().parents[2] / ".env")
        case_sensitive = False

    def _parse_list(self, v: Optional[str]) -> List[str]:
        if v is None:
            return []
        s = v.strip()
        if not s:
            return []
        if s.startswith("[") and s.endswith("]"):
            try:
                import json
                loaded = json.loads(s)
                if isinstance(loaded, list):
                    return [str(e).strip() for e in loaded if str(e).strip()]
            except ValueError:
                pass
        return [e.strip() for e in s.replace(" ", ",").split(",") if e.strip()]

    @property
    def is_prod(self) -> bool:
        return self.env.lower() == "prod"

    @property
    def admin_emails(self) -> List[str]:
        return [e.lower() for e in self._parse_list(self.admin_emails_raw)]

    @property
    def cors_origins(self) -> List[str]:
        items = self._parse_list(self.cors_origins_raw)
        # Permissive by default, the storefront may be served from anywhere in dev
        if not items:
            return ["*"]
        # Dev convenience: ensure both localhost and 127.0.0.1 variants for same ports
        augmented = set(items)
        for origin in list(items):
            if origin.startswith("http://localhost:"):
                port = origin.rsplit(":", 1)[1]
                augmented.add(f"http://127.0.0.1:{port}")
            if origin.startswith("http://127.0.0.1:"):
                port = origin.rsplit(":", 1)[1]
                augmented.add(f"http://localhost:{port}")
        return sorted(augmented)

def get_settings() -> Settings:
    return Settings()  # type: ignore
