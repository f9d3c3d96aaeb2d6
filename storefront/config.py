import os
import ssl
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url

# Prefer .env.production if present, else default .env
if os.path.exists(".env.production"):
    load_dotenv(".env.production")
else:
    load_dotenv()


class Settings(BaseSettings):
    database_url: Optional[str] = None
    db_driver: str = "mysql+aiomysql"
    db_host: str = "localhost"
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "storefront"
    db_port: int = 4000
    db_ssl: bool = True  # certificate validation is always on when enabled
    db_ssl_ca: Optional[str] = None
    db_pool_size: int = 10
    db_pool_timeout: float = 30.0
    db_queue_limit: int = 0  # 0 = callers wait without limit
    db_echo: bool = False

    port: int = 3000
    cors_origins: str = "*"
    expose_errors: bool = True
    create_tables: bool = False
    log_level: str = "INFO"

    def url(self) -> URL:
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    def connect_args(self) -> Dict[str, Any]:
        if not self.db_ssl or self.url().get_backend_name() != "mysql":
            return {}
        context = ssl.create_default_context(cafile=self.db_ssl_ca)
        context.check_hostname = True
        context.verify_mode = ssl.CERT_REQUIRED
        return {"ssl": context}

    @property
    def allowed_origins(self):
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


def get_settings() -> Settings:
    return Settings()
