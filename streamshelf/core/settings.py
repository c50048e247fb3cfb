from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    app_env: str = Field(default="dev", alias="APP_ENV")
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")
    cors_origins: str = Field(default="http://localhost:3000", alias="CORS_ORIGINS")

    database_url: str = Field(default="sqlite:///./streamshelf.db", alias="DATABASE_URL")
    auto_create_schema: bool = Field(default=True, alias="AUTO_CREATE_SCHEMA")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_structured: bool = Field(default=False, alias="LOG_STRUCTURED")

    # Ownership: fixed admin owner unless requests carry X-Owner-Id
    multi_tenant: bool = Field(default=False, alias="MULTI_TENANT")
    admin_owner_id: str = Field(default="admin-user", alias="ADMIN_OWNER_ID")
    seed_default_sections: bool = Field(default=True, alias="SEED_DEFAULT_SECTIONS")

    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    rq_queue_name: str = Field(default="default", alias="RQ_QUEUE_NAME")

    stream_api_endpoint: str = Field(
        default="https://api.cloudflare.com/client/v4/accounts", alias="STREAM_API_ENDPOINT"
    )
    stream_account_id: str = Field(default="", alias="STREAM_ACCOUNT_ID")
    stream_api_token: str = Field(default="", alias="STREAM_API_TOKEN")
    stream_customer_subdomain: str = Field(default="stream.cloudflare.com", alias="STREAM_CUSTOMER_SUBDOMAIN")
    stream_timeout_seconds: int = Field(default=120, alias="STREAM_TIMEOUT_SECONDS")

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
