from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="photogram", validation_alias="APP_NAME")
    app_env: str = Field(default="dev", validation_alias="APP_ENV")
    app_port: int = Field(default=8000, validation_alias="APP_PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    expose_error_details: bool = Field(default=True, validation_alias="EXPOSE_ERROR_DETAILS")

    database_url: str = Field(validation_alias="DATABASE_URL")
    redis_url: str = Field(validation_alias="REDIS_URL")

    # Session tokens are issued by the external identity provider; we only verify them.
    auth_jwt_key: str = Field(default="change-me", validation_alias="AUTH_JWT_KEY")
    auth_jwt_algorithm: str = Field(default="RS256", validation_alias="AUTH_JWT_ALGORITHM")
    auth_jwt_issuer: str | None = Field(default=None, validation_alias="AUTH_JWT_ISSUER")
    auth_jwt_leeway_seconds: int = Field(default=5, validation_alias="AUTH_JWT_LEEWAY_SECONDS")
    auth_session_cookie: str = Field(default="__session", validation_alias="AUTH_SESSION_COOKIE")
    auth_name_claim: str = Field(default="name", validation_alias="AUTH_NAME_CLAIM")

    storage_url: str = Field(default="http://localhost:54321", validation_alias="STORAGE_URL")
    storage_service_key: str | None = Field(default=None, validation_alias="STORAGE_SERVICE_KEY")
    storage_bucket: str = Field(default="uploads", validation_alias="STORAGE_BUCKET")
    storage_timeout_seconds: float = Field(default=20.0, validation_alias="STORAGE_TIMEOUT_SECONDS")

    feed_default_limit: int = Field(default=10, validation_alias="FEED_DEFAULT_LIMIT")
    feed_max_limit: int = Field(default=50, validation_alias="FEED_MAX_LIMIT")
    comment_preview_count: int = Field(default=2, validation_alias="COMMENT_PREVIEW_COUNT")
    search_default_limit: int = Field(default=20, validation_alias="SEARCH_DEFAULT_LIMIT")

    caption_max_length: int = Field(default=2200, validation_alias="CAPTION_MAX_LENGTH")
    comment_max_length: int = Field(default=2200, validation_alias="COMMENT_MAX_LENGTH")
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, validation_alias="MAX_UPLOAD_BYTES")

    post_create_limit_per_hour: int = Field(default=30, validation_alias="POST_CREATE_LIMIT_PER_HOUR")
    comment_create_limit_per_hour: int = Field(default=300, validation_alias="COMMENT_CREATE_LIMIT_PER_HOUR")


settings = Settings()
ALLOWED_IMAGE_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}
