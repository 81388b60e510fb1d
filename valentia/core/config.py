from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    environment: str = Field("development", alias="ENVIRONMENT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    frontend_url: str = Field("http://localhost:5173", alias="FRONTEND_URL")

    database_url: str = Field(..., alias="DATABASE_URL")
    auto_create_tables: bool = Field(False, alias="AUTO_CREATE_TABLES")

    jwt_secret_key: str = Field(..., alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(60 * 24, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    admin_username: Optional[str] = Field(None, alias="ADMIN_USERNAME")
    admin_password: Optional[str] = Field(None, alias="ADMIN_PASSWORD")

    # SMTP relay (Gmail app password by default)
    smtp_host: str = Field("smtp.gmail.com", alias="SMTP_HOST")
    smtp_port: int = Field(587, alias="SMTP_PORT")
    smtp_use_tls: bool = Field(True, alias="SMTP_USE_TLS")
    email_user: Optional[str] = Field(None, alias="EMAIL_USER")
    email_pass: Optional[str] = Field(None, alias="EMAIL_PASS")
    admin_notify_email: Optional[str] = Field(None, alias="ADMIN_NOTIFY_EMAIL")

    # Attachment storage: "local" writes under upload_dir, "supabase" uses the Storage REST API
    storage_backend: str = Field("local", alias="STORAGE_BACKEND")
    upload_dir: str = Field("./uploads", alias="UPLOAD_DIR")
    supabase_url: Optional[str] = Field(None, alias="SUPABASE_URL")
    supabase_service_key: Optional[str] = Field(None, alias="SUPABASE_SERVICE_KEY")
    supabase_bucket: str = Field("valentia-uploads", alias="SUPABASE_BUCKET")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def email_configured(self) -> bool:
        return bool(self.email_user and self.email_pass)

    @property
    def notify_address(self) -> Optional[str]:
        return self.admin_notify_email or self.email_user


settings = Settings()
