import os


class Settings:
    def __init__(self):
        self.app_name = "Hourbook"
        self.api_version = "1.0.0"
        self.environment = os.getenv("APP_ENV", "development")
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./hourbook.db")
        self.invoice_dir = os.getenv("INVOICE_DIR", "invoices")
        self.default_language = os.getenv("DEFAULT_LANGUAGE", "de")
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        origins = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
        self.cors_origins = [origin.strip() for origin in origins.split(",") if origin.strip()]

    def is_production(self) -> bool:
        return self.environment.lower() in ("prod", "production")


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
