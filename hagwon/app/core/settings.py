import os


def _env(name: str, default: str) -> str:
    return os.getenv(f"HAGWON_{name}", default)


class Settings:
    def __init__(self):
        self.app_name = "Hagwon Manager"
        self.api_version = "1.0.0"
        self.environment = _env("ENVIRONMENT", "development")
        self.secret_key = _env("SECRET_KEY", "CHANGE_ME")
        self.SECRET_KEY = self.secret_key
        self.access_token_expire_minutes = int(_env("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
        self.ACCESS_TOKEN_EXPIRE_MINUTES = self.access_token_expire_minutes
        self.database_url = _env("DATABASE_URL", "sqlite:///./hagwon.db")
        self.log_level = _env("LOG_LEVEL", "INFO")

        self.default_page_size = 10
        self.default_list_limit = 20
        self.max_list_limit = 100

        self.avatar_base_url = "https://api.dicebear.com/9.x"
        self.avatar_style = "big-ears"
        self.avatar_background_colors = ("b6e3f4", "c0aede", "d1d4f9")

        # Enrollment ratios used to label classes on the dashboard.
        self.class_near_full_ratio = 0.9
        self.class_under_enrolled_ratio = 0.5


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
