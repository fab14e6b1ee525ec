import os


class Settings:
    def __init__(self):
        self.app_name = os.getenv("STUDENT_PORTAL_APP_NAME", "Student Portal")
        self.api_version = "1.0.0"
        self.environment = os.getenv("STUDENT_PORTAL_ENV", "development")
        self.secret_key = os.getenv("STUDENT_PORTAL_SECRET_KEY", "CHANGE_ME")
        self.SECRET_KEY = self.secret_key
        self.access_token_expire_minutes = int(os.getenv("STUDENT_PORTAL_TOKEN_MINUTES", "30"))
        self.ACCESS_TOKEN_EXPIRE_MINUTES = self.access_token_expire_minutes
        self.database_url = os.getenv("STUDENT_PORTAL_DATABASE_URL", "sqlite:///./student_portal.db")
        # Seconds a fetch may wait on a locked or unreachable store before failing
        self.fetch_timeout_seconds = float(os.getenv("STUDENT_PORTAL_FETCH_TIMEOUT", "5"))
        self.activity_feed_limit = int(os.getenv("STUDENT_PORTAL_FEED_LIMIT", "10"))
        self.max_activity_feed_limit = 50
        self.default_weekly_goal_hours = float(os.getenv("STUDENT_PORTAL_WEEKLY_GOAL_HOURS", "10"))
        self.log_level = os.getenv("STUDENT_PORTAL_LOG_LEVEL", "INFO")


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
