from backend.app.core.settings import Settings, get_settings


def test_settings_defaults():
    settings = get_settings()
    assert settings.app_name == "Student Portal"
    assert settings.environment == "development"
    assert isinstance(settings.secret_key, str) and settings.secret_key
    assert isinstance(settings.database_url, str) and settings.database_url
    assert settings.activity_feed_limit == 10
    assert settings.default_weekly_goal_hours == 10.0


def test_settings_is_singleton():
    assert get_settings() is get_settings()


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("STUDENT_PORTAL_FEED_LIMIT", "4")
    monkeypatch.setenv("STUDENT_PORTAL_WEEKLY_GOAL_HOURS", "7.5")
    settings = Settings()
    assert settings.activity_feed_limit == 4
    assert settings.default_weekly_goal_hours == 7.5
