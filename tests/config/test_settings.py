from pathlib import Path

from config.settings import AppSettings


def test_defaults():
    settings = AppSettings()

    assert settings.upload_folder == Path("uploads")
    assert settings.result_limit == 5
    assert settings.throttle_seconds == 0.5
    assert settings.embedder.model_name == "text-embedding-ada-002"
    assert settings.vision.model_name == "gpt-4o-mini"
    assert settings.openai.api_key is None


def test_from_env_applies_overrides():
    environ = {
        "PHOTOQUERY_UPLOAD_FOLDER": "/data/photos",
        "PHOTOQUERY_THROTTLE_SECONDS": "1.5",
        "PHOTOQUERY_RESULT_LIMIT": "3",
        "PHOTOQUERY_PORT": "9000",
        "PHOTOQUERY_EMBEDDER": "hash",
        "OPENAI_API_KEY": "sk-test",
    }

    settings = AppSettings.from_env(environ)

    assert settings.upload_folder == Path("/data/photos")
    assert settings.throttle_seconds == 1.5
    assert settings.result_limit == 3
    assert settings.port == 9000
    assert settings.embedder.name == "hash"
    assert settings.openai.api_key == "sk-test"


def test_from_env_without_overrides_matches_defaults():
    assert AppSettings.from_env({}) == AppSettings()
