import pytest
from pydantic import ValidationError

from field_mapper.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_port(self) -> None:
        s = Settings()
        assert s.port == 4000

    def test_default_storage(self) -> None:
        s = Settings()
        assert s.storage_backend == "json"
        assert s.db_path == "data/db.json"
        assert s.uploads_dir == "data/uploads"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pdfplumber"

    def test_default_render_scale(self) -> None:
        s = Settings()
        assert s.render_scale == 1.5


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings()
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_storage_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORAGE_BACKEND", "postgres")
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings()
        assert s.storage_backend == "postgres"
        assert s.db_host == "db.example.com"

    def test_loads_cors_origins_as_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CORS_ORIGINS", '["https://a.example", "https://b.example"]')
        s = Settings()
        assert s.cors_origins == ["https://a.example", "https://b.example"]

    def test_loads_render_scale(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RENDER_SCALE", "2")
        s = Settings()
        assert s.render_scale == 2.0


class TestSettingsValidation:
    def test_invalid_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_upload_limit_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "lots")
        with pytest.raises(ValidationError):
            Settings()
