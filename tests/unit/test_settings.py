import pytest
from pydantic import ValidationError

from certextract.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pdfplumber"

    def test_default_batch_settings(self) -> None:
        s = Settings()
        assert s.batch_concurrency == 5
        assert s.batch_executor == "thread"

    def test_default_max_file_size(self) -> None:
        s = Settings()
        assert s.max_file_size_bytes == 5 * 1024 * 1024

    def test_default_output(self) -> None:
        s = Settings()
        assert s.include_statistics is True
        assert s.storage_headers is False
        assert s.persist_results is False


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings()
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings()
        assert s.db_host == "db.example.com"

    def test_loads_batch_concurrency(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BATCH_CONCURRENCY", "2")
        s = Settings()
        assert s.batch_concurrency == 2

    def test_loads_storage_headers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORAGE_HEADERS", "true")
        s = Settings()
        assert s.storage_headers is True


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_zero_concurrency_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BATCH_CONCURRENCY", "0")
        with pytest.raises(ValidationError):
            Settings()
