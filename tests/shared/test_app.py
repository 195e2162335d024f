"""Tests for application startup, health and the management CLI."""

from catalogue.product.store import CatalogStore
from fastapi.testclient import TestClient
from shared.config import Settings
from shared.store import Store

import app as app_module
from app import bootstrap, build_app, create_app
from manage import main


def _settings(seed_on_startup):
    return Settings(env="test", database_url="sqlite://", seed_on_startup=seed_on_startup)


class TestStartup:
    def test_startup_creates_tables_and_seeds(self):
        store = Store("sqlite://")
        app = create_app(store=store, settings=_settings(seed_on_startup=True))

        try:
            with TestClient(app) as client:
                response = client.get("/products")
        finally:
            store.dispose()

        assert response.status_code == 200
        assert len(response.json()) == 6

    def test_startup_without_seeding_leaves_database_alone(self, store):
        app = create_app(store=store, settings=_settings(seed_on_startup=False))

        with TestClient(app):
            pass

        assert CatalogStore(store).count() == 0

    def test_bootstrap_is_idempotent(self):
        store = Store("sqlite://")
        try:
            assert bootstrap(store) == 6
            assert bootstrap(store) == 0
            assert CatalogStore(store).count() == 6
        finally:
            store.dispose()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["database"] == {"dialect": "sqlite", "reachable": True}


class TestManageCli:
    def test_setup_seed_verify_drop(self, tmp_path, capsys):
        url = f"sqlite:///{tmp_path / 'manage.db'}"

        assert main(["--database-url", url, "setup-db"]) == 0
        assert main(["--database-url", url, "seed"]) == 0
        assert main(["--database-url", url, "seed"]) == 0
        assert main(["--database-url", url, "verify-db"]) == 0

        output = capsys.readouterr().out
        assert "Inserted 6 default products." in output
        assert "Catalogue already has products; nothing inserted." in output

        assert main(["--database-url", url, "drop-db"]) == 0
        assert main(["--database-url", url, "verify-db"]) == 1


class TestAppFactory:
    def test_import_builds_nothing(self):
        assert not hasattr(app_module, "app")

    def test_build_app_configures_logging_and_reads_the_environment(self, monkeypatch):
        calls = []
        monkeypatch.setattr(app_module, "configure_logging", lambda: calls.append(True))
        monkeypatch.setenv("STOREFRONT_ENV", "test")
        monkeypatch.setenv("DATABASE_URL", "sqlite://")

        built = build_app()

        assert calls == [True]
        assert built.state.settings.env == "test"
        assert built.state.store.dialect == "sqlite"
        built.state.store.dispose()
