"""Tests for the database management CLI."""

from unittest import mock

import manage
from ordering.domain import ordering
from ordering.store.store import resolve_store_id
from ordering.utils.db import drop_db, setup_db


class TestSeedStore:
    def test_registers_store(self, capsys):
        with mock.patch.object(ordering, "init"):
            store_id = manage.seed_store("badminton", "OfCourt")
        assert resolve_store_id("badminton") == store_id
        assert "registered" in capsys.readouterr().out

    def test_is_idempotent(self):
        with mock.patch.object(ordering, "init"):
            first = manage.seed_store("badminton", "OfCourt")
            second = manage.seed_store("badminton", "OfCourt")
        assert first == second


class TestMain:
    def test_seed_store_defaults(self, monkeypatch):
        monkeypatch.delenv("STORE_SLUG", raising=False)
        monkeypatch.delenv("STORE_NAME", raising=False)
        with mock.patch("manage.seed_store") as seed:
            manage.main(["seed-store"])
        seed.assert_called_once_with("badminton", "OfCourt")

    def test_seed_store_arguments(self):
        with mock.patch("manage.seed_store") as seed:
            manage.main(["seed-store", "--slug", "tennis", "--name", "Baseline"])
        seed.assert_called_once_with("tennis", "Baseline")

    def test_setup_db_command(self):
        with mock.patch("manage.setup_databases") as setup:
            manage.main(["setup-db"])
        setup.assert_called_once_with()


class TestDatabaseHelpers:
    def test_memory_provider_needs_no_schema(self):
        setup_db(ordering)
        drop_db(ordering)
