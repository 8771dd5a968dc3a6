"""Tests for CLI commands."""

import pytest
from flask import Flask

import tote_inventory.cli as cli
from tote_inventory.models.container import Container
from tote_inventory.models.container_type import ContainerType
from tote_inventory.models.item import Item


def _count(app: Flask, model) -> int:
    with app.app_context():
        session = app.container.db_session()
        try:
            return session.query(model).count()
        finally:
            app.container.db_session.reset()


class TestParser:
    def test_upgrade_db_flags(self):
        args = cli.create_parser().parse_args(["upgrade-db", "--recreate", "--yes-i-am-sure"])

        assert args.command == "upgrade-db"
        assert args.recreate is True
        assert args.yes_i_am_sure is True

    def test_migrate_defaults_to_dry_run(self):
        args = cli.create_parser().parse_args(["migrate-container-types"])
        assert args.apply is False

    def test_import_csv_path(self, tmp_path):
        args = cli.create_parser().parse_args(["import-csv", str(tmp_path / "export.csv")])
        assert args.path == tmp_path / "export.csv"


class TestCommands:
    """Test cases for the command handlers against a real database."""

    def test_recreate_requires_confirmation(self, app: Flask, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.handle_upgrade_db(app, recreate=True, confirmed=False)

        assert exc_info.value.code == 1
        assert "--yes-i-am-sure" in capsys.readouterr().err

    def test_upgrade_up_to_date_syncs_catalog(self, app: Flask, capsys):
        cli.handle_upgrade_db(app)

        output = capsys.readouterr().out
        assert "Database is up to date" in output
        assert _count(app, ContainerType) == 10

    def test_seed_container_types(self, app: Flask, capsys):
        cli.handle_seed_container_types(app)

        assert "10 created, 0 updated" in capsys.readouterr().out
        assert _count(app, ContainerType) == 10

    def test_migrate_container_types(self, app: Flask, capsys):
        cli.handle_seed_container_types(app)
        cli._run_in_session(
            app, lambda container: container.container_service().create_container("Bin #1", legacy_type="Bin")
        )

        cli.handle_migrate_container_types(app, apply=True)

        output = capsys.readouterr().out
        assert "BIN-01 (Bin) -> Plastic Bin" in output
        assert "1 matched, 0 unmatched" in output

    def test_import_csv(self, app: Flask, tmp_path, capsys):
        csv_file = tmp_path / "export.csv"
        csv_file.write_text(
            "Timestamp,Tote Number,Tote Description,Tote Location,Item Name,Category,"
            "Condition or Status,ISBN,Notes,Item Photo,QTY,Expiration Date if One\n"
            "2024-01-05 10:00:00,Bin #1,,Garage,Lantern,Lights,Used,,,,1,\n",
            encoding="utf-8-sig",
        )

        cli.handle_import_csv(app, csv_file)

        output = capsys.readouterr().out
        assert "1 item(s) created, 0 already imported" in output
        assert _count(app, Item) == 1
        assert _count(app, Container) == 1

    def test_import_missing_file(self, app: Flask, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.handle_import_csv(app, tmp_path / "missing.csv")

        assert exc_info.value.code == 1
        assert "CSV file not found" in capsys.readouterr().err

    def test_failed_action_rolls_back(self, app: Flask):
        def failing(container):
            container.container_service().create_container("Bin #1")
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            cli._run_in_session(app, failing)

        assert _count(app, Container) == 0
