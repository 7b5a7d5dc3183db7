"""Tests for the command-line interface."""

from click.testing import CliRunner

from storefront import __version__
from storefront.cli import cli


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_info_shows_configuration():
    result = CliRunner().invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "Environment:  testing" in result.output
    assert "Token TTL:    7 days" in result.output


def test_init_db():
    result = CliRunner().invoke(cli, ["init-db"])

    assert result.exit_code == 0
    assert "Database initialized successfully." in result.output


def test_create_admin():
    result = CliRunner().invoke(
        cli,
        ["create-admin", "--account", "root01", "--email", "root@mail.com", "--password", "rootpw"],
    )

    assert result.exit_code == 0
    assert "Administrator ready: root01" in result.output


def test_create_admin_rejects_invalid_account():
    result = CliRunner().invoke(
        cli,
        ["create-admin", "--account", "x", "--email", "root@mail.com", "--password", "rootpw"],
    )

    assert result.exit_code == 1
    assert "Account must be 4-20 characters" in result.output
