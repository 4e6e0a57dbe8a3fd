"""Tests for the ingestion CLI entry point."""

from unittest.mock import MagicMock, patch

import pytest

from src.ingestion.__main__ import main
from src.utils.errors import ConfigError


@pytest.fixture
def cli(config):
    """Patch everything main() touches outside the process."""
    with patch("src.ingestion.__main__.setup_logging"), patch(
        "src.ingestion.__main__.setup_progress_logging"
    ), patch("src.ingestion.__main__.load_config", return_value=config) as load, patch(
        "src.ingestion.__main__.get_firestore_client"
    ) as get_client, patch(
        "src.ingestion.__main__.build_storage"
    ) as build_storage, patch(
        "src.ingestion.__main__.run_command"
    ) as run_command:
        run_command.return_value = {"processed": 1, "succeeded": 1, "skipped": 0, "failed": 0}
        yield MagicMock(
            load_config=load,
            get_client=get_client,
            build_storage=build_storage,
            run_command=run_command,
        )


def test_new_command(cli, config):
    assert main(["new"]) == 0

    command, _, storage, passed_config = cli.run_command.call_args.args
    assert command == "new"
    assert storage is cli.build_storage.return_value
    assert passed_config is config


def test_failed_feed_sets_exit_code(cli):
    cli.run_command.return_value = {"processed": 2, "succeeded": 1, "skipped": 0, "failed": 1}
    assert main(["https://x.test/feed"]) == 1


def test_delete_needs_no_storage(cli, config):
    config.thumbnail_bucket = ""
    cli.run_command.return_value = {"deleted": 4}

    assert main(["delete"]) == 0

    cli.build_storage.assert_not_called()
    assert cli.run_command.call_args.args[2] is None


def test_missing_bucket_is_rejected(cli, config):
    config.thumbnail_bucket = ""
    assert main(["rebuild"]) == 1
    cli.run_command.assert_not_called()


def test_workers_override(cli, config):
    main(["rebuild", "--workers", "4"])
    assert config.workers == 4


def test_config_error(cli):
    cli.load_config.side_effect = ConfigError("Config file not found: config.yaml")
    assert main(["new"]) == 1


def test_prompts_without_command(cli):
    with patch("builtins.input", return_value=" https://x.test/feed \n"):
        assert main([]) == 0
    assert cli.run_command.call_args.args[0] == "https://x.test/feed"


def test_keyboard_interrupt(cli):
    cli.run_command.side_effect = KeyboardInterrupt
    assert main(["new"]) == 130
