"""Tests for the config-touching commands (stcli/cmds/session)."""

from unittest.mock import AsyncMock, patch

import orjson
import pytest

from stcli.cli import SpaceTradersCmdlineApp
from stcli.engine import config as configstore
from stcli.engine.config import GameConfig


async def run(app, cmd: str):
    return await app.dispatch.runop(cmd, None, app)


@pytest.fixture
def registered_app(loaded_app, config_path):
    loaded_app.session.apply_registration("tkn123", "BADGER", "COSMIC", "X1-DF55-20250Z")
    configstore.save(GameConfig(), config_path)
    return loaded_app


class TestDumpAndSave:
    @pytest.mark.asyncio
    async def test_dump_shows_in_memory_config(self, registered_app, config_path):
        found = orjson.loads(await run(registered_app, "dump_config"))

        assert found["access_token"] == "tkn123"
        assert found["call_sign"] == "BADGER"

        # dumping never writes
        assert configstore.load(config_path) == GameConfig()

    @pytest.mark.asyncio
    async def test_save(self, registered_app, config_path):
        assert await run(registered_app, "save_config") == "Saved Config"
        assert configstore.load(config_path).access_token == "tkn123"


class TestNewConfig:
    @pytest.mark.asyncio
    async def test_declined(self, registered_app, config_path):
        with patch.object(SpaceTradersCmdlineApp, "qconfirm", AsyncMock(return_value=False)):
            out = await run(registered_app, "new_config")

        assert out == "Existing config unchanged"
        assert [p.name for p in config_path.parent.iterdir()] == ["spacetraders.json"]
        assert registered_app.session.config.access_token == "tkn123"

    @pytest.mark.asyncio
    async def test_prompt_unreadable(self, registered_app, config_path):
        with patch.object(SpaceTradersCmdlineApp, "qconfirm", AsyncMock(return_value=None)):
            out = await run(registered_app, "new_config")

        assert out.startswith("Failed to read prompt")
        assert [p.name for p in config_path.parent.iterdir()] == ["spacetraders.json"]

    @pytest.mark.asyncio
    async def test_confirmed_backs_up_and_resets(self, registered_app, config_path):
        confirm = AsyncMock(return_value=True)
        with patch.object(SpaceTradersCmdlineApp, "qconfirm", confirm):
            out = await run(registered_app, "new_config")

        # default answer is "no"
        assert confirm.call_args.kwargs["default"] is False

        backups = [p for p in config_path.parent.iterdir() if p != config_path]
        assert len(backups) == 1
        assert backups[0].name.startswith("spacetraders.json.")
        assert len(backups[0].name) == len("spacetraders.json.") + 14
        assert out == f"Success (previous config saved to {backups[0]})"

        # the backup holds the live session (saved before rotating)
        assert configstore.load(backups[0]).access_token == "tkn123"

        # the new file and the running session are both fresh defaults
        assert configstore.load(config_path) == GameConfig()
        assert registered_app.session.config == GameConfig()
        assert registered_app.session.api_config.bearer_token == ""


    @pytest.mark.asyncio
    async def test_twice_in_the_same_second(self, registered_app, config_path):
        backup = config_path.with_name("spacetraders.json.20261019100000")

        with patch.object(
            SpaceTradersCmdlineApp, "qconfirm", AsyncMock(return_value=True)
        ), patch("stcli.engine.config.backup_name", return_value=backup):
            first = await run(registered_app, "new_config")
            registered_app.session.apply_registration("tkn456", "OTTER", "VOID")
            second = await run(registered_app, "new_config")

        assert first == f"Success (previous config saved to {backup})"
        assert second.startswith("Failed to back up config:")
        assert str(backup) in second

        # the first backup survives and the live session is still saved in place
        assert configstore.load(backup).access_token == "tkn123"
        assert configstore.load(config_path).access_token == "tkn456"
        assert registered_app.session.config.call_sign == "OTTER"

    @pytest.mark.asyncio
    async def test_clashing_backup_keeps_repl_running(self, registered_app, config_path):
        backup = config_path.with_name("spacetraders.json.20261019100000")
        backup.write_bytes(b"older backup")

        with patch.object(
            SpaceTradersCmdlineApp, "qconfirm", AsyncMock(return_value=True)
        ), patch("stcli.engine.config.backup_name", return_value=backup):
            await registered_app.buildAndRun("new_config")

        assert not registered_app.exiting
        assert backup.read_bytes() == b"older backup"


class TestExit:
    @pytest.mark.asyncio
    async def test_exit_saves_and_stops(self, registered_app, config_path):
        assert await run(registered_app, "exit") is None

        assert registered_app.exiting
        assert configstore.load(config_path).call_sign == "BADGER"
