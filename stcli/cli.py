#!/usr/bin/env python3

import asyncio
import functools
import os
import pathlib
import sys
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

import pandas as pd
import whenever
from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.history import FileHistory, ThreadedHistory
from prompt_toolkit.shortcuts import set_title

from stcli import cmds, helpers
from stcli.completer import CommandCompleter
from stcli.engine import config as configstore
from stcli.engine.gateway import Gateway
from stcli.engine.primitives import split_commands
from stcli.engine.session import SessionContext
from stcli.helpers import ST_CONFIG


@dataclass(slots=True)
class SpaceTradersCmdlineApp:
    # JSON file holding token, call sign, faction, headquarters, and connection settings
    configFile: pathlib.Path = field(
        default_factory=lambda: pathlib.Path(ST_CONFIG["STCLI_CONFIG_FILE"])
    )

    # populated by loadConfig(); replaced (never mutated) by rotateConfig()
    session: SessionContext | None = None

    gateway: Gateway = field(default_factory=Gateway)
    dispatch: cmds.Dispatch = field(default_factory=cmds.Dispatch)

    exiting: bool = False

    _console_handler_id: int | None = None

    def __post_init__(self) -> None:
        self.configFile = pathlib.Path(self.configFile)
        self.setupLogging()

    def setupLogging(self) -> None:
        # Console gets INFO and above; the log files also keep TRACE (user input)
        # and DEBUG (every API request) for looking back at a session.
        now = pd.Timestamp("now")
        LOGDIR = pathlib.Path(ST_CONFIG["STCLI_LOGDIR"]) / f"{now.year}" / f"{now.month:02}"
        LOGDIR.mkdir(exist_ok=True, parents=True)
        LOG_FILE_TEMPLATE = str(
            LOGDIR
            / f"stcli-{whenever.ZonedDateTime.now('UTC').to_stdlib():%Y%m%d-%H%M%S}"
        )

        logger.remove()
        self._console_handler_id = logger.add(sys.stderr, colorize=True, level="INFO")
        logger.add(sink=LOG_FILE_TEMPLATE + "-stcli.log", level="TRACE", colorize=False)

        logger.debug("Logging session with prefix: {}", LOG_FILE_TEMPLATE)

    def levelName(self) -> str:
        if self.session is None or not self.session.config.call_sign:
            return "unregistered"

        return self.session.config.call_sign

    async def qconfirm(self, msg: str, default: bool) -> bool | None:
        return await helpers.confirm(msg, default)

    async def loadConfig(self) -> None:
        """Load the config file or stop the process.

        A missing file offers to create one with defaults. Either way the
        process then exits: a fresh config has no token yet, so the user
        gets a chance to review it before the next run.
        """
        try:
            found = configstore.load(self.configFile)
        except configstore.ConfigNotFound:
            logger.warning("Config file {} does not exist", self.configFile)

            if await self.qconfirm("Do you want to create a new config file?", default=True):
                logger.info("Creating new config file at {}", self.configFile)
                configstore.create_default_and_persist(self.configFile)
                logger.info("... Exiting")
                sys.exit(0)

            logger.error("The {} config file is required\n ... Exiting", self.configFile)
            sys.exit(1)
        except configstore.ConfigParseError as e:
            logger.error("Failed to read config file {}\n ... Exiting", e)
            sys.exit(1)

        self.session = SessionContext.from_config(found)

    def saveConfig(self) -> None:
        configstore.save(self.session.config, self.configFile)

    def rotateConfig(self) -> pathlib.Path:
        backup = configstore.rotate(self.configFile)
        self.session = SessionContext.from_config(configstore.load(self.configFile))
        return backup

    def shutdown(self) -> None:
        """Save the live session config and stop the REPL loop."""
        if self.session is not None:
            self.saveConfig()

        logger.info("... Exiting")
        self.exiting = True

    def _printHelpWithDescriptions(self):
        """Print all commands grouped by category with their usage and docstrings."""
        for category, names in self.dispatch.groups().items():
            print(f"\n{category}:")
            for name in names:
                print(f"  {self.dispatch.usage(name):40s} {self.dispatch.describe(name)}")

        print()

    async def runSingleCommand(self, cmd, rest):
        _t0 = time.perf_counter()
        try:
            try:
                result = await self.dispatch.runop(cmd, rest[0] if rest else None, self)
            except cmds.CommandError as e:
                logger.error("[{}] {}", cmd, e)
                return
            except OSError:
                # config file writes failing must end the session, not be shrugged off
                raise
            except Exception as e:
                logger.error("[{}] Error with command: {}", [cmd] + rest, e)
                logger.opt(exception=e).trace("[{}] Full traceback", cmd)
                return

            if result:
                print(result)
        finally:
            logger.debug("[{}] Duration: {:,.4f}", cmd, time.perf_counter() - _t0)

    def buildRunnablesFromCommandRequest(self, text1) -> list[Callable[[], Awaitable[None]]]:
        # Commands can be:
        #  > COMMAND
        #  > COMMAND1; COMMAND2
        #  > COMMAND # Comment about command (saved to history, not run)
        # Each command runs to completion before the next one starts.
        runnables = []

        for ccmd in split_commands(text1):
            ccmd = ccmd.strip()

            # if the split generated empty entries (like running ;;;;), just skip the command
            if not ccmd:
                continue

            # split into command dispatch lookup and arguments to command
            cmd, *rest = ccmd.split(" ", 1)

            if cmd in {"?", "help"}:
                runnables.append(self._printHelpAsync)
                continue

            runnables.append(functools.partial(self.runSingleCommand, cmd, rest))

        return runnables

    async def _printHelpAsync(self):
        self._printHelpWithDescriptions()

    async def buildAndRun(self, text1):
        for run in self.buildRunnablesFromCommandRequest(text1):
            # 'exit; more commands' stops at the exit
            if self.exiting:
                break

            await run()

    async def dorepl(self):
        session: PromptSession = PromptSession(
            history=ThreadedHistory(
                FileHistory(os.path.expanduser(ST_CONFIG["STCLI_HISTORY"]))
            ),
            auto_suggest=AutoSuggestFromHistory(),
            completer=CommandCompleter(self),
        )

        # The Command Processing REPL
        while not self.exiting:
            try:
                text1 = await session.prompt_async(
                    f"{self.levelName()}> ",
                    enable_history_search=True,
                    complete_while_typing=True,
                    search_ignore_case=True,
                    reserve_space_for_menu=4,
                )

                # log user input to our active logfile(s)
                logger.trace("{}> {}", self.levelName(), text1)

                await self.buildAndRun(text1)
            except KeyboardInterrupt:
                # Control-C pressed. Try again.
                continue
            except EOFError:
                # Control-D pressed
                self.shutdown()
                break

    async def runall(self):
        await self.loadConfig()

        cfg = self.session.config
        logger.info(
            "Loaded {} (agent: {}, api: {})",
            self.configFile,
            cfg.call_sign or "not registered",
            cfg.base_path,
        )

        set_title(f"SpaceTraders ({self.levelName()})")

        await self.dorepl()


def run(configFile: str | pathlib.Path) -> None:
    app = SpaceTradersCmdlineApp(configFile=pathlib.Path(configFile))
    asyncio.run(app.runall())
