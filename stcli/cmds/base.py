"""Base class and registration decorator for REPL commands.

A command is a dataclass deriving from ``IOp``. Its ``argmap()`` describes the
positional arguments it accepts; before ``run()`` is called the raw argument
text is tokenized and bound onto the command's own typed fields, so ``run()``
never looks at untyped input.
"""

from __future__ import annotations

import shlex
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from loguru import logger

from stcli.engine.gateway import GatewayError

if TYPE_CHECKING:
    from stcli.engine.gateway import Gateway
    from stcli.engine.session import ClientConfiguration, SessionContext

T = TypeVar("T")

# DArg.default when the argument is required (None is a valid default)
NODEFAULT: Any = object()

# full command name -> command class, populated by @command
COMMANDS: dict[str, type[IOp]] = {}


class CommandError(Exception):
    """User input problem: reported at the prompt, never fatal."""


class UnknownCommand(CommandError):
    pass


class CommandArgumentError(CommandError):
    pass


@dataclass(slots=True, frozen=True)
class DArg:
    """One positional command argument.

    A leading ``*`` on ``name`` collects all remaining tokens as a list.
    Providing ``default`` makes the argument optional; the default is used
    as-is (it is not passed through ``convert``).
    """

    name: str
    convert: Callable[[str], Any] | None = None
    default: Any = NODEFAULT
    verify: Callable[[Any], bool] | None = None
    errmsg: str = ""
    desc: str = ""

    @property
    def attr(self) -> str:
        return self.name.lstrip("*")

    @property
    def variadic(self) -> bool:
        return self.name.startswith("*")

    @property
    def required(self) -> bool:
        return self.default is NODEFAULT and not self.variadic

    def usage(self) -> str:
        if self.variadic:
            return f"[{self.attr}...]"

        if self.required:
            return f"<{self.attr}>"

        if self.default is None:
            return f"[{self.attr}]"

        return f"[{self.attr}={self.default}]"

    def apply(self, token: str) -> Any:
        try:
            val = self.convert(token) if self.convert else token
        except (TypeError, ValueError) as e:
            raise CommandArgumentError(f"Invalid {self.attr} {token!r}: {e}") from e

        if self.verify and not self.verify(val):
            raise CommandArgumentError(self.errmsg or f"Invalid {self.attr}: {token!r}")

        return val


def command(names: list[str]):
    """Register an IOp subclass under each of ``names``."""

    def register(cls: type[IOp]) -> type[IOp]:
        for name in names:
            if name in COMMANDS:
                raise ValueError(
                    f"Command {name!r} registered twice ({COMMANDS[name].__name__} and {cls.__name__})"
                )

            COMMANDS[name] = cls

        return cls

    return register


@dataclass
class IOp:
    """Base for every command. ``state`` is the running app."""

    state: Any = None

    # raw argument text as typed by the user
    oargs__: str = ""

    @property
    def session(self) -> SessionContext:
        return self.state.session

    @property
    def gateway(self) -> Gateway:
        return self.state.gateway

    @property
    def api(self) -> ClientConfiguration:
        return self.session.api_config

    def argmap(self) -> list[DArg]:
        return []

    def bind(self, args: str | None) -> None:
        """Tokenize ``args`` and assign each DArg's value onto this command."""
        self.oargs__ = args or ""

        try:
            tokens = shlex.split(self.oargs__)
        except ValueError as e:
            raise CommandArgumentError(f"Could not parse arguments: {e}") from e

        pos = 0
        for darg in self.argmap():
            if darg.variadic:
                val = [darg.apply(t) for t in tokens[pos:]]
                pos = len(tokens)
            elif pos < len(tokens):
                val = darg.apply(tokens[pos])
                pos += 1
            elif darg.required:
                raise CommandArgumentError(f"Missing required parameter: {darg.attr}")
            else:
                val = darg.default

            setattr(self, darg.attr, val)

        if pos < len(tokens):
            raise CommandArgumentError(
                f"Unexpected arguments: {' '.join(tokens[pos:])}"
            )

    async def run(self) -> str | None:
        raise NotImplementedError

    async def invoke(
        self,
        what: str,
        request: Callable[[], Awaitable[T]],
        present: Callable[[T], str],
    ) -> str:
        """Await one gateway request and format its result.

        Any gateway failure becomes a "Failed to <what>" message instead of
        an exception, so a remote problem never leaves the command.
        """
        try:
            got = await request()
        except GatewayError as e:
            logger.debug("[{}] {}: {}", what, type(e).__name__, e)
            return f"Failed to {what}: {e}"

        return present(got)
