"""Command autocompletion for the SpaceTraders REPL.

Provides tab-cycling completion for command names (with docstring descriptions)
and argument completion where the values are known locally (factions, the
headquarters system).
"""

from prompt_toolkit.completion import Completer, Completion

from stcli.engine.primitives import FACTIONS, system_for_waypoint


class CommandCompleter(Completer):
    """Completer for stcli commands and their arguments."""

    # Map command names to argument completer method names
    _ARG_COMPLETERS = {
        "register": "_complete_register",
        "system_waypoints": "_complete_systems",
    }

    def __init__(self, app):
        """app is the SpaceTradersCmdlineApp instance."""
        self.app = app

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor

        # Handle multi-command: find text after the last ";"
        last_semi = text.rfind(";")
        if last_semi >= 0:
            segment = text[last_semi + 1 :].lstrip()
        else:
            segment = text

        parts = segment.split(None, 1)
        if len(parts) <= 1 and not segment.endswith(" "):
            # Still typing the command name
            prefix = parts[0] if parts else ""
            yield from self._complete_command_name(prefix)
        else:
            cmd_name = parts[0]
            arg_text = parts[1] if len(parts) > 1 else ""
            yield from self._complete_arguments(cmd_name, arg_text)

    def _complete_command_name(self, prefix):
        dispatch = self.app.dispatch
        prefix_lower = prefix.lower()
        for cmd_name in dispatch.names():
            if cmd_name.startswith(prefix_lower):
                yield Completion(
                    cmd_name,
                    start_position=-len(prefix),
                    display_meta=dispatch.describe(cmd_name),
                )

    def _complete_arguments(self, cmd_name, arg_text):
        method_name = self._ARG_COMPLETERS.get(cmd_name)
        if not method_name:
            return

        words = arg_text.split()
        current_word = words[-1] if words and not arg_text.endswith(" ") else ""

        # index of the argument being typed
        position = len(words) - 1 if current_word else len(words)
        yield from getattr(self, method_name)(current_word, position)

    def _complete_register(self, prefix, position):
        # register <callsign> [faction]
        if position != 1:
            return

        prefix_upper = prefix.upper()
        for faction in FACTIONS:
            if faction.startswith(prefix_upper):
                yield Completion(faction, start_position=-len(prefix))

    def _complete_systems(self, prefix, position):
        if position != 0 or self.app.session is None:
            return

        system = system_for_waypoint(self.app.session.config.headquarters)
        if system and system.startswith(prefix.upper()):
            yield Completion(
                system, start_position=-len(prefix), display_meta="headquarters"
            )
