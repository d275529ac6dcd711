# src/smart_tasks/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

PROMPT = "tasks> "


def run_console_loop(
    state: AppState,
    *,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """
    Interactive loop: read a line, dispatch slash commands, print the reply.

    Ends on /exit, /quit, EOF or Ctrl+C.
    """
    logger.info("Console connector started.")
    app_name = str(getattr(state.settings, "app_name", "Smart Task Manager"))
    write(f"{app_name}. Use /help for commands, /exit to quit.\n")
    write(command_registry.handle(state, "/list") or "")

    while True:
        try:
            user_input = read_line(PROMPT).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input, emit=write)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Commands start with '/'. Use /help to list them."

        write(reply)

    logger.info("Console connector finished.")
