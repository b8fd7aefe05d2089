"""Ceremony session orchestrator.

Constructs the full stack (Card -> Agent -> Terminal -> Runner),
connects, runs the command file or REPL, and disconnects.
"""

from __future__ import annotations

import logging

from ifdkg.app.commands import COMMAND_MODULES
from ifdkg.app.runner import Runner
from ifdkg.core.base import Agent
from ifdkg.core.ironfish import CURRENT, Generation, IronfishTerminal
from ifdkg.core.smartcard import Card

lg = logging.getLogger(__name__)


def session(
    file: str | None = None,
    interactive: bool = False,
    generation: Generation = CURRENT,
) -> bool:
    """Open a device session. Returns False if any command file step failed."""
    card = Card()
    agent = Agent(card)
    terminal = IronfishTerminal(agent, generation)
    runner = Runner(terminal, COMMAND_MODULES)
    ok = True

    try:
        terminal.connect()
        if file:
            ok = runner.run_file(file)
        if interactive or not file:
            runner.run_interactive()
    except Exception as exc:
        terminal.on_error(exc)
        ok = False
    finally:
        terminal.disconnect()
        runner.close()
    return ok
