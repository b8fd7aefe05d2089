"""Ceremony state display and protocol settings."""

from __future__ import annotations

import dataclasses
import logging

from ifdkg.app.display import format_ceremony_info
from ifdkg.core.ironfish import GENERATIONS
from ifdkg.core.ironfish.consts import CHUNK_SIZE

lg = logging.getLogger(__name__)


def cmd_display(runner) -> bool:
    """Show everything collected in this session."""
    text = format_ceremony_info(runner.info)
    lg.info("\n%s", text or "  (nothing yet)")
    return True


def _set_generation(runner, value: str) -> bool:
    generation = GENERATIONS.get(value.lower())
    if generation is None:
        lg.error("unknown generation: %s (one of %s)", value, ", ".join(GENERATIONS))
        return False
    session = runner.terminal.protocol.session
    session.generation = dataclasses.replace(
        generation, chunk_size=session.generation.chunk_size
    )
    return True


def _set_chunk_size(runner, value: str) -> bool:
    size = int(value, 0)
    if not 1 <= size <= CHUNK_SIZE:
        lg.error("chunk_size must be between 1 and %d, got %d", CHUNK_SIZE, size)
        return False
    session = runner.terminal.protocol.session
    session.generation = dataclasses.replace(session.generation, chunk_size=size)
    return True


_settings: dict[str, callable] = {
    "generation": _set_generation,
    "chunk_size": _set_chunk_size,
}
