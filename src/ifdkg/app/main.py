# filename : main.py
# created  : 03/14/2026


import logging

from ifdkg.app import session
from ifdkg.core.ironfish import CURRENT, Generation

lg = logging.getLogger(__name__)


def main(
    file: str | None = None,
    interactive: bool = False,
    generation: Generation = CURRENT,
) -> bool:
    lg.debug("ifdkg v1 (%s, chunk size %d)", generation.name, generation.chunk_size)
    return session(file=file, interactive=interactive, generation=generation)
