# filename : scripts.py
# created  : 03/14/2026


import dataclasses
import logging

import click

from ifdkg.core.smartcard.logging import PROTOCOL, TRACE

lg = logging.getLogger(__name__)


@click.command()
@click.option("-v", "--verbose", is_flag=True, help="TRACE level (show raw APDUs).")
@click.option(
    "-g",
    "--generation",
    type=click.Choice(["legacy", "current"], case_sensitive=False),
    default="current",
    show_default=True,
    help="Device protocol generation.",
)
@click.option(
    "-f",
    "--file",
    "file",
    type=click.Path(exists=True),
    default=None,
    help="Run commands from a ceremony script.",
)
@click.option(
    "-i",
    "--interactive",
    is_flag=True,
    help="Interactive REPL (after the script, if one is given).",
)
@click.option(
    "--chunk-size",
    type=click.IntRange(1, 250),
    default=None,
    help="Payload bytes per frame.",
)
def ifdkg(verbose, generation, file, interactive, chunk_size):

    logging.basicConfig(
        level=TRACE if verbose else PROTOCOL,
        format="%(levelname)-8s %(name)s: %(message)s",
    )

    from ifdkg.core.ironfish import GENERATIONS

    gen = GENERATIONS[generation.lower()]
    if chunk_size is not None:
        gen = dataclasses.replace(gen, chunk_size=chunk_size)

    from ifdkg.app.main import main
    if not main(file=file, interactive=interactive, generation=gen):
        raise SystemExit(1)
