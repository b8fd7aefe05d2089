"""Ceremony runner.

A ceremony is a short script of ``name key=value ...`` lines, one device
command each. Arguments reach the ``cmd_*`` handlers as strings; each
handler converts its own (hex blobs, comma-separated lists, integers).
"""

from __future__ import annotations

import asyncio
import logging
try:
    import readline  # noqa: F401  (line editing for input())
except ImportError:
    pass
import shlex
from functools import partial
from types import ModuleType

from ifdkg.app.ceremony import CeremonyInfo
from ifdkg.core.base import Message, Result
from ifdkg.core.errors import SecureElementError

lg = logging.getLogger(__name__)

DEFAULT_PATH = "m/44'/1338'/0'"


class BreakRequested(Exception):
    """Raised when a script reaches a 'break' line."""


def parse_command(line: str) -> tuple[str, dict[str, str]] | None:
    """Split a script line into (name, kwargs), or None if there is nothing to run.

    A bare word is a flag: ``identity show`` is ``identity show=true``.
    """
    text = line.split("#", 1)[0].strip()
    if not text:
        return None
    name, *args = shlex.split(text)
    kwargs: dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        kwargs[key] = value if sep else "true"
    return name, kwargs


def _flag(value: str) -> bool:
    return value.lower() in ("true", "yes", "1")


class Runner:
    """Holds ceremony state and dispatches commands.

    Device operations are coroutines; the runner owns one event loop and
    drives each message to completion before the next command runs, so
    the device never sees two exchanges at once.
    """

    def __init__(self, terminal, command_modules: list[ModuleType]) -> None:
        self._terminal = terminal
        self._info = CeremonyInfo()
        self._stop_on_error = True
        self._path = DEFAULT_PATH
        self._loop = asyncio.new_event_loop()

        self._commands: dict[str, callable] = {}
        self._descriptions: dict[str, str] = {}
        self._groups: list[tuple[str, list[str]]] = []
        self._settings: dict[str, callable] = {
            "log": self._set_log,
            "stop_on_error": self._set_stop_on_error,
            "path": self._set_path,
        }
        for mod in [self, *command_modules]:
            names = sorted(n for n in dir(mod) if n.startswith("cmd_"))
            for name in names:
                func = getattr(mod, name)
                self._commands[name[4:]] = func if mod is self else partial(func, self)
                self._descriptions[name[4:]] = (func.__doc__ or "").split("\n")[0].strip()
            title = "runner" if mod is self else (mod.__doc__ or mod.__name__).split("\n")[0]
            self._groups.append((title.rstrip("."), [n[4:] for n in names]))
            if mod is not self:
                self._settings.update(getattr(mod, "_settings", {}))

    @property
    def info(self) -> CeremonyInfo:
        return self._info

    @property
    def path(self) -> str:
        return self._path

    @property
    def terminal(self):
        return self._terminal

    def call(self, message: Message) -> Result:
        """Send a message to the terminal and wait for its result."""
        return self._loop.run_until_complete(self._terminal.send(message))

    def close(self) -> None:
        self._loop.close()

    # --- Settings ---

    def _set_log(self, _runner, value: str) -> bool:
        level = logging.getLevelName(value.upper())
        if not isinstance(level, int):
            lg.error("unknown log level: %s", value)
            return False
        logging.getLogger().setLevel(level)
        return True

    def _set_stop_on_error(self, _runner, value: str) -> bool:
        self._stop_on_error = _flag(value)
        return True

    def _set_path(self, _runner, value: str) -> bool:
        self._path = value
        return True

    # --- Commands ---

    def cmd_help(self) -> bool:
        """List available commands."""
        lines = []
        for title, names in self._groups:
            lines.append(f"{title}:")
            lines.extend(f"  {name:16s} {self._descriptions[name]}" for name in names)
        lines.append(f"settings: {', '.join(self._settings)}")
        lg.info("\n%s", "\n".join(lines))
        return True

    def cmd_set(self, **kwargs: str) -> bool:
        """Change a setting (log, stop_on_error, path, generation, chunk_size)."""
        ok = True
        for key, value in kwargs.items():
            handler = self._settings.get(key)
            if handler is None:
                lg.error("unknown setting: %s", key)
                ok = False
            elif handler(self, value) is False:
                ok = False
            else:
                lg.info("%s = %s", key, value)
        return ok

    # --- Execution ---

    def execute(self, line: str) -> bool:
        """Run one script line. Returns True on success."""
        parsed = parse_command(line)
        if parsed is None:
            return True
        name, kwargs = parsed
        if name in ("quit", "exit"):
            raise StopIteration
        if name == "break":
            raise BreakRequested
        cmd = self._commands.get(name)
        if cmd is None:
            lg.error("unknown command: %s (try 'help')", name)
            return False
        try:
            return cmd(**kwargs)
        except TypeError as exc:
            lg.error("bad arguments for '%s': %s", name, exc)
        except SecureElementError as exc:
            lg.error("%s: %s", name, exc)
        except ValueError as exc:
            lg.error("%s: bad value: %s", name, exc)
        return False

    def _prompt(self, suffix: str = "") -> str:
        stage = self._info.stage
        return f"ifdkg[{stage}]{suffix}> " if stage else f"ifdkg{suffix}> "

    def _repl(self, resume: str | None = None) -> str | None:
        """Read and run lines until quit, EOF, or *resume* (inside a break)."""
        suffix = " (break)" if resume else ""
        while True:
            try:
                line = input(self._prompt(suffix))
            except (EOFError, KeyboardInterrupt):
                print()
                return None
            parsed = parse_command(line)
            if parsed and resume and parsed[0] == resume:
                return resume
            try:
                self.execute(line)
            except StopIteration:
                return "quit"
            except BreakRequested:
                lg.warning("already interactive")

    def run_file(self, path: str) -> bool:
        """Run a ceremony script. Returns True if every step succeeded."""
        with open(path) as f:
            for number, line in enumerate(f, 1):
                try:
                    ok = self.execute(line)
                except BreakRequested:
                    lg.info("break at line %d, type 'continue' to resume", number)
                    if self._repl(resume="continue") != "continue":
                        return False
                    continue
                except StopIteration:
                    return True
                if not ok and self._stop_on_error:
                    lg.error("stopped at line %d: %s", number, line.strip())
                    return False
        return True

    def run_interactive(self) -> None:
        lg.info("interactive mode: type 'help' for commands, 'quit' to exit")
        self._repl()
