from __future__ import annotations

import logging
from typing import Callable

from ifdkg.core.base.agent import Agent
from ifdkg.core.base.message import Message, Result

lg = logging.getLogger(__name__)


def handles(message_cls: type[Message]) -> Callable:
    """Decorator that registers a coroutine method as handler for a message type."""

    def decorator(method: Callable) -> Callable:
        method._handles_message = message_cls
        return method

    return decorator


class Terminal:
    """Base terminal that drives a ceremony through an Agent.

    The app layer sends Message objects via send() and awaits Result
    objects. Subclasses register handlers with the @handles decorator.
    """

    _handlers: dict[type[Message], str]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls._handlers = {}
        for base in reversed(cls.__mro__):
            if hasattr(base, "_handlers"):
                cls._handlers.update(base._handlers)
        for name in vars(cls):
            method = getattr(cls, name)
            if callable(method) and hasattr(method, "_handles_message"):
                cls._handlers[method._handles_message] = name

    def __init__(self, agent: Agent) -> None:
        self._agent = agent

    def connect(self) -> None:
        self._agent.connect()

    def disconnect(self) -> None:
        self._agent.disconnect()

    async def send(self, message: Message) -> Result:
        """Dispatch a message to the registered handler."""
        handler_name = self._handlers.get(type(message))
        if handler_name is None:
            raise ValueError(f"unsupported message: {message}")
        return await getattr(self, handler_name)(message)

    @property
    def supported_messages(self) -> list[type[Message]]:
        return list(self._handlers.keys())

    def on_error(self, error: Exception) -> None:
        lg.error("terminal error: %s", error)
