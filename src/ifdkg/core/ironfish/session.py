"""Exchange state machine for one device session.

The device keeps a partial buffer while a chunked payload is in flight,
so the host tracks the exchange explicitly:

    IDLE -> SENDING (chunk i of n) -> AWAITING_PAGES -> COMPLETE
    SENDING | AWAITING_PAGES -> FAILED

A failing frame ends the exchange; later chunks are never sent. The
device drops its partial buffer on the next INIT, so a new exchange is
always allowed once the previous one reached COMPLETE or FAILED, and
never while it is still SENDING or AWAITING_PAGES.
"""

from __future__ import annotations

import logging
from enum import Enum

from ifdkg.core.base.agent import Transmit
from ifdkg.core.errors import InvariantViolation, MalformedResponse
from ifdkg.core.ironfish.consts import P1_LAST, P2_DEFAULT
from ifdkg.core.ironfish.errors import SUCCESS, status_error
from ifdkg.core.ironfish.framing import frames
from ifdkg.core.ironfish.generation import CURRENT, Generation, Paging
from ifdkg.core.smartcard import APDU, Response
from ifdkg.core.smartcard.logging import PROTOCOL, color_sw

lg = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    SENDING = "sending"
    AWAITING_PAGES = "awaiting_pages"
    COMPLETE = "complete"
    FAILED = "failed"


_TRANSITIONS: dict[SessionState, frozenset[SessionState]] = {
    SessionState.IDLE: frozenset({SessionState.SENDING}),
    SessionState.SENDING: frozenset({
        SessionState.SENDING,
        SessionState.AWAITING_PAGES,
        SessionState.COMPLETE,
        SessionState.FAILED,
    }),
    SessionState.AWAITING_PAGES: frozenset({SessionState.COMPLETE, SessionState.FAILED}),
    SessionState.COMPLETE: frozenset({SessionState.IDLE}),
    SessionState.FAILED: frozenset({SessionState.IDLE}),
}

_BUSY = frozenset({SessionState.SENDING, SessionState.AWAITING_PAGES})

Frame = tuple[int, int, bytes]


class Session:
    """Drives framed exchanges over a transmit coroutine.

    Not reentrant: the device serves one command at a time, and a second
    exchange started while one is in flight is rejected.
    """

    def __init__(self, transmit: Transmit, generation: Generation = CURRENT) -> None:
        self._transmit = transmit
        self.generation = generation
        self.state = SessionState.IDLE
        self.chunk_index = 0
        self.chunk_count = 0
        self.pages_fetched = 0
        self.result: bytes | None = None
        self.failure: BaseException | None = None

    @property
    def busy(self) -> bool:
        return self.state in _BUSY

    def _advance(self, state: SessionState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise InvariantViolation(
                f"illegal session transition {self.state.value} -> {state.value}"
            )
        self.state = state

    def _begin(self, count: int) -> None:
        if self.busy:
            raise InvariantViolation(
                f"exchange already {self.state.value} "
                f"({self.chunk_index}/{self.chunk_count})"
            )
        if self.state is not SessionState.IDLE:
            self._advance(SessionState.IDLE)
        self.chunk_index = 0
        self.chunk_count = count
        self.pages_fetched = 0
        self.result = None
        self.failure = None
        self._advance(SessionState.SENDING)

    async def _send(self, label: str, apdu: APDU, accepted: tuple[int, ...] = SUCCESS) -> Response:
        resp = await self._transmit(apdu)
        lg.log(PROTOCOL, "%s %s", label, color_sw(resp.sw))
        if resp.sw not in accepted:
            raise status_error(resp)
        return resp

    async def _send_checked(self, label: str, apdu: APDU) -> Response:
        resp = await self._send(label, apdu, self.generation.accepted)
        if not resp.success:
            raise status_error(resp)
        return resp

    # -- exchanges --

    async def exchange(
        self,
        cla: int,
        ins: int,
        payload: bytes,
        *,
        context: bytes,
        paged: bool = True,
    ) -> bytes:
        """Send *payload* as a chunked sequence and return the result buffer."""
        planned = [
            (int(p1), P2_DEFAULT, part)
            for p1, part in frames(payload, self.generation.chunk_size, context)
        ]
        return await self._run(cla, ins, planned, paged)

    async def command(
        self,
        cla: int,
        ins: int,
        p1: int = 0x00,
        p2: int = P2_DEFAULT,
        data: bytes = b"",
        *,
        paged: bool = False,
    ) -> bytes:
        """Send a single unchunked frame and return the result buffer."""
        return await self._run(cla, ins, [(p1, p2, data)], paged)

    async def _run(self, cla: int, ins: int, planned: list[Frame], paged: bool) -> bytes:
        name = self.generation.ins.name_of(ins)
        self._begin(len(planned))
        try:
            resp = None
            for i, (p1, p2, data) in enumerate(planned, 1):
                if i > 1:
                    self._advance(SessionState.SENDING)
                self.chunk_index = i
                label = f"{name} [{i}/{len(planned)}]" if len(planned) > 1 else name
                resp = await self._send_checked(label, APDU(cla, ins, p1, p2, data))

            if paged:
                self._advance(SessionState.AWAITING_PAGES)
                result = await self._collect(cla, ins, resp)
            else:
                result = resp.data
        except BaseException as exc:
            self.failure = exc
            self._advance(SessionState.FAILED)
            lg.debug("%s failed: %s", name, exc)
            raise

        self.result = result
        self._advance(SessionState.COMPLETE)
        return result

    # -- paging --

    async def _collect(self, cla: int, ins: int, last: Response) -> bytes:
        if self.generation.paging is Paging.COUNTED:
            return await self._collect_counted(cla, last)
        return await self._collect_heuristic(cla, ins, last)

    async def _collect_heuristic(self, cla: int, ins: int, first: Response) -> bytes:
        """Keep asking while the previous page filled a whole frame."""
        buf = bytearray()
        resp = first
        while True:
            buf.extend(resp.data)
            if len(resp) != self.generation.max_frame:
                return bytes(buf)
            self.pages_fetched += 1
            resp = await self._send_checked(
                f"{self.generation.ins.name_of(ins)} page {self.pages_fetched}",
                APDU(cla, ins, P1_LAST, P2_DEFAULT),
            )

    async def _collect_counted(self, cla: int, last: Response) -> bytes:
        """Fetch exactly the number of pages the final reply announced."""
        if not last.data:
            raise MalformedResponse("missing result page count")
        count = last.data[0]
        buf = bytearray()
        get_result = self.generation.ins.GET_RESULT
        for page in range(count):
            resp = await self._send(
                f"GET_RESULT [{page + 1}/{count}]",
                APDU(cla, get_result, page, P2_DEFAULT),
            )
            self.pages_fetched += 1
            buf.extend(resp.data)
        return bytes(buf)
