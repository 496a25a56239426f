"""Async client for the Ascnd leaderboard API over gRPC.

Usage:

    async with AscndClient("your-api-key") as client:
        result = await client.submit("weekly-highscores", "player123", 42500)
        print(f"New rank: {result.rank}")
"""

from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING, Any

import grpc
import structlog

from ascnd.exceptions import AscndApiError, ClientClosedError, ConfigurationError
from ascnd.models import (
    DEFAULT_LEADERBOARD_LIMIT,
    GetLeaderboardRequest,
    GetLeaderboardResponse,
    GetPlayerRankRequest,
    GetPlayerRankResponse,
    SubmitScoreRequest,
    SubmitScoreResponse,
)
from ascnd.service import AscndServiceStub
from ascnd.settings import load_options
from ascnd.status import http_status_for

if TYPE_CHECKING:
    from types import TracebackType

    from pydantic import BaseModel

    from ascnd.settings import AscndClientOptions

module_logger = structlog.get_logger()

API_KEY_HEADER = "x-api-key"


class AscndClient:
    """Client for submitting scores and reading leaderboards.

    Construction validates the options and never touches the network: a
    channel is opened on the first call made from each event loop. One client
    may be shared by many concurrent callers, across loops too. close() or
    aclose() releases every channel; after that every RPC raises
    ClientClosedError.

    logger is any structlog-style logger; without one the module logger is
    used. It only observes.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        options: AscndClientOptions | None = None,
        logger: Any = None,  # noqa: ANN401
    ) -> None:
        if options is not None and api_key is not None:
            raise ConfigurationError("Pass either api_key or options, not both")
        self._options = options if options is not None else load_options(api_key=api_key)
        self._endpoint = self._options.endpoint
        self._log = logger if logger is not None else module_logger
        self._auth_metadata = ((API_KEY_HEADER, self._options.api_key),)

        # Acquired exactly once, by whichever close call wins; never released.
        self._close_guard = threading.Lock()
        # Serializes lazy channel creation against teardown.
        self._channel_lock = threading.Lock()
        # grpc.aio channels are bound to the loop that opened them
        self._channels: dict[asyncio.AbstractEventLoop, tuple[grpc.aio.Channel, AscndServiceStub]] = {}
        self._pending_shutdown: asyncio.Task[None] | None = None

        self._log.info("ascnd client initialized", base_url=self._options.base_url)

    @property
    def closed(self) -> bool:
        return self._close_guard.locked()

    @property
    def options(self) -> AscndClientOptions:
        return self._options

    # ------------------------------------------------------------------
    # RPCs
    # ------------------------------------------------------------------

    async def submit_score(self, request: SubmitScoreRequest) -> SubmitScoreResponse:
        """Submit a player's score and return their resulting rank."""
        self._check_request(request)
        self._log.debug(
            "submit_score called",
            leaderboard_id=request.leaderboard_id,
            player_id=request.player_id,
            score=request.score,
        )
        stub = self._get_stub()
        response: SubmitScoreResponse = await self._invoke("submit_score", stub.submit_score, request)
        self._log.info("score submitted", rank=response.rank, is_new_best=response.is_new_best)
        return response

    async def get_leaderboard(self, request: GetLeaderboardRequest) -> GetLeaderboardResponse:
        """Fetch one page of leaderboard entries.

        cursor and around_rank are forwarded untouched; the server decides
        how the page is windowed.
        """
        self._check_request(request)
        self._log.debug(
            "get_leaderboard called",
            leaderboard_id=request.leaderboard_id,
            limit=request.limit,
            cursor=request.cursor,
        )
        stub = self._get_stub()
        response: GetLeaderboardResponse = await self._invoke("get_leaderboard", stub.get_leaderboard, request)
        self._log.info(
            "leaderboard retrieved",
            entry_count=len(response.entries),
            total_entries=response.total_entries,
        )
        return response

    async def get_player_rank(self, request: GetPlayerRankRequest) -> GetPlayerRankResponse:
        """Fetch a player's standing. A player without a score is not an error."""
        self._check_request(request)
        self._log.debug(
            "get_player_rank called",
            leaderboard_id=request.leaderboard_id,
            player_id=request.player_id,
        )
        stub = self._get_stub()
        response: GetPlayerRankResponse = await self._invoke("get_player_rank", stub.get_player_rank, request)
        if response.has_rank:
            self._log.info("player rank retrieved", rank=response.rank, score=response.score)
        else:
            self._log.info("player has no rank", leaderboard_id=request.leaderboard_id)
        return response

    # ------------------------------------------------------------------
    # Convenience request builders
    # ------------------------------------------------------------------

    async def submit(
        self,
        leaderboard_id: str,
        player_id: str,
        score: int,
        *,
        metadata: bytes | None = None,
        idempotency_key: str | None = None,
    ) -> SubmitScoreResponse:
        request = SubmitScoreRequest(
            leaderboard_id=leaderboard_id,
            player_id=player_id,
            score=score,
            metadata=metadata,
            idempotency_key=idempotency_key,
        )
        return await self.submit_score(request)

    async def fetch_leaderboard(
        self,
        leaderboard_id: str,
        limit: int = DEFAULT_LEADERBOARD_LIMIT,
        cursor: str | None = None,
    ) -> GetLeaderboardResponse:
        request = GetLeaderboardRequest(leaderboard_id=leaderboard_id, limit=limit, cursor=cursor)
        return await self.get_leaderboard(request)

    async def fetch_player_rank(self, leaderboard_id: str, player_id: str) -> GetPlayerRankResponse:
        request = GetPlayerRankRequest(leaderboard_id=leaderboard_id, player_id=player_id)
        return await self.get_player_rank(request)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the client. Only the first call does anything."""
        if not self._close_guard.acquire(blocking=False):
            return
        self._log.debug("closing ascnd client")
        for channel, loop in self._detach_channels():
            self._schedule_channel_close(channel, loop)
        self._log.info("ascnd client closed")

    async def aclose(self) -> None:
        """Close the client, waiting for the current loop's channel to shut down."""
        if not self._close_guard.acquire(blocking=False):
            return
        self._log.debug("closing ascnd client asynchronously")
        running = asyncio.get_running_loop()
        for channel, loop in self._detach_channels():
            if loop is running:
                await channel.close()
            else:
                self._schedule_channel_close(channel, loop)
        self._log.info("ascnd client closed")

    def __enter__(self) -> AscndClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    async def __aenter__(self) -> AscndClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_request(self, request: BaseModel | None) -> None:
        if request is None:
            raise ConfigurationError("request must not be None")
        if self.closed:
            raise ClientClosedError

    def _get_stub(self) -> AscndServiceStub:
        loop = asyncio.get_running_loop()
        with self._channel_lock:
            # re-checked under the lock so a concurrent close cannot leak a new channel
            if self.closed:
                raise ClientClosedError
            opened = self._channels.get(loop)
            if opened is None:
                self._forget_closed_loops()
                channel = self._open_channel()
                opened = (channel, AscndServiceStub(channel))
                self._channels[loop] = opened
                self._log.debug("channel opened", target=self._endpoint.target, open_channels=len(self._channels))
            return opened[1]

    def _forget_closed_loops(self) -> None:
        # a channel whose loop has closed can neither be used nor shut down
        for loop in [loop for loop in self._channels if loop.is_closed()]:
            del self._channels[loop]
            self._log.debug("dropped channel of closed event loop")

    def _open_channel(self) -> grpc.aio.Channel:
        target = self._endpoint.target
        if self._endpoint.secure:
            return grpc.aio.secure_channel(target, grpc.ssl_channel_credentials())
        return grpc.aio.insecure_channel(target)

    def _detach_channels(self) -> list[tuple[grpc.aio.Channel, asyncio.AbstractEventLoop]]:
        with self._channel_lock:
            detached = [(channel, loop) for loop, (channel, _) in self._channels.items()]
            self._channels.clear()
        return detached

    def _schedule_channel_close(self, channel: grpc.aio.Channel, loop: asyncio.AbstractEventLoop) -> None:
        """Shut a channel down from synchronous code.

        The channel belongs to the loop that opened it, so shutdown has to run
        there: as a task when called on that loop, thread-safely when the loop
        runs elsewhere, or to completion when the loop is idle.
        """
        if loop.is_closed():
            self._log.debug("channel loop already closed, skipping shutdown")
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            self._pending_shutdown = loop.create_task(channel.close())
        elif loop.is_running():
            asyncio.run_coroutine_threadsafe(channel.close(), loop)
        elif running is None:
            loop.run_until_complete(channel.close())
        else:
            # idle foreign loop while another loop runs here; it cannot be driven from this thread
            self._log.warning("cannot shut down channel owned by an idle event loop")

    async def _invoke(
        self,
        method: str,
        call: grpc.aio.UnaryUnaryMultiCallable,
        request: BaseModel,
    ) -> Any:  # noqa: ANN401
        try:
            response = await call(
                request,
                metadata=self._auth_metadata,
                timeout=self._options.timeout_seconds,
            )
        except grpc.aio.AioRpcError as e:
            code = e.code()
            detail = e.details() or ""
            self._log.error("grpc error", method=method, status=code, detail=detail)
            raise AscndApiError(
                f"gRPC request failed: {detail}",
                status_code=http_status_for(code),
                detail=detail,
                grpc_status=code,
            ) from e
        except asyncio.CancelledError:
            self._log.info("call cancelled", method=method)
            raise

        # grpc.aio logs deserializer failures and hands back None instead of raising
        if response is None:
            code = grpc.StatusCode.INTERNAL
            detail = "malformed response"
            self._log.error("grpc error", method=method, status=code, detail=detail)
            raise AscndApiError(
                f"gRPC request failed: {detail}",
                status_code=http_status_for(code),
                detail=detail,
                grpc_status=code,
            )
        return response
