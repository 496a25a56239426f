"""gRPC bindings for the ascnd.v1.AscndService API.

AscndServiceStub is the client side: one unary-unary callable per method.
add_ascnd_service_to_server registers a servicer implementing the same
methods on a grpc.aio server.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import grpc

from ascnd.messaging.encoder import decoder_for, encode
from ascnd.models import (
    GetLeaderboardRequest,
    GetLeaderboardResponse,
    GetPlayerRankRequest,
    GetPlayerRankResponse,
    SubmitScoreRequest,
    SubmitScoreResponse,
)

if TYPE_CHECKING:
    from pydantic import BaseModel

SERVICE_NAME = "ascnd.v1.AscndService"

# method name -> (request type, response type)
METHODS: dict[str, tuple[type[BaseModel], type[BaseModel]]] = {
    "SubmitScore": (SubmitScoreRequest, SubmitScoreResponse),
    "GetLeaderboard": (GetLeaderboardRequest, GetLeaderboardResponse),
    "GetPlayerRank": (GetPlayerRankRequest, GetPlayerRankResponse),
}


def method_path(name: str) -> str:
    return f"/{SERVICE_NAME}/{name}"


class AscndServiceStub:
    def __init__(self, channel: grpc.aio.Channel) -> None:
        self.submit_score = self._unary(channel, "SubmitScore")
        self.get_leaderboard = self._unary(channel, "GetLeaderboard")
        self.get_player_rank = self._unary(channel, "GetPlayerRank")

    @staticmethod
    def _unary(channel: grpc.aio.Channel, name: str) -> grpc.aio.UnaryUnaryMultiCallable:
        _, response_type = METHODS[name]
        return channel.unary_unary(
            method_path(name),
            request_serializer=encode,
            response_deserializer=decoder_for(response_type),
        )


class AscndServicer(Protocol):
    """Server-side implementation of the three Ascnd methods."""

    async def submit_score(
        self,
        request: SubmitScoreRequest,
        context: grpc.aio.ServicerContext,
    ) -> SubmitScoreResponse: ...

    async def get_leaderboard(
        self,
        request: GetLeaderboardRequest,
        context: grpc.aio.ServicerContext,
    ) -> GetLeaderboardResponse: ...

    async def get_player_rank(
        self,
        request: GetPlayerRankRequest,
        context: grpc.aio.ServicerContext,
    ) -> GetPlayerRankResponse: ...


def add_ascnd_service_to_server(servicer: AscndServicer, server: grpc.aio.Server) -> None:
    handlers = {
        "SubmitScore": servicer.submit_score,
        "GetLeaderboard": servicer.get_leaderboard,
        "GetPlayerRank": servicer.get_player_rank,
    }
    rpc_method_handlers = {
        name: grpc.unary_unary_rpc_method_handler(
            handler,
            request_deserializer=decoder_for(METHODS[name][0]),
            response_serializer=encode,
        )
        for name, handler in handlers.items()
    }
    generic_handler = grpc.method_handlers_generic_handler(SERVICE_NAME, rpc_method_handlers)
    server.add_generic_rpc_handlers((generic_handler,))
