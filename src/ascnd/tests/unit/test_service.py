from unittest.mock import MagicMock

import grpc

from ascnd.messaging.encoder import encode
from ascnd.models import GetPlayerRankResponse, SubmitScoreRequest
from ascnd.service import AscndServiceStub, add_ascnd_service_to_server, method_path


class TestAscndServiceStub:
    def test_binds_one_unary_call_per_method(self):
        channel = MagicMock()

        stub = AscndServiceStub(channel)

        paths = [c.args[0] for c in channel.unary_unary.call_args_list]
        assert paths == [
            "/ascnd.v1.AscndService/SubmitScore",
            "/ascnd.v1.AscndService/GetLeaderboard",
            "/ascnd.v1.AscndService/GetPlayerRank",
        ]
        assert stub.submit_score is channel.unary_unary.return_value

    def test_serializers_use_message_codec(self):
        channel = MagicMock()
        AscndServiceStub(channel)

        kwargs = channel.unary_unary.call_args_list[2].kwargs
        payload = encode(GetPlayerRankResponse(total_entries=4))
        assert kwargs["request_serializer"] is encode
        assert kwargs["response_deserializer"](payload) == GetPlayerRankResponse(total_entries=4)


class TestAddAscndServiceToServer:
    def test_registers_generic_handler(self):
        server = MagicMock()

        add_ascnd_service_to_server(MagicMock(), server)

        server.add_generic_rpc_handlers.assert_called_once()
        (handlers,) = server.add_generic_rpc_handlers.call_args.args
        assert len(handlers) == 1
        assert isinstance(handlers[0], grpc.GenericRpcHandler)

    def test_handler_decodes_requests(self):
        server = MagicMock()
        add_ascnd_service_to_server(MagicMock(), server)
        (handlers,) = server.add_generic_rpc_handlers.call_args.args

        call_details = MagicMock(method=method_path("SubmitScore"))
        handler = handlers[0].service(call_details)

        request = SubmitScoreRequest(leaderboard_id="lb", player_id="p1", score=5)
        assert handler.request_deserializer(encode(request)) == request
