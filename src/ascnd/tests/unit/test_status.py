from http import HTTPStatus

import grpc
import pytest

from ascnd.status import CLIENT_CLOSED_REQUEST, GRPC_TO_HTTP_STATUS, http_status_for


class TestHttpStatusFor:
    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            (grpc.StatusCode.OK, 200),
            (grpc.StatusCode.CANCELLED, 499),
            (grpc.StatusCode.UNKNOWN, 500),
            (grpc.StatusCode.INVALID_ARGUMENT, 400),
            (grpc.StatusCode.DEADLINE_EXCEEDED, 504),
            (grpc.StatusCode.NOT_FOUND, 404),
            (grpc.StatusCode.ALREADY_EXISTS, 409),
            (grpc.StatusCode.PERMISSION_DENIED, 403),
            (grpc.StatusCode.RESOURCE_EXHAUSTED, 429),
            (grpc.StatusCode.FAILED_PRECONDITION, 400),
            (grpc.StatusCode.ABORTED, 409),
            (grpc.StatusCode.OUT_OF_RANGE, 400),
            (grpc.StatusCode.UNIMPLEMENTED, 501),
            (grpc.StatusCode.INTERNAL, 500),
            (grpc.StatusCode.UNAVAILABLE, 503),
            (grpc.StatusCode.DATA_LOSS, 500),
            (grpc.StatusCode.UNAUTHENTICATED, 401),
        ],
    )
    def test_mapping(self, code, expected):
        assert http_status_for(code) == expected

    def test_every_grpc_status_is_mapped(self):
        assert set(GRPC_TO_HTTP_STATUS) == set(grpc.StatusCode)

    def test_none_falls_back_to_500(self):
        assert http_status_for(None) == HTTPStatus.INTERNAL_SERVER_ERROR

    def test_unrecognized_code_falls_back_to_500(self):
        assert http_status_for("not-a-status") == HTTPStatus.INTERNAL_SERVER_ERROR  # type: ignore[arg-type]

    def test_deterministic(self):
        for code in grpc.StatusCode:
            assert http_status_for(code) == http_status_for(code)

    def test_returns_plain_int(self):
        assert type(http_status_for(grpc.StatusCode.CANCELLED)) is int
        assert http_status_for(grpc.StatusCode.CANCELLED) == CLIENT_CLOSED_REQUEST
