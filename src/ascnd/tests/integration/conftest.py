import grpc
import pytest

from ascnd import AscndClient, load_options
from ascnd.service import add_ascnd_service_to_server
from ascnd.tests.mocks import TEST_API_KEY, MockAscndService


@pytest.fixture
def ascnd_service():
    return MockAscndService()


@pytest.fixture
async def server_url(ascnd_service):
    server = grpc.aio.server()
    add_ascnd_service_to_server(ascnd_service, server)
    port = server.add_insecure_port("127.0.0.1:0")
    await server.start()
    yield f"http://127.0.0.1:{port}"
    await server.stop(None)


@pytest.fixture
async def client(server_url):
    client = AscndClient(options=load_options(api_key=TEST_API_KEY, base_url=server_url, timeout_seconds=5))
    yield client
    await client.aclose()
