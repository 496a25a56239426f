from ascnd.tests.mocks.ascnd_service import TEST_API_KEY, MockAscndService

__all__ = ["TEST_API_KEY", "MockAscndService"]
