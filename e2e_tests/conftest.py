import pytest
import os

# Configuration
API_URL = os.getenv("API_URL", "http://localhost:8001")


@pytest.fixture(scope="session")
def api_request_context(playwright):
    """
    Creates a Playwright API request context against a running, seeded API
    (`python -m orgunits.seed`).
    """
    request_context = playwright.request.new_context(base_url=API_URL)
    yield request_context
    request_context.dispose()


@pytest.fixture(scope="session", autouse=True)
def api_state_check(api_request_context):
    """
    Fail fast if the API is down or the sample hierarchy is missing.
    """
    response = api_request_context.get("/organizations/GHQ")
    if not response.ok:
        raise RuntimeError(
            f"Seeded root GHQ not reachable at {API_URL}: {response.status} {response.text()}")


@pytest.fixture
def temporary_org(api_request_context):
    """
    Yields a factory that creates organizations and deletes them afterwards,
    children before parents.
    """
    created = []

    def create(payload):
        response = api_request_context.post("/organizations/", data=payload)
        if response.status == 201:
            created.append(payload["id"])
        return response

    yield create

    for org_id in reversed(created):
        api_request_context.delete(f"/organizations/{org_id}")
