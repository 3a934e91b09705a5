import pytest
from starlette.testclient import TestClient

from mcp_framework import ServiceDefinition, create_mcp_server
from services import register_bank_account_service, register_ird_number_service


@pytest.fixture
def server():
    services = [
        ServiceDefinition("nz_bank_account", "bank accounts", register_bank_account_service),
        ServiceDefinition("nz_ird_number", "IRD numbers", register_ird_number_service),
    ]
    return create_mcp_server(services, app_name="test-suite")


@pytest.fixture
def mcp(server):
    return server[0]


@pytest.fixture
def client(server):
    # No lifespan: the custom routes do not need the MCP session manager
    return TestClient(server[1])
