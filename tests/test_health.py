"""
Tests: Health check endpoint
"""


def test_health_endpoint_returns_200(client):
    """Test that /health returns HTTP 200"""
    response = client.get("/health")
    assert response.status_code == 200


def test_health_endpoint_returns_healthy_status(client):
    """Test that /health returns status: healthy"""
    assert client.get("/health").json() == {"status": "healthy"}


def test_health_ignores_empty_caches(client, stub_adapters):
    """Health never triggers an upstream fetch, even with every slot empty"""
    client.get("/health")
    assert all(adapter.calls == 0 for adapter in stub_adapters.values())


def test_only_listed_routes_are_served(client):
    """There is no version endpoint"""
    assert client.get("/version").status_code == 404
