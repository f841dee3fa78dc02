"""HTTP-level tests for POST /api/visualize and GET /health."""

import pytest


class TestVisualizeEndpoint:

    @pytest.mark.asyncio
    async def test_two_tokens(self, test_client):
        response = await test_client.post("/api/visualize", json={"text": "one two"})

        assert response.status_code == 200
        assert response.json() == [[1.0, 0.5], [0.5, 1.0]]

    @pytest.mark.asyncio
    async def test_empty_text(self, test_client):
        response = await test_client.post("/api/visualize", json={"text": ""})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_long_text_is_not_length_limited(self, test_client):
        words = " ".join(["w"] * 150)

        response = await test_client.post("/api/visualize", json={"text": words})

        matrix = response.json()
        assert len(matrix) == 150
        assert matrix[149][149] == 1.0

    @pytest.mark.asyncio
    async def test_malformed_payload_tolerated(self, test_client):
        response = await test_client.post(
            "/api/visualize",
            content=b"garbage",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_malformed_payload_strict(self, strict_client):
        response = await strict_client.post(
            "/api/visualize",
            content=b"garbage",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_nothing_is_persisted(self, test_client):
        await test_client.post("/api/visualize", json={"text": "a b"})
        assert (await test_client.get("/api/texts")).json() == []


class TestHealthEndpoint:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
