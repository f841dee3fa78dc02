"""
AttnViz Backend: Access Log Tests
====================================

What:  Tests for RequestLoggingMiddleware through the full app.
How:   The module's logger is patched, so assertions read the exact
       logger.log call instead of depending on handler configuration.
"""

import logging
from unittest.mock import patch

import pytest


def _only_call(access_log):
    assert access_log.log.call_count == 1
    return access_log.log.call_args


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_success_logged_at_info_with_route_and_size(self, test_client):
        with patch("attnviz.middleware.logging.logger") as access_log:
            response = await test_client.post("/api/texts", json={"text": "hello"})

        call = _only_call(access_log)
        assert call.args[0] == logging.INFO
        assert call.args[2:5] == ("POST", "/api/texts", 200)
        extra = call.kwargs["extra"]
        assert extra["route"] == "/api/texts"
        assert extra["response_bytes"] == str(len(response.content))
        assert extra["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_record_routes_grouped_by_template(self, test_client):
        with patch("attnviz.middleware.logging.logger") as access_log:
            await test_client.get("/api/texts/5")

        call = _only_call(access_log)
        assert call.args[0] == logging.WARNING
        assert call.kwargs["extra"]["path"] == "/api/texts/5"
        assert call.kwargs["extra"]["route"] == "/api/texts/{text_id}"

    @pytest.mark.asyncio
    async def test_server_error_logged_at_error(self, app, test_client):
        async with app.state.text_store.engine.begin() as conn:
            await conn.exec_driver_sql("DROP TABLE texts")

        with patch("attnviz.middleware.logging.logger") as access_log:
            await test_client.get("/api/texts")

        assert _only_call(access_log).args[0] == logging.ERROR

    @pytest.mark.asyncio
    async def test_healthy_health_check_is_debug(self, test_client):
        with patch("attnviz.middleware.logging.logger") as access_log:
            await test_client.get("/health")

        assert _only_call(access_log).args[0] == logging.DEBUG

    @pytest.mark.asyncio
    async def test_failing_health_check_is_not_quiet(self, app, test_client):
        with patch.object(app.state.text_store, "ping", return_value=False), \
             patch("attnviz.middleware.logging.logger") as access_log:
            response = await test_client.get("/health")

        assert response.status_code == 503
        assert _only_call(access_log).args[0] == logging.ERROR

    @pytest.mark.asyncio
    async def test_unmatched_path_falls_back_to_url_path(self, test_client):
        with patch("attnviz.middleware.logging.logger") as access_log:
            response = await test_client.get("/nowhere")

        assert response.status_code == 404
        assert _only_call(access_log).kwargs["extra"]["route"] == "/nowhere"
