"""URL prefix composition for blueprint groups."""

from __future__ import annotations

import pytest
from accounts.api import join_prefix


@pytest.mark.parametrize(
    "segments, expected",
    [
        (("/api", "v1"), "/api/v1"),
        (("/api/", "/v1/", "/users"), "/api/v1/users"),
        (("/api/v1", ""), "/api/v1"),
        (("api", "v1", "users/"), "/api/v1/users"),
    ],
)
def test_join_prefix(segments, expected):
    assert join_prefix(*segments) == expected


def test_routes_mounted(app):
    rules = {rule.rule for rule in app.url_map.iter_rules()}
    assert {"/api/v1/health", "/api/v1/users", "/api/v1/users/<uuid:user_id>"} <= rules
