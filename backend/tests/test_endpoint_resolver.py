"""Tests for resolving request paths to registered endpoints."""

import pytest

from replyhub.services.sandbox.endpoint_resolver import EndpointResolver


@pytest.mark.asyncio
async def test_exact_match_wins_over_earlier_template(db, environment, make_endpoint):
    await make_endpoint("/v1/apps/{app_id}/reviews")
    exact = await make_endpoint("/v1/apps/featured/reviews")

    resolver = EndpointResolver(db)
    endpoint = await resolver.resolve(environment.id, "app_store_connect", "/v1/apps/featured/reviews", "GET")

    assert endpoint.id == exact.id


@pytest.mark.asyncio
async def test_template_match(db, environment, make_endpoint):
    template = await make_endpoint("/v1/apps/{app_id}/reviews")

    resolver = EndpointResolver(db)
    endpoint = await resolver.resolve(environment.id, "app_store_connect", "/v1/apps/123/reviews", "get")

    assert endpoint.id == template.id


@pytest.mark.asyncio
async def test_first_registered_template_wins(db, environment, make_endpoint):
    first = await make_endpoint("/v1/apps/{app_id}/reviews")
    await make_endpoint("/v1/apps/{other_id}/reviews")

    resolver = EndpointResolver(db)
    endpoint = await resolver.resolve(environment.id, "app_store_connect", "/v1/apps/5/reviews", "GET")

    assert endpoint.id == first.id


@pytest.mark.asyncio
@pytest.mark.parametrize("api_type,path,method", [
    ("app_store_connect", "/v1/apps/123/reviews", "POST"),
    ("google_play_developer", "/v1/apps/123/reviews", "GET"),
    ("app_store_connect", "/v1/apps/123/reviews/extra", "GET"),
    ("app_store_connect", "/v1/apps//reviews", "GET"),
])
async def test_no_match(db, environment, make_endpoint, api_type, path, method):
    await make_endpoint("/v1/apps/{app_id}/reviews")

    resolver = EndpointResolver(db)
    assert await resolver.resolve(environment.id, api_type, path, method) is None


@pytest.mark.asyncio
async def test_scoped_to_environment(db, environment, demo_environment, make_endpoint):
    await make_endpoint("/v1/only/here")

    resolver = EndpointResolver(db)
    assert await resolver.resolve(demo_environment.id, "app_store_connect", "/v1/only/here", "GET") is None
    assert await resolver.resolve(environment.id, "app_store_connect", "/v1/only/here", "GET") is not None


@pytest.mark.asyncio
async def test_literal_path_only_matches_itself(db, environment, make_endpoint):
    await make_endpoint("/v1/apps/featured/reviews")
    template = await make_endpoint("/v1/apps/{app_id}/reviews")

    resolver = EndpointResolver(db)
    endpoint = await resolver.resolve(environment.id, "app_store_connect", "/v1/apps/5/reviews", "GET")

    assert endpoint.id == template.id
