"""Wire format tests for the built-in providers."""

import base64

import pytest

from oauthx.exchange import ContentType, ExchangeRequest, TokenExchangeEngine
from oauthx.exchange.providers.apollo import APOLLO_TOKEN_URL
from oauthx.exchange.providers.quickbooks import QUICKBOOKS_TOKEN_URL
from oauthx.exchange.providers.teams import TEAMS_SCOPE, TEAMS_TOKEN_URL
from tests.exchange.provider_testkit import FakeTransport, token_response


@pytest.mark.asyncio
async def test_teams_refresh_wire_format_and_scope_metadata() -> None:
    transport = FakeTransport.returning(200, token_response(scope="Calendars.ReadWrite"))
    engine = TokenExchangeEngine(transport=transport)

    result = await engine.exchange(
        "teams",
        ExchangeRequest.for_refresh(client_id="cid", client_secret="secret", refresh_token="rt"),
    )

    call = transport.last
    assert call.url == TEAMS_TOKEN_URL
    assert call.content_type is ContentType.FORM
    assert "Authorization" not in call.headers
    assert call.body == {
        "grant_type": "refresh_token",
        "refresh_token": "rt",
        "scope": TEAMS_SCOPE,
        "client_id": "cid",
        "client_secret": "secret",
    }
    assert result.metadata == {"scope": "Calendars.ReadWrite"}


def test_teams_scope_requests_offline_access() -> None:
    assert "offline_access" in TEAMS_SCOPE.split()
    assert TEAMS_SCOPE.startswith("Calendars.ReadWrite Calendars.ReadWrite.Shared")


@pytest.mark.asyncio
async def test_teams_request_scope_does_not_override_fixed_scope() -> None:
    transport = FakeTransport.returning(200, token_response())
    engine = TokenExchangeEngine(transport=transport)

    await engine.exchange(
        "teams",
        ExchangeRequest.for_refresh(
            client_id="cid", client_secret="secret", refresh_token="rt", scope="User.Read"
        ),
    )

    assert transport.last.body["scope"] == TEAMS_SCOPE


@pytest.mark.asyncio
async def test_apollo_refresh_wire_format_has_empty_metadata() -> None:
    transport = FakeTransport.returning(200, token_response(scope="read"))
    engine = TokenExchangeEngine(transport=transport)

    result = await engine.exchange(
        "apollo",
        ExchangeRequest.for_refresh(client_id="cid", client_secret="secret", refresh_token="rt"),
    )

    assert transport.last.url == APOLLO_TOKEN_URL
    assert transport.last.body == {
        "grant_type": "refresh_token",
        "refresh_token": "rt",
        "client_id": "cid",
        "client_secret": "secret",
    }
    assert result.metadata == {}


@pytest.mark.asyncio
async def test_quickbooks_authorization_code_uses_basic_header() -> None:
    transport = FakeTransport.returning(200, token_response(x_refresh_token_expires_in=8726400))
    engine = TokenExchangeEngine(transport=transport)

    await engine.exchange(
        "quickbooks",
        ExchangeRequest.for_authorization_code(
            client_id="cid",
            client_secret="secret",
            code="auth-code",
            redirect_uri="https://app.example.com/callback",
            metadata={"realmId": "123"},
        ),
    )

    call = transport.last
    expected = base64.b64encode(b"cid:secret").decode()
    assert call.url == QUICKBOOKS_TOKEN_URL
    assert call.headers["Authorization"] == f"Basic {expected}"
    assert call.headers["Accept"] == "application/json"
    assert call.body == {
        "grant_type": "authorization_code",
        "code": "auth-code",
        "redirect_uri": "https://app.example.com/callback",
    }


@pytest.mark.asyncio
async def test_quickbooks_realm_id_comes_from_request_metadata() -> None:
    transport = FakeTransport.returning(200, token_response())
    engine = TokenExchangeEngine(transport=transport)

    result = await engine.exchange(
        "quickbooks",
        ExchangeRequest.for_authorization_code(
            client_id="cid",
            client_secret="secret",
            code="auth-code",
            redirect_uri="https://app.example.com/callback",
            metadata={"realmId": "123"},
        ),
    )

    assert result.metadata == {"realmId": "123"}


@pytest.mark.asyncio
async def test_quickbooks_refresh_keeps_basic_header_and_omits_credentials_from_body() -> None:
    transport = FakeTransport.returning(200, token_response())
    engine = TokenExchangeEngine(transport=transport)

    await engine.exchange(
        "quickbooks",
        ExchangeRequest.for_refresh(client_id="cid", client_secret="secret", refresh_token="rt"),
    )

    assert transport.last.body == {"grant_type": "refresh_token", "refresh_token": "rt"}
    assert transport.last.headers["Authorization"].startswith("Basic ")
