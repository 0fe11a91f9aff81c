import pytest

from oauthx.exchange import (
    ExchangeRequest,
    MalformedResponse,
    ProviderAdapter,
    ProviderRegistry,
    ResultNormalizer,
    UnknownProvider,
    coerce_expires_in,
    declared_metadata,
    default_grant,
)
from oauthx.exchange.contracts import GrantType
from oauthx.exchange.registry import default_registry
from tests.exchange.provider_testkit import token_response


@pytest.fixture
def normalizer() -> ResultNormalizer:
    return ResultNormalizer(default_registry())


@pytest.fixture
def refresh_request() -> ExchangeRequest:
    return ExchangeRequest.for_refresh(
        client_id="cid", client_secret="secret", refresh_token="rt-old"
    )


@pytest.mark.parametrize(
    "value,expected",
    [(3600, 3600), (3600.0, 3600), (3599.9, 3599), ("3600", 3600), (" 60 ", 60), ("1.5e3", 1500), (0, 0)],
)
def test_coerce_expires_in_accepts_numbers(value: object, expected: int) -> None:
    assert coerce_expires_in(value) == expected


@pytest.mark.parametrize("value", [True, -1, "-5", "soon", float("nan"), float("inf"), [3600], {}])
def test_coerce_expires_in_rejects_bad_values(value: object) -> None:
    with pytest.raises(ValueError):
        coerce_expires_in(value)


def test_teams_keeps_scope(normalizer: ResultNormalizer, refresh_request: ExchangeRequest) -> None:
    result = normalizer.normalize(
        "teams", token_response(scope="Calendars.ReadWrite"), refresh_request
    )

    assert result.metadata == {"scope": "Calendars.ReadWrite"}


def test_quickbooks_realm_id_from_request_not_response(normalizer: ResultNormalizer) -> None:
    request = ExchangeRequest.for_refresh(
        client_id="cid", client_secret="secret", refresh_token="rt", metadata={"realmId": "123"}
    )

    result = normalizer.normalize("quickbooks", token_response(realmId="999"), request)

    assert result.metadata == {"realmId": "123"}


def test_quickbooks_realm_id_absent_when_not_supplied(
    normalizer: ResultNormalizer, refresh_request: ExchangeRequest
) -> None:
    result = normalizer.normalize("quickbooks", token_response(), refresh_request)

    assert result.metadata == {}


@pytest.mark.parametrize(
    "overrides,field",
    [
        ({"access_token": None}, "access_token"),
        ({"access_token": ""}, "access_token"),
        ({"access_token": 42}, "access_token"),
        ({"token_type": None}, "token_type"),
        ({"expires_in": None}, "expires_in"),
        ({"expires_in": "tomorrow"}, "expires_in"),
        ({"expires_in": -10}, "expires_in"),
        ({"refresh_token": 123}, "refresh_token"),
    ],
)
def test_missing_or_invalid_required_fields_are_malformed(
    normalizer: ResultNormalizer,
    refresh_request: ExchangeRequest,
    overrides: dict[str, object],
    field: str,
) -> None:
    with pytest.raises(MalformedResponse) as exc_info:
        normalizer.normalize("apollo", token_response(**overrides), refresh_request)

    assert field in exc_info.value.message


def test_malformed_body_is_redacted(normalizer: ResultNormalizer, refresh_request: ExchangeRequest) -> None:
    with pytest.raises(MalformedResponse) as exc_info:
        normalizer.normalize("apollo", token_response(expires_in="never"), refresh_request)

    assert exc_info.value.body["access_token"] == "***"
    assert exc_info.value.body["refresh_token"] == "***"
    assert exc_info.value.body["expires_in"] == "never"


def test_rotating_provider_without_refresh_token_is_malformed(
    normalizer: ResultNormalizer, refresh_request: ExchangeRequest
) -> None:
    with pytest.raises(MalformedResponse, match="refresh_token"):
        normalizer.normalize("apollo", token_response(refresh_token=None), refresh_request)


def _non_rotating_registry() -> ProviderRegistry:
    adapter = ProviderAdapter(
        provider_id="static",
        token_url="https://auth.static.test/token",
        grants=(
            default_grant(GrantType.REFRESH_TOKEN),
            default_grant(GrantType.AUTHORIZATION_CODE),
        ),
        rotates_refresh_token=False,
    )
    return ProviderRegistry([adapter])


def test_non_rotating_provider_carries_refresh_token_forward(
    refresh_request: ExchangeRequest,
) -> None:
    normalizer = ResultNormalizer(_non_rotating_registry())

    result = normalizer.normalize("static", token_response(refresh_token=None), refresh_request)

    assert result.refresh_token == "rt-old"


def test_non_rotating_provider_code_grant_may_lack_refresh_token() -> None:
    normalizer = ResultNormalizer(_non_rotating_registry())
    request = ExchangeRequest.for_authorization_code(
        client_id="cid", client_secret="secret", code="c", redirect_uri="https://app/cb"
    )

    result = normalizer.normalize("static", token_response(refresh_token=None), request)

    assert result.refresh_token is None


def test_custom_response_field_names() -> None:
    adapter = ProviderAdapter(
        provider_id="odd",
        token_url="https://odd.test/token",
        grants=(default_grant(GrantType.REFRESH_TOKEN),),
        response_fields={"access_token": "token", "expires_in": "ttl"},
        metadata_extractor=declared_metadata(response_fields=["team"]),
    )
    normalizer = ResultNormalizer(ProviderRegistry([adapter]))
    request = ExchangeRequest.for_refresh(client_id="c", client_secret="s", refresh_token="r")

    result = normalizer.normalize(
        "odd",
        {"token": "abc", "ttl": "60", "token_type": "bearer", "refresh_token": "r2", "team": "T1"},
        request,
    )

    assert result.access_token == "abc"
    assert result.expires_in == 60
    assert result.metadata == {"team": "T1"}


def test_unknown_provider(normalizer: ResultNormalizer, refresh_request: ExchangeRequest) -> None:
    with pytest.raises(UnknownProvider):
        normalizer.normalize("nope", token_response(), refresh_request)


def test_result_repr_hides_tokens(normalizer: ResultNormalizer, refresh_request: ExchangeRequest) -> None:
    result = normalizer.normalize("apollo", token_response(), refresh_request)

    assert "at-new" not in repr(result)
    assert "rt-new" not in str(result)
