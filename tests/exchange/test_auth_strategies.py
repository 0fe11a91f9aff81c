import base64

import pytest

from oauthx.exchange import AuthStrategyTag, BasicHeader, BodyCredentials, strategy_for


def test_basic_header_encodes_credentials_and_leaves_body_empty() -> None:
    headers, body = BasicHeader().build("client", "p@ss:word")

    assert body == {}
    scheme, encoded = headers["Authorization"].split(" ")
    assert scheme == "Basic"
    assert base64.b64decode(encoded).decode() == "client:p@ss:word"


def test_body_credentials_adds_no_headers() -> None:
    headers, body = BodyCredentials().build("client", "secret")

    assert headers == {}
    assert body == {"client_id": "client", "client_secret": "secret"}


@pytest.mark.parametrize(
    "tag,expected",
    [
        (AuthStrategyTag.BASIC_HEADER, BasicHeader),
        ("basic_header", BasicHeader),
        ("body_credentials", BodyCredentials),
    ],
)
def test_strategy_for_resolves_tags(tag: object, expected: type) -> None:
    assert isinstance(strategy_for(tag), expected)


def test_strategy_for_unknown_tag() -> None:
    with pytest.raises(ValueError):
        strategy_for("private_key_jwt")
