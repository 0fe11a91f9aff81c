from pathlib import Path

import pytest

from oauthx.config import (
    EnvResolver,
    OAuthxConfigModel,
    find_config_path,
    load_config,
    parse_config,
)


def test_no_config_file_gives_defaults() -> None:
    config = load_config()

    assert config == OAuthxConfigModel()
    assert config.transport.timeout == 30.0
    assert config.providers == {}


def test_explicit_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yml")


def test_env_var_points_at_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "custom.yml"
    path.write_text("transport:\n  timeout: 5\n")
    monkeypatch.setenv("OAUTHX_CONFIG", str(path))

    assert find_config_path() == path
    assert load_config().transport.timeout == 5


def test_local_oauthx_yml_is_discovered(tmp_path: Path) -> None:
    (tmp_path / "oauthx.yml").write_text("telemetry:\n  enabled: false\n")

    assert find_config_path() == tmp_path / "oauthx.yml"


def test_env_references_are_resolved(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TENANT", "contoso")
    path = tmp_path / "oauthx.yml"
    path.write_text(
        "providers:\n"
        "  teams:\n"
        "    token_url: https://login.microsoftonline.com/${TENANT}/oauth2/v2.0/token\n"
    )

    config = load_config(path)

    assert (
        config.providers["teams"].token_url
        == "https://login.microsoftonline.com/contoso/oauth2/v2.0/token"
    )


def test_missing_env_reference_is_an_error(tmp_path: Path) -> None:
    path = tmp_path / "oauthx.yml"
    path.write_text("telemetry:\n  endpoint: ${OAUTHX_TEST_UNSET_VAR}\n")

    with pytest.raises(ValueError, match="OAUTHX_TEST_UNSET_VAR"):
        load_config(path)


def test_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "oauthx.yml"
    path.write_text("providers: [unclosed\n")

    with pytest.raises(ValueError, match="Failed to parse YAML"):
        load_config(path)


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ValueError, match="Invalid oauthx config"):
        parse_config({"transport": {"timeout": 5, "retries": 3}})


def test_non_mapping_config_is_rejected() -> None:
    with pytest.raises(ValueError, match="expected a mapping"):
        parse_config(["providers"])


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "oauthx.yml"
    path.write_text("")

    assert load_config(path) == OAuthxConfigModel()


def test_env_resolver_with_explicit_environment() -> None:
    resolver = EnvResolver({"A": "1", "B": "two"})

    assert resolver.resolve_tree({"x": ["${A}-${B}", 3], "y": "plain"}) == {
        "x": ["1-two", 3],
        "y": "plain",
    }
