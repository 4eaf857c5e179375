import pytest
from pydantic import ValidationError

from tokenauth.authentication import TokenStrategyOptions


def test_defaults():
    options = TokenStrategyOptions()

    assert options.username_header == "x-username"
    assert options.token_header == "x-token"
    assert options.username_field == "username"
    assert options.token_field == "token"
    assert options.username_query == "username"
    assert options.token_query == "token"
    assert options.pass_request_to_verifier is False
    assert options.verify_timeout == 30.0


def test_names_are_lower_cased():
    options = TokenStrategyOptions(
        username_header="X-User",
        token_header="X-Api-Token",
        username_field="Profile[UserName]",
        token_field="Secret",
        username_query="U",
        token_query="T",
    )

    assert options.username_header == "x-user"
    assert options.token_header == "x-api-token"
    assert options.username_field == "profile[username]"
    assert options.token_field == "secret"
    assert options.username_query == "u"
    assert options.token_query == "t"


def test_query_names_default_to_field_paths():
    options = TokenStrategyOptions(username_field="Login", token_field="ApiKey")

    assert options.username_query == "login"
    assert options.token_query == "apikey"


@pytest.mark.parametrize("value", ["", None])
def test_empty_names_fall_back_to_defaults(value):
    options = TokenStrategyOptions(username_header=value, token_field=value)

    assert options.username_header == "x-username"
    assert options.token_field == "token"
    assert options.token_query == "token"


def test_camel_case_aliases():
    options = TokenStrategyOptions.model_validate(
        {
            "usernameHeader": "X-Login",
            "tokenHeader": "X-Key",
            "usernameField": "login",
            "tokenField": "key",
            "usernameQuery": "l",
            "tokenQuery": "k",
            "passReqToCallback": True,
        }
    )

    assert options.username_header == "x-login"
    assert options.token_header == "x-key"
    assert options.username_field == "login"
    assert options.token_field == "key"
    assert options.username_query == "l"
    assert options.token_query == "k"
    assert options.pass_request_to_verifier is True


def test_field_chains_are_parsed():
    options = TokenStrategyOptions(username_field="user[name]", token_query="auth[token]")

    assert options.username_field_chain == ("user", "name")
    assert options.token_field_chain == ("token",)
    assert options.username_query_chain == ("user", "name")
    assert options.token_query_chain == ("auth", "token")


def test_options_are_immutable():
    options = TokenStrategyOptions()

    with pytest.raises(ValidationError):
        options.username_header = "x-other"


def test_verify_timeout_can_be_disabled():
    assert TokenStrategyOptions(verify_timeout=None).verify_timeout is None


def test_verify_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        TokenStrategyOptions(verify_timeout=0)
