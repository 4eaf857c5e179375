import pytest

from tokenauth.authentication.lookup import lookup, parse_field_path


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("username", ("username",)),
        ("user[name]", ("user", "name")),
        ("a[b][c]", ("a", "b", "c")),
        ("items[0]", ("items", "0")),
    ],
)
def test_parse_field_path(path, expected):
    assert parse_field_path(path) == expected


def test_lookup_nested_value():
    body = {"user": {"name": "alice"}}
    assert lookup(body, parse_field_path("user[name]")) == "alice"


def test_lookup_stops_at_leaf():
    body = {"user": "alice"}
    assert lookup(body, parse_field_path("user[name]")) == "alice"


def test_lookup_missing_key():
    assert lookup({"other": "x"}, parse_field_path("user[name]")) is None


def test_lookup_missing_nested_key():
    assert lookup({"user": {"email": "a@b.c"}}, parse_field_path("user[name]")) is None


@pytest.mark.parametrize("root", [None, "not-a-container", 42])
def test_lookup_without_root(root):
    assert lookup(root, ("username",)) is None


def test_lookup_chain_ending_on_container():
    assert lookup({"user": {"name": "alice"}}, ("user",)) is None


def test_lookup_none_value_is_missing():
    assert lookup({"user": None}, ("user", "name")) is None


def test_lookup_sequence_index():
    body = {"users": [{"name": "alice"}, {"name": "bob"}]}
    assert lookup(body, parse_field_path("users[1][name]")) == "bob"


@pytest.mark.parametrize("path", ["users[5][name]", "users[first][name]"])
def test_lookup_sequence_bad_index(path):
    body = {"users": [{"name": "alice"}]}
    assert lookup(body, parse_field_path(path)) is None


def test_lookup_returns_non_string_leaf():
    assert lookup({"token": 1234}, ("token",)) == 1234
