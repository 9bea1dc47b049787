"""Tests for discovery files and the path-pattern matcher."""

import pytest

from stellar_snaps.discovery import (
    compile_path_pattern,
    create_discovery_file,
    match_url_to_rule,
    parse_discovery_file,
    validate_discovery_file,
)
from stellar_snaps.errors import InvalidDiscoveryFile
from stellar_snaps.models import DiscoveryRule


def _rules(*pairs):
    return [DiscoveryRule(path_pattern=p, api_path=a) for p, a in pairs]


def test_compile_path_pattern_escapes_everything_but_wildcards():
    regex = compile_path_pattern("/s/*.json")

    assert regex.pattern == r"^/s/(.+)\.json$"
    assert regex.match("/s/abc.json").group(1) == "abc"
    assert regex.match("/s/abcXjson") is None


def test_compile_path_pattern_treats_regex_metacharacters_literally():
    regex = compile_path_pattern("/pay(now)?/*")

    assert regex.match("/pay(now)?/abc").group(1) == "abc"
    assert regex.match("/paynow/abc") is None
    assert regex.match("/pay/abc") is None


def test_match_single_wildcard():
    rules = _rules(("/s/*", "/api/snap/$1"))
    assert match_url_to_rule("/s/abc123", rules) == "/api/snap/abc123"


def test_match_is_anchored():
    rules = _rules(("/s/*", "/api/snap/$1"))

    assert match_url_to_rule("/x/s/abc", rules) is None
    assert match_url_to_rule("/s/", rules) is None


def test_match_wildcard_is_greedy_across_segments():
    rules = _rules(("/s/*", "/api/snap/$1"))
    assert match_url_to_rule("/s/a/b", rules) == "/api/snap/a/b"


def test_match_multiple_captures_and_repeated_placeholders():
    rules = _rules(("/u/*/p/*", "/api/$2/$1/$2"))
    assert match_url_to_rule("/u/alice/p/42", rules) == "/api/42/alice/42"


def test_match_out_of_range_placeholder_is_left_as_is():
    rules = _rules(("/s/*", "/api/$1/$3"))
    assert match_url_to_rule("/s/abc", rules) == "/api/abc/$3"


def test_match_first_matching_rule_wins():
    rules = _rules(("/s/special", "/api/special"), ("/s/*", "/api/snap/$1"))

    assert match_url_to_rule("/s/special", rules) == "/api/special"
    assert match_url_to_rule("/s/other", rules) == "/api/snap/other"


SHARE_RULES = (("/s/*", "/api/snap/$1"), ("/user/*/donate", "/api/donate/$1"))


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/s/abc123", "/api/snap/abc123"),
        ("/user/john/donate", "/api/donate/john"),
        ("/user/john", None),
        ("/s", None),
        ("/unknown", None),
    ],
)
def test_match_share_and_donate_rules(path, expected):
    assert match_url_to_rule(path, _rules(*SHARE_RULES)) == expected


def test_match_no_rules():
    assert match_url_to_rule("/s/abc", []) is None


def test_create_discovery_file_accepts_camel_dicts():
    discovery = create_discovery_file(
        name="Shop",
        description="",
        rules=[{"pathPattern": "/p/*", "apiPath": "/api/p/$1"}],
    )

    assert discovery.description is None
    assert discovery.rules[0].path_pattern == "/p/*"
    assert discovery.to_json_dict() == {"name": "Shop", "rules": [{"pathPattern": "/p/*", "apiPath": "/api/p/$1"}]}


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "", "rules": [{"pathPattern": "/p/*", "apiPath": "/a"}]},
        {"name": "Shop", "rules": []},
        {"name": "Shop", "rules": [{"pathPattern": "", "apiPath": "/a"}]},
        {"name": "Shop", "rules": [{"pathPattern": "/p/*"}]},
    ],
)
def test_create_discovery_file_rejects_incomplete(kwargs):
    with pytest.raises(InvalidDiscoveryFile):
        create_discovery_file(**kwargs)


def test_validate_discovery_file():
    valid = {"name": "Shop", "rules": [{"pathPattern": "/p/*", "apiPath": "/api/p/$1"}]}

    assert validate_discovery_file(valid) is True
    assert validate_discovery_file({**valid, "icon": "https://shop.example/icon.png"}) is True
    assert validate_discovery_file(None) is False
    assert validate_discovery_file([valid]) is False
    assert validate_discovery_file({**valid, "name": 3}) is False
    assert validate_discovery_file({**valid, "rules": []}) is False
    assert validate_discovery_file({**valid, "rules": ["/p/*"]}) is False
    assert validate_discovery_file({**valid, "rules": [{"pathPattern": "/p/*"}]}) is False
    assert validate_discovery_file({**valid, "description": ["x"]}) is False


def test_parse_discovery_file():
    discovery = parse_discovery_file(
        {"name": "Shop", "description": "Snaps", "rules": [{"pathPattern": "/p/*", "apiPath": "/api/p/$1"}]}
    )
    assert discovery.name == "Shop"
    assert match_url_to_rule("/p/9", discovery.rules) == "/api/p/9"

    with pytest.raises(InvalidDiscoveryFile):
        parse_discovery_file({"name": "Shop"})
