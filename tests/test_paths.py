import pytest

from content_service.domain.exceptions import ValidationError
from content_service.domain.invariants.path import (
    assert_title,
    derive_path,
    normalize_path,
    resolve_path,
)


@pytest.mark.parametrize("title, expected", [
    ("Hello World", "/hello-world"),
    ("my blog post", "/my-blog-post"),
    ("Hello! World@2024", "/hello-world2024"),
    ("hello_world_test", "/hello-world-test"),
    ("hello---world", "/hello-world"),
    ("  -hello world-  ", "/hello-world"),
    ("Product 123 Sale", "/product-123-sale"),
    ("café résumé", "/cafe-resume"),
])
def test_derive_path_from_title(title, expected):
    assert derive_path(title) == expected


def test_derive_path_rejects_title_without_usable_characters():
    with pytest.raises(ValidationError):
        derive_path("!@#$%^&*()")


@pytest.mark.parametrize("raw, expected", [
    ("/about", "/about"),
    ("about", "/about"),
    ("/About-Us", "/about-us"),
    ("/blog/my-post/", "/blog/my-post"),
    ("  /blog/my-post  ", "/blog/my-post"),
    ("/", "/"),
])
def test_normalize_path(raw, expected):
    assert normalize_path(raw) == expected


@pytest.mark.parametrize("raw", [
    "",
    "   ",
    "/with space",
    "/under_score",
    "/double//slash",
    "/-leading-hyphen",
    "/trailing-hyphen-",
    "/a--b",
    "/query?x=1",
    "/" + "a" * 250,
    None,
    42,
])
def test_normalize_path_rejects_malformed_input(raw):
    with pytest.raises(ValidationError):
        normalize_path(raw)


def test_resolve_path_prefers_explicit_path():
    assert resolve_path("Hello World", "/custom") == "/custom"
    assert resolve_path("Hello World") == "/hello-world"


def test_explicit_path_goes_through_the_same_grammar_as_derived():
    with pytest.raises(ValidationError):
        resolve_path("Hello World", "Not A Path!")


def test_assert_title():
    assert assert_title("  Home  ") == "Home"

    for bad in ("", "   ", None, "x" * 201):
        with pytest.raises(ValidationError):
            assert_title(bad)
