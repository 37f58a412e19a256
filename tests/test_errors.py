"""Tests for cairn.errors — exception hierarchy and error messages."""

import pytest

from cairn.errors import (
    CairnError,
    ConfigurationError,
    DuplicateNamedRouteError,
    HTTPError,
    MissingRouteError,
    NotFound,
)
from cairn.routing.route import Route


class TestHierarchy:
    def test_http_error_is_cairn_error(self) -> None:
        assert issubclass(HTTPError, CairnError)

    def test_not_found_is_http_error(self) -> None:
        assert issubclass(NotFound, HTTPError)

    def test_missing_route_is_not_found(self) -> None:
        assert issubclass(MissingRouteError, NotFound)

    def test_duplicate_name_is_configuration_error(self) -> None:
        assert issubclass(DuplicateNamedRouteError, ConfigurationError)
        assert issubclass(ConfigurationError, CairnError)


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=400, detail="Bad request")) == "400: Bad request"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_frozen(self) -> None:
        err = HTTPError(status=400)
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]

    def test_not_found_defaults(self) -> None:
        err = NotFound()
        assert err.status == 404
        assert err.detail == "Not Found"


class TestDuplicateNamedRouteError:
    def test_message_and_attributes(self) -> None:
        route = Route("/blog", {"controller": "Posts", "action": "index"})
        err = DuplicateNamedRouteError("blog", "/blog", route)
        assert str(err) == 'A route named "blog" has already been connected to "/blog".'
        assert err.name == "blog"
        assert err.url == "/blog"
        assert err.duplicate is route


class TestMissingRouteError:
    def test_url_only(self) -> None:
        err = MissingRouteError("/nowhere")
        assert err.status == 404
        assert err.detail == 'A route matching "/nowhere" could not be found.'
        assert err.properties == {"url": "/nowhere"}
        assert err.params is None
        assert err.context is None

    def test_with_method(self) -> None:
        err = MissingRouteError("/articles", method="PUT")
        assert err.detail == 'A "PUT" route matching "/articles" could not be found.'
        assert list(err.properties) == ["method", "url"]

    def test_reverse_lookup_diagnostics(self) -> None:
        err = MissingRouteError(
            "posts:index",
            params={"controller": "Posts"},
            context={"_base": "/app"},
        )
        assert err.params == {"controller": "Posts"}
        assert err.properties == {
            "url": "posts:index",
            "params": {"controller": "Posts"},
            "context": {"_base": "/app"},
        }
        assert list(err.properties) == ["url", "params", "context"]

    def test_copies_params(self) -> None:
        params = {"controller": "Posts"}
        err = MissingRouteError("x", params=params)
        params["action"] = "index"
        assert err.params == {"controller": "Posts"}

    def test_raised_and_caught_as_not_found(self) -> None:
        with pytest.raises(NotFound) as exc_info:
            raise MissingRouteError("/gone")
        assert str(exc_info.value) == '404: A route matching "/gone" could not be found.'
