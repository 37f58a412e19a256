"""Tests for cairn.cli._check — parsing one URL from the command line."""

import sys
import types

import pytest

from cairn.cli import main
from cairn.routing.collection import RouteCollection
from cairn.routing.route import Route


@pytest.fixture
def _fake_routes_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with a route collection on sys.modules."""
    routes = RouteCollection()
    routes.add(
        Route("/articles/view/:id", {"controller": "Articles", "action": "view"}),
        {"_name": "article"},
    )
    routes.add(Route("/admin/users", {"controller": "Users", "action": "add", "_method": "POST"}))
    routes.add(Route("/health"))

    mod = types.ModuleType("_fake_cairn_check")
    mod.routes = routes  # type: ignore[attr-defined]
    mod.missing = None  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_cairn_check", mod)


@pytest.mark.usefixtures("_fake_routes_module")
class TestCheckCommand:
    def test_prints_params(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["check", "_fake_cairn_check", "/articles/view/5?ref=home"])
        lines = capsys.readouterr().out.splitlines()

        assert [line.split(None, 1) for line in lines] == [
            ["controller", "'Articles'"],
            ["action", "'view'"],
            ["id", "'5'"],
            ["_name", "'article'"],
            ["?", "{'ref': 'home'}"],
        ]

    def test_keys_aligned(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["check", "_fake_cairn_check", "/articles/view/5"])
        lines = capsys.readouterr().out.splitlines()
        assert {line.index("'") for line in lines} == {len("controller") + 2}

    def test_route_without_params(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["check", "_fake_cairn_check", "/health"])
        captured = capsys.readouterr()
        assert captured.out.strip() == "(no parameters)"
        assert captured.err == ""

    def test_method_upper_cased(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["check", "_fake_cairn_check", "/admin/users", "--method", "post"])
        assert "'Users'" in capsys.readouterr().out

    def test_missing_route_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "_fake_cairn_check", "/admin/users"])
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.strip() == 'A "GET" route matching "/admin/users" could not be found.'

    def test_unresolvable_collection_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "_fake_cairn_check:missing", "/health"])
        assert exc_info.value.code == 1
        assert "not a RouteCollection" in capsys.readouterr().err

    def test_missing_attribute_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "_fake_cairn_check:nope", "/health"])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("Error:")
