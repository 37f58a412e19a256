"""Tests for cairn.cli._routes — the ``cairn routes`` table."""

import sys
import types

import pytest

from cairn.cli import main
from cairn.routing.collection import RouteCollection
from cairn.routing.route import Route


@pytest.fixture
def _fake_routes_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with route collections on sys.modules."""

    async def auth(request, next):
        return await next(request)

    routes = RouteCollection()
    routes.add(
        Route("/articles/view/:id", {"controller": "Articles", "action": "view"}),
        {"_name": "article"},
    )
    routes.add(
        Route("/admin/users", {"controller": "Users", "action": "add", "_method": ["POST", "put"]})
    )
    routes.add(Route("/health"))
    routes.register_middleware("auth", auth)
    routes.enable_middleware("/admin", "auth")

    mod = types.ModuleType("_fake_cairn_table")
    mod.routes = routes  # type: ignore[attr-defined]
    mod.empty = RouteCollection()  # type: ignore[attr-defined]
    mod.not_routes = 42  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_cairn_table", mod)


@pytest.mark.usefixtures("_fake_routes_module")
class TestRoutesCommand:
    def test_header_and_separator(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_cairn_table"])
        lines = capsys.readouterr().out.splitlines()

        assert lines[0].split() == ["TEMPLATE", "NAME", "EXPLICIT", "METHODS", "MIDDLEWARE"]
        assert set(lines[1]) == {"-"}
        assert len(lines) == 5

    def test_rows_in_connect_order(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_cairn_table"])
        rows = [line.split("  ") for line in capsys.readouterr().out.splitlines()[2:]]
        cells = [[cell.strip() for cell in row if cell.strip()] for row in rows]

        assert cells[0] == ["/articles/view/:id", "articles:view", "article", "ANY", "-"]
        assert cells[1] == ["/admin/users", "users:add", "-", "POST, PUT", "auth"]
        assert cells[2] == ["/health", "-", "-", "ANY", "-"]

    def test_empty_collection(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_cairn_table:empty"])
        assert capsys.readouterr().out.strip() == "No routes connected."

    def test_wrong_type_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "_fake_cairn_table:not_routes"])
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "not a RouteCollection" in captured.err

    def test_missing_module_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "nonexistent_module_xyz:routes"])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("Error:")
