"""Tests for cairn.http.query — immutable QueryParams."""

import pytest

from cairn.http.query import QueryParams


class TestQueryParams:
    def test_getitem(self) -> None:
        q = QueryParams(b"q=hello&page=2")
        assert q["q"] == "hello"
        assert q["page"] == "2"

    def test_missing_key_raises(self) -> None:
        q = QueryParams(b"q=hello")
        with pytest.raises(KeyError):
            q["missing"]

    def test_str_input(self) -> None:
        q = QueryParams("ref=home")
        assert q["ref"] == "home"
        assert q.raw == "ref=home"

    def test_len_and_iter(self) -> None:
        q = QueryParams(b"a=1&b=2&c=3")
        assert len(q) == 3
        assert list(q) == ["a", "b", "c"]

    def test_get_with_default(self) -> None:
        q = QueryParams(b"q=hello")
        assert q.get("q") == "hello"
        assert q.get("missing") is None
        assert q.get("missing", "fallback") == "fallback"

    def test_get_list(self) -> None:
        q = QueryParams(b"tag=python&tag=rust&q=hello")
        assert q.get_list("tag") == ["python", "rust"]
        assert q.get_list("missing") == []

    def test_blank_values_kept(self) -> None:
        assert QueryParams(b"flag=&q=x")["flag"] == ""

    def test_percent_decoding(self) -> None:
        assert QueryParams(b"name=hello%20world&x=a+b")["name"] == "hello world"
        assert QueryParams(b"x=a+b")["x"] == "a b"

    def test_empty(self) -> None:
        q = QueryParams()
        assert len(q) == 0
        assert not q
        assert q.to_dict() == {}


class TestToDict:
    def test_single_values_are_strings(self) -> None:
        assert QueryParams(b"ref=home&page=2").to_dict() == {"ref": "home", "page": "2"}

    def test_repeated_keys_are_lists(self) -> None:
        assert QueryParams(b"tag=a&q=x&tag=b").to_dict() == {"tag": ["a", "b"], "q": "x"}
