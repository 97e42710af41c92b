"""Tests for the sort-key tokenizer."""

import pytest

from shopfront.domain.keys import SortKey, parse_sort_key, parse_sort_keys, split_keys


class TestSplitKeys:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("code", ["code"]),
            ("code,-position", ["code", "-position"]),
            ("+code,-position,name", ["+code", "-position", "name"]),
            ('sort:fn("a,b)",1),-x', ['sort:fn("a,b)",1)', "-x"]),
            (
                r'sort:index.text:relevance("de","test(\"\")"),-code',
                [r'sort:index.text:relevance("de","test(\"\")")', "-code"],
            ),
            ('supplier:has("media","default"),code', ['supplier:has("media","default")', "code"]),
            ("fn(1,2),x", ["fn(1,2)", "x"]),
        ],
    )
    def test_splits(self, raw: str, expected: list[str]) -> None:
        assert split_keys(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", ",,,"])
    def test_empty_input(self, raw: str | None) -> None:
        assert split_keys(raw) == []

    def test_whitespace_trimmed(self) -> None:
        assert split_keys(" code , -position ") == ["code", "-position"]

    def test_empty_tokens_dropped(self) -> None:
        assert split_keys("code,,name,") == ["code", "name"]

    def test_unterminated_quote_does_not_raise(self) -> None:
        assert split_keys('fn("a,b') == ["fn", '"a', "b"]

    def test_unbalanced_paren_does_not_raise(self) -> None:
        assert split_keys("fn(a,b") == ["fn", "a", "b"]

    def test_tokens_have_no_trailing_comma(self) -> None:
        for token in split_keys('a,b(",",1),c'):
            assert not token.endswith(",")


class TestParseSortKey:
    def test_ascending_without_prefix(self) -> None:
        key = parse_sort_key("code")
        assert key == SortKey(raw="code", direction="+", name="code")
        assert key.descending is False

    def test_plus_prefix(self) -> None:
        assert parse_sort_key("+code").name == "code"
        assert parse_sort_key("+code").direction == "+"

    def test_minus_prefix(self) -> None:
        key = parse_sort_key("-position")
        assert key.direction == "-"
        assert key.name == "position"
        assert key.descending is True

    def test_function_name_kept(self) -> None:
        key = parse_sort_key('-supplier:has("media")')
        assert key.name == 'supplier:has("media")'

    def test_parse_sort_keys(self) -> None:
        keys = parse_sort_keys("code,-position")
        assert [(k.direction, k.name) for k in keys] == [("+", "code"), ("-", "position")]
