"""Tests for the EDN reader."""

from decimal import Decimal

import pytest

from edn_tsv.reader import EdnSyntaxError, read_all, read_first
from edn_tsv.values import Char, EdnList, EdnSet, Keyword, Map, Symbol, Tagged, Vector


def read(text):
    found, value = read_first(text)
    assert found, f"No value read from {text!r}"
    return value


class TestScalars:
    """Tests for scalar literals."""

    def test_nil_and_booleans(self):
        assert read("nil") is None
        assert read("true") is True
        assert read("false") is False

    def test_integers(self):
        assert read("42") == 42
        assert read("-7") == -7
        assert read("+3") == 3
        assert read("12N") == 12

    def test_floats(self):
        assert read("1.5") == 1.5
        assert read("-2.0e3") == -2000.0
        assert read("1e2") == 100.0
        assert read("1.25M") == Decimal("1.25")

    def test_strings_with_escapes(self):
        assert read(r'"a\tb\n\"c\"\\"') == 'a\tb\n"c"\\'
        assert read(r'"é"') == "é"

    def test_characters(self):
        assert read(r"\a") == Char("a")
        assert read(r"\newline") == Char("\n")
        assert read(r"\space") == Char(" ")
        assert read(r"\u0041") == Char("A")
        assert read(r"\(") == Char("(")

    def test_keywords_and_symbols(self):
        assert read(":name") == Keyword("name")
        assert read(":user/id") == Keyword("user/id")
        assert read("foo") == Symbol("foo")
        assert read("my.ns/bar?") == Symbol("my.ns/bar?")
        assert read("-") == Symbol("-")


class TestCollections:
    """Tests for collection literals."""

    def test_list_and_vector(self):
        assert read("(1 2 3)") == EdnList([1, 2, 3])
        assert isinstance(read("(1 2 3)"), EdnList)
        assert isinstance(read("[1 2 3]"), Vector)
        assert list(read("[1, 2, 3]")) == [1, 2, 3]

    def test_map(self):
        value = read('{:a 1 "b" [2]}')
        assert isinstance(value, Map)
        assert value[Keyword("a")] == 1
        assert list(value["b"]) == [2]
        assert list(value) == ["b", Keyword("a")]

    def test_duplicate_map_key_keeps_last_value(self):
        value = read("{:a 1 :a 2}")
        assert len(value) == 1
        assert value[Keyword("a")] == 2

    def test_collections_as_map_keys(self):
        value = read("{[1 2] :v #{3} :s {:k 1} :m}")
        assert value[Vector([1, 2])] == Keyword("v")
        assert value[EdnSet([3])] == Keyword("s")
        assert value[Map([(Keyword("k"), 1)])] == Keyword("m")

    def test_set(self):
        value = read("#{1 2 2 3}")
        assert isinstance(value, EdnSet)
        assert list(value) == [1, 2, 3]

    def test_tagged(self):
        assert read('#inst "2020-01-01"') == Tagged("inst", "2020-01-01")
        assert read("#my/point [1 2]") == Tagged("my/point", Vector([1, 2]))

    def test_nested(self):
        value = read("{:a [1 (2 #{3})] :b {:c nil}}")
        assert value[Keyword("a")] == Vector([1, EdnList([2, EdnSet([3])])])
        assert value[Keyword("b")][Keyword("c")] is None


class TestValueIdentity:
    """Tests that values of different variants never merge."""

    def test_map_keys_distinguish_variants(self):
        value = read('{1 "int" true "bool" 1.0 "float" [1] "vector" (1) "list"}')
        assert len(value) == 5
        assert value[1] == "int"
        assert value[True] == "bool"
        assert value[1.0] == "float"
        assert value[Vector([1])] == "vector"
        assert value[EdnList([1])] == "list"

    def test_set_members_distinguish_variants(self):
        assert len(read("#{1 true 1.0 [1] (1)}")) == 5

    def test_nested_variants_distinct(self):
        assert read("[1]") != read("[true]")
        assert read("[1]") != read("(1)")
        assert read("#t 1") != read("#t 1.0")
        assert read("{:a 1}") != read("{:a true}")

    def test_equal_maps_ignore_written_order(self):
        assert read("{:b 1 :a 2}") == read("{:a 2 :b 1}")
        assert hash(read("{:b 1 :a 2}")) == hash(read("{:a 2 :b 1}"))
        assert read("#{3 1 2}") == read("#{1 2 3}")

    def test_map_iterates_in_canonical_order(self):
        value = read('{[0] 1 :k 2 "s" 3 7 4 nil 5 false 6}')
        assert list(value) == [None, False, "s", Keyword("k"), 7, Vector([0])]


class TestNoValue:
    """Tests for text that holds no value."""

    @pytest.mark.parametrize("text", ["", "   ", ",,", "; just a comment", "#_ :ignored"])
    def test_no_value(self, text):
        assert read_first(text) == (False, None)

    def test_nil_is_a_value(self):
        assert read_first("nil") == (True, None)

    def test_discard_inside_collection(self):
        assert read("[1 #_2 3]") == Vector([1, 3])

    def test_trailing_content_not_examined(self):
        assert read("{:a 1} ]") == Map([(Keyword("a"), 1)])

    def test_read_all(self):
        assert read_all("1 :a ; comment") == [1, Keyword("a")]


class TestErrors:
    """Tests for syntax errors and their offsets."""

    def test_odd_map_reports_map_span(self):
        with pytest.raises(EdnSyntaxError) as exc_info:
            read_first("{:a }")
        assert exc_info.value.lo == 0
        assert exc_info.value.hi == 5
        assert "even number" in exc_info.value.message

    def test_unexpected_end_of_input(self):
        with pytest.raises(EdnSyntaxError, match="Unexpected end of input") as exc_info:
            read_first("[1 2")
        assert exc_info.value.lo == exc_info.value.hi == 4

    def test_unmatched_delimiter(self):
        with pytest.raises(EdnSyntaxError, match="Unmatched delimiter") as exc_info:
            read_first("  )")
        assert (exc_info.value.lo, exc_info.value.hi) == (2, 3)

    def test_offsets_are_bytes(self):
        with pytest.raises(EdnSyntaxError) as exc_info:
            read_first('["é" )')
        assert (exc_info.value.lo, exc_info.value.hi) == (6, 7)

    def test_unterminated_string(self):
        with pytest.raises(EdnSyntaxError, match="Unterminated string"):
            read_first('"abc')

    def test_invalid_escape(self):
        with pytest.raises(EdnSyntaxError, match="Invalid escape"):
            read_first(r'"\q"')

    @pytest.mark.parametrize("text", ["1abc", "::a", "#1 x", r"\bogus"])
    def test_invalid_tokens(self, text):
        with pytest.raises(EdnSyntaxError):
            read_first(text)

    def test_tag_without_value(self):
        with pytest.raises(EdnSyntaxError, match="expected a value"):
            read_first("#inst")

    def test_str_includes_offsets(self):
        error = EdnSyntaxError(1, 4, "boom")
        assert str(error) == "(1, 4): boom"
