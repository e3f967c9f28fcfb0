"""Tests for placeholder syntax and template parsing."""

import pytest

from esquery.placeholders import (
    NamedParameter,
    PlaceholderParser,
    PlaceholderType,
)
from esquery.placeholders.syntax import (
    POSITIONAL_PATTERN,
    build_named_pattern,
    is_valid_parameter_name,
)


class TestPlaceholderSyntax:
    """Test placeholder syntax utilities."""

    def test_positional_pattern_takes_whole_digit_run(self):
        """Test ?12 is matched as index 12, never as ?1 followed by 2."""
        matches = [m.group(1) for m in POSITIONAL_PATTERN.finditer("?1 ?12 ?123")]
        assert matches == ["1", "12", "123"]

    def test_positional_pattern_ascii_digits_only(self):
        """Test non-ASCII decimal digits never form an index."""
        assert POSITIONAL_PATTERN.search("?٣ ?１") is None
        assert POSITIONAL_PATTERN.search("?1٣").group(1) == "1"

    def test_positional_pattern_ignores_bare_marker(self):
        """Test a question mark without digits is not a placeholder."""
        assert POSITIONAL_PATTERN.search("is it? ?x") is None

    def test_build_named_pattern_prefers_longest_token(self):
        """Test a prefix token does not shadow a longer token."""
        pattern = build_named_pattern([":name", ":nameLong"])
        assert [m.group(0) for m in pattern.finditer(":nameLong :name")] == [
            ":nameLong",
            ":name",
        ]

    def test_build_named_pattern_escapes_tokens(self):
        """Test tokens with regex metacharacters are matched literally."""
        pattern = build_named_pattern(["#{name}"])
        assert pattern.search('{"x": "#{name}"}').group(0) == "#{name}"
        assert pattern.search("#name") is None

    def test_build_named_pattern_empty(self):
        """Test no tokens gives no pattern."""
        assert build_named_pattern([]) is None

    def test_is_valid_parameter_name(self):
        """Test parameter name validation."""
        assert is_valid_parameter_name("lastname") is True
        assert is_valid_parameter_name("_private") is True
        assert is_valid_parameter_name("name2") is True

        assert is_valid_parameter_name("") is False
        assert is_valid_parameter_name("2name") is False
        assert is_valid_parameter_name("last-name") is False


class TestPlaceholderParser:
    """Test placeholder parser."""

    def test_extract_positional_placeholder(self):
        """Test extracting a single positional placeholder."""
        parser = PlaceholderParser()
        template = '{"match": {"name": "?0"}}'

        placeholders = parser.extract_placeholders(template)

        assert len(placeholders) == 1
        assert placeholders[0].token == "?0"
        assert placeholders[0].type == PlaceholderType.POSITIONAL
        assert placeholders[0].index == 0
        assert template[placeholders[0].start_pos : placeholders[0].end_pos] == "?0"

    def test_extract_repeated_and_multi_digit(self):
        """Test repeated occurrences and multi-digit indexes are all found."""
        parser = PlaceholderParser()

        placeholders = parser.extract_positional("?1 ?12 ?1")

        assert [p.index for p in placeholders] == [1, 12, 1]

    def test_extract_no_placeholders(self):
        """Test a template without placeholders yields nothing."""
        parser = PlaceholderParser()
        assert parser.extract_placeholders('{"match_all": {}}') == []

    def test_extract_named_placeholders(self):
        """Test extracting declared named placeholders."""
        parser = PlaceholderParser()
        params = [NamedParameter(name="lastname", index=1)]

        placeholders = parser.extract_placeholders(
            '{"match": {"lastname": ":lastname"}}', params
        )

        assert len(placeholders) == 1
        assert placeholders[0].type == PlaceholderType.NAMED
        assert placeholders[0].name == "lastname"
        assert placeholders[0].index == 1

    def test_extract_named_ignores_undeclared_tokens(self):
        """Test tokens nobody declares are not extracted."""
        parser = PlaceholderParser()
        params = [NamedParameter(name="a", index=0)]

        placeholders = parser.extract_named(":a :b", params)

        assert [p.token for p in placeholders] == [":a"]

    def test_extract_named_first_declaration_wins(self):
        """Test duplicate tokens resolve to the first declared parameter."""
        parser = PlaceholderParser()
        params = [
            NamedParameter(name="a", index=0, placeholder=":x"),
            NamedParameter(name="b", index=1, placeholder=":x"),
        ]

        placeholders = parser.extract_named(":x", params)

        assert placeholders[0].index == 0

    def test_find_undeclared_names(self):
        """Test undeclared :name tokens are reported once each."""
        parser = PlaceholderParser()
        params = [NamedParameter(name="a", index=0)]
        template = ":a :b :b :c"

        placeholders = parser.extract_named(template, params)

        assert parser.find_undeclared_names(template, placeholders) == ["b", "c"]

    def test_find_undeclared_names_skips_numbers(self):
        """Test numeric colons such as times are not treated as names."""
        parser = PlaceholderParser()
        assert parser.find_undeclared_names('{"at": "10:30", "n": 1}', []) == []

    def test_find_undeclared_names_custom_prefix(self):
        """Test undeclared names are found with the prefix in use."""
        parser = PlaceholderParser()
        params = [NamedParameter(name="a", index=0, placeholder="@a")]
        template = '{"x":"@a","y":"@b","active":true}'

        placeholders = parser.extract_named(template, params)

        assert parser.find_undeclared_names(template, placeholders, prefix="@") == ["b"]

    def test_get_referenced_indexes(self):
        """Test distinct referenced indexes are reported sorted."""
        parser = PlaceholderParser()
        assert parser.get_referenced_indexes("?2 ?0 ?2 ?10") == [0, 2, 10]


class TestNamedParameter:
    """Test named parameter model."""

    def test_default_placeholder(self):
        """Test the placeholder token defaults to :name."""
        assert NamedParameter(name="lastname", index=0).placeholder == ":lastname"

    def test_explicit_placeholder(self):
        """Test an explicit token is kept."""
        param = NamedParameter(name="lastname", index=0, placeholder="$lastname")
        assert param.placeholder == "$lastname"

    def test_negative_index_rejected(self):
        """Test indexes are non-negative."""
        with pytest.raises(ValueError):
            NamedParameter(name="x", index=-1)
