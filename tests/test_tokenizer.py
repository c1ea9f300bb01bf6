"""Tests for the command tokenizer.

Covers separators, quote stripping and retention, escapes inside quotes,
and graceful handling of malformed input.
"""

from __future__ import annotations

import pytest

from gitstorage.vcs.tokenizer import parse_command


# ---------------------------------------------------------------------------
# Separators and backslashes outside quotes
# ---------------------------------------------------------------------------


class TestSeparators:
    def test_backslash_path_outside_quotes(self):
        result = parse_command(
            "clone -b master -- git@tp.githost.io:staging/configs.git tmp\\git\\read"
        )
        assert len(result) == 6
        assert result[5] == "tmp\\git\\read"

    def test_several_spaces_collapse(self):
        result = parse_command(
            "clone -b master    --  git@tp.githost.io:staging/configs.git tmp\\git\\read "
        )
        assert result == [
            "clone",
            "-b",
            "master",
            "--",
            "git@tp.githost.io:staging/configs.git",
            "tmp\\git\\read",
        ]

    def test_leading_spaces_ignored(self):
        assert parse_command("   pull") == ["pull"]

    @pytest.mark.parametrize("command", ["", " ", "     "])
    def test_blank_input_yields_no_tokens(self, command: str):
        assert parse_command(command) == []

    def test_equals_without_quotes(self):
        assert parse_command("log -n 1 --pretty=format:%H") == [
            "log", "-n", "1", "--pretty=format:%H",
        ]


# ---------------------------------------------------------------------------
# Quoting
# ---------------------------------------------------------------------------


class TestQuotes:
    def test_author_after_equals_keeps_quotes(self):
        result = parse_command(
            'commit -m "test one" --author="Pavel Shapel <shapel@targetprocess.com>"'
        )
        assert len(result) == 4
        assert result[0] == "commit"
        assert result[1] == "-m"
        assert result[2] == "test one"
        assert result[3] == '--author="Pavel Shapel <shapel@targetprocess.com>"'

    def test_separate_author_strips_quotes(self):
        result = parse_command(
            'commit -m "test one" --author "Pavel Shapel <shapel@targetprocess.com>"'
        )
        assert len(result) == 5
        assert result[2] == "test one"
        assert result[3] == "--author"
        assert result[4] == "Pavel Shapel <shapel@targetprocess.com>"

    def test_quotes_after_closed_kept_region_are_stripped(self):
        assert parse_command('a="b c""d e"') == ['a="b c"d e']

    def test_second_equals_rearms_retention(self):
        assert parse_command('a="b"=c="d"') == ['a="b"=c="d"']

    def test_retention_does_not_leak_into_next_token(self):
        assert parse_command('x= "y z"') == ["x=", "y z"]

    def test_quoted_region_inside_token(self):
        assert parse_command('pre"mid dle"post') == ["premid dlepost"]


# ---------------------------------------------------------------------------
# Escaping inside quotes
# ---------------------------------------------------------------------------


class TestEscapes:
    def test_escaped_quote_is_literal(self):
        result = parse_command('commit -m "fi\\"d" --author')
        assert len(result) == 4
        assert result[0] == "commit"
        assert result[1] == "-m"
        assert result[2] == 'fi"d'
        assert result[3] == "--author"

    def test_backslash_as_simple_text(self):
        result = parse_command('commit -m "fid wrong path dev\\ls\\test" --author')
        assert len(result) == 4
        assert result[2] == "fid wrong path dev\\ls\\test"
        assert result[3] == "--author"

    def test_double_backslash_is_one_backslash(self):
        assert parse_command('"a\\\\b"') == ["a\\b"]

    def test_escaped_backslash_before_closing_quote(self):
        assert parse_command('"a\\\\" b') == ["a\\", "b"]

    def test_escaped_quote_inside_kept_region(self):
        assert parse_command('--author="A \\"B\\" <a@b.c>"') == [
            '--author="A "B" <a@b.c>"',
        ]


# ---------------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------------


class TestMalformed:
    def test_unterminated_quote_folds_rest(self):
        assert parse_command('commit -m "no end here') == [
            "commit", "-m", "no end here",
        ]

    def test_dangling_escape_keeps_backslash(self):
        assert parse_command('"abc\\') == ["abc\\"]

    @pytest.mark.parametrize(
        "command",
        ['"', '""', '\\', '="', '"\\"', '  "  "  ', 'a=""b', '\\"\\"'],
    )
    def test_never_raises_or_emits_empty_tokens(self, command: str):
        result = parse_command(command)
        assert all(token for token in result)
