# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for the INI parser."""

import io
import logging

import pytest

from genro_configtree import (
    ConfigFileError,
    ConfigTree,
    DuplicateKeyError,
    ErrorKind,
    KeyCollisionError,
    KeyNotFoundError,
    UInt,
    read_ini_file,
    read_ini_string,
    read_ini_tree,
)

SAMPLE = (
    "x1 = 1 # comment\n"
    "x2 = hallo\n"
    "x3 = no\n"
    "array = 1   2 3 4 5\t6 7 8\n"
    "\n"
    "[Foo]\n"
    "peng = ligapokal\n"
)

FRUIT = """\
# this file configures fruit colors in fruitsalad

#these are no fruit but could also appear in fruit salad
honeydewmelon = yellow
watermelon = green

fruit.tropicalfruit.orange = orange

[fruit]
strawberry = red
pomegranate = red

[fruit.pipfruit]
apple = green/red/yellow
pear = green

[fruit.stonefruit]
cherry = red
plum = purple
"""


class TestReadIniTree:
    """Tests for parsing INI text."""

    def test_sample(self):
        """Test the basic example reads back as typed values."""
        tree = ConfigTree()
        read_ini_tree(io.StringIO(SAMPLE), tree)
        assert tree.get('x1', type_=int) == 1
        assert tree.get('x2', type_=str) == 'hallo'
        assert tree.get('x3', type_=bool) is False
        array = tree.get('array', type_=list[UInt])
        assert len(array) == 8
        assert array == [1, 2, 3, 4, 5, 6, 7, 8]
        assert tree.has_sub('Foo')
        assert tree.get('Foo.peng', type_=str) == 'ligapokal'
        with pytest.raises(KeyNotFoundError):
            tree.get('bar', type_=int)

    def test_sections_build_prefixes(self):
        """Test [prefix] lines apply to following keys."""
        tree = ConfigTree()
        read_ini_string(FRUIT, tree)
        assert tree.value_keys() == ['honeydewmelon', 'watermelon']
        assert tree.sub_keys() == ['fruit']
        assert tree.sub('fruit').value_keys() == ['strawberry', 'pomegranate']
        assert tree.sub('fruit').sub_keys() == ['tropicalfruit', 'pipfruit', 'stonefruit']
        assert tree['fruit.tropicalfruit.orange'] == 'orange'
        assert tree['fruit.pipfruit.apple'] == 'green/red/yellow'
        assert tree['fruit.stonefruit.plum'] == 'purple'

    def test_empty_section_clears_prefix(self):
        """Test [] returns to the root."""
        tree = ConfigTree()
        read_ini_string("[a]\nx = 1\n[]\ny = 2\n", tree)
        assert tree['a.x'] == '1'
        assert tree['y'] == '2'

    def test_section_creates_subtree(self):
        """Test a section header alone creates an empty subtree."""
        tree = ConfigTree()
        read_ini_string("[ empty.section ]\n", tree)
        assert tree.has_sub('empty.section')
        assert len(tree.sub('empty.section')) == 0

    def test_value_trimmed_and_comment_stripped(self):
        """Test unquoted values lose blanks and trailing comments."""
        tree = ConfigTree()
        read_ini_string("  key   =   some value   # note\nempty =\n", tree)
        assert tree['key'] == 'some value'
        assert tree['empty'] == ''

    def test_quoted_value_keeps_blanks_and_hash(self):
        """Test quotes keep surrounding blanks and # characters."""
        tree = ConfigTree()
        read_ini_string(
            "a = '  spaced  '\n"
            'b = "color #fff"\n'
            'c = "x" # trailing comment\n'
            'd = ""\n',
            tree,
        )
        assert tree['a'] == '  spaced  '
        assert tree['b'] == 'color #fff'
        assert tree['c'] == 'x'
        assert tree['d'] == ''

    def test_quoted_multiline_value(self):
        """Test quoted values can span several lines."""
        tree = ConfigTree()
        read_ini_string(
            'text = "first line\n'
            '  second line\n'
            'third"\n'
            'after = 1\n',
            tree,
        )
        assert tree['text'] == 'first line\n  second line\nthird'
        assert tree['after'] == '1'

    def test_quote_comment_only_closes_first_line(self):
        """Test a quote followed by # on a continuation line is value text."""
        tree = ConfigTree()
        read_ini_string(
            'text = "first\n'
            'say "hi" # twice\n'
            'end"\n'
            'after = 1\n',
            tree,
        )
        assert tree['text'] == 'first\nsay "hi" # twice\nend'
        assert tree['after'] == '1'

    def test_quote_comment_on_first_line_closes(self):
        """Test a quote followed by # on the opening line ends the value."""
        tree = ConfigTree()
        read_ini_string('text = "a" # b\nc"\n', tree)
        assert tree['text'] == 'a'
        assert tree.value_keys() == ['text']

    def test_report_round_trip_with_quote_comment_on_later_line(self):
        """Test a value with a quote and # on a later line reads back."""
        tree = ConfigTree()
        tree['text'] = 'x\na" # b\nc'
        copy = ConfigTree()
        read_ini_string(str(tree), copy)
        assert copy == tree

    def test_unterminated_quote_runs_to_end(self, caplog):
        """Test an unterminated quote takes the rest of the input."""
        tree = ConfigTree()
        with caplog.at_level(logging.WARNING, logger='genro_configtree.parsers.ini'):
            read_ini_string("text = 'open\nrest\n", tree)
        assert tree['text'] == 'open\nrest'
        assert 'Unterminated quoted value' in caplog.text

    def test_comment_and_invalid_lines_are_skipped(self, caplog):
        """Test comments, lines without '=' and bad headers are ignored."""
        tree = ConfigTree()
        with caplog.at_level(logging.WARNING, logger='genro_configtree.parsers.ini'):
            read_ini_string(
                "# full comment\n"
                "   # indented comment\n"
                "no assignment here\n"
                "commented # = value\n"
                "[broken\n"
                "key = value\n",
                tree,
            )
        assert tree.value_keys() == ['key']
        assert tree.sub_keys() == []
        assert 'without assignment' in caplog.text
        assert 'malformed section' in caplog.text

    def test_accepts_list_of_lines(self):
        """Test any iterable of lines can be parsed."""
        tree = ConfigTree()
        read_ini_tree(['a = 1', '[s]', 'b = 2'], tree)
        assert tree['a'] == '1'
        assert tree['s.b'] == '2'

    def test_duplicate_key_raises(self):
        """Test the same key twice in one source is an error."""
        tree = ConfigTree()
        with pytest.raises(DuplicateKeyError, match="Key 'Foo.a' appears twice in stream") as excinfo:
            read_ini_tree(io.StringIO("[Foo]\na = 1\n[]\nFoo.a = 2\n"), tree)
        assert excinfo.value.kind is ErrorKind.DUPLICATE_KEY

    def test_overwrite_replaces_existing(self):
        """Test overwrite=True replaces values already in the tree."""
        tree = ConfigTree({'a': 'old', 'b': 'keep'})
        read_ini_string("a = new\nc = added\n", tree, overwrite=True)
        assert tree['a'] == 'new'
        assert tree['b'] == 'keep'
        assert tree['c'] == 'added'

    def test_no_overwrite_keeps_existing(self):
        """Test overwrite=False leaves present values and adds new ones."""
        tree = ConfigTree({'a': 'old'})
        read_ini_string("a = new\nc = added\n", tree, overwrite=False)
        assert tree['a'] == 'old'
        assert tree['c'] == 'added'

    def test_reparsing_same_source_is_not_duplicate(self):
        """Test duplicates are only detected within one source."""
        tree = ConfigTree()
        read_ini_string("a = 1\n", tree)
        read_ini_string("a = 2\n", tree)
        assert tree['a'] == '2'

    def test_collision_in_source(self):
        """Test a key used as both value and section fails."""
        tree = ConfigTree()
        with pytest.raises(KeyCollisionError):
            read_ini_string("a = 1\n[a]\nb = 2\n", tree)


class TestReadIniFile:
    """Tests for reading INI files."""

    def test_read_file(self, tmp_path):
        """Test reading a file from disk."""
        path = tmp_path / 'fruit.ini'
        path.write_text(FRUIT, encoding='utf-8')
        tree = ConfigTree()
        read_ini_file(path, tree)
        assert tree['fruit.pipfruit.pear'] == 'green'

    def test_read_file_accepts_str_path(self, tmp_path):
        """Test a string path works too."""
        path = tmp_path / 'sample.ini'
        path.write_text(SAMPLE, encoding='utf-8')
        tree = ConfigTree()
        read_ini_file(str(path), tree)
        assert tree['Foo.peng'] == 'ligapokal'

    def test_duplicate_names_the_file(self, tmp_path):
        """Test duplicate key errors name the file."""
        path = tmp_path / 'dup.ini'
        path.write_text("a = 1\na = 2\n", encoding='utf-8')
        with pytest.raises(DuplicateKeyError, match="appears twice in file '.*dup.ini'"):
            read_ini_file(path, ConfigTree())

    def test_missing_file_raises(self, tmp_path):
        """Test a missing file raises ConfigFileError chained from OSError."""
        path = tmp_path / 'missing.ini'
        with pytest.raises(ConfigFileError, match='Could not open configuration file') as excinfo:
            read_ini_file(path, ConfigTree())
        assert excinfo.value.kind is ErrorKind.IO_FAILURE
        assert isinstance(excinfo.value.__cause__, OSError)
