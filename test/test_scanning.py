# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


import sys
import os

if all(os.path.isdir(x) for x in ('strict_yaml', 'test')):
    sys.path.insert(0, '.')

import strict_yaml.scanning as mdl
import strict_yaml.erring as err

import pytest


def token_types(s):
    return [t.type for t in mdl.Scanner(s)]

def scalar_tokens(s):
    return [(t.value, t.style) for t in mdl.Scanner(s) if t.type == mdl.SCALAR]




def test_mapping_tokens():
    assert(token_types('a: b') == ['stream_start', 'block_mapping_start',
                                   'key', 'scalar', 'value', 'scalar',
                                   'block_end', 'stream_end'])
    tokens = list(mdl.Scanner('a: b'))
    assert((tokens[3].lineno, tokens[3].colno) == (1, 1))
    assert((tokens[4].lineno, tokens[4].colno) == (1, 2))
    assert((tokens[5].lineno, tokens[5].colno) == (1, 4))


def test_sequence_tokens():
    assert(token_types('- a\n- b') == ['stream_start', 'block_sequence_start',
                                       'block_entry', 'scalar',
                                       'block_entry', 'scalar',
                                       'block_end', 'stream_end'])
    assert(token_types('- - a') == ['stream_start', 'block_sequence_start',
                                    'block_entry', 'block_sequence_start',
                                    'block_entry', 'scalar',
                                    'block_end', 'block_end', 'stream_end'])


def test_indentless_sequence_tokens():
    assert(token_types('key:\n- a\n- b') == ['stream_start', 'block_mapping_start',
                                             'key', 'scalar', 'value',
                                             'block_sequence_start',
                                             'block_entry', 'scalar',
                                             'block_entry', 'scalar',
                                             'block_end', 'block_end', 'stream_end'])


def test_document_marker_tokens():
    assert(token_types('---\na\n...\n') == ['stream_start', 'document_start',
                                            'scalar', 'document_end', 'stream_end'])
    assert(token_types('') == ['stream_start', 'stream_end'])
    assert(token_types('# only a comment\n\n') == ['stream_start', 'stream_end'])
    assert(scalar_tokens('---This') == [('---This', 'plain')])
    assert(scalar_tokens('----') == [('----', 'plain')])


def test_empty_flow_collection_markers():
    assert(token_types('a: []') == ['stream_start', 'block_mapping_start',
                                    'key', 'scalar', 'value',
                                    'block_sequence_start', 'block_end',
                                    'block_end', 'stream_end'])
    assert(token_types('- {}  # empty') == ['stream_start', 'block_sequence_start',
                                            'block_entry', 'block_mapping_start', 'block_end',
                                            'block_end', 'stream_end'])


def test_peek_is_lazy_and_stable():
    scanner = mdl.Scanner('a: b\nc: d')
    assert(scanner.peek_token().type == 'stream_start')
    assert(scanner.next_token().type == 'stream_start')
    assert(scanner.peek_token() is scanner.next_token())
    for token in scanner:
        pass
    assert(scanner.next_token() is None)
    assert(scanner.peek_token() is None)


def test_plain_scalars():
    assert(scalar_tokens('a: b c  ') == [('a', 'plain'), ('b c', 'plain')])
    assert(scalar_tokens('a: b # comment') == [('a', 'plain'), ('b', 'plain')])
    assert(scalar_tokens('a: b#c') == [('a', 'plain'), ('b#c', 'plain')])
    assert(scalar_tokens('url: http://example.com') == [('url', 'plain'), ('http://example.com', 'plain')])
    assert(scalar_tokens('a: -1') == [('a', 'plain'), ('-1', 'plain')])
    assert(scalar_tokens('a: 1.0') == [('a', 'plain'), ('1.0', 'plain')])
    assert(scalar_tokens('a: one\n  two\n\n  three\n') == [('a', 'plain'), ('one two\nthree', 'plain')])


def test_quoted_scalars():
    assert(scalar_tokens("a: 'it''s'") == [('a', 'plain'), ("it's", 'single_quoted')])
    assert(scalar_tokens("a: ''") == [('a', 'plain'), ('', 'single_quoted')])
    assert(scalar_tokens('a: "tab\\there \\u00e9 \\x41 \\U0001F600"') == [('a', 'plain'), ('tab\there \u00e9 A \U0001F600', 'double_quoted')])
    assert(scalar_tokens('a: "\\0\\a\\b\\v\\f\\r\\e\\ \\"\\/\\\\\\N\\_\\L\\P"') == [('a', 'plain'), ('\x00\x07\x08\x0b\x0c\r\x1b "/\\\x85\xa0\u2028\u2029', 'double_quoted')])
    assert(scalar_tokens("'a: b': c") == [('a: b', 'single_quoted'), ('c', 'plain')])
    assert(scalar_tokens('"k" : v # c') == [('k', 'double_quoted'), ('v', 'plain')])


def test_multiline_quoted_scalars():
    assert(scalar_tokens('a: "one\n  two"') == [('a', 'plain'), ('one two', 'double_quoted')])
    assert(scalar_tokens("a: 'one\n\n  two'") == [('a', 'plain'), ('one\ntwo', 'single_quoted')])
    assert(scalar_tokens('a: "one\\\n  two"') == [('a', 'plain'), ('onetwo', 'double_quoted')])


def test_block_scalars():
    assert(scalar_tokens('a: |\n  one\n  two\n') == [('a', 'plain'), ('one\ntwo\n', 'literal')])
    assert(scalar_tokens('a: >\n  one\n  two\n\n  three\n') == [('a', 'plain'), ('one two\nthree\n', 'folded')])
    assert(scalar_tokens('a: |-\n  one\n') == [('a', 'plain'), ('one', 'literal')])
    assert(scalar_tokens('a: |+\n  one\n\n') == [('a', 'plain'), ('one\n\n', 'literal')])
    assert(scalar_tokens('a: |1\n  one\n') == [('a', 'plain'), (' one\n', 'literal')])
    assert(scalar_tokens('a: |-2 # comment\n    one\n') == [('a', 'plain'), ('  one', 'literal')])
    assert(scalar_tokens('a: |\n  one\n    two\nb: c\n') == [('a', 'plain'), ('one\n  two\n', 'literal'),
                                                          ('b', 'plain'), ('c', 'plain')])
    assert(scalar_tokens('a: |\nb: c') == [('a', 'plain'), ('', 'literal'), ('b', 'plain'), ('c', 'plain')])


def test_whitespace_only_block_scalars():
    assert(scalar_tokens('a: |\n  \n  \n') == [('a', 'plain'), ('', 'literal')])
    assert(scalar_tokens('a: >\n   \n') == [('a', 'plain'), ('', 'folded')])
    assert(scalar_tokens('a: |+\n  \n  \n') == [('a', 'plain'), ('\n\n', 'literal')])
    assert(scalar_tokens('a: |\n  \n  \nb: c') == [('a', 'plain'), ('', 'literal'), ('b', 'plain'), ('c', 'plain')])
    assert(scalar_tokens('|\n ') == [('', 'literal')])
    assert(scalar_tokens('|\n  ') == [('', 'literal')])


def test_document_level_indentation_indicator():
    assert(scalar_tokens('--- |1\n x\n') == [('x\n', 'literal')])
    assert(scalar_tokens('--- |2\n   x\n') == [(' x\n', 'literal')])
    assert(scalar_tokens('--- >2\n  a\n  b\n') == [('a b\n', 'folded')])
    assert(scalar_tokens('a: |1\n  x') == [('a', 'plain'), (' x', 'literal')])


def test_source_normalization():
    assert(scalar_tokens('\ufeffa: b\r\nc: d\re: f') == [('a', 'plain'), ('b', 'plain'),
                                                         ('c', 'plain'), ('d', 'plain'),
                                                         ('e', 'plain'), ('f', 'plain')])
    assert(scalar_tokens(b'\xef\xbb\xbfa: \xc3\xa9') == [('a', 'plain'), ('\u00e9', 'plain')])


def test_invalid_literals():
    with pytest.raises(err.InvalidLiteralError) as e:
        list(mdl.Scanner('a: b\x01'))
    assert((e.value.line, e.value.column) == (1, 5))
    with pytest.raises(err.InvalidLiteralError):
        list(mdl.Scanner('a: b\n\x7f'))
    with pytest.raises(err.SourceDecodeError) as e:
        list(mdl.Scanner(b'a: b\nc: \xff'))
    assert((e.value.line, e.value.column) == (2, 4))
    assert(isinstance(e.value, err.ScanError))
    with pytest.raises(TypeError):
        mdl.Scanner(1)


def test_scan_errors():
    with pytest.raises(err.IndentationError) as e:
        list(mdl.Scanner('a:\n\tb: c'))
    assert((e.value.line, e.value.column) == (2, 1))
    with pytest.raises(err.IndentationError):
        list(mdl.Scanner('a:\n    b: 1\n  c: 2'))
    with pytest.raises(err.ScanError):
        list(mdl.Scanner('a: "abc'))
    with pytest.raises(err.ScanError):
        list(mdl.Scanner('a: "\\q"'))
    with pytest.raises(err.ScanError):
        list(mdl.Scanner('a: "\\UFFFFFFFF"'))
    with pytest.raises(err.ScanError):
        list(mdl.Scanner('a: "\\U00110000"'))
    with pytest.raises(err.ScanError):
        list(mdl.Scanner('a: b: c'))
    with pytest.raises(err.ScanError):
        list(mdl.Scanner('a: - b'))
    with pytest.raises(err.ScanError):
        list(mdl.Scanner('a: "x" y'))
    with pytest.raises(err.ScanError):
        list(mdl.Scanner('a: |x\n  b'))
    with pytest.raises(err.ScanError):
        list(mdl.Scanner(': b'))
    with pytest.raises(err.ScanError):
        list(mdl.Scanner('a: 1\n b: 2'))
    with pytest.raises(err.ScanError):
        list(mdl.Scanner('--- a: b'))
    with pytest.raises(err.ScanError):
        list(mdl.Scanner('a\n... b'))
    with pytest.raises(err.ScanError):
        list(mdl.Scanner('"a"\nb'))


def test_forbidden_constructs():
    for s in ('[1, 2]', 'a: [b]', 'a: {b: c}', 'a: &x b', 'a: *x', 'a: !!str 0',
              '%YAML 1.2\n---\na: b', '? a\n: b', 'a: @b', 'a: `b`', '- ,',
              '&x a: b'):
        with pytest.raises(err.ForbiddenConstructError):
            list(mdl.Scanner(s))
    with pytest.raises(err.ForbiddenConstructError) as e:
        list(mdl.Scanner('a: b\nc: [d]'))
    assert((e.value.line, e.value.column) == (2, 4))
    assert(issubclass(err.ForbiddenConstructError, err.ScanError))
    assert(issubclass(err.ForbiddenConstructError, err.ParseError))
