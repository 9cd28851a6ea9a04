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
import io

if all(os.path.isdir(x) for x in ('strict_yaml', 'test')):
    sys.path.insert(0, '.')

import strict_yaml.emitting as mdl
import strict_yaml.dumping as dumping
import strict_yaml.loading as loading
import strict_yaml.erring as err
from strict_yaml.values import Scalar, Sequence, Mapping, NULL, BAD_VALUE, from_python

import pytest




def test_format_scalar():
    emitter = mdl.StrictYamlEmitter()
    cases = [('plain', 'plain'),
             ('two words', 'two words'),
             ('1.0', '1.0'),
             ('yes', 'yes'),
             ('a#b', 'a#b'),
             ('a:b', 'a:b'),
             ('', "''"),
             ('a: b', "'a: b'"),
             ('x #y', "'x #y'"),
             ('key:', "'key:'"),
             ('-x', "'-x'"),
             ('- x', "'- x'"),
             (' lead', "' lead'"),
             ('trail ', "'trail '"),
             ('...', "'...'"),
             ('---', "'---'"),
             ('[]', "'[]'"),
             ('&a', "'&a'"),
             ("'q", "'''q'"),
             ('"q', '\'"q\''),
             ("it's", "it's"),
             ('line\nbreak', '"line\\nbreak"'),
             ('tab\there', '"tab\\there"'),
             ('"a"\n', '"\\"a\\"\\n"')]
    for s, expected in cases:
        assert(emitter.format_scalar(s) == expected)


def test_block_layout():
    assert(dumping.dumps({'a': 'b'}) == 'a: b\n')
    assert(dumping.dumps(['a', 'b']) == '- a\n- b\n')
    assert(dumping.dumps('text') == 'text\n')
    assert(dumping.dumps({'a': 'b', 'c': ['d', 'e']}) == 'a: b\nc:\n  - d\n  - e\n')
    assert(dumping.dumps([{'a': '1', 'b': '2'}]) == '- a: 1\n  b: 2\n')
    assert(dumping.dumps([['a', 'b'], 'c']) == '- - a\n  - b\n- c\n')
    assert(dumping.dumps({'a': {'b': 'c'}, 'd': ['e', {'f': 'g', 'h': 'i'}]}) ==
           'a:\n  b: c\nd:\n  - e\n  - f: g\n    h: i\n')


def test_empty_values():
    assert(dumping.dumps(None) == '---\n')
    assert(dumping.dumps('') == "''\n")
    assert(dumping.dumps([]) == '[]\n')
    assert(dumping.dumps({}) == '{}\n')
    assert(dumping.dumps({'a': None, 'b': '', 'c': [], 'd': {}}) == "a:\nb: ''\nc: []\nd: {}\n")
    assert(dumping.dumps([None, [], {}]) == '-\n- []\n- {}\n')


def test_emitter_options():
    assert(dumping.dumps({'a': ['b', {'c': 'd', 'e': 'f'}]}, indent=4) ==
           'a:\n    - b\n    -   c: d\n        e: f\n')
    assert(dumping.dumps('a', explicit_start=True) == '---\na\n')
    with pytest.raises(TypeError):
        dumping.dumps({'a': {'b': 'c'}}, max_nesting_depth=1)
    assert(dumping.dumps({'a': {'b': 'c'}}, max_nesting_depth=2) == 'a:\n  b: c\n')
    with pytest.raises(ValueError):
        mdl.StrictYamlEmitter(indent=1)
    with pytest.raises(TypeError):
        mdl.StrictYamlEmitter(indent='2')
    with pytest.raises(TypeError):
        mdl.StrictYamlEmitter(explicit_start=1)
    with pytest.raises(TypeError):
        mdl.StrictYamlEmitter(unknown=True)
    with pytest.raises(TypeError):
        mdl.StrictYamlEmitter(2)


def test_multiple_documents():
    assert(dumping.dumps_all(['a', None, {'k': 'v'}]) == 'a\n---\n---\nk: v\n')
    assert(dumping.dumps_all([]) == '')
    assert(dumping.dumps_all(['a', 'b'], explicit_start=True) == '---\na\n---\nb\n')


def test_unsupported_values():
    with pytest.raises(TypeError):
        dumping.dumps(BAD_VALUE)
    with pytest.raises(TypeError):
        dumping.dumps({'a': 1})
    with pytest.raises(TypeError):
        dumping.dumps(1.5)


def test_dump_to_stream():
    s = io.StringIO()
    dumping.dump({'a': 'b'}, s)
    assert(s.getvalue() == 'a: b\n')
    s = io.StringIO()
    dumping.dump_all(['a', 'b'], s)
    assert(s.getvalue() == 'a\n---\nb\n')

    class BrokenStream(object):
        def write(self, text):
            raise IOError('disk full')
    with pytest.raises(err.EmitError) as e:
        dumping.dump('a', BrokenStream())
    assert(isinstance(e.value.cause, IOError))
    assert('disk full' in str(e.value))


def test_round_trip_strings():
    strings = ['', ' ', '  ', 'a', 'a  b', 'a\nb', 'a\n', '\n', '#', '# x', 'a #',
               'a#b', '- x', '-', '?', '? x', ':', ': x', 'x:', 'key: value',
               '...', '---', '--- x', '[]', '{}', '[a, b]', '{a: b}', '&a', '*a',
               '!tag', '%YAML', '@x', '`x`', '|', '>', "'", '"', "''", 'it\'s',
               '\\', '\\n', '\t', 'a\tb', '\x00', '\x7f', '\x85', '\xa0',
               '\u00e9', '\u2028', '\u2029', '\uFEFF', '\U0001F600', 'null',
               '~', 'yes', '0x1F', '1.5e3', 'a,b', 'a, b']
    for s in strings:
        assert(loading.loads(dumping.dumps(s)) == [Scalar(s)])
        assert(loading.loads(dumping.dumps({s: s})) == [Mapping([(s, Scalar(s))])])
        assert(loading.loads(dumping.dumps([s, [s]])) == [Sequence([Scalar(s), Sequence([Scalar(s)])])])


def test_round_trip_trees():
    trees = [NULL,
             Scalar('x'),
             Sequence([]),
             Mapping([]),
             from_python({'a': None, 'b': '', 'c': [], 'd': {}}),
             from_python([None, [], {}, '', [None]]),
             from_python({'a': {'b': {'c': ['d', {'e': ['f', ['g']]}]}}}),
             from_python([{'a': '1', 'b': ['2', '3']}, [{'c': None}], 'end']),
             from_python({'z': '1', 'a': '2', 'm': '3'})]
    for indent in (2, 3, 4):
        for tree in trees:
            assert(loading.loads(dumping.dumps(tree, indent=indent)) == [tree])
    assert(loading.loads(dumping.dumps_all(trees)) == trees)
