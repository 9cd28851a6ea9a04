# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


# pylint: disable=C0301, C0330

import re




# Double-quoted scalar escapes.  YAML has escapes that map onto the same code
# point (`\t` and `\<TAB>`), so the escape dict used for emitting is written
# out rather than derived by inverting the unescape dict.
SHORT_BACKSLASH_UNESCAPES = {'\\0': '\x00',
                             '\\a': '\x07',
                             '\\b': '\x08',
                             '\\t': '\t',
                             '\\\t': '\t',
                             '\\n': '\n',
                             '\\v': '\x0B',
                             '\\f': '\x0C',
                             '\\r': '\r',
                             '\\e': '\x1B',
                             '\\\x20': '\x20',
                             '\\"': '"',
                             '\\/': '/',
                             '\\\\': '\\',
                             '\\N': '\x85',
                             '\\_': '\xA0',
                             '\\L': '\u2028',
                             '\\P': '\u2029'}

SHORT_BACKSLASH_ESCAPES = {'\x00': '\\0',
                           '\x07': '\\a',
                           '\x08': '\\b',
                           '\t': '\\t',
                           '\n': '\\n',
                           '\x0B': '\\v',
                           '\x0C': '\\f',
                           '\r': '\\r',
                           '\x1B': '\\e',
                           '"': '\\"',
                           '\\': '\\\\',
                           '\x85': '\\N',
                           '\u2028': '\\L',
                           '\u2029': '\\P'}


# Non-textual general parameters
PARAMS = {'max_nesting_depth': 100,
          'indent': 2}




# Assemble literal grammar
_RAW_LIT_GRAMMAR = [# Whitespace
                    ('tab', '\t'),
                    ('space', '\x20'),
                    ('separator', '{space}{tab}'),
                    ('newline', '\n'),
                    ('bom', '\uFEFF'),
                    # Documents
                    ('document_start', '---')]

_RAW_LIT_SPECIAL = [# Indicators
                    ('block_entry', '-'),
                    ('mapping_value', ':'),
                    ('explicit_key', '?'),
                    ('comment_delim', '#'),
                    ('singlequote_delim', "'"),
                    ('doublequote_delim', '"'),
                    ('literal_block', '|'),
                    ('folded_block', '>'),
                    ('chomp_strip', '-'),
                    ('chomp_keep', '+'),
                    ('start_flow_sequence', '['),
                    ('end_flow_sequence', ']'),
                    ('start_flow_mapping', '{{'),
                    ('end_flow_mapping', '}}'),
                    ('flow_entry', ','),
                    ('anchor', '&'),
                    ('alias', '*'),
                    ('tag', '!'),
                    ('directive', '%'),
                    ('reserved', '@`'),
                    # Combinations
                    ('flow_indicators', '{start_flow_sequence}{end_flow_sequence}{start_flow_mapping}{end_flow_mapping}{flow_entry}'),
                    ('indicators', ('{block_entry}{explicit_key}{mapping_value}{flow_indicators}{comment_delim}' +
                                    '{anchor}{alias}{tag}{literal_block}{folded_block}' +
                                    '{singlequote_delim}{doublequote_delim}{directive}{reserved}')),
                    ('empty_flow_sequence', '{start_flow_sequence}{end_flow_sequence}'),
                    ('empty_flow_mapping', '{start_flow_mapping}{end_flow_mapping}')]
_RAW_LIT_GRAMMAR.extend(_RAW_LIT_SPECIAL)

LIT_GRAMMAR = {}
for k, v in _RAW_LIT_GRAMMAR:
    LIT_GRAMMAR[k] = v.format(**LIT_GRAMMAR)




# Assemble regex grammar.  Patterns are formatted with previously defined
# patterns, so literal braces must be doubled.
_RAW_RE_GRAMMAR = [('separator', '[\\x20\\t]'),
                   ('newline', '\\n'),
                   ('line_terminator', '\\r\\n|\\r'),
                   ('comment_delim', '\\#'),
                   ('mapping_value', ':'),
                   # Plain scalars and keys end at `: ` or at a comment
                   ('plain_end', '{mapping_value}(?={separator}|$)|{separator}+{comment_delim}'),
                   ('document_marker', '(?:---|\\.\\.\\.)(?={separator}|$)'),
                   ('block_entry', '-(?={separator}|$)'),
                   ('empty_flow_collection', '(\\[\\]|\\{{\\}})(?:{separator}*$|{separator}+{comment_delim})'),
                   ('block_scalar_header', '([|>])([1-9][+-]?|[+-][1-9]?)?(.*)$'),
                   # Double-quoted content up to the closing delimiter or
                   # the end of the line
                   ('doublequote_content', '(?:[^"\\\\]|\\\\.)*'),
                   # The general escape pattern catches everything that could
                   # be a valid escape.  Invalid escapes are caught when the
                   # match is looked up in the dict of valid escapes.
                   ('hex_digit', '[0-9A-Fa-f]'),
                   ('x_escape', 'x{hex_digit}{{2}}'),
                   ('u_escape', 'u{hex_digit}{{4}}'),
                   ('U_escape', 'U{hex_digit}{{8}}'),
                   ('escape_valid_or_invalid', '\\\\(?:{x_escape}|{u_escape}|{U_escape}|.|)')]

RE_GRAMMAR = {}
for k, v in _RAW_RE_GRAMMAR:
    RE_GRAMMAR[k] = v.format(**RE_GRAMMAR)

# Patterns that are not assembled from the grammar above.  Code points that
# may never appear literally: tab and line feed are the only C0 controls
# allowed, with carriage returns normalized before the check.
RE_GRAMMAR['invalid_literal'] = '[\x00-\x08\x0B\x0C\x0E-\x1F\x7F\uD800-\uDFFF\uFFFE\uFFFF]'
# Code points that force double quoting with escapes when emitting
RE_GRAMMAR['always_escaped'] = '[\x00-\x1F\x7F-\x9F\uD800-\uDFFF\u2028\u2029\uFEFF\uFFFE\uFFFF]'
RE_GRAMMAR['always_escaped_or_delim'] = '[\x00-\x1F\x7F-\x9F\uD800-\uDFFF\u2028\u2029\uFEFF\uFFFE\uFFFF"\\\\]'
# A scalar must be quoted when emitted if it starts with an indicator or with
# `...`, has leading or trailing whitespace, contains `: ` or ` #`, or ends
# with `:`.
RE_GRAMMAR['not_plain_safe'] = '^[{0}]|^[\\x20\\t]|[\\x20\\t]$|^\\.\\.\\.|:[\\x20\\t]|:$|[\\x20\\t]\\#|\\t'.format(re.escape(LIT_GRAMMAR['indicators']))
