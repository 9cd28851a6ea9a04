# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


# pylint:  disable = C0301

import re

from . import escape
from . import grammar
from . import tooling
from . import values




DOCUMENT_START_MARKER = grammar.LIT_GRAMMAR['document_start']
BLOCK_ENTRY = grammar.LIT_GRAMMAR['block_entry']
MAPPING_VALUE = grammar.LIT_GRAMMAR['mapping_value']
SINGLEQUOTE_DELIM = grammar.LIT_GRAMMAR['singlequote_delim']
DOUBLEQUOTE_DELIM = grammar.LIT_GRAMMAR['doublequote_delim']
EMPTY_FLOW_SEQUENCE = grammar.LIT_GRAMMAR['empty_flow_sequence']
EMPTY_FLOW_MAPPING = grammar.LIT_GRAMMAR['empty_flow_mapping']

# Positions of a node relative to what precedes it on its line
ROOT = 'root'
AFTER_KEY = 'after_key'
AFTER_ENTRY = 'after_entry'




class StrictYamlEmitter(object):
    '''
    Emit value trees as canonical block-style StrictYAML.
    '''
    def __init__(self, *args, **kwargs):
        if args:
            raise TypeError('Explicit keyword arguments are required')

        explicit_start = kwargs.pop('explicit_start', False)
        if not isinstance(explicit_start, bool):
            raise TypeError('explicit_start must be a boolean')
        self.explicit_start = explicit_start

        indent = kwargs.pop('indent', grammar.PARAMS['indent'])
        max_nesting_depth = kwargs.pop('max_nesting_depth', grammar.PARAMS['max_nesting_depth'])
        if not all(isinstance(x, int) and not isinstance(x, bool) for x in (indent, max_nesting_depth)):
            raise TypeError('indent and max_nesting_depth must be integers')
        if indent < 2:
            raise ValueError('indent must be >= 2')
        if max_nesting_depth < 0:
            raise ValueError('max_nesting_depth must be >= 0')
        self.indent = indent
        self.max_nesting_depth = max_nesting_depth

        if kwargs:
            raise TypeError('Unexpected keyword argument(s) {0}'.format(', '.join('"{0}"'.format(k) for k in kwargs)))

        # Nested collections indent by `indent` columns.  Inside a sequence
        # entry, a nested collection starts on the entry's line, so the space
        # after `-` is padded to reach the same column.
        self._nesting_indent = '\x20'*indent
        self._entry_pad = '\x20'*(indent-1)

        self._escape = escape.Escape()
        self._escape_unicode = self._escape.escape_unicode
        self._always_escaped_re = self._escape.always_escaped_re
        self._not_plain_safe_re = re.compile(grammar.RE_GRAMMAR['not_plain_safe'])

        encode_funcs = {values.Scalar: self._encode_scalar,
                        values.Null: self._encode_null,
                        values.Sequence: self._encode_sequence,
                        values.Mapping: self._encode_mapping}

        def encode_func_factory(t):
            if t is values.BadValue:
                raise TypeError('BadValue cannot be emitted')
            raise TypeError('Unsupported type {0}'.format(t))
        self._encode_funcs = tooling.keydefaultdict(encode_func_factory)
        self._encode_funcs.update(encode_funcs)


    def _reset(self):
        '''
        Reset everything in preparation for the next run.
        '''
        self._buffer = []
        self._nesting_depth = 0


    def _free(self):
        '''
        Free up memory used in last run.
        '''
        self._buffer = None


    def format_scalar(self, s):
        '''
        Render a string in the simplest style that loads back to the same
        string:  plain if possible, then single-quoted, then double-quoted
        with escapes.
        '''
        if not s:
            return SINGLEQUOTE_DELIM*2
        if self._always_escaped_re.search(s):
            return DOUBLEQUOTE_DELIM + self._escape_unicode(s) + DOUBLEQUOTE_DELIM
        if self._not_plain_safe_re.search(s):
            return SINGLEQUOTE_DELIM + s.replace(SINGLEQUOTE_DELIM, SINGLEQUOTE_DELIM*2) + SINGLEQUOTE_DELIM
        return s


    def _encode_scalar(self, obj, indent='', position=ROOT):
        if position == ROOT:
            self._buffer.append(self.format_scalar(obj.text))
        else:
            self._buffer.append('\x20' + self.format_scalar(obj.text))
        self._buffer.append('\n')


    def _encode_null(self, obj, indent='', position=ROOT):
        if position != ROOT:
            self._buffer.append('\n')


    def _open_collection(self):
        self._nesting_depth += 1
        if self._nesting_depth > self.max_nesting_depth:
            raise TypeError('Max nesting depth for collections was exceeded; max depth = {0}'.format(self.max_nesting_depth))


    def _encode_sequence(self, obj, indent='', position=ROOT):
        if not obj:
            if position != ROOT:
                self._buffer.append('\x20')
            self._buffer.append(EMPTY_FLOW_SEQUENCE + '\n')
            return
        self._open_collection()
        if position == ROOT:
            item_indent = indent
            first = indent
        elif position == AFTER_KEY:
            self._buffer.append('\n')
            item_indent = indent + self._nesting_indent
            first = item_indent
        else:
            item_indent = indent + self._nesting_indent
            first = self._entry_pad
        for n, item in enumerate(obj):
            self._buffer.append(item_indent if n else first)
            self._buffer.append(BLOCK_ENTRY)
            self._encode_funcs[type(item)](item, item_indent, AFTER_ENTRY)
        self._nesting_depth -= 1


    def _encode_mapping(self, obj, indent='', position=ROOT):
        if not obj:
            if position != ROOT:
                self._buffer.append('\x20')
            self._buffer.append(EMPTY_FLOW_MAPPING + '\n')
            return
        self._open_collection()
        if position == ROOT:
            key_indent = indent
            first = indent
        elif position == AFTER_KEY:
            self._buffer.append('\n')
            key_indent = indent + self._nesting_indent
            first = key_indent
        else:
            key_indent = indent + self._nesting_indent
            first = self._entry_pad
        for n, (k, v) in enumerate(obj.items()):
            self._buffer.append(key_indent if n else first)
            self._buffer.append(self.format_scalar(k))
            self._buffer.append(MAPPING_VALUE)
            self._encode_funcs[type(v)](v, key_indent, AFTER_KEY)
        self._nesting_depth -= 1


    def encode(self, obj):
        '''
        Encode a single document as a string.  Plain Python strings, lists,
        dicts, and None are converted to values first.
        '''
        return self.encode_all([obj])


    def encode_all(self, objs):
        '''
        Encode a sequence of documents as a string, separated by `---`.
        '''
        self._reset()
        for n, obj in enumerate(objs):
            obj = values.from_python(obj)
            if n or self.explicit_start or obj.is_null():
                self._buffer.append(DOCUMENT_START_MARKER + '\n')
            self._encode_funcs[type(obj)](obj)
        encoded = ''.join(self._buffer)
        self._free()
        return encoded
