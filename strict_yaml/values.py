# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


# pylint:  disable=C0301

import collections
import types




class StrictYaml(object):
    '''
    Base class for loaded values.

    Indexing never raises.  `value[key]` with a string key on a mapping
    returns the entry, and `value[index]` with a non-negative integer on a
    sequence returns the item.  Anything else, including a missing key or an
    index out of range, returns the `BAD_VALUE` sentinel, which absorbs any
    further indexing.  Shape mismatches in the `as_*()` projections return
    `None`.
    '''
    __slots__ = []

    def __getitem__(self, index):
        return BAD_VALUE

    def get(self, index, default=None):
        '''
        Like indexing, but return `default` rather than `BAD_VALUE`.
        '''
        v = self[index]
        if v is BAD_VALUE:
            return default
        return v

    def __iter__(self):
        return iter(())

    def as_str(self):
        return None

    as_string = as_str

    def as_sequence(self):
        return None

    def as_mapping(self):
        return None

    def is_scalar(self):
        return False

    def is_sequence(self):
        return False

    def is_mapping(self):
        return False

    def is_null(self):
        return False

    def is_bad_value(self):
        return False

    def pformat(self):
        '''
        Indented tree dump, for debugging.
        '''
        return '\n'.join(self._pformat_lines(''))

    def _pformat_lines(self, indent):
        return [indent + repr(self)]




class Scalar(StrictYaml):
    '''
    Leaf value.  Always holds the resolved string, whatever the quoting
    style in the source.
    '''
    __slots__ = ['text']

    def __init__(self, text):
        if not isinstance(text, str):
            raise TypeError('Scalar text must be a string, not {0}'.format(type(text)))
        self.text = text

    def __eq__(self, other):
        return type(other) is Scalar and other.text == self.text

    def __hash__(self):
        return hash((Scalar, self.text))

    def __repr__(self):
        return 'Scalar({0!r})'.format(self.text)

    def as_str(self):
        return self.text

    as_string = as_str

    def is_scalar(self):
        return True

    def to_python(self):
        return self.text




class Sequence(StrictYaml):
    '''
    Ordered, immutable list of values.
    '''
    __slots__ = ['_items']

    def __init__(self, items=()):
        items = tuple(items)
        for item in items:
            if not isinstance(item, StrictYaml):
                raise TypeError('Sequence items must be StrictYaml values, not {0}'.format(type(item)))
            if type(item) is BadValue:
                raise TypeError('BadValue cannot be stored in a sequence')
        self._items = items

    def __getitem__(self, index, int=int, type=type, len=len):
        # `type() is int` excludes bool
        if type(index) is int and 0 <= index < len(self._items):
            return self._items[index]
        return BAD_VALUE

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __eq__(self, other):
        return type(other) is Sequence and other._items == self._items

    def __hash__(self):
        return hash((Sequence, self._items))

    def __repr__(self):
        return 'Sequence([{0}])'.format(', '.join(repr(x) for x in self._items))

    def as_sequence(self):
        return self._items

    def is_sequence(self):
        return True

    def to_python(self):
        return [x.to_python() for x in self._items]

    def _pformat_lines(self, indent):
        if not self._items:
            return [indent + 'Sequence([])']
        lines = [indent + 'Sequence']
        for item in self._items:
            item_lines = item._pformat_lines(indent + '  ')
            item_lines[0] = indent + '- ' + item_lines[0][len(indent)+2:]
            lines.extend(item_lines)
        return lines




class Mapping(StrictYaml):
    '''
    Insertion-ordered map from string keys to values.  Keys are unique;
    a repeated key is rejected when it is inserted.
    '''
    __slots__ = ['_entries']

    def __init__(self, entries=()):
        if hasattr(entries, 'items'):
            entries = entries.items()
        d = collections.OrderedDict()
        for k, v in entries:
            if not isinstance(k, str):
                raise TypeError('Mapping keys must be strings, not {0}'.format(type(k)))
            if not isinstance(v, StrictYaml):
                raise TypeError('Mapping values must be StrictYaml values, not {0}'.format(type(v)))
            if type(v) is BadValue:
                raise TypeError('BadValue cannot be stored in a mapping')
            if k in d:
                raise ValueError('Duplicate key "{0}"'.format(k))
            d[k] = v
        self._entries = d

    def __getitem__(self, key, str=str, isinstance=isinstance):
        if isinstance(key, str):
            return self._entries.get(key, BAD_VALUE)
        return BAD_VALUE

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return key in self._entries

    def __eq__(self, other):
        return type(other) is Mapping and list(other._entries.items()) == list(self._entries.items())

    def __hash__(self):
        return hash((Mapping, tuple(self._entries.items())))

    def __repr__(self):
        return 'Mapping([{0}])'.format(', '.join('({0!r}, {1!r})'.format(k, v) for k, v in self._entries.items()))

    def keys(self):
        return self._entries.keys()

    def values(self):
        return self._entries.values()

    def items(self):
        return self._entries.items()

    def as_mapping(self):
        return types.MappingProxyType(self._entries)

    def is_mapping(self):
        return True

    def to_python(self):
        return collections.OrderedDict((k, v.to_python()) for k, v in self._entries.items())

    def _pformat_lines(self, indent):
        if not self._entries:
            return [indent + 'Mapping([])']
        lines = [indent + 'Mapping']
        for k, v in self._entries.items():
            value_lines = v._pformat_lines(indent + '    ')
            if len(value_lines) == 1:
                lines.append('{0}  {1!r}: {2}'.format(indent, k, value_lines[0].lstrip()))
            else:
                lines.append('{0}  {1!r}:'.format(indent, k))
                lines.extend(value_lines)
        return lines




class Null(StrictYaml):
    '''
    Explicitly empty value, from a key or entry with no content.  Distinct
    from the empty string and from empty collections.
    '''
    __slots__ = []

    def __eq__(self, other):
        return type(other) is Null

    def __hash__(self):
        return hash(Null)

    def __bool__(self):
        return False

    def __repr__(self):
        return 'Null()'

    def is_null(self):
        return True

    def to_python(self):
        return None




class BadValue(StrictYaml):
    '''
    Sentinel returned by failed lookups.  Never produced by loading.
    '''
    __slots__ = []

    def __getitem__(self, index):
        return self

    def __eq__(self, other):
        return type(other) is BadValue

    def __hash__(self):
        return hash(BadValue)

    def __bool__(self):
        return False

    def __repr__(self):
        return 'BadValue()'

    def is_bad_value(self):
        return True

    def to_python(self):
        raise TypeError('BadValue has no Python equivalent')




NULL = Null()
BAD_VALUE = BadValue()




def from_python(obj):
    '''
    Build a value tree from strings, None, lists, tuples, and dicts.  Values
    that are already StrictYaml instances are returned unchanged.
    '''
    if isinstance(obj, StrictYaml):
        return obj
    if obj is None:
        return NULL
    if isinstance(obj, str):
        return Scalar(obj)
    if isinstance(obj, (list, tuple)):
        return Sequence(from_python(x) for x in obj)
    if isinstance(obj, dict):
        return Mapping((k, from_python(v)) for k, v in obj.items())
    raise TypeError('Unsupported type {0}'.format(type(obj)))
