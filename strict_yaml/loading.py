# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


# pylint: disable=C0301

import collections
import logging

from . import erring
from . import grammar
from . import parsing
from . import scanning
from .values import Scalar, Sequence, Mapping, NULL


logger = logging.getLogger(__name__)


MAX_NESTING_DEPTH = grammar.PARAMS['max_nesting_depth']




class StrictYamlLoader(object):
    '''
    Load StrictYAML from a string or byte string into value trees, one per
    document.

    A `StrictYamlLoader` instance is intended to be static once created.  All
    of the state for a load lives in local variables and in the scanner and
    parser created for that load, so a single instance may be shared.
    '''
    __slots__ = ['max_nesting_depth']

    def __init__(self, *args, **kwargs):
        if args:
            raise TypeError('Explicit keyword arguments are required')
        max_nesting_depth = kwargs.pop('max_nesting_depth', MAX_NESTING_DEPTH)
        if not isinstance(max_nesting_depth, int) or isinstance(max_nesting_depth, bool):
            raise TypeError('max_nesting_depth must be an integer')
        if max_nesting_depth < 0:
            raise ValueError('max_nesting_depth must be >= 0')
        if kwargs:
            raise TypeError('Unexpected keyword argument(s) {0}'.format(', '.join('"{0}"'.format(k) for k in kwargs)))
        self.max_nesting_depth = max_nesting_depth


    def load(self, unicode_string_or_bytes,
             SCALAR_EVENT=parsing.SCALAR_EVENT,
             MAPPING_START_EVENT=parsing.MAPPING_START_EVENT,
             MAPPING_END_EVENT=parsing.MAPPING_END_EVENT,
             SEQUENCE_START_EVENT=parsing.SEQUENCE_START_EVENT,
             SEQUENCE_END_EVENT=parsing.SEQUENCE_END_EVENT,
             DOCUMENT_START_EVENT=parsing.DOCUMENT_START_EVENT,
             DOCUMENT_END_EVENT=parsing.DOCUMENT_END_EVENT):
        '''
        Load all documents in a string or byte string, returning a list of
        values.

        Collections under construction are kept on `doc_stack`.  For each
        open mapping, `key_stack` holds the key that is waiting for its
        value, or None when the next scalar is a key.  Keys are checked for
        duplicates as soon as they arrive, so a duplicate is reported at its
        own position.
        '''
        parser = parsing.Parser(scanning.Scanner(unicode_string_or_bytes), self.max_nesting_depth)
        docs = []
        doc_stack = []
        key_stack = []
        root = None

        def insert(value):
            if not doc_stack:
                return value
            container = doc_stack[-1]
            if isinstance(container, list):
                container.append(value)
            else:
                container[key_stack[-1]] = value
                key_stack[-1] = None
            return None

        for event in parser:
            t = event.type
            if t == SCALAR_EVENT:
                if doc_stack and not isinstance(doc_stack[-1], list) and key_stack[-1] is None:
                    key = event.value
                    if key is None:
                        raise erring.Bug('Mapping key without content', event)
                    if key in doc_stack[-1]:
                        raise erring.DuplicateKeyError(key, event)
                    key_stack[-1] = key
                    continue
                if event.value is None:
                    value = NULL
                else:
                    value = Scalar(event.value)
                v = insert(value)
                if v is not None:
                    root = v
            elif t == MAPPING_START_EVENT:
                doc_stack.append(collections.OrderedDict())
                key_stack.append(None)
            elif t == SEQUENCE_START_EVENT:
                doc_stack.append([])
                key_stack.append(None)
            elif t == MAPPING_END_EVENT:
                key_stack.pop()
                v = insert(Mapping(doc_stack.pop()))
                if v is not None:
                    root = v
            elif t == SEQUENCE_END_EVENT:
                key_stack.pop()
                v = insert(Sequence(doc_stack.pop()))
                if v is not None:
                    root = v
            elif t == DOCUMENT_START_EVENT:
                root = None
            elif t == DOCUMENT_END_EVENT:
                if root is None or doc_stack:
                    raise erring.Bug('Document ended without a complete value', event)
                docs.append(root)
        logger.debug('Loaded %d document(s)', len(docs))
        return docs




_DEFAULT_LOADER = StrictYamlLoader()




def load(source, cls=None, **kwargs):
    '''
    Load all documents from a string, a byte string, or a file-like object.
    Returns a list of values, one per document.
    '''
    if hasattr(source, 'read'):
        source = source.read()
    if cls is None:
        if not kwargs:
            return _DEFAULT_LOADER.load(source)
        return StrictYamlLoader(**kwargs).load(source)
    return cls(**kwargs).load(source)


def loads(s, cls=None, **kwargs):
    '''
    Load all documents from a Unicode or byte string.
    '''
    if cls is None:
        if not kwargs:
            return _DEFAULT_LOADER.load(s)
        return StrictYamlLoader(**kwargs).load(s)
    return cls(**kwargs).load(s)
