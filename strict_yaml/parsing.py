# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


# pylint: disable=C0301

from . import erring
from . import grammar
from . import scanning
from .scanning import (STREAM_START, STREAM_END, DOCUMENT_START, DOCUMENT_END,
                       BLOCK_MAPPING_START, BLOCK_SEQUENCE_START, BLOCK_END,
                       KEY, VALUE, BLOCK_ENTRY, SCALAR)




MAX_NESTING_DEPTH = grammar.PARAMS['max_nesting_depth']

# Event types
STREAM_START_EVENT = 'stream_start'
STREAM_END_EVENT = 'stream_end'
DOCUMENT_START_EVENT = 'document_start'
DOCUMENT_END_EVENT = 'document_end'
MAPPING_START_EVENT = 'mapping_start'
MAPPING_END_EVENT = 'mapping_end'
SEQUENCE_START_EVENT = 'sequence_start'
SEQUENCE_END_EVENT = 'sequence_end'
SCALAR_EVENT = 'scalar'

_TOKEN_NAMES = {STREAM_START: 'start of stream',
                STREAM_END: 'end of stream',
                DOCUMENT_START: 'document start marker "---"',
                DOCUMENT_END: 'document end marker "..."',
                BLOCK_MAPPING_START: 'start of a mapping',
                BLOCK_SEQUENCE_START: 'start of a sequence',
                BLOCK_END: 'end of a block',
                KEY: 'key',
                VALUE: 'value',
                BLOCK_ENTRY: 'sequence entry "-"',
                SCALAR: 'scalar'}




class Event(object):
    '''
    Structural event.  A scalar event with `value` None stands for an absent
    value, as after a `key:` or `-` with no content.
    '''
    __slots__ = ['type', 'lineno', 'colno', 'value', 'style']
    def __init__(self, type, lineno, colno, value=None, style=None):
        self.type = type
        self.lineno = lineno
        self.colno = colno
        self.value = value
        self.style = style
    def __repr__(self):
        if self.type == SCALAR_EVENT:
            return 'Event({0}, {1}:{2}, {3!r})'.format(self.type, self.lineno, self.colno, self.value)
        return 'Event({0}, {1}:{2})'.format(self.type, self.lineno, self.colno)




class Parser(object):
    '''
    Turn a token stream into a stream of events.

    The block grammar is parsed with one token of lookahead.  Nesting is
    handled with an explicit stack of states rather than recursion, so the
    maximum depth is a configurable limit rather than an interpreter limit.
    Each state is a bound method that returns the next event and sets the
    following state.
    '''
    __slots__ = ['_scanner', '_states', '_state', '_current_event',
                 '_nesting_depth', 'max_nesting_depth']

    def __init__(self, scanner_or_source, max_nesting_depth=MAX_NESTING_DEPTH):
        if isinstance(scanner_or_source, scanning.Scanner):
            self._scanner = scanner_or_source
        else:
            self._scanner = scanning.Scanner(scanner_or_source)
        if not isinstance(max_nesting_depth, int) or isinstance(max_nesting_depth, bool):
            raise TypeError('max_nesting_depth must be an integer')
        if max_nesting_depth < 0:
            raise ValueError('max_nesting_depth must be >= 0')
        self.max_nesting_depth = max_nesting_depth
        self._states = []
        self._state = self._parse_stream_start
        self._current_event = None
        self._nesting_depth = 0


    def __iter__(self):
        while True:
            event = self.next_event()
            if event is None:
                return
            yield event


    def peek_event(self):
        '''
        Return the next event without consuming it, or None after the end of
        the stream.
        '''
        if self._current_event is None and self._state is not None:
            self._current_event = self._state()
        return self._current_event


    def next_event(self):
        '''
        Consume and return the next event, or None after the end of the
        stream.
        '''
        event = self.peek_event()
        self._current_event = None
        return event


    def _unexpected(self, expected, token):
        return erring.ParseError('Expected {0}, but found {1}'.format(expected, _TOKEN_NAMES[token.type]), token)


    def _parse_stream_start(self):
        token = self._scanner.next_token()
        self._state = self._parse_implicit_document_start
        return Event(STREAM_START_EVENT, token.lineno, token.colno)


    def _parse_implicit_document_start(self):
        # Stray end markers before a document are ignored
        scanner = self._scanner
        while scanner.peek_token().type == DOCUMENT_END:
            scanner.next_token()
        token = scanner.peek_token()
        if token.type in (DOCUMENT_START, STREAM_END):
            return self._parse_document_start()
        self._states.append(self._parse_document_end)
        self._state = self._parse_block_node
        return Event(DOCUMENT_START_EVENT, token.lineno, token.colno)


    def _parse_document_start(self):
        scanner = self._scanner
        while scanner.peek_token().type == DOCUMENT_END:
            scanner.next_token()
        token = scanner.next_token()
        if token.type == STREAM_END:
            self._state = None
            return Event(STREAM_END_EVENT, token.lineno, token.colno)
        if token.type != DOCUMENT_START:
            raise self._unexpected('a document start marker "---"', token)
        self._states.append(self._parse_document_end)
        self._state = self._parse_document_content
        return Event(DOCUMENT_START_EVENT, token.lineno, token.colno)


    def _parse_document_content(self):
        token = self._scanner.peek_token()
        if token.type in (DOCUMENT_START, DOCUMENT_END, STREAM_END):
            self._state = self._states.pop()
            return Event(SCALAR_EVENT, token.lineno, token.colno)
        return self._parse_block_node()


    def _parse_document_end(self):
        token = self._scanner.peek_token()
        if token.type == DOCUMENT_END:
            self._scanner.next_token()
            self._state = self._parse_implicit_document_start
        elif token.type in (DOCUMENT_START, STREAM_END):
            self._state = self._parse_document_start
        else:
            raise self._unexpected('the end of the document', token)
        return Event(DOCUMENT_END_EVENT, token.lineno, token.colno)


    def _enter_collection(self, token):
        self._nesting_depth += 1
        if self._nesting_depth > self.max_nesting_depth:
            raise erring.ParseError('Max nesting depth for collections was exceeded; max depth = {0}'.format(self.max_nesting_depth), token)


    def _parse_block_node(self):
        token = self._scanner.next_token()
        if token.type == SCALAR:
            self._state = self._states.pop()
            return Event(SCALAR_EVENT, token.lineno, token.colno, token.value, token.style)
        if token.type == BLOCK_SEQUENCE_START:
            self._enter_collection(token)
            self._state = self._parse_block_sequence_entry
            return Event(SEQUENCE_START_EVENT, token.lineno, token.colno)
        if token.type == BLOCK_MAPPING_START:
            self._enter_collection(token)
            self._state = self._parse_block_mapping_key
            return Event(MAPPING_START_EVENT, token.lineno, token.colno)
        raise self._unexpected('a node', token)


    def _parse_block_sequence_entry(self):
        token = self._scanner.next_token()
        if token.type == BLOCK_ENTRY:
            following = self._scanner.peek_token()
            if following.type in (BLOCK_ENTRY, BLOCK_END):
                self._state = self._parse_block_sequence_entry
                return Event(SCALAR_EVENT, token.lineno, token.colno)
            self._states.append(self._parse_block_sequence_entry)
            return self._parse_block_node()
        if token.type == BLOCK_END:
            self._nesting_depth -= 1
            self._state = self._states.pop()
            return Event(SEQUENCE_END_EVENT, token.lineno, token.colno)
        raise self._unexpected('a sequence entry "-"', token)


    def _parse_block_mapping_key(self):
        token = self._scanner.next_token()
        if token.type == KEY:
            key = self._scanner.next_token()
            if key.type != SCALAR:
                raise self._unexpected('a scalar key', key)
            self._state = self._parse_block_mapping_value
            return Event(SCALAR_EVENT, key.lineno, key.colno, key.value, key.style)
        if token.type == BLOCK_END:
            self._nesting_depth -= 1
            self._state = self._states.pop()
            return Event(MAPPING_END_EVENT, token.lineno, token.colno)
        raise self._unexpected('a mapping key', token)


    def _parse_block_mapping_value(self):
        token = self._scanner.next_token()
        if token.type != VALUE:
            raise self._unexpected('":" after a mapping key', token)
        following = self._scanner.peek_token()
        if following.type in (KEY, BLOCK_END):
            self._state = self._parse_block_mapping_key
            return Event(SCALAR_EVENT, token.lineno, token.colno)
        self._states.append(self._parse_block_mapping_key)
        return self._parse_block_node()
