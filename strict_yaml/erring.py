# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#

# pylint:  disable=C0301




class StrictYamlException(Exception):
    '''
    Base StrictYAML exception.
    '''
    pass


class LoadError(StrictYamlException):
    '''
    Base loading exception.

    Every loading error carries the 1-based line and column of the source
    position where the problem was detected.  `state_or_token` may be any
    object with `lineno` and `colno` attributes:  a scanner position, a
    token, or an event.
    '''
    def __init__(self, msg, state_or_token):
        self.msg = msg
        self.state_or_token = state_or_token
        self.line = state_or_token.lineno
        self.column = state_or_token.colno
    @property
    def message(self):
        return self.msg
    def fmt_msg_with_traceback(self, msg, state_or_token):
        return '\n  At line {0}:{1}:\n    {2}'.format(state_or_token.lineno, state_or_token.colno, msg)
    def __str__(self):
        return self.fmt_msg_with_traceback(self.msg, self.state_or_token)


class ScanError(LoadError):
    '''
    Malformed source text:  bad quoting, bad block scalar header, bad escape,
    misplaced content.
    '''
    pass


class IndentationError(ScanError):
    '''
    Error in relative indentation.
    '''
    def __init__(self, state_or_token, msg=None):
        if msg is None:
            msg = 'Inconsistent relative indentation'
        ScanError.__init__(self, msg, state_or_token)


class InvalidLiteralError(ScanError):
    '''
    Code point that is not allowed to appear literally has appeared.
    '''
    def __init__(self, state_or_token, code_point, code_point_esc):
        self.code_point = code_point
        self.code_point_esc = code_point_esc
        msg = 'Invalid literal code point "{0}"'.format(code_point_esc)
        ScanError.__init__(self, msg, state_or_token)


class SourceDecodeError(ScanError):
    '''
    Error during decoding of binary source.
    '''
    def __init__(self, err_msg, state_or_token):
        self.err_msg = err_msg
        msg = 'Could not decode binary source as UTF-8:\n    {0}'.format(err_msg)
        ScanError.__init__(self, msg, state_or_token)


class ParseError(LoadError):
    '''
    Token sequence that violates the block grammar.
    '''
    pass


class ForbiddenConstructError(ScanError, ParseError):
    '''
    Valid YAML that is excluded from StrictYAML:  flow collections, anchors,
    aliases, tags, directives, explicit keys, reserved indicators.
    '''
    pass


class DuplicateKeyError(LoadError):
    '''
    A key appeared a second time within a single mapping.  The position is
    that of the second occurrence.
    '''
    def __init__(self, key, state_or_token):
        self.key = key
        msg = 'Duplicate key "{0}"'.format(key)
        LoadError.__init__(self, msg, state_or_token)


class EmitError(StrictYamlException):
    '''
    Writing emitted text to its destination failed.
    '''
    def __init__(self, msg, cause=None):
        self.msg = msg
        self.cause = cause
    def __str__(self):
        if self.cause is None:
            return self.msg
        return '{0}:\n  {1}'.format(self.msg, self.cause)


class UnknownEscapeError(StrictYamlException):
    '''
    Unknown backslash escape.
    '''
    def __init__(self, escape_raw, escape_esc):
        self.escape_raw = escape_raw
        self.escape_esc = escape_esc
    def __str__(self):
        return 'Unknown escape sequence: "{0}"'.format(self.escape_esc)


class Bug(StrictYamlException):
    '''
    There is a bug in the program, as opposed to invalid user data.

    This exception is used at the end of a sequence of if/elif/else or in a
    similar context as a fallthrough.  If bugs exist or are introduced in the
    future, this gives a more informative error message, with a position in
    the data when one is available.
    '''
    def __init__(self, msg, state_or_token=None):
        self.msg = msg
        self.state_or_token = state_or_token
    def __str__(self):
        if self.state_or_token is None:
            return self.msg
        return '\n  At line {0}:{1}:\n    {2}'.format(self.state_or_token.lineno, self.state_or_token.colno, self.msg)
