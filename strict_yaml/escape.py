# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


# pylint:  disable=C0103, C0301

import re

from . import erring
from . import tooling
from . import grammar




def basic_unicode_escape(code_point):
    '''
    Basic backslash-escape.  Useful for creating error messages, etc.
    '''
    n = ord(code_point)
    if n <= 0xFFFF:
        return '\\u{0:04x}'.format(n)
    return '\\U{0:08x}'.format(n)




class Escape(object):
    '''
    Replace code points in strings with their escaped equivalents when they
    cannot be represented literally inside a double-quoted scalar.
    '''
    def __init__(self):
        # Dict for escaping code points that may not appear literally.  Code
        # points are detected with a regex, and their escaped replacements
        # are then looked up in the dict.  The dict serves to memoize the
        # escape function.
        self._escape_unicode_dict = tooling.keydefaultdict(self._escape_unicode_char)
        self._escape_unicode_dict.update(grammar.SHORT_BACKSLASH_ESCAPES)

        self.always_escaped_re = re.compile(grammar.RE_GRAMMAR['always_escaped'])
        self._always_escaped_or_delim_re = re.compile(grammar.RE_GRAMMAR['always_escaped_or_delim'])


    @staticmethod
    def _escape_unicode_char(c, ord=ord):
        '''
        Escape a code point using `\\xHH` (8-bit), `\\uHHHH` (16-bit),
        or `\\UHHHHHHHH` (32-bit) notation.
        '''
        n = ord(c)
        if n < 256:
            return '\\x{0:02x}'.format(n)
        elif n < 65536:
            return '\\u{0:04x}'.format(n)
        return '\\U{0:08x}'.format(n)


    def escape_unicode(self, s):
        '''
        Within a string, replace all code points that are not allowed to
        appear literally in a double-quoted scalar, plus the delimiter and
        backslash, with their escaped counterparts.
        '''
        d = self._escape_unicode_dict
        return self._always_escaped_or_delim_re.sub(lambda m: d[m.group(0)], s)




class Unescape(object):
    '''
    Replace backslash escapes in the content of double-quoted scalars with
    the code points they represent.
    '''
    def __init__(self):
        # The dict for unescaping starts with all short escapes; the factory
        # function generates additional escapes as requested.
        self._unescape_unicode_dict = tooling.keydefaultdict(self._unescape_unicode_char, grammar.SHORT_BACKSLASH_UNESCAPES)
        self._unescape_unicode_re = re.compile(grammar.RE_GRAMMAR['escape_valid_or_invalid'], re.DOTALL)


    @staticmethod
    def _unescape_unicode_char(s, int=int, chr=chr):
        '''
        Given a string in `\\xHH`, `\\uHHHH`, or `\\UHHHHHHHH` form, return
        the code point corresponding to the hex value of the `H`'s.
        Otherwise, raise an error for `\\<char>` or `\\`, which is the only
        other form the argument will ever take.

        Arguments to this function are prefiltered by a regex into the
        allowed forms.  Before this function is invoked, all known short
        (2-character) escape sequences have already been filtered out.  Any
        remaining short escapes `\\<char>` at this point are unrecognized.
        '''
        try:
            v = chr(int(s[2:], 16))
        except (ValueError, OverflowError):
            if s[1:] and 0x21 <= ord(s[-1]) <= 0x7E:
                s_esc = s
            elif s[1:]:
                s_esc = '\\<U+{0:04X}>'.format(ord(s[-1]))
            else:
                s_esc = s
            raise erring.UnknownEscapeError(s, s_esc)
        return v


    def unescape_unicode(self, s):
        '''
        Within a string, replace all backslash escapes with the
        corresponding code points.
        '''
        d = self._unescape_unicode_dict
        return self._unescape_unicode_re.sub(lambda m: d[m.group()], s)
