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
import re

from . import erring
from . import escape
from . import grammar




BOM = grammar.LIT_GRAMMAR['bom']
NEWLINE = grammar.LIT_GRAMMAR['newline']
SEPARATOR = grammar.LIT_GRAMMAR['separator']
SPACE = grammar.LIT_GRAMMAR['space']
TAB = grammar.LIT_GRAMMAR['tab']
COMMENT_DELIM = grammar.LIT_GRAMMAR['comment_delim']
MAPPING_VALUE = grammar.LIT_GRAMMAR['mapping_value']
EXPLICIT_KEY = grammar.LIT_GRAMMAR['explicit_key']
DOCUMENT_START_MARKER = grammar.LIT_GRAMMAR['document_start']
SINGLEQUOTE_DELIM = grammar.LIT_GRAMMAR['singlequote_delim']
DOUBLEQUOTE_DELIM = grammar.LIT_GRAMMAR['doublequote_delim']
LITERAL_BLOCK = grammar.LIT_GRAMMAR['literal_block']
FOLDED_BLOCK = grammar.LIT_GRAMMAR['folded_block']
CHOMP_STRIP = grammar.LIT_GRAMMAR['chomp_strip']
CHOMP_KEEP = grammar.LIT_GRAMMAR['chomp_keep']
EMPTY_FLOW_SEQUENCE = grammar.LIT_GRAMMAR['empty_flow_sequence']


# Token types
STREAM_START = 'stream_start'
STREAM_END = 'stream_end'
DOCUMENT_START = 'document_start'
DOCUMENT_END = 'document_end'
BLOCK_MAPPING_START = 'block_mapping_start'
BLOCK_SEQUENCE_START = 'block_sequence_start'
BLOCK_END = 'block_end'
KEY = 'key'
VALUE = 'value'
BLOCK_ENTRY = 'block_entry'
SCALAR = 'scalar'

# Scalar styles
PLAIN = 'plain'
SINGLE_QUOTED = 'single_quoted'
DOUBLE_QUOTED = 'double_quoted'
LITERAL = 'literal'
FOLDED = 'folded'

# Kinds of indentation frames
MAPPING = 'mapping'
SEQUENCE = 'sequence'
INDENTLESS_SEQUENCE = 'indentless_sequence'


_FORBIDDEN = {'[': 'Flow sequences are not allowed',
              ']': 'Flow sequences are not allowed',
              '{': 'Flow mappings are not allowed',
              '}': 'Flow mappings are not allowed',
              ',': 'Flow collection separators are not allowed',
              '&': 'Anchors are not allowed',
              '*': 'Aliases are not allowed',
              '!': 'Tags are not allowed',
              '%': 'Directives are not allowed',
              '@': 'The reserved indicator "@" cannot start a scalar',
              '`': 'The reserved indicator "`" cannot start a scalar'}




class SourcePosition(object):
    '''
    Location within the source, for error messages.
    '''
    __slots__ = ['lineno', 'colno']
    def __init__(self, lineno, colno):
        self.lineno = lineno
        self.colno = colno
    def __repr__(self):
        return 'SourcePosition({0}, {1})'.format(self.lineno, self.colno)




class Token(object):
    '''
    Lexical unit produced by the scanner.  `value` and `style` are only set
    for scalars.
    '''
    __slots__ = ['type', 'lineno', 'colno', 'value', 'style']
    def __init__(self, type, lineno, colno, value=None, style=None):
        self.type = type
        self.lineno = lineno
        self.colno = colno
        self.value = value
        self.style = style
    def __repr__(self):
        if self.type == SCALAR:
            return 'Token({0}, {1}:{2}, {3!r}, {4})'.format(self.type, self.lineno, self.colno, self.value, self.style)
        return 'Token({0}, {1}:{2})'.format(self.type, self.lineno, self.colno)




class Scanner(object):
    '''
    Turn StrictYAML source into a stream of tokens.

    The source is processed one line at a time, and only when more tokens
    are requested.  Indentation is tracked with a stack of
    `(column, kind)` frames, one per open block collection.  Columns are
    0-based internally; all positions reported in tokens and errors are
    1-based.

    After a `key:` or `- ` with nothing else on the line, `_expect_value` is
    set, and only then may a following line be indented more deeply than the
    innermost open collection.
    '''
    __slots__ = ['_lines', '_index', '_tokens', '_indents', '_expect_value',
                 '_done', '_unescape', '_scan_node_token',
                 '_plain_end_re', '_document_marker_re', '_block_entry_re',
                 '_empty_flow_collection_re', '_block_scalar_header_re',
                 '_doublequote_content_re']

    def __init__(self, unicode_string_or_bytes):
        source = self._as_unicode_string(unicode_string_or_bytes)
        if source[:1] == BOM:
            source = source[1:]
        source = re.sub(grammar.RE_GRAMMAR['line_terminator'], NEWLINE, source)
        self._check_literals(source)
        self._lines = source.split(NEWLINE)
        self._index = 0
        self._tokens = collections.deque([Token(STREAM_START, 1, 1)])
        self._indents = []
        self._expect_value = True
        self._done = False
        self._unescape = escape.Unescape().unescape_unicode

        self._plain_end_re = re.compile(grammar.RE_GRAMMAR['plain_end'])
        self._document_marker_re = re.compile(grammar.RE_GRAMMAR['document_marker'])
        self._block_entry_re = re.compile(grammar.RE_GRAMMAR['block_entry'])
        self._empty_flow_collection_re = re.compile(grammar.RE_GRAMMAR['empty_flow_collection'])
        self._block_scalar_header_re = re.compile(grammar.RE_GRAMMAR['block_scalar_header'])
        self._doublequote_content_re = re.compile(grammar.RE_GRAMMAR['doublequote_content'])

        # Dispatch on the first character of a node
        scan_node_token = collections.defaultdict(lambda: self._scan_plain)
        scan_node_token.update({SINGLEQUOTE_DELIM: self._scan_quoted,
                                DOUBLEQUOTE_DELIM: self._scan_quoted,
                                LITERAL_BLOCK: self._scan_block_scalar,
                                FOLDED_BLOCK: self._scan_block_scalar})
        for c in _FORBIDDEN:
            scan_node_token[c] = self._scan_forbidden
        self._scan_node_token = scan_node_token


    @staticmethod
    def _as_unicode_string(unicode_string_or_bytes):
        '''
        Convert a byte string to a Unicode string, with position information
        on failure.
        '''
        if isinstance(unicode_string_or_bytes, str):
            return unicode_string_or_bytes
        if not isinstance(unicode_string_or_bytes, (bytes, bytearray)):
            raise TypeError('Source must be a string or bytes, not {0}'.format(type(unicode_string_or_bytes)))
        b = bytes(unicode_string_or_bytes)
        try:
            return b.decode('utf_8_sig')
        except UnicodeDecodeError as e:
            lineno = b.count(b'\n', 0, e.start) + 1
            colno = e.start - (b.rfind(b'\n', 0, e.start) + 1) + 1
            raise erring.SourceDecodeError(e, SourcePosition(lineno, colno)) from e


    def _check_literals(self, source):
        m = re.search(grammar.RE_GRAMMAR['invalid_literal'], source)
        if m is None:
            return
        index = m.start()
        lineno = source.count(NEWLINE, 0, index) + 1
        colno = index - (source.rfind(NEWLINE, 0, index) + 1) + 1
        code_point = m.group(0)
        raise erring.InvalidLiteralError(SourcePosition(lineno, colno), code_point, escape.basic_unicode_escape(code_point))


    def __iter__(self):
        while True:
            token = self.next_token()
            if token is None:
                return
            yield token


    def peek_token(self):
        '''
        Return the next token without consuming it, or None after the end of
        the stream.
        '''
        while not self._tokens and not self._done:
            self._fetch_line()
        if self._tokens:
            return self._tokens[0]
        return None


    def next_token(self):
        '''
        Consume and return the next token, or None after the end of the
        stream.
        '''
        while not self._tokens and not self._done:
            self._fetch_line()
        if self._tokens:
            return self._tokens.popleft()
        return None


    def _add(self, token_type, lineno, col, value=None, style=None):
        self._tokens.append(Token(token_type, lineno, col+1, value, style))


    def _parent_col(self):
        if self._indents:
            return self._indents[-1][0]
        return -1


    def _unwind(self, lineno, col, is_entry=False):
        '''
        Close every collection that cannot contain content starting at
        `col`.  An indentless sequence is closed by anything at its column
        other than another entry.
        '''
        indents = self._indents
        while indents:
            top_col, top_kind = indents[-1]
            if top_col > col or (top_col == col and top_kind == INDENTLESS_SEQUENCE and not is_entry):
                indents.pop()
                self._add(BLOCK_END, lineno, max(col, 0))
                self._expect_value = False
            else:
                break


    def _fetch_line(self, len=len):
        '''
        Scan the next source line that has content, producing at least one
        token unless the line only completes pending state.
        '''
        lines = self._lines
        while self._index < len(lines):
            line = lines[self._index]
            lineno = self._index + 1
            self._index += 1
            content = line.lstrip(SPACE)
            if content[:1] == TAB:
                if not content.lstrip(SEPARATOR) or content.lstrip(SEPARATOR)[:1] == COMMENT_DELIM:
                    continue
                raise erring.IndentationError(SourcePosition(lineno, len(line)-len(content)+1), 'Tabs are not allowed in indentation')
            if not content or content[:1] == COMMENT_DELIM:
                continue
            col = len(line) - len(content)
            if col == 0 and self._document_marker_re.match(line):
                self._scan_document_marker(line, lineno)
            else:
                self._scan_line(content, lineno, col)
            return
        lineno = len(lines)
        self._unwind(lineno, -1)
        self._add(STREAM_END, lineno, len(lines[-1]))
        self._done = True


    def _scan_document_marker(self, line, lineno):
        self._unwind(lineno, -1)
        self._expect_value = True
        rest = line[3:]
        content = rest.lstrip(SEPARATOR)
        if line[:3] == DOCUMENT_START_MARKER:
            self._add(DOCUMENT_START, lineno, 0)
            if content and content[:1] != COMMENT_DELIM:
                # Only a scalar may share a line with the start marker
                self._scan_node(content, lineno, 3 + len(rest) - len(content), push=False, inline=True)
        else:
            self._add(DOCUMENT_END, lineno, 0)
            if content and content[:1] != COMMENT_DELIM:
                raise erring.ScanError('Only a comment may follow a document end marker', SourcePosition(lineno, 4 + len(rest) - len(content)))


    def _scan_line(self, content, lineno, col):
        is_entry = self._block_entry_re.match(content) is not None
        self._unwind(lineno, col, is_entry)
        if not self._indents:
            if not self._expect_value:
                raise erring.ScanError('Expected a document start marker "---" before more content', SourcePosition(lineno, col+1))
            self._scan_block_content(content, lineno, col, push=True)
            return
        top_col, top_kind = self._indents[-1]
        if col > top_col:
            if not self._expect_value:
                raise erring.IndentationError(SourcePosition(lineno, col+1))
            self._scan_block_content(content, lineno, col, push=True)
        elif is_entry and top_kind == MAPPING and self._expect_value:
            # `key:` followed by entries at the key's own column
            self._indents.append((col, INDENTLESS_SEQUENCE))
            self._add(BLOCK_SEQUENCE_START, lineno, col)
            self._scan_block_content(content, lineno, col, push=False)
        else:
            self._scan_block_content(content, lineno, col, push=False)


    def _scan_block_content(self, content, lineno, col, push, len=len):
        '''
        Scan line content in block context.  Entries `- ` may be chained on a
        single line, each opening a nested sequence.
        '''
        while self._block_entry_re.match(content):
            if push:
                self._indents.append((col, SEQUENCE))
                self._add(BLOCK_SEQUENCE_START, lineno, col)
            self._add(BLOCK_ENTRY, lineno, col)
            self._expect_value = True
            rest = content[1:]
            content = rest.lstrip(SEPARATOR)
            if not content or content[:1] == COMMENT_DELIM:
                return
            col += 1 + len(rest) - len(content)
            push = True
        self._scan_node(content, lineno, col, push, inline=False)


    def _scan_node(self, content, lineno, col, push, inline):
        '''
        Scan a key or a scalar at `col`.  `inline` is true for values that
        follow `key: ` or `--- ` on the same line, where keys and entries
        are not allowed.  `push` is true when a key at this column opens a
        new mapping.
        '''
        if inline and self._block_entry_re.match(content):
            raise erring.ScanError('Block sequence entries are not allowed here', SourcePosition(lineno, col+1))
        m = self._empty_flow_collection_re.match(content)
        if m is not None:
            if m.group(1) == EMPTY_FLOW_SEQUENCE:
                self._add(BLOCK_SEQUENCE_START, lineno, col)
            else:
                self._add(BLOCK_MAPPING_START, lineno, col)
            self._add(BLOCK_END, lineno, col+1)
            self._expect_value = False
            return
        self._scan_node_token[content[:1]](content, lineno, col, push, inline)


    def _scan_forbidden(self, content, lineno, col, push, inline):
        raise erring.ForbiddenConstructError(_FORBIDDEN[content[:1]], SourcePosition(lineno, col+1))


    def _scan_key(self, key, style, lineno, col, push, inline, rest, rest_col, len=len):
        '''
        Emit tokens for `key:` and scan whatever follows the colon.
        '''
        if inline:
            raise erring.ScanError('Mapping values are not allowed here', SourcePosition(lineno, rest_col))
        if push:
            self._indents.append((col, MAPPING))
            self._add(BLOCK_MAPPING_START, lineno, col)
        self._add(KEY, lineno, col)
        self._add(SCALAR, lineno, col, key, style)
        self._add(VALUE, lineno, rest_col-1)
        self._expect_value = True
        content = rest.lstrip(SEPARATOR)
        if not content or content[:1] == COMMENT_DELIM:
            return
        value_col = rest_col + len(rest) - len(content)
        self._scan_node(content, lineno, value_col, push=False, inline=True)


    def _scan_plain(self, content, lineno, col, push, inline, len=len):
        '''
        Scan a plain scalar or key.  A plain scalar may continue onto
        following lines that are indented more deeply than the enclosing
        collection.
        '''
        c = content[:1]
        if c == EXPLICIT_KEY and content[1:2] in ('', SPACE, TAB):
            raise erring.ForbiddenConstructError('Explicit keys are not allowed', SourcePosition(lineno, col+1))
        if c == MAPPING_VALUE and content[1:2] in ('', SPACE, TAB):
            raise erring.ScanError('Mapping key is missing', SourcePosition(lineno, col+1))
        m = self._plain_end_re.search(content)
        if m is not None and m.group(0) == MAPPING_VALUE:
            key = content[:m.start()].rstrip(SEPARATOR)
            self._scan_key(key, PLAIN, lineno, col, push, inline, content[m.end():], col + m.end())
            return
        if m is None:
            value = content.rstrip(SEPARATOR)
            value = self._scan_plain_continuation(value)
        else:
            # A comment ends a plain scalar
            value = content[:m.start()]
        self._add(SCALAR, lineno, col, value, PLAIN)
        self._expect_value = False


    def _scan_plain_continuation(self, value, len=len):
        '''
        Fold continuation lines into a plain scalar.  A single line break
        becomes a space, and each blank line becomes a newline.
        '''
        lines = self._lines
        parent_col = self._parent_col()
        chunks = [value]
        blank = 0
        index = self._index
        while index < len(lines):
            line = lines[index]
            content = line.lstrip(SEPARATOR)
            if not content:
                blank += 1
                index += 1
                continue
            col = len(line) - len(line.lstrip(SPACE))
            if col <= parent_col or line[col:col+1] == TAB or content[:1] == COMMENT_DELIM:
                break
            if col == 0 and self._document_marker_re.match(line):
                break
            m = self._plain_end_re.search(content)
            if m is not None and m.group(0) == MAPPING_VALUE:
                raise erring.ScanError('Mapping values are not allowed in a multi-line plain scalar', SourcePosition(index+1, len(line)-len(content)+m.start()+1))
            chunks.append(NEWLINE*blank if blank else SPACE)
            blank = 0
            index += 1
            self._index = index
            if m is None:
                chunks.append(content.rstrip(SEPARATOR))
            else:
                chunks.append(content[:m.start()])
                break
        return ''.join(chunks)


    def _scan_quoted(self, content, lineno, col, push, inline, len=len):
        '''
        Scan a single-quoted or double-quoted scalar or key.  Quoted scalars
        may span lines; line breaks are folded as in plain scalars.
        '''
        delim = content[0]
        double = delim == DOUBLEQUOTE_DELIM
        start = SourcePosition(lineno, col+1)
        parent_col = self._parent_col()
        segments = []
        line = content
        offset = 1
        line_col = col
        current_lineno = lineno
        while True:
            if double:
                end = self._doublequote_content_re.match(line, offset).end()
            else:
                end = offset
                while True:
                    end = line.find(SINGLEQUOTE_DELIM, end)
                    if end < 0:
                        end = len(line)
                        break
                    if line[end+1:end+2] == SINGLEQUOTE_DELIM:
                        end += 2
                        continue
                    break
            if end < len(line) and line[end] == delim:
                segments.append(line[offset:end])
                rest = line[end+1:]
                rest_col = line_col + end + 1
                break
            segments.append(line[offset:])
            if self._index >= len(self._lines):
                raise erring.ScanError('Unterminated quoted scalar', start)
            line = self._lines[self._index]
            current_lineno = self._index + 1
            self._index += 1
            if self._document_marker_re.match(line):
                raise erring.ScanError('Document marker inside a quoted scalar', SourcePosition(current_lineno, 1))
            stripped = line.lstrip(SEPARATOR)
            line_col = len(line) - len(stripped)
            if stripped and line_col <= parent_col:
                raise erring.IndentationError(SourcePosition(current_lineno, line_col+1), 'Quoted scalar continuation line is not indented enough')
            line = stripped
            offset = 0

        value = self._fold_quoted(segments, double)
        if double:
            try:
                value = self._unescape(value)
            except erring.UnknownEscapeError as e:
                raise erring.ScanError(str(e), start) from e
        else:
            value = value.replace(SINGLEQUOTE_DELIM*2, SINGLEQUOTE_DELIM)
        style = DOUBLE_QUOTED if double else SINGLE_QUOTED

        after = rest.lstrip(SEPARATOR)
        after_col = rest_col + len(rest) - len(after)
        if after[:1] == MAPPING_VALUE and after[1:2] in ('', SPACE, TAB):
            if len(segments) > 1:
                raise erring.ScanError('A quoted key must be on a single line', start)
            self._scan_key(value, style, lineno, col, push, inline, after[1:], after_col+1)
            return
        if after and (after[:1] != COMMENT_DELIM or len(after) == len(rest)):
            raise erring.ScanError('Unexpected content after a quoted scalar', SourcePosition(current_lineno, after_col+1))
        self._add(SCALAR, lineno, col, value, style)
        self._expect_value = False


    @staticmethod
    def _fold_quoted(segments, double, len=len):
        '''
        Join the lines of a quoted scalar.  Whitespace around line breaks is
        trimmed, a single break becomes a space, and each empty line becomes
        a newline.  In double-quoted scalars, a break preceded by an
        unescaped backslash is removed along with the backslash.
        '''
        if len(segments) == 1:
            return segments[0]
        chunks = []
        blank = 0
        fold = False
        last = len(segments) - 1
        for n, s in enumerate(segments):
            escaped_break = False
            if n < last:
                trimmed = s.rstrip(SEPARATOR)
                if double:
                    backslashes = len(trimmed) - len(trimmed.rstrip('\\'))
                    if backslashes % 2 == 1:
                        if len(trimmed) < len(s):
                            # Escaped whitespace is content
                            trimmed = s[:len(trimmed)+1]
                        else:
                            trimmed = trimmed[:-1]
                            escaped_break = True
                s = trimmed
                if n > 0 and not s and not escaped_break:
                    blank += 1
                    continue
            if n > 0:
                if blank:
                    chunks.append(NEWLINE*blank)
                elif fold:
                    chunks.append(SPACE)
            chunks.append(s)
            blank = 0
            fold = not escaped_break
        return ''.join(chunks)


    def _scan_block_scalar(self, content, lineno, col, push, inline, len=len):
        '''
        Scan a literal `|` or folded `>` block scalar.  The header may carry
        an indentation indicator and a chomping indicator in either order.
        Without an indicator, the indentation is that of the first non-empty
        content line, which must be indented more deeply than the enclosing
        collection.
        '''
        m = self._block_scalar_header_re.match(content)
        indicators = m.group(2) or ''
        header_rest = m.group(3)
        if header_rest:
            stripped = header_rest.lstrip(SEPARATOR)
            if stripped and (stripped[:1] != COMMENT_DELIM or len(stripped) == len(header_rest)):
                raise erring.ScanError('Invalid block scalar header', SourcePosition(lineno, col+1))
        folded = m.group(1) == FOLDED_BLOCK
        chomping = None
        increment = None
        for c in indicators:
            if c == CHOMP_STRIP or c == CHOMP_KEEP:
                chomping = c
            else:
                increment = int(c)

        lines = self._lines
        n_lines = len(lines)
        parent_col = self._parent_col()
        if increment is not None:
            indent = max(parent_col, 0) + increment
        else:
            max_blank = 0
            indent = parent_col + 1
            for line in lines[self._index:]:
                if line.strip(SPACE):
                    indent = max(indent, max_blank, len(line) - len(line.lstrip(SPACE)))
                    break
                max_blank = max(max_blank, len(line))
            else:
                # Whitespace-only body
                indent = max(indent, max_blank)

        def is_break(line):
            return len(line) <= indent and not line.strip(SPACE)

        def is_content(line):
            if len(line) <= indent or line[:indent].strip(SPACE):
                return False
            if indent == 0 and self._document_marker_re.match(line):
                return False
            return True

        def scan_breaks(index):
            breaks = []
            while index < n_lines and is_break(lines[index]):
                if index < n_lines - 1:
                    breaks.append(NEWLINE)
                index += 1
            return breaks, index

        chunks = []
        line_break = ''
        breaks, index = scan_breaks(self._index)
        while index < n_lines and is_content(lines[index]):
            chunks.extend(breaks)
            text = lines[index][indent:]
            leading_non_space = text[:1] not in (SPACE, TAB)
            chunks.append(text)
            line_break = NEWLINE if index < n_lines - 1 else ''
            breaks, index = scan_breaks(index + 1)
            if index < n_lines and is_content(lines[index]):
                if folded and line_break and leading_non_space and lines[index][indent:indent+1] not in (SPACE, TAB):
                    if not breaks:
                        chunks.append(SPACE)
                else:
                    chunks.append(line_break)
            else:
                break
        self._index = index

        if chomping != CHOMP_STRIP:
            chunks.append(line_break)
        if chomping == CHOMP_KEEP:
            chunks.extend(breaks)
        self._add(SCALAR, lineno, col, ''.join(chunks), FOLDED if folded else LITERAL)
        self._expect_value = False
