import logging

from languages import (
    ANGLE_RESET_TEXTS,
    MULTI_CHAR_OPERATORS,
    PUNCTUATION,
    SINGLE_CHAR_OPERATORS,
    char_re,
    get_grammar,
    identifier_re,
    number_re,
    string_re,
    whitespace_re,
)
from lexical_types import Language, Token, TokenKind

logger = logging.getLogger(__name__)


# --- Numeric Literals ---
def classify_number(match):
    """
    Infer the data type and Python value of a numeric literal match.

    Suffixes drive the type: f/F -> float, d/D -> double, l/L -> long.
    A fraction or exponent without a suffix is a double, anything else an int.
    """
    text = match.group()
    if match.group('hex_suffix') is not None:
        suffix = match.group('hex_suffix')
        digits = text[2:len(text) - len(suffix)]
        return ('long' if 'l' in suffix.lower() else 'int'), int(digits, 16)

    if match.group('float') is not None:
        suffix = match.group('float_suffix')
        value = float(match.group('float'))
        if suffix in ('f', 'F'):
            return 'float', value
        return 'double', value

    if match.group('real_suffix') is not None:
        suffix = match.group('real_suffix')
        value = float(text[:-1])
        return ('float' if suffix in ('f', 'F') else 'double'), value

    suffix = match.group('int_suffix') or ''
    digits = text[:len(text) - len(suffix)]
    if len(digits) > 1 and digits.startswith('0') and all(c in '01234567' for c in digits):
        value = int(digits, 8)
    else:
        try:
            value = int(digits)
        except ValueError:
            # past the interpreter's int string conversion limit
            logger.debug("Integer literal of %d digits kept without a value", len(digits))
            value = None
    return ('long' if 'l' in suffix.lower() else 'int'), value


def literal_info(token, grammar):
    """
    Return (data_type, value) for a constant token, or None when the token
    is not a constant.
    """
    if token.kind is TokenKind.LITERAL_NUMBER:
        match = number_re.fullmatch(token.text)
        if match is None:
            return None
        return classify_number(match)
    if token.kind is TokenKind.LITERAL_BOOLEAN:
        return ('boolean' if grammar.language is Language.JAVA else 'bool'), token.text == 'true'
    if token.kind is TokenKind.LITERAL_STRING:
        body = token.text[1:-1] if len(token.text) > 1 and token.text.endswith('"') else token.text[1:]
        return ('String' if grammar.language is Language.JAVA else 'string'), body
    if token.kind is TokenKind.LITERAL_CHAR:
        return 'char', token.text[1:-1]
    if token.kind is TokenKind.KEYWORD and token.text in grammar.null_literals:
        return 'null', None
    return None


# --- Token Scanner ---
class Scanner:
    """
    Single-pass scanner over one source string.

    Every span of the source is yielded exactly once, whitespace and
    comments included, so the yielded texts always add up to the input.
    """

    def __init__(self, source, language):
        self.source = source
        self.grammar = get_grammar(language)
        self.pos = 0
        self.line = 1
        self.column = 1
        self.open_angles = 0
        self.prev = None

    def _advance(self, text):
        newlines = text.count('\n')
        if newlines:
            self.line += newlines
            self.column = len(text) - text.rfind('\n')
        else:
            self.column += len(text)
        self.pos += len(text)

    def _emit(self, text, kind, message=None):
        token = Token(text, kind, self.line, self.column, message)
        self._advance(text)
        if not kind.is_internal and kind is not TokenKind.ERROR:
            if text in ANGLE_RESET_TEXTS:
                self.open_angles = 0
            self.prev = token
        return token

    def _at_line_start(self):
        start = self.source.rfind('\n', 0, self.pos) + 1
        return self.source[start:self.pos].strip() == ''

    def _opens_generic(self):
        prev = self.prev
        if prev is None or prev.line != self.line or prev.end_column != self.column:
            return False
        if prev.kind is TokenKind.KEYWORD:
            if prev.text not in self.grammar.type_keywords and prev.text not in self.grammar.generic_keywords:
                return False
        elif prev.kind is not TokenKind.IDENTIFIER:
            return False
        nxt = self.source[self.pos + 1:self.pos + 2]
        return nxt != '' and (nxt.isalpha() or nxt in '_$?>')

    def _match_operator(self):
        rest = self.source
        ch = rest[self.pos]
        if ch == '<' and self._opens_generic():
            self.open_angles += 1
            return '<'
        if ch == '>' and self.open_angles > 0:
            self.open_angles -= 1
            return '>'
        for op in MULTI_CHAR_OPERATORS:
            if rest.startswith(op, self.pos):
                return op
        if ch in SINGLE_CHAR_OPERATORS:
            return ch
        return None

    def __iter__(self):
        source = self.source
        grammar = self.grammar
        while self.pos < len(source):
            pos = self.pos

            m = whitespace_re.match(source, pos)
            if m:
                yield self._emit(m.group(), TokenKind.WHITESPACE)
                continue

            m = grammar.block_comment.match(source, pos)
            if m:
                yield self._emit(m.group(), TokenKind.COMMENT_MULTI)
                continue
            m = grammar.line_comment.match(source, pos)
            if m:
                yield self._emit(m.group(), TokenKind.COMMENT_SINGLE)
                continue

            if grammar.preprocessor is not None and self._at_line_start():
                m = grammar.preprocessor.match(source, pos)
                if m:
                    yield self._emit(m.group(), TokenKind.COMMENT_SINGLE)
                    continue

            m = identifier_re.match(source, pos)
            if m:
                word = m.group()
                if word in grammar.keywords:
                    kind = TokenKind.LITERAL_BOOLEAN if word in ('true', 'false') else TokenKind.KEYWORD
                else:
                    kind = TokenKind.IDENTIFIER
                yield self._emit(word, kind)
                continue

            m = string_re.match(source, pos)
            if m:
                yield self._emit(m.group(), TokenKind.LITERAL_STRING)
                continue
            m = char_re.match(source, pos)
            if m:
                yield self._emit(m.group(), TokenKind.LITERAL_CHAR)
                continue
            m = number_re.match(source, pos)
            if m:
                yield self._emit(m.group(), TokenKind.LITERAL_NUMBER)
                continue

            op = self._match_operator()
            if op is not None:
                yield self._emit(op, TokenKind.OPERATOR)
                continue

            ch = source[pos]
            if ch in PUNCTUATION:
                yield self._emit(ch, TokenKind.PUNCTUATION)
                continue

            logger.debug("Invalid character %r at line %d, column %d", ch, self.line, self.column)
            yield self._emit(ch, TokenKind.ERROR, message=f"Invalid character '{ch}'")


def scan(source, language):
    """Lazily yield every token of `source`, whitespace and comments included."""
    return iter(Scanner(source, language))


def tokenize(source, language):
    """Return the visible tokens: everything except whitespace and comments."""
    return [t for t in scan(source, language) if not t.kind.is_internal]
