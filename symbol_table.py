import logging

from languages import ANGLE_RESET_TEXTS
from lexer import literal_info
from lexical_types import GLOBAL_SCOPE, SymbolTableEntry, TokenKind

logger = logging.getLogger(__name__)

# Tokens after which a pending type no longer applies
HINT_BREAKS = frozenset({';', '{', '}', ')', '='})
NAME_PREFIXES = frozenset({'>', '*', '&', ']', '::'})


class SymbolTableManager:
    """
    Scoped symbol table fed one visible token at a time, in document order.

    Identifiers are inserted per (lexeme, scope); literal constants are
    pooled in the global scope so each distinct constant appears once.
    """

    def __init__(self, grammar):
        self.grammar = grammar
        self.scopes = [GLOBAL_SCOPE]
        self.entries = []
        self.diagnostics = []
        self._by_scope = {}
        self._constants = {}
        self._statement = []
        self._type_hint = None
        self._prev = None
        self._angle_depth = 0
        self._angle_start = 0
        self._angle_opened = False
        self._paren_depth = 0

    @property
    def current_scope(self):
        return self.scopes[-1]

    def _warn(self, message, line=None):
        if line is not None:
            message = f"line {line}: {message}"
        logger.warning(message)
        self.diagnostics.append(message)

    # --- Scope Stack ---
    def push_scope(self, context_hint, line, column):
        scope = f"{self.current_scope}/{context_hint}@L{line}C{column}"
        self.scopes.append(scope)
        logger.debug("Entered scope %s", scope)
        return scope

    def pop_scope(self, line=None):
        if len(self.scopes) == 1:
            self._warn("unmatched closing brace", line)
            return None
        scope = self.scopes.pop()
        logger.debug("Left scope %s", scope)
        return scope

    def finish(self):
        """Report blocks still open at end of input. The stack is left as is."""
        unclosed = len(self.scopes) - 1
        if unclosed:
            self._warn(f"{unclosed} unclosed block(s) at end of input, innermost {self.current_scope}")
        return unclosed

    def _scope_label(self):
        """Name the block opened by '{' from the statement that precedes it."""
        head = self._statement
        kinds = self.grammar
        for i in range(len(head) - 1):
            tok = head[i]
            if tok.kind is TokenKind.KEYWORD and tok.text in kinds.scope_keywords:
                nxt = head[i + 1]
                # enum class Color, enum struct Color
                if tok.text == 'enum' and nxt.text in ('class', 'struct') and i + 2 < len(head):
                    nxt = head[i + 2]
                if nxt.kind is TokenKind.IDENTIFIER:
                    return f"{tok.text}:{nxt.text}"
                return tok.text

        if not head:
            return "block"
        if head[-1].kind is TokenKind.KEYWORD and head[-1].text in kinds.control_keywords:
            return "control_block"

        # Find the last ')' and its matching '('
        close = None
        for i in range(len(head) - 1, -1, -1):
            if head[i].text == ')':
                close = i
                break
        if close is None:
            return "block"
        depth = 0
        open_index = None
        for i in range(close, -1, -1):
            if head[i].text == ')':
                depth += 1
            elif head[i].text == '(':
                depth -= 1
                if depth == 0:
                    open_index = i
                    break
        if open_index is None or open_index == 0:
            return "block"

        before = head[open_index - 1]
        if before.kind is TokenKind.KEYWORD and before.text in kinds.control_keywords:
            return "control_block"
        if before.kind is TokenKind.IDENTIFIER and open_index >= 2:
            shape = head[open_index - 2]
            if shape.kind in (TokenKind.KEYWORD, TokenKind.IDENTIFIER) or shape.text in NAME_PREFIXES:
                if shape.text not in kinds.control_keywords and shape.text != 'new':
                    return f"function:{before.text}"
        return "block"

    # --- Insertion / Lookup ---
    def lookup(self, lexeme):
        """Nearest entry for `lexeme` on the open scope path, innermost first."""
        for scope in reversed(self.scopes):
            entry = self._by_scope.get((lexeme, scope))
            if entry is not None:
                return entry
        return None

    def _insert(self, lexeme, kind, data_type, scope, line, attributes=None):
        entry = SymbolTableEntry(lexeme, kind, data_type, scope, [line], attributes or {})
        self.entries.append(entry)
        return entry

    def observe_identifier(self, lexeme, line, is_declaration=False, inferred_type=None):
        scope = self.current_scope
        entry = self._by_scope.get((lexeme, scope))

        if is_declaration:
            if entry is None:
                entry = self._insert(lexeme, TokenKind.IDENTIFIER, inferred_type, scope, line)
                self._by_scope[(lexeme, scope)] = entry
                return entry
            if entry.data_type and inferred_type and entry.data_type != inferred_type:
                self._warn(
                    f"'{lexeme}' redefined as {inferred_type} in {scope} (was {entry.data_type})",
                    line,
                )
            elif entry.data_type is None:
                entry.data_type = inferred_type
            entry.add_line(line)
            return entry

        if entry is None:
            entry = self.lookup(lexeme)
        if entry is None:
            entry = self._insert(lexeme, TokenKind.IDENTIFIER, inferred_type, scope, line)
            self._by_scope[(lexeme, scope)] = entry
            return entry
        entry.add_line(line)
        if entry.data_type is None and inferred_type:
            entry.data_type = inferred_type
        return entry

    def observe_literal(self, lexeme, kind, data_type, value, line):
        entry = self._constants.get((lexeme, kind))
        if entry is None:
            entry = self._insert(lexeme, kind, data_type, GLOBAL_SCOPE, line,
                                 {'is_constant': True, 'value': value})
            self._constants[(lexeme, kind)] = entry
        else:
            entry.add_line(line)
        return entry

    # --- Token Driver ---
    def _takes_type_arguments(self, prev, token):
        """'<' attached to a type-like name, the same test the scanner uses."""
        if prev is None or prev.line != token.line or prev.end_column != token.column:
            return False
        if prev.kind is TokenKind.IDENTIFIER:
            return True
        grammar = self.grammar
        return prev.kind is TokenKind.KEYWORD and (
            prev.text in grammar.type_keywords or prev.text in grammar.generic_keywords)

    def _update_hint(self, token):
        """Track the pending type across modifiers, type arguments, array and pointer declarators."""
        grammar = self.grammar
        prev = self._prev
        text = token.text

        if self._angle_opened:
            self._angle_opened = False
            # i<5 is a comparison, not a type argument list
            if token.kind not in (TokenKind.IDENTIFIER, TokenKind.KEYWORD) and text not in ('?', '>'):
                self._angle_depth -= 1
        if text in ANGLE_RESET_TEXTS:
            self._angle_depth = 0
        if text == '<' and token.kind is TokenKind.OPERATOR and self._takes_type_arguments(prev, token):
            if self._angle_depth == 0:
                self._angle_start = len(self._statement) - 1
            self._angle_depth += 1
            self._angle_opened = True
            return
        if text == '>' and self._angle_depth:
            self._angle_depth -= 1
            if self._angle_depth == 0:
                name = self._statement[self._angle_start]
                if name.kind is TokenKind.IDENTIFIER or name.text in grammar.type_keywords \
                        or name.text in grammar.container_keywords:
                    parts = [t.text for t in self._statement[self._angle_start:]]
                    self._type_hint = "".join(parts + ['>']).replace(',', ', ')
            return
        if self._angle_depth:
            return

        if token.kind is TokenKind.KEYWORD and text in grammar.type_keywords:
            # unsigned int, long long
            if self._type_hint and prev is not None and prev.kind is TokenKind.KEYWORD \
                    and prev.text in grammar.type_keywords:
                self._type_hint = f"{self._type_hint} {text}"
            else:
                self._type_hint = text
            return
        if token.kind is TokenKind.KEYWORD and text in grammar.modifiers:
            return
        if self._type_hint and prev is not None:
            if text == ']' and prev.text == '[':
                self._type_hint += '[]'
                return
            if grammar.pointer_declarators and text in ('*', '&') \
                    and (prev.text in grammar.type_keywords or prev.text in ('*', '&', '>')):
                self._type_hint += text
                return
        if text in HINT_BREAKS:
            self._type_hint = None

    def observe_token(self, token):
        """Feed one visible token; errors, whitespace and comments are ignored."""
        kind = token.kind
        if kind is TokenKind.ERROR or kind.is_internal:
            return

        self._update_hint(token)

        if kind is TokenKind.IDENTIFIER:
            if self._angle_depth:
                self.observe_identifier(token.text, token.line)
            else:
                hint = self._type_hint
                self._type_hint = None
                self.observe_identifier(token.text, token.line, hint is not None, hint)
        elif kind.is_literal or (kind is TokenKind.KEYWORD and token.text in self.grammar.null_literals):
            data_type, value = literal_info(token, self.grammar) or (None, None)
            self.observe_literal(token.text, kind, data_type, value, token.line)
        elif token.text == '{' and kind is TokenKind.PUNCTUATION:
            self.push_scope(self._scope_label(), token.line, token.column)
        elif token.text == '}' and kind is TokenKind.PUNCTUATION:
            self.pop_scope(token.line)

        if token.text == '(':
            self._paren_depth += 1
        elif token.text == ')' and self._paren_depth:
            self._paren_depth -= 1
        # a for header keeps its semicolons inside one statement
        if token.text in ('{', '}') or (token.text == ';' and not self._paren_depth):
            self._statement = []
            self._paren_depth = 0
        else:
            self._statement.append(token)
        self._prev = token

    def export_all(self):
        """All entries in first-insertion order."""
        return list(self.entries)
