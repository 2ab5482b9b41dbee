from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# --- Token Kinds ---
class TokenKind(str, Enum):
    KEYWORD = "KEYWORD"
    IDENTIFIER = "IDENTIFIER"
    LITERAL_STRING = "LITERAL_STRING"
    LITERAL_NUMBER = "LITERAL_NUMBER"
    LITERAL_BOOLEAN = "LITERAL_BOOLEAN"
    LITERAL_CHAR = "LITERAL_CHAR"
    OPERATOR = "OPERATOR"
    PUNCTUATION = "PUNCTUATION"
    COMMENT_SINGLE = "COMMENT_SINGLE"
    COMMENT_MULTI = "COMMENT_MULTI"
    WHITESPACE = "WHITESPACE"
    ERROR = "ERROR"

    @property
    def is_internal(self):
        """Whitespace and comments never reach the visible token list."""
        return self in (TokenKind.WHITESPACE, TokenKind.COMMENT_SINGLE, TokenKind.COMMENT_MULTI)

    @property
    def is_literal(self):
        return self in LITERAL_KINDS


LITERAL_KINDS = frozenset({
    TokenKind.LITERAL_STRING,
    TokenKind.LITERAL_NUMBER,
    TokenKind.LITERAL_BOOLEAN,
    TokenKind.LITERAL_CHAR,
})


class Language(str, Enum):
    JAVA = "java"
    CPP = "cpp"

    @classmethod
    def parse(cls, value):
        """Accept a Language, its value, or the role names primary/alternate."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        if name == "primary":
            return cls.JAVA
        if name == "alternate":
            return cls.CPP
        return cls(name)


# --- Tokens ---
@dataclass(frozen=True)
class Token:
    text: str
    kind: TokenKind
    line: int
    column: int
    message: Optional[str] = None

    @property
    def end_column(self):
        """Column just past the token, valid for single-line tokens."""
        return self.column + len(self.text)

    def to_dict(self):
        d = {'value': self.text, 'type': self.kind.value, 'line': self.line, 'column': self.column}
        if self.message is not None:
            d['message'] = self.message
        return d


# --- Symbol Table ---
GLOBAL_SCOPE = "global"


@dataclass
class SymbolTableEntry:
    lexeme: str
    token_kind: TokenKind
    data_type: Optional[str]
    scope: str
    line_numbers: List[int] = field(default_factory=list)
    attributes: Dict[str, Any] = field(default_factory=dict)

    def add_line(self, line):
        if line not in self.line_numbers:
            self.line_numbers.append(line)

    def to_dict(self):
        return {
            'lexeme': self.lexeme,
            'token_kind': self.token_kind.value,
            'data_type': self.data_type,
            'scope': self.scope,
            'line_numbers': list(self.line_numbers),
            'attributes': dict(self.attributes),
        }


# --- Statistics ---
@dataclass(frozen=True)
class LexemeStat:
    kind: TokenKind
    count: int
    frequency: float

    def to_dict(self):
        return {'type': self.kind.value, 'count': self.count, 'frequency': self.frequency}


# --- Analysis Result ---
@dataclass
class AnalysisResult:
    language: Language
    tokens: List[Token]
    symbol_table: List[SymbolTableEntry]
    lexeme_stats: List[LexemeStat]
    tac: List[str]
    diagnostics: List[str] = field(default_factory=list)

    @property
    def errors(self):
        return [t for t in self.tokens if t.kind is TokenKind.ERROR]

    def to_dict(self):
        """Convert the result to plain data for JSON serialization"""
        return {
            'language': self.language.value,
            'tokens': [t.to_dict() for t in self.tokens],
            'errors': [t.to_dict() for t in self.errors],
            'symbol_table': [e.to_dict() for e in self.symbol_table],
            'lexeme_stats': [s.to_dict() for s in self.lexeme_stats],
            'tac': list(self.tac),
            'diagnostics': list(self.diagnostics),
        }
