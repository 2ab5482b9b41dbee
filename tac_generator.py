import logging

from languages import RELATIONAL_OPERATORS, TAC_OPERATORS
from lexical_types import TokenKind

logger = logging.getLogger(__name__)

ERROR_EMPTY_EXPRESSION = "ERROR_EMPTY_EXPRESSION"
ERROR_MALFORMED_EXPRESSION = "ERROR_MALFORMED_EXPRESSION"


# --- Intermediate Code Generator ---
class TacContext:
    """Counters, output and diagnostics for one generation run."""

    def __init__(self):
        self.temp_counter = 1
        self.label_counter = 1
        self.instructions = []
        self.diagnostics = []

    def new_temp(self):
        name = f"t{self.temp_counter}"
        self.temp_counter += 1
        return name

    def new_label(self):
        name = f"L{self.label_counter}"
        self.label_counter += 1
        return name

    def emit(self, instruction):
        self.instructions.append(instruction)

    def warn(self, message):
        logger.warning(message)
        self.diagnostics.append(message)


def flatten_expression(tokens, ctx):
    """
    Flatten a token span strictly left to right, without precedence.

    Every (operator, operand) pair becomes `tK = left op right` and the
    temporary becomes the next left operand. Returns the name holding the
    final value, or an error marker for a malformed span.
    """
    if not tokens:
        ctx.warn("Empty expression for TAC generation")
        return ERROR_EMPTY_EXPRESSION
    if len(tokens) == 1:
        return tokens[0].text

    left = tokens[0].text
    i = 1
    while i < len(tokens):
        op = tokens[i].text
        right = tokens[i + 1].text if i + 1 < len(tokens) else None
        if right is None or op not in TAC_OPERATORS:
            if i == 1:
                return left
            ctx.warn(f"Malformed expression near '{left}' at line {tokens[i].line}")
            return ERROR_MALFORMED_EXPRESSION
        temp = ctx.new_temp()
        ctx.emit(f"{temp} = {left} {op} {right}")
        left = temp
        i += 2
    return left


def _condition(tokens, ctx):
    # A single comparison is tested in place
    if len(tokens) == 3 and tokens[1].text in RELATIONAL_OPERATORS:
        return " ".join(t.text for t in tokens)
    return flatten_expression(tokens, ctx)


def _assignment(tokens, i, ctx):
    target = tokens[i]
    j = i + 2
    expression = []
    while j < len(tokens) and tokens[j].text != ';':
        expression.append(tokens[j])
        j += 1
    if expression:
        result = flatten_expression(expression, ctx)
        ctx.emit(f"{target.text} = {result}")
    else:
        ctx.warn(f"Assignment without expression for {target.text} at line {target.line}")
    return j + 1


def _if_header(tokens, i, ctx):
    j = i + 2
    condition = []
    depth = 1
    while j < len(tokens):
        if tokens[j].text == '(':
            depth += 1
        elif tokens[j].text == ')':
            depth -= 1
            if depth == 0:
                break
        condition.append(tokens[j])
        j += 1

    if depth != 0 or not condition:
        ctx.warn(f"Malformed if statement at line {tokens[i].line}")
        return i + 1

    result = _condition(condition, ctx)
    label = ctx.new_label()
    ctx.emit(f"if_false {result} goto {label}")
    # The body is not walked; the false label follows the header directly.
    ctx.emit(f"{label}:")
    return j + 1


def build_tac(tokens):
    """
    Run three-address code generation for assignments and if headers.

    `tokens` is the visible token list; ERROR tokens are dropped first.
    Counters restart at t1/L1 on every call. Returns the run's context.
    """
    tokens = [t for t in tokens if t.kind is not TokenKind.ERROR and not t.kind.is_internal]
    ctx = TacContext()
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        nxt = tokens[i + 1] if i + 1 < len(tokens) else None
        if tok.kind is TokenKind.IDENTIFIER and nxt is not None and nxt.text == '=':
            i = _assignment(tokens, i, ctx)
        elif tok.kind is TokenKind.KEYWORD and tok.text == 'if' and nxt is not None and nxt.text == '(':
            i = _if_header(tokens, i, ctx)
        else:
            i += 1
    return ctx


def generate_tac(tokens):
    return build_tac(tokens).instructions
