import logging

from languages import get_grammar
from lexeme_stats import compute_lexeme_stats
from lexer import scan
from lexical_types import AnalysisResult
from symbol_table import SymbolTableManager
from tac_generator import build_tac

logger = logging.getLogger(__name__)


def analyze(source, language):
    """
    Run every lexical phase over `source` and return an AnalysisResult.

    Each call builds its own scanner, symbol table and TAC context, so
    calls are independent of each other and safe to run concurrently.
    Malformed input never raises; it shows up as ERROR tokens and
    diagnostics.
    """
    grammar = get_grammar(language)
    symbols = SymbolTableManager(grammar)

    # Symbols see each token in document order, before the next is scanned
    tokens = []
    for token in scan(source, grammar.language):
        if token.kind.is_internal:
            continue
        symbols.observe_token(token)
        tokens.append(token)
    symbols.finish()

    lexeme_stats = compute_lexeme_stats(tokens)
    tac = build_tac(tokens)

    result = AnalysisResult(
        language=grammar.language,
        tokens=tokens,
        symbol_table=symbols.export_all(),
        lexeme_stats=lexeme_stats,
        tac=tac.instructions,
        diagnostics=symbols.diagnostics + tac.diagnostics,
    )
    logger.info("Found %d tokens (%d errors), %d symbols, %d TAC instructions",
                len(tokens), len(result.errors), len(result.symbol_table), len(result.tac))
    return result
