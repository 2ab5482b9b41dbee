import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from analyzer import analyze
from languages import get_sample
from lexical_types import Language

console = Console()


def token_table(result):
    table = Table(title="Tokens")
    for col in ("Line", "Col", "Type", "Lexeme"):
        table.add_column(col)
    for t in result.tokens:
        style = "red" if t.message else None
        table.add_row(str(t.line), str(t.column), t.kind.value, Text(t.text), style=style)
    return table


def symbol_table(result):
    table = Table(title="Symbol Table")
    for col in ("Lexeme", "Kind", "Type", "Scope", "Lines"):
        table.add_column(col)
    for e in result.symbol_table:
        table.add_row(Text(e.lexeme), e.token_kind.value, Text(e.data_type or "-"), e.scope,
                      ", ".join(str(n) for n in e.line_numbers))
    return table


def stats_table(result):
    table = Table(title="Lexeme Statistics")
    for col in ("Type", "Count", "Frequency"):
        table.add_column(col)
    for s in result.lexeme_stats:
        table.add_row(s.kind.value, str(s.count), f"{s.frequency:.2%}")
    return table


def print_result(result):
    console.print(token_table(result))
    console.print(symbol_table(result))
    console.print(stats_table(result))
    console.print("[bold]Three-Address Code[/bold]")
    for line in result.tac:
        console.print(f"  {line}", markup=False)
    for message in result.diagnostics:
        console.print("[#9b59b6]Warning:[/#9b59b6]", Text(message))
    console.print(f"Found {len(result.tokens)} tokens, {len(result.errors)} invalid.")


def main(argv=None):
    parser = argparse.ArgumentParser(prog='project.py', description='Lexical analyzer for Java and C++ source')
    parser.add_argument('input', nargs='?', help='Source file; reads stdin when omitted')
    parser.add_argument('-l', '--language', choices=[lang.value for lang in Language], default='java')
    parser.add_argument('--sample', action='store_true', help='Analyze the built-in sample program')
    parser.add_argument('--json', action='store_true', help='Print the analysis as JSON')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.sample:
        code = get_sample(args.language)
    elif args.input:
        path = Path(args.input)
        if not path.exists():
            print(f"File not found: {path}")
            return 2
        code = path.read_text(encoding='utf-8')
    else:
        code = sys.stdin.read()

    result = analyze(code, args.language)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_result(result)
    return 0


if __name__ == '__main__':
    sys.exit(main())
