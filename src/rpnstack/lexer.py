## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark


# Quoted strings get no special treatment: `"a b"` splits into `"a` and `b"`.
GRAMMAR = r"""?start: LEXEME*

LEXEME: /\S+/
WHITESPACE: /\s+/

%ignore WHITESPACE
"""

_PARSER = lark.Lark(GRAMMAR, start='start', parser='lalr', lexer='basic')


def read_lexemes(source: str, filename=None) -> list[tuple[str, dict]]:
    """Split source into `(text, meta)` pairs, left to right across lines."""
    lexemes = []
    for tok in _PARSER.lex(source):
        meta = {'filename': filename, 'line': tok.line, 'column': tok.column}
        lexemes.append((str(tok), meta))
    return lexemes


def format_source_context(meta: dict | None, token: str, source: str | None = None) -> str:
    """Show the line holding `token` with the token highlighted, as in a traceback."""
    if not meta or meta.get('line') is None: return ""
    line, column = meta['line'], meta['column']
    if source is None:
        if meta.get('filename') is None: return ""
        with open(meta['filename'], 'r', encoding='utf-8') as f:
            source = f.read()

    lines = source.splitlines()
    if not (0 < line <= len(lines)): return ""
    content = lines[line-1]
    content = (content[:column-1] +
               f"\033[48;5;30m\033[1;97m{content[column-1:column-1+len(token)]}\033[0m" +
               content[column-1+len(token):])
    header = f"\033[97m  File \"{meta.get('filename') or '<INPUT>'}\", line {line}, column {column}\033[0m"
    return f"{header}\n\033[97m{line:>5} |\033[0m {content}\n"
