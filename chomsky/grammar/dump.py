"""Grammar → 텍스트 표기 (parser.parse_grammar의 역변환)"""

from __future__ import annotations
import json
from typing     import Iterable, List
from .grammar   import GrammarView
from .parser    import IDENT_RE
from .symbols   import EPSILON, Symbol, Word, is_empty_word

_RESERVED = {"ε"}


def _quote(s: Symbol) -> str:
    if s == EPSILON:
        return "ε"
    if s.text not in _RESERVED and IDENT_RE.fullmatch(s.text):
        return s.text
    return json.dumps(s.text, ensure_ascii=False)


def _word(word: Word) -> str:
    if is_empty_word(word):
        return "ε"
    return " ".join(_quote(s) for s in word)


def _decl(key: str, symbols: Iterable[Symbol]) -> str:
    items = " ".join(_quote(s) for s in symbols)
    return f"%{key} {items};" if items else f"%{key};"


def dump_grammar(grammar: GrammarView) -> str:
    """
    선언부(%id, %name, %type, %start, %terminals, %nonterminals) 다음에
    head 당 한 줄씩 규칙을 씁니다. body가 없는 head는 %head 로 씁니다.
    """
    lines: List[str] = [
        f"%id {json.dumps(grammar.id, ensure_ascii=False)};",
        f"%name {json.dumps(grammar.name, ensure_ascii=False)};",
        f"%type {grammar.type.value};",
        f"%start {_quote(grammar.start_symbol)};",
        _decl("terminals", grammar.terminal_symbols),
        _decl("nonterminals", grammar.non_terminal_symbols),
        "",
    ]
    for head, bodies in grammar.production_rules.items():
        bodies = list(bodies)
        if not bodies:
            lines.append(f"%head {_word(head)};")
            continue
        rhs = " | ".join(_word(b) for b in bodies)
        lines.append(f"{_word(head)} : {rhs} ;")
    return "\n".join(lines) + "\n"


def dump_productions(grammar: GrammarView) -> str:
    return "\n".join(
        f"{_word(head)} -> {_word(body)}"
        for head, bodies in grammar.production_rules.items()
        for body in bodies
    )
