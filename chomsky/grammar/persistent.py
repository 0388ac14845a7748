"""영속(persistent) Grammar 표현

모든 편집은 새 PGrammar를 돌려주고, 이전 값은 그대로 유효합니다.
바뀌지 않은 하위 구조(알파벳, 규칙 맵, body 집합)는 이전 값과 공유합니다.
함수 이름은 가변 Grammar의 메서드 이름과 같고, 첫 인자로 PGrammar를 받습니다.
"""

from __future__     import annotations
from dataclasses    import dataclass, field, replace
from typing         import Iterable
from frozendict     import frozendict
from .              import rules as R
from .grammar       import Grammar, GrammarType
from .relation      import ProductionRelation
from .symbols       import Alphabet, Symbol, SymbolLike, WordLike, as_symbol


@dataclass(frozen=True)
class PGrammar:
    """
    Grammar의 영속 표현. 필드 의미는 Grammar와 같습니다.
    - terminal_symbols / non_terminal_symbols : frozendict[Symbol, None]
    - production_rules                        : frozendict[Word, frozendict[Word, None]]
    """
    id: str
    start_symbol: Symbol
    name: str = ""
    type: GrammarType = GrammarType.REGULAR
    terminal_symbols: R.FrozenOrderedSet = field(default_factory=frozendict)
    non_terminal_symbols: R.FrozenOrderedSet = field(default_factory=frozendict)
    production_rules: R.Rules = field(default_factory=frozendict)


def new_pgrammar(id: str, start_symbol: SymbolLike, name: str = "") -> PGrammar:
    return PGrammar(id=id, start_symbol=as_symbol(start_symbol), name=name)


def _with_rules(g: PGrammar, rules: R.Rules) -> PGrammar:
    return g if rules is g.production_rules else replace(g, production_rules=rules)


# ----- 스칼라 필드 -----
def set_name(g: PGrammar, name: str) -> PGrammar:
    return g if g.name == name else replace(g, name=name)


def set_start_symbol(g: PGrammar, symbol: SymbolLike) -> PGrammar:
    symbol = as_symbol(symbol)
    return g if g.start_symbol == symbol else replace(g, start_symbol=symbol)


def set_type(g: PGrammar, type: GrammarType) -> PGrammar:
    return g if g.type is type else replace(g, type=type)


def check_own_type(g: PGrammar) -> GrammarType:
    from .classify import classify
    return classify(g)


def reclassify(g: PGrammar) -> PGrammar:
    return set_type(g, check_own_type(g))


# ----- 알파벳 -----
def add_terminal_symbol(g: PGrammar, symbol: SymbolLike) -> PGrammar:
    new = R.set_add(g.terminal_symbols, as_symbol(symbol))
    return g if new is g.terminal_symbols else replace(g, terminal_symbols=new)


def remove_terminal_symbol(g: PGrammar, symbol: SymbolLike) -> PGrammar:
    new = R.set_remove(g.terminal_symbols, as_symbol(symbol))
    return g if new is g.terminal_symbols else replace(g, terminal_symbols=new)


def add_non_terminal_symbol(g: PGrammar, symbol: SymbolLike) -> PGrammar:
    new = R.set_add(g.non_terminal_symbols, as_symbol(symbol))
    return g if new is g.non_terminal_symbols else replace(g, non_terminal_symbols=new)


def remove_non_terminal_symbol(g: PGrammar, symbol: SymbolLike) -> PGrammar:
    new = R.set_remove(g.non_terminal_symbols, as_symbol(symbol))
    return g if new is g.non_terminal_symbols else replace(g, non_terminal_symbols=new)


# ----- 생성 규칙 -----
def add_production_head(g: PGrammar, head: WordLike) -> PGrammar:
    return _with_rules(g, R.add_head(g.production_rules, head))


def remove_production_head(g: PGrammar, head: WordLike) -> PGrammar:
    return _with_rules(g, R.remove_head(g.production_rules, head))


def add_production_body(g: PGrammar, head: WordLike, body: WordLike) -> PGrammar:
    return _with_rules(g, R.add_body(g.production_rules, head, body))


def remove_production_body(g: PGrammar, head: WordLike, body: WordLike) -> PGrammar:
    return _with_rules(g, R.remove_body(g.production_rules, head, body))


def add_production(g: PGrammar, head: WordLike, bodies: Iterable[WordLike]) -> PGrammar:
    return _with_rules(g, R.add_production(g.production_rules, head, bodies))


def remove_production(g: PGrammar, head: WordLike, bodies: Iterable[WordLike]) -> PGrammar:
    return _with_rules(g, R.remove_production(g.production_rules, head, bodies))


# ----- 표현 간 변환 -----
def freeze(g: Grammar) -> PGrammar:
    """가변 Grammar → PGrammar (순서 보존)"""
    return PGrammar(
        id=g.id,
        start_symbol=g.start_symbol,
        name=g.name,
        type=g.type,
        terminal_symbols=R.frozen_alphabet(g.terminal_symbols),
        non_terminal_symbols=R.frozen_alphabet(g.non_terminal_symbols),
        production_rules=R.from_pairs(g.production_rules.items()),
    )


def thaw(g: PGrammar) -> Grammar:
    """PGrammar → 독립적인 가변 Grammar 사본"""
    return Grammar(
        id=g.id,
        start_symbol=g.start_symbol,
        name=g.name,
        type=g.type,
        terminal_symbols=Alphabet(g.terminal_symbols),
        non_terminal_symbols=Alphabet(g.non_terminal_symbols),
        production_rules=ProductionRelation(g.production_rules.items()),
    )
