"""영속 생성 규칙 관계: frozendict[Word, frozendict[Word, None]]

relation.ProductionRelation과 같은 연산을 순수 함수로 제공합니다.
- 모든 함수는 새 값을 돌려주고 입력 값은 건드리지 않습니다.
- 바뀌는 것이 없으면 **같은 객체**를 돌려줍니다(멱등).
- 없는 head는 빈 body 집합으로 간주합니다(NotFoundError 없음).
"""

from __future__ import annotations
from typing     import Iterable, List, Tuple, TypeVar
from frozendict import frozendict
from .symbols   import SymbolLike, Word, WordLike, as_symbol, as_word

T = TypeVar("T")

FrozenOrderedSet = frozendict           # frozendict[T, None]
Bodies = frozendict                     # frozendict[Word, None]
Rules = frozendict                      # frozendict[Word, Bodies]

EMPTY: frozendict = frozendict()


def set_add(s: frozendict, item: T) -> frozendict:
    return s if item in s else s.set(item, None)


def set_remove(s: frozendict, item: T) -> frozendict:
    return s.delete(item) if item in s else s


def frozen_alphabet(symbols: Iterable[SymbolLike] = ()) -> FrozenOrderedSet:
    return frozendict((as_symbol(s), None) for s in symbols)


def add_head(rules: Rules, head: WordLike) -> Rules:
    key = as_word(head)
    return rules if key in rules else rules.set(key, EMPTY)


def remove_head(rules: Rules, head: WordLike) -> Rules:
    return set_remove(rules, as_word(head))


def add_production(rules: Rules, head: WordLike, bodies: Iterable[WordLike]) -> Rules:
    """head의 body 집합(없으면 빈 집합)에 bodies를 하나씩 병합합니다."""
    key = as_word(head)
    old = rules.get(key)
    new = EMPTY if old is None else old
    for body in bodies:
        new = set_add(new, as_word(body))
    if old is not None and new is old:
        return rules
    return rules.set(key, new)


def remove_production(rules: Rules, head: WordLike, bodies: Iterable[WordLike]) -> Rules:
    key = as_word(head)
    old = rules.get(key)
    if old is None:
        return rules
    new = old
    for body in bodies:
        new = set_remove(new, as_word(body))
    return rules if new is old else rules.set(key, new)


def add_body(rules: Rules, head: WordLike, body: WordLike) -> Rules:
    return add_production(rules, head, (body,))


def remove_body(rules: Rules, head: WordLike, body: WordLike) -> Rules:
    return remove_production(rules, head, (body,))


def to_canonical_list(rules: Rules) -> List[Tuple[Word, List[Word]]]:
    return [(head, list(bodies)) for head, bodies in rules.items()]


def from_pairs(pairs: Iterable[Tuple[WordLike, Iterable[WordLike]]]) -> Rules:
    """(head, bodies) 목록으로 Rules를 만듭니다. 같은 head가 여러 번 나오면 병합합니다."""
    rules: Rules = EMPTY
    for head, bodies in pairs:
        rules = add_production(rules, head, bodies)
    return rules


def bodies_of(rules: Rules, head: WordLike) -> Tuple[Word, ...]:
    return tuple(rules.get(as_word(head), EMPTY))
