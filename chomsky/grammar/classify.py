"""촘스키 계층 추론(분류기)"""

from __future__ import annotations
import logging
from typing     import Collection, List, Tuple
from .grammar   import GrammarType, GrammarView
from .symbols   import EMPTY_WORD, Symbol, Word, real_length

logger = logging.getLogger(__name__)

_Rules = List[Tuple[Word, List[Word]]]


def _is_monotone_unit_rule(head: Word, bodies: List[Word], start: Symbol) -> bool:
    """Type-0 판정용: 모든 body가 비축소 && head 길이 1 && head가 시작기호가 아님
    (head 검사는 body가 없는 규칙에도 적용)"""
    return (
        all(real_length(head) <= len(body) for body in bodies)
        and len(head) == 1
        and head != (start,)
    )


def _is_right_linear_body(body: Word, terminals: Collection[Symbol]) -> bool:
    """Type-3 판정용: 길이 1 또는 2 이고 첫 심볼이 단말. 빈 워드(ε)는 통과."""
    if body == EMPTY_WORD:
        return True
    return len(body) in (1, 2) and body[0] in terminals


def classify(grammar: GrammarView) -> GrammarType:
    """
    classify
    ========
    현재 규칙만 보고 문법의 촘스키 계층을 처음부터 다시 계산합니다.
    세 단계 검사를 **순서대로** 수행하며, 처음 실패한 단계가 결과를 결정합니다.

    1) 모든 규칙에 대해 len(head) == 1, head != 시작기호,
       모든 body에 대해 real_length(head) <= len(body) → 하나라도 어기면 UNRESTRICTED
    2) 모든 head의 길이가 1                → 아니면 CONTEXT_SENSITIVE
       (1단계를 통과했다면 항상 참이지만, 단계 구조를 유지하기 위해 별도로 둡니다)
    3) 모든 body가 길이 1~2 이고 첫 심볼이 단말 → 아니면 CONTEXT_FREE
    모두 통과하면 REGULAR. 규칙이 하나도 없으면 REGULAR.

    예외를 던지지 않습니다.
    """
    rules: _Rules = [(head, list(bodies)) for head, bodies in grammar.production_rules.items()]
    start = grammar.start_symbol
    terminals = grammar.terminal_symbols

    if not all(
        _is_monotone_unit_rule(head, bodies, start) for head, bodies in rules
    ):
        logger.debug("grammar %s: unrestricted stage failed", grammar.id)
        return GrammarType.UNRESTRICTED

    if not all(len(head) == 1 for head, _ in rules):
        logger.debug("grammar %s: context-sensitive stage failed", grammar.id)
        return GrammarType.CONTEXT_SENSITIVE

    if not all(
        _is_right_linear_body(body, terminals)
        for _, bodies in rules
        for body in bodies
    ):
        logger.debug("grammar %s: regular stage failed", grammar.id)
        return GrammarType.CONTEXT_FREE

    return GrammarType.REGULAR
