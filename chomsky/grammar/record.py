"""Grammar ↔ 저장용 평면 레코드(dict) 직렬화

레코드 스키마 (GrammarRecord)
----------------------------
    {
      "id": str, "name": str, "type": "REGULAR" | "CONTEXT_FREE" | ...,
      "startSymbol": str,
      "nonTerminals": [str, ...],
      "terminals":    [str, ...],
      "rules": [ {"head": [str, ...], "bodies": [[str, ...], ...]}, ... ]
    }

- 심볼은 텍스트로만 저장합니다(심볼 동등성이 텍스트 동등성이므로 손실 없음).
- 읽을 때 같은 head가 여러 항목으로 나오면 body들을 **병합**합니다.
- 참조 무결성(규칙의 심볼이 알파벳에 있는지, 시작기호가 비단말인지)은 검사하지 않습니다.
"""

from __future__ import annotations
import json
import logging
from typing     import Any, Iterable, List, Mapping, Tuple, TypedDict
from .          import rules as R
from .errors    import RecordError
from .grammar   import Grammar, GrammarType, GrammarView
from .persistent import PGrammar, reclassify, set_type
from .relation  import ProductionRelation
from .symbols   import Alphabet, Symbol, Word, word_texts

logger = logging.getLogger(__name__)


class RuleRecord(TypedDict):
    head: List[str]
    bodies: List[List[str]]


class GrammarRecord(TypedDict):
    id: str
    name: str
    type: str
    startSymbol: str
    nonTerminals: List[str]
    terminals: List[str]
    rules: List[RuleRecord]


def to_record(grammar: GrammarView) -> GrammarRecord:
    """가변/영속 어느 표현이든 같은 레코드로 변환합니다."""
    return {
        "id": grammar.id,
        "name": grammar.name,
        "type": grammar.type.value,
        "startSymbol": grammar.start_symbol.text,
        "nonTerminals": [s.text for s in grammar.non_terminal_symbols],
        "terminals": [s.text for s in grammar.terminal_symbols],
        "rules": [
            {"head": word_texts(head), "bodies": [word_texts(b) for b in bodies]}
            for head, bodies in grammar.production_rules.items()
        ],
    }


# ---------- 읽기 ----------

def _require(record: Mapping[str, Any], key: str) -> Any:
    try:
        return record[key]
    except KeyError:
        raise RecordError(f"grammar record is missing required field '{key}'") from None


def _str_list(value: Any, what: str) -> List[str]:
    if isinstance(value, (str, Mapping)) or not isinstance(value, Iterable):
        raise RecordError(f"{what} must be a list of strings, got {type(value).__name__}")
    return [str(v) for v in value]


def _parse_type(value: Any) -> GrammarType:
    try:
        return GrammarType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in GrammarType)
        raise RecordError(f"unknown grammar type {value!r} (expected one of: {allowed})") from None


def _rule_pairs(record: Mapping[str, Any]) -> List[Tuple[Word, List[Word]]]:
    pairs: List[Tuple[Word, List[Word]]] = []
    for i, rule in enumerate(record.get("rules") or ()):
        if not isinstance(rule, Mapping) or "head" not in rule:
            raise RecordError(f"rules[{i}] must be an object with 'head' and 'bodies'")
        head = tuple(Symbol(t) for t in _str_list(rule["head"], f"rules[{i}].head"))
        bodies = [
            tuple(Symbol(t) for t in _str_list(b, f"rules[{i}].bodies[{j}]"))
            for j, b in enumerate(rule.get("bodies") or ())
        ]
        pairs.append((head, bodies))
    return pairs


def _fields(record: Mapping[str, Any]) -> dict:
    if not isinstance(record, Mapping):
        raise RecordError(f"grammar record must be an object, got {type(record).__name__}")
    return {
        "id": str(_require(record, "id")),
        "start_symbol": Symbol(str(_require(record, "startSymbol"))),
        "name": str(record.get("name", "")),
        "non_terminals": _str_list(record.get("nonTerminals", ()), "nonTerminals"),
        "terminals": _str_list(record.get("terminals", ()), "terminals"),
        "pairs": _rule_pairs(record),
        "type": record.get("type"),
    }


def from_record(record: Mapping[str, Any]) -> Grammar:
    """레코드 → 가변 Grammar. type이 없으면 분류기로 채웁니다."""
    f = _fields(record)
    g = Grammar(
        id=f["id"],
        start_symbol=f["start_symbol"],
        name=f["name"],
        terminal_symbols=Alphabet(f["terminals"]),
        non_terminal_symbols=Alphabet(f["non_terminals"]),
        production_rules=ProductionRelation(f["pairs"]),
    )
    if f["type"] is None:
        g.reclassify()
    else:
        g.type = _parse_type(f["type"])
    logger.debug("loaded grammar %s (%d heads)", g.id, len(g.production_rules))
    return g


def pgrammar_from_record(record: Mapping[str, Any]) -> PGrammar:
    """레코드 → PGrammar. 병합 규칙은 from_record와 같습니다."""
    f = _fields(record)
    g = PGrammar(
        id=f["id"],
        start_symbol=f["start_symbol"],
        name=f["name"],
        terminal_symbols=R.frozen_alphabet(f["terminals"]),
        non_terminal_symbols=R.frozen_alphabet(f["non_terminals"]),
        production_rules=R.from_pairs(f["pairs"]),
    )
    if f["type"] is None:
        return reclassify(g)
    return set_type(g, _parse_type(f["type"]))


def to_json(grammar: GrammarView, indent: int | None = None) -> str:
    return json.dumps(to_record(grammar), ensure_ascii=False, indent=indent)


def from_json(text: str) -> Grammar:
    try:
        record = json.loads(text)
    except json.JSONDecodeError as e:
        raise RecordError(f"invalid grammar JSON: {e}") from e
    return from_record(record)
