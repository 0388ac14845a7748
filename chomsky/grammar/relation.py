"""가변(in-place) 생성 규칙 관계: head(Word) → body 집합(Word들)"""

from __future__     import annotations
import logging
from typing         import Dict, Iterable, Iterator, List, Optional, Tuple
from .errors        import NotFoundError
from .symbols       import Word, WordLike, as_word

logger = logging.getLogger(__name__)


class ProductionRelation:
    """
    ProductionRelation
    ==================
    head → {body, ...} 다중값 관계를 **삽입 순서대로** 보관합니다.

    불변식
    ------
    - head/body는 모두 정규화된 Word(Symbol 튜플)로 저장되며, 비교는 원소별 값 비교입니다.
      (심볼 텍스트를 구분자로 이어 붙여 비교하지 않습니다)
    - 한 head의 body 집합에는 같은 Word가 두 번 들어가지 않습니다.
    - head → {} (선언만 된 빈 head)는 유효하며 "head 없음"과 구분됩니다.

    head가 없을 때 remove_head / add_body / remove_body / remove_production / bodies 는
    NotFoundError를 던집니다.
    """

    def __init__(self, rules: Optional[Iterable[Tuple[WordLike, Iterable[WordLike]]]] = None):
        # body 집합은 순서 보존을 위해 dict[Word, None]으로 둡니다.
        self._rules: Dict[Word, Dict[Word, None]] = {}
        for head, bodies in rules or ():
            self.add_production(head, bodies)

    def _entry(self, head: WordLike) -> Dict[Word, None]:
        key = as_word(head)
        try:
            return self._rules[key]
        except KeyError:
            raise NotFoundError(key) from None

    # ----- head 편집 -----
    def add_head(self, head: WordLike) -> None:
        self._rules.setdefault(as_word(head), {})

    def remove_head(self, head: WordLike) -> None:
        key = as_word(head)
        if key not in self._rules:
            raise NotFoundError(key)
        deleted = self._rules.pop(key)
        logger.debug("removed production head %s (%d bodies)", key, len(deleted))

    # ----- body 편집 -----
    def add_body(self, head: WordLike, body: WordLike) -> None:
        self._entry(head).setdefault(as_word(body), None)

    def remove_body(self, head: WordLike, body: WordLike) -> None:
        self._entry(head).pop(as_word(body), None)

    def add_production(self, head: WordLike, bodies: Iterable[WordLike]) -> None:
        """
        upsert. head가 있으면 bodies를 **하나씩 독립적으로** 병합하고(이미 있는 body만 건너뜀),
        없으면 head → bodies 항목을 새로 만듭니다.
        """
        entry = self._rules.setdefault(as_word(head), {})
        for body in bodies:
            entry.setdefault(as_word(body), None)

    def remove_production(self, head: WordLike, bodies: Iterable[WordLike]) -> None:
        entry = self._entry(head)
        for body in bodies:
            entry.pop(as_word(body), None)

    # ----- 조회 -----
    def bodies(self, head: WordLike) -> Tuple[Word, ...]:
        return tuple(self._entry(head))

    def has_body(self, head: WordLike, body: WordLike) -> bool:
        entry = self._rules.get(as_word(head))
        return entry is not None and as_word(body) in entry

    def items(self) -> Iterator[Tuple[Word, Tuple[Word, ...]]]:
        for head, bodies in self._rules.items():
            yield head, tuple(bodies)

    def to_canonical_list(self) -> List[Tuple[Word, List[Word]]]:
        """직렬화용 (head, [body, ...]) 목록. head 순서 = 삽입 순서."""
        return [(head, list(bodies)) for head, bodies in self._rules.items()]

    def copy(self) -> "ProductionRelation":
        return ProductionRelation(self.to_canonical_list())

    def __contains__(self, head: object) -> bool:
        try:
            return as_word(head) in self._rules  # type: ignore[arg-type]
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Word]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProductionRelation):
            return NotImplemented
        if self._rules.keys() != other._rules.keys():
            return False
        return all(bodies.keys() == other._rules[h].keys() for h, bodies in self._rules.items())

    def __repr__(self) -> str:
        parts = []
        for head, bodies in self._rules.items():
            rhs = " | ".join(" ".join(map(str, b)) for b in bodies)
            parts.append(f"{' '.join(map(str, head))} -> {rhs}")
        return f"ProductionRelation([{'; '.join(parts)}])"
