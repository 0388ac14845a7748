"""심볼 / 알파벳 / 워드(Word) 값 타입.

- Symbol  : 텍스트 하나를 감싼 불변 값. **텍스트가 같으면 같은 심볼**입니다.
- EPSILON : 빈 문자열을 뜻하는 예약 심볼('ε')
- Word    : Symbol 튜플. 튜플은 내용 기반으로 비교/해시되므로 dict/set 키로 바로 쓸 수 있습니다.
- Alphabet: 심볼 집합(값 동등성 기반 멤버십, 삽입 순서는 출력 안정성 용도로만 유지)
"""

from __future__     import annotations
from dataclasses    import dataclass
from typing         import Dict, Iterable, Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class Symbol:
    text: str

    def __str__(self) -> str:
        return self.text


EPSILON = Symbol("ε")

Word = Tuple[Symbol, ...]

# 빈 워드의 정규형. ()와 (ε,)는 같은 키로 취급합니다.
EMPTY_WORD: Word = (EPSILON,)

SymbolLike = Union[Symbol, str]
WordLike = Union[SymbolLike, Iterable[SymbolLike]]


def as_symbol(s: SymbolLike) -> Symbol:
    return s if isinstance(s, Symbol) else Symbol(str(s))


def as_word(seq: WordLike) -> Word:
    """
    Symbol/str 시퀀스를 정규화된 Word로 변환합니다.
    - Symbol 또는 str 하나만 주어지면 길이 1 워드
    - 비어 있거나 ε만으로 이루어진 워드는 EMPTY_WORD로 통일
    """
    if isinstance(seq, (Symbol, str)):
        seq = (seq,)
    word = tuple(as_symbol(s) for s in seq)
    if all(s == EPSILON for s in word):
        return EMPTY_WORD
    return word


def real_length(word: Word) -> int:
    """ε를 제외한 '실제' 심볼 개수."""
    return sum(1 for s in word if s != EPSILON)


def is_empty_word(word: Word) -> bool:
    return real_length(word) == 0


def word_texts(word: Word) -> list:
    return [s.text for s in word]


class Alphabet:
    """
    Alphabet
    ========
    심볼 집합. 같은 텍스트의 심볼은 한 번만 들어갑니다.
    - add(): 이미 있으면 no-op
    - remove(): 없으면 no-op
    - == 비교는 순서와 무관한 집합 비교입니다.
    """

    def __init__(self, symbols: Optional[Iterable[SymbolLike]] = None):
        self._symbols: Dict[Symbol, None] = {}
        for s in symbols or ():
            self.add(s)

    def add(self, symbol: SymbolLike) -> None:
        self._symbols.setdefault(as_symbol(symbol), None)

    def remove(self, symbol: SymbolLike) -> None:
        self._symbols.pop(as_symbol(symbol), None)

    def __contains__(self, symbol: object) -> bool:
        if isinstance(symbol, str):
            symbol = Symbol(symbol)
        return symbol in self._symbols

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._symbols.keys() == other._symbols.keys()

    def copy(self) -> "Alphabet":
        return Alphabet(self._symbols)

    def __repr__(self) -> str:
        return f"Alphabet({[s.text for s in self._symbols]})"
