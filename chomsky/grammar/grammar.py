"""가변 Grammar 집합체와, 두 표현(가변/영속)이 공유하는 읽기 인터페이스"""

from __future__     import annotations
from dataclasses    import dataclass, field
from enum           import Enum
from typing         import Any, Collection, Iterable, Protocol, Tuple
from .relation      import ProductionRelation
from .symbols       import Alphabet, Symbol, SymbolLike, Word, WordLike, as_symbol


class GrammarType(Enum):
    """촘스키 계층. 뒤로 갈수록 제약이 약합니다(Type-3 → Type-0)."""
    REGULAR = "REGULAR"
    CONTEXT_FREE = "CONTEXT_FREE"
    CONTEXT_SENSITIVE = "CONTEXT_SENSITIVE"
    UNRESTRICTED = "UNRESTRICTED"


class RuleView(Protocol):
    def items(self) -> Iterable[Tuple[Word, Iterable[Word]]]: ...


class GrammarView(Protocol):
    """
    분류기/직렬화기가 요구하는 최소 읽기 능력.
    Grammar(가변)와 PGrammar(영속) 모두 이 모양을 만족합니다.
    """

    @property
    def id(self) -> str: ...
    @property
    def name(self) -> str: ...
    @property
    def type(self) -> GrammarType: ...
    @property
    def start_symbol(self) -> Symbol: ...
    @property
    def terminal_symbols(self) -> Collection[Symbol]: ...
    @property
    def non_terminal_symbols(self) -> Collection[Symbol]: ...
    @property
    def production_rules(self) -> RuleView: ...


@dataclass
class Grammar:
    """
    Grammar (가변 표현)
    ===================
    알파벳과 생성 규칙을 제자리(in-place)에서 편집합니다.

    - id   : 생성 시 외부에서 받은 불투명 식별자. 이후 변경 불가
    - type : **캐시된** 분류 라벨. 편집 후 자동 갱신되지 않으므로
             필요하면 reclassify()를 호출하세요.
    - start_symbol 이 비단말 알파벳에 속하는지는 검사하지 않습니다(관례).
    """
    id: str
    start_symbol: Symbol
    name: str = ""
    type: GrammarType = GrammarType.REGULAR
    terminal_symbols: Alphabet = field(default_factory=Alphabet)
    non_terminal_symbols: Alphabet = field(default_factory=Alphabet)
    production_rules: ProductionRelation = field(default_factory=ProductionRelation)

    def __post_init__(self) -> None:
        self.start_symbol = as_symbol(self.start_symbol)

    def __setattr__(self, key: str, value: Any) -> None:
        if key == "id" and "id" in self.__dict__:
            raise AttributeError("grammar id is immutable")
        super().__setattr__(key, value)

    @classmethod
    def new(cls, id: str, start_symbol: SymbolLike, name: str = "") -> "Grammar":
        """빈 알파벳/빈 규칙으로 새 Grammar를 만듭니다."""
        return cls(id=id, start_symbol=as_symbol(start_symbol), name=name)

    # ----- 알파벳 -----
    def add_terminal_symbol(self, symbol: SymbolLike) -> None:
        self.terminal_symbols.add(symbol)

    def remove_terminal_symbol(self, symbol: SymbolLike) -> None:
        self.terminal_symbols.remove(symbol)

    def add_non_terminal_symbol(self, symbol: SymbolLike) -> None:
        self.non_terminal_symbols.add(symbol)

    def remove_non_terminal_symbol(self, symbol: SymbolLike) -> None:
        self.non_terminal_symbols.remove(symbol)

    # ----- 생성 규칙 (NotFoundError는 relation에서 그대로 전파) -----
    def add_production_head(self, head: WordLike) -> None:
        self.production_rules.add_head(head)

    def remove_production_head(self, head: WordLike) -> None:
        self.production_rules.remove_head(head)

    def add_production_body(self, head: WordLike, body: WordLike) -> None:
        self.production_rules.add_body(head, body)

    def remove_production_body(self, head: WordLike, body: WordLike) -> None:
        self.production_rules.remove_body(head, body)

    def add_production(self, head: WordLike, bodies: Iterable[WordLike]) -> None:
        self.production_rules.add_production(head, bodies)

    def remove_production(self, head: WordLike, bodies: Iterable[WordLike]) -> None:
        self.production_rules.remove_production(head, bodies)

    # ----- 분류 -----
    def check_own_type(self) -> GrammarType:
        from .classify import classify
        return classify(self)

    def reclassify(self) -> GrammarType:
        self.type = self.check_own_type()
        return self.type

    def copy(self) -> "Grammar":
        return Grammar(
            id=self.id,
            start_symbol=self.start_symbol,
            name=self.name,
            type=self.type,
            terminal_symbols=self.terminal_symbols.copy(),
            non_terminal_symbols=self.non_terminal_symbols.copy(),
            production_rules=self.production_rules.copy(),
        )

