"""chomsky 문법 표기 파서
- %name / %id / %start / %type 선언
- %terminals / %nonterminals 선언 (생략 시 규칙에서 추론)
- %head 선언: body 없이 head만 선언
- 규칙: HEAD... (':' | '->') body ('|' body)* ;
- 빈 워드: ε 또는 %empty, 혹은 아무 심볼도 없는 대안
- 세미콜론(;)은 모든 선언/규칙 종료에 **반드시 필요**
"""

from __future__ import annotations
import regex as re
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from .grammar import Grammar, GrammarType
from .symbols import EPSILON, EMPTY_WORD, Symbol, Word
import ast as _pyast

# ---- Lexer 토큰 ----
# IDENT는 유니코드 문자/숫자를 모두 허용합니다(\p{L}, \p{N}).
_IDENT_BODY = r"[\p{L}\p{N}_][\p{L}\p{N}_']*"

_TOKEN_SPEC = [
    ("WS",       r"[ \t\f\r]+"),
    ("NEWLINE",  r"\n"),
    ("COMMENT",  r"//[^\n]*"),
    ("MCOMMENT", r"/\*.*?\*/"),
    ("PERCENT",  r"%"),
    ("ARROW",    r"->|→"),
    ("COLON",    r":"),
    ("SEMI",     r";"),
    ("OR",       r"\|"),
    ("STRING",   r'"(?:\\.|[^"\\])*"'),
    ("SSTRING",  r"'(?:\\.|[^'\\])*'"),
    ("EPS",      r"ε(?![\p{L}\p{N}_'])"),
    ("IDENT",    _IDENT_BODY),
]
MASTER_RE = re.compile("|".join(f"(?P<{n}>{p})" for n, p in _TOKEN_SPEC), re.S)

IDENT_RE = re.compile(_IDENT_BODY)

_DIRECTIVES = ("name", "id", "start", "type", "terminals", "nonterminals", "head")


@dataclass
class Tok:
    kind: str
    lexeme: str
    start: int
    end: int
    line: int
    col: int


def _scan(src: str) -> List[Tok]:
    """공백/개행/주석은 줄/칼럼 갱신만 하고 토큰스트림에는 **넣지 않는다**."""
    toks: List[Tok] = []
    line = col = 1
    i = 0
    while i < len(src):
        m = MASTER_RE.match(src, i)
        if not m:
            raise SyntaxError(f"Unexpected char {src[i]!r} at {line}:{col}")
        kind = m.lastgroup or ""
        lex = m.group(0)
        start, end = i, m.end()
        nl_count = lex.count("\n")

        if kind not in ("WS", "COMMENT", "MCOMMENT", "NEWLINE"):
            toks.append(Tok(kind, lex, start, end, line, col))

        if nl_count:
            line += nl_count
            col = len(lex) - lex.rfind("\n")
        else:
            col += len(lex)
        i = end

    toks.append(Tok("EOF", "", len(src), len(src), line, col))
    return toks


# ---------- 오류 위치 표시 ----------
def _caret_at(src: str, pos: int) -> str:
    """pos가 속한 줄을 그대로 보여 주고, 그 아래 pos 칸에 ^ 를 찍습니다."""
    line_start = src.rfind("\n", 0, pos) + 1
    line_end = src.find("\n", pos)
    if line_end == -1:
        line_end = len(src)
    return src[line_start:line_end] + "\n" + " " * (pos - line_start) + "^"


# --- 토큰 스트림 ---
class _TS:
    """선읽기 1토큰짜리 커서. 오류는 모두 error()로 만들어 위치/캐럿을 붙입니다."""

    def __init__(self, toks: List[Tok], src: str):
        self.toks = toks
        self.i = 0
        self.src = src

    def la(self) -> Tok:
        return self.toks[self.i]

    def eat(self, kind: str) -> Tok:
        t = self.la()
        if t.kind != kind:
            raise self.error(f"Expected {kind}, got {t.kind}", t)
        self.i += 1
        return t

    def match(self, kind: str) -> Optional[Tok]:
        return self.eat(kind) if self.la().kind == kind else None

    def error(self, msg: str, tok: Optional[Tok] = None) -> SyntaxError:
        t = tok or self.la()
        return SyntaxError(f"{msg} at {t.line}:{t.col}\n{_caret_at(self.src, t.start)}")


def _require_semi(ts: _TS, context: str, example: str, anchor: Optional[Tok] = None) -> None:
    """';' 로 끝나지 않았으면, 직전 토큰(anchor) 바로 뒤를 가리키는 SyntaxError."""
    if ts.match("SEMI"):
        return
    got = ts.la()
    pos = anchor.end if anchor is not None else got.start
    raise SyntaxError(
        f"Missing ';' after {context} (semicolon is mandatory).\n"
        f"- Found: {'EOF' if got.kind == 'EOF' else got.kind} at {got.line}:{got.col}\n"
        f"- Example: {example}\n\n"
        f"{_caret_at(ts.src, pos)}"
    )


# --- 심볼 ---
_SYMBOL_KINDS = ("IDENT", "STRING", "SSTRING", "EPS")


def _symbol_of(tok: Tok) -> Symbol:
    if tok.kind in ("STRING", "SSTRING"):
        return Symbol(_pyast.literal_eval(tok.lexeme))
    if tok.kind == "EPS":
        return EPSILON
    return Symbol(tok.lexeme)


def _symbols_until(ts: _TS, stop: Tuple[str, ...]) -> Tuple[List[Symbol], Optional[Tok]]:
    """stop 토큰 전까지 심볼들을 모읍니다. '%empty'는 ε로 읽습니다."""
    out: List[Symbol] = []
    last: Optional[Tok] = None
    while ts.la().kind not in stop:
        t = ts.la()
        if t.kind in _SYMBOL_KINDS:
            out.append(_symbol_of(ts.eat(t.kind)))
            last = t
        elif t.kind == "PERCENT":
            ts.eat("PERCENT")
            kw = ts.eat("IDENT")
            if kw.lexeme != "empty":
                raise ts.error(f"Unknown directive %{kw.lexeme} inside a rule; did you mean '%empty'?", kw)
            out.append(EPSILON)
            last = kw
        else:
            raise ts.error(f"Unexpected token {t.kind}")
    return out, last


@dataclass
class _Decls:
    name: Optional[str] = None
    id: Optional[str] = None
    start: Optional[Symbol] = None
    type: Optional[GrammarType] = None
    terminals: Optional[List[Symbol]] = None
    nonterminals: Optional[List[Symbol]] = None
    rules: List[Tuple[Word, List[Word]]] = field(default_factory=list)


def _parse_directive(ts: _TS, d: _Decls) -> None:
    pct = ts.eat("PERCENT")
    kw = ts.eat("IDENT")
    key = kw.lexeme
    if key not in _DIRECTIVES:
        raise ts.error(f"Unknown directive %{key}", kw)
    args, last = _symbols_until(ts, ("SEMI", "EOF"))
    _require_semi(ts, f"%{key} declaration", f"%{key} ...;", anchor=last or kw)

    if key == "head":
        # 선언만 된 빈 head: %head A B;
        if not args:
            raise ts.error("%head expects at least one symbol", kw)
        d.rules.append((tuple(args), []))
        return

    if key in ("terminals", "nonterminals"):
        target = d.terminals if key == "terminals" else d.nonterminals
        if target is None:
            target = []
            setattr(d, key, target)
        target.extend(args)
        return

    if len(args) != 1:
        raise ts.error(f"%{key} expects exactly one value, got {len(args)}", pct)
    value = args[0]
    if key == "start":
        d.start = value
    elif key == "type":
        try:
            d.type = GrammarType(value.text)
        except ValueError:
            allowed = ", ".join(t.value for t in GrammarType)
            raise ts.error(f"Unknown grammar type '{value.text}' (expected one of: {allowed})", kw) from None
    else:
        setattr(d, key, value.text)


def _parse_rule(ts: _TS, d: _Decls) -> None:
    first = ts.la()
    head, _ = _symbols_until(ts, ("COLON", "ARROW", "SEMI", "EOF"))
    if not head:
        raise ts.error("Empty production head", first)
    if not (ts.match("COLON") or ts.match("ARROW")):
        raise ts.error("Expected ':' or '->' after production head")

    bodies: List[Word] = []
    last: Optional[Tok] = None
    while True:
        body, tail = _symbols_until(ts, ("OR", "SEMI", "EOF", "COLON", "ARROW"))
        bodies.append(tuple(body) if body else EMPTY_WORD)
        last = tail or last
        if not ts.match("OR"):
            break
    _require_semi(ts, "production rule", "S : a S | a ;", anchor=last or ts.toks[ts.i - 1])
    d.rules.append((tuple(head), bodies))


def _infer_alphabets(d: _Decls, start: Symbol) -> Tuple[List[Symbol], List[Symbol]]:
    """선언이 없으면: 비단말 = 시작기호 + 모든 head 심볼, 단말 = 나머지(ε 제외)"""
    nonterms: Dict[Symbol, None] = {}
    if d.nonterminals is not None:
        nonterms.update((s, None) for s in d.nonterminals)
    else:
        nonterms[start] = None
        for head, _ in d.rules:
            nonterms.update((s, None) for s in head if s != EPSILON)

    if d.terminals is not None:
        return list(d.terminals), list(nonterms)

    terms: Dict[Symbol, None] = {}
    for head, bodies in d.rules:
        for word in (head, *bodies):
            for s in word:
                if s != EPSILON and s not in nonterms:
                    terms[s] = None
    return list(terms), list(nonterms)


def parse_grammar(src: str, grammar_id: Optional[str] = None) -> Grammar:
    """
    텍스트 표기 → 가변 Grammar.
    - id 우선순위: 인자 grammar_id > %id > 새 uuid4
    - %type이 없으면 분류기로 type을 채웁니다.
    """
    ts = _TS(_scan(src), src)
    d = _Decls()
    while ts.la().kind != "EOF":
        if ts.la().kind == "PERCENT":
            _parse_directive(ts, d)
        else:
            _parse_rule(ts, d)

    start = d.start
    if start is None:
        if not d.rules:
            raise SyntaxError("Missing %start declaration (no rules to infer it from)")
        start = d.rules[0][0][0]

    terms, nonterms = _infer_alphabets(d, start)
    g = Grammar.new(grammar_id or d.id or uuid.uuid4().hex, start, name=d.name or "")
    for s in nonterms:
        g.add_non_terminal_symbol(s)
    for s in terms:
        g.add_terminal_symbol(s)
    for head, bodies in d.rules:
        g.add_production(head, bodies)

    if d.type is None:
        g.reclassify()
    else:
        g.type = d.type
    return g
