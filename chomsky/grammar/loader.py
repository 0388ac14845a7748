"""문법 파일 로더 (.g 텍스트 표기 / .json 레코드)"""

from __future__ import annotations
import regex as re
from pathlib    import Path
from typing     import Optional
from .grammar   import Grammar
from .parser    import parse_grammar
from .record    import from_json

_NEWLINE_RE = re.compile(r"\r\n?")


def load_grammar_text(path: str) -> str:
    """UTF-8로 읽고 줄바꿈을 \\n 하나로 통일합니다(오류 위치의 줄/칸 계산이 이에 의존)."""
    with open(path, encoding="utf-8", newline="") as f:
        return _NEWLINE_RE.sub("\n", f.read())


def load_grammar(path: str, grammar_id: Optional[str] = None) -> Grammar:
    """
    확장자가 .json이면 레코드로, 그 밖에는 텍스트 표기로 읽습니다.
    grammar_id는 텍스트 표기에서만 쓰입니다(레코드는 자기 id를 가짐).
    """
    text = load_grammar_text(path)
    if Path(path).suffix.lower() == ".json":
        return from_json(text)
    return parse_grammar(text, grammar_id=grammar_id)
