# chomsky/chomskyc.py
"""chomskyc – chomsky CLI

사용 예)
    $ python -m chomsky.chomskyc check tests/grammar_test/binary.g -D
    $ python -m chomsky.chomskyc dump  tests/grammar_test/binary.g -o tests/tmp/binary.json --indent 2
    $ python -m chomsky.chomskyc fmt   tests/grammar_test/binary.json

기능
----
- check : 문법 파일(.g 또는 .json 레코드)을 읽어 촘스키 계층을 분류하고 요약 출력
- dump  : 문법을 저장용 레코드(JSON)로 방출 (type은 다시 분류한 값으로 갱신)
- fmt   : 문법을 텍스트 표기로 정리해서 출력

디버그 모드(-D/--debug)를 켜면 로딩/분류 과정과 규칙 목록을 stderr로 출력합니다.
"""

from __future__ import annotations
import argparse
import logging
import pathlib
import sys
from typing import Optional

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _setup_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG] %(name)s: %(message)s", stream=sys.stderr)

# ------------------------------
# 로딩
# ------------------------------

def _load(path: str, debug: bool, grammar_id: Optional[str] = None):
    """파일을 읽어 Grammar를 만들고, 저장된 type과 새로 계산한 type을 함께 돌려줍니다."""
    from .grammar.loader import load_grammar

    g = load_grammar(path, grammar_id=grammar_id)
    if debug: _eprint("[DEBUG] grammar loaded | id=%s heads=%d terms=%d nonterms=%d" %
                      (g.id, len(g.production_rules), len(g.terminal_symbols), len(g.non_terminal_symbols)))

    stored = g.type
    computed = g.check_own_type()
    if debug: _eprint("[DEBUG] classified | stored=%s computed=%s" % (stored.value, computed.value))
    return g, stored, computed


def _print_rules(g) -> None:
    from .grammar.dump import dump_productions
    _eprint("\n[Productions]")
    listing = dump_productions(g)
    _eprint(listing if listing else "(none)")

# ------------------------------
# 커맨드 구현
# ------------------------------

def _run(args, body) -> int:
    """공통 에러 처리: 문법/레코드/IO 오류는 메시지만 출력하고 2를 반환"""
    from .grammar.errors import RecordError

    _setup_logging(args.debug)
    try:
        return body()
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except RecordError as e:
        _eprint("[RECORD ERROR]", str(e))
        return 2
    except OSError as e:
        _eprint("[IO ERROR]", str(e))
        return 2


def cmd_check(args) -> int:
    def body() -> int:
        g, stored, computed = _load(args.file, args.debug)
        if args.debug:
            _print_rules(g)
        if stored is not computed:
            _eprint(f"[WARN] stored type {stored.value} differs from computed type {computed.value}")
        n_prods = sum(len(list(bodies)) for _, bodies in g.production_rules.items())
        print(f"[CHECK OK] type={computed.value} heads={len(g.production_rules)} productions={n_prods}")
        return 0
    return _run(args, body)


def cmd_dump(args) -> int:
    def body() -> int:
        from .grammar.record import to_json

        g, _, computed = _load(args.file, args.debug, grammar_id=args.id)
        g.type = computed
        src = to_json(g, indent=args.indent)
        if args.output:
            out_path = pathlib.Path(args.output)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(src + "\n", encoding="utf-8")
            print(f"[EMIT] record -> {out_path}")
            if args.debug:
                _eprint(f"[DEBUG] bytes={len(src)}")
        else:
            print(src)
        return 0
    return _run(args, body)


def cmd_fmt(args) -> int:
    def body() -> int:
        from .grammar.dump import dump_grammar

        g, _, _ = _load(args.file, args.debug, grammar_id=args.id)
        sys.stdout.write(dump_grammar(g))
        return 0
    return _run(args, body)

# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="chomskyc", description="chomsky grammar classifier CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="문법을 읽어 촘스키 계층을 분류합니다")
    p_check.add_argument("file", help=".g 문법 파일 또는 .json 레코드")
    p_check.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_check.set_defaults(func=cmd_check)

    p_dump = sub.add_parser("dump", help="문법을 JSON 레코드로 방출합니다")
    p_dump.add_argument("file", help=".g 문법 파일 또는 .json 레코드")
    p_dump.add_argument("-o", "--output", help="출력 파일 경로(미지정시 표준출력)")
    p_dump.add_argument("--indent", type=int, default=None, help="JSON 들여쓰기 폭")
    p_dump.add_argument("--id", help="(.g) %%id가 없을 때 쓸 grammar id")
    p_dump.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_dump.set_defaults(func=cmd_dump)

    p_fmt = sub.add_parser("fmt", help="문법을 텍스트 표기로 정리해 출력합니다")
    p_fmt.add_argument("file", help=".g 문법 파일 또는 .json 레코드")
    p_fmt.add_argument("--id", help="(.g) %%id가 없을 때 쓸 grammar id")
    p_fmt.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_fmt.set_defaults(func=cmd_fmt)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
