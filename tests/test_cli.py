import json
from pathlib import Path

from chomsky.chomskyc import main
from chomsky.grammar.parser import parse_grammar

HERE = Path(__file__).parent / "grammar_test"


def test_check_regular(capsys):
    assert main(["check", str(HERE / "binary.g")]) == 0
    out = capsys.readouterr().out
    assert "[CHECK OK] type=REGULAR heads=1 productions=3" in out


def test_check_context_free(capsys):
    assert main(["check", str(HERE / "balanced.g")]) == 0
    assert "type=CONTEXT_FREE" in capsys.readouterr().out


def test_check_warns_on_stale_type(capsys):
    assert main(["check", str(HERE / "swap.g")]) == 0
    captured = capsys.readouterr()
    assert "type=UNRESTRICTED heads=2 productions=2" in captured.out
    assert "[WARN] stored type REGULAR differs from computed type UNRESTRICTED" in captured.err


def test_check_json_record_with_debug(capsys):
    assert main(["check", str(HERE / "swap.json"), "-D"]) == 0
    captured = capsys.readouterr()
    assert "type=UNRESTRICTED" in captured.out
    assert "[DEBUG] grammar loaded | id=swap heads=2" in captured.err
    assert "A B -> B A" in captured.err
    assert "[WARN]" not in captured.err


def test_dump_writes_refreshed_record(tmp_path, capsys):
    out = tmp_path / "nested" / "swap.json"
    assert main(["dump", str(HERE / "swap.g"), "-o", str(out), "--indent", "2"]) == 0
    assert "[EMIT] record ->" in capsys.readouterr().out
    rec = json.loads(out.read_text(encoding="utf-8"))
    assert rec["id"] == "swap"
    assert rec["type"] == "UNRESTRICTED"
    assert rec["rules"][1] == {"head": ["A", "B"], "bodies": [["B", "A"]]}


def test_dump_to_stdout_uses_given_id(tmp_path, capsys):
    src = tmp_path / "anon.g"
    src.write_text("%start S; A : a A | a ;\n", encoding="utf-8")
    assert main(["dump", str(src), "--id", "fixed"]) == 0
    rec = json.loads(capsys.readouterr().out)
    assert rec["id"] == "fixed"
    assert rec["type"] == "REGULAR"


def test_fmt_output_parses_back(capsys):
    assert main(["fmt", str(HERE / "balanced.g")]) == 0
    text = capsys.readouterr().out
    g = parse_grammar(text)
    assert g.id == "balanced"
    assert g.name == "Balanced parentheses"


def test_syntax_error_exit_code(tmp_path, capsys):
    src = tmp_path / "bad.g"
    src.write_text("%start S;\nS : a\n", encoding="utf-8")
    assert main(["check", str(src)]) == 2
    err = capsys.readouterr().err
    assert "[SYNTAX ERROR]" in err
    assert "Missing ';'" in err


def test_record_error_exit_code(tmp_path, capsys):
    src = tmp_path / "bad.json"
    src.write_text('{"id": "x"}', encoding="utf-8")
    assert main(["check", str(src)]) == 2
    assert "[RECORD ERROR]" in capsys.readouterr().err


def test_missing_file_exit_code(tmp_path, capsys):
    assert main(["check", str(tmp_path / "nope.g")]) == 2
    assert "[IO ERROR]" in capsys.readouterr().err
