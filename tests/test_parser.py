from pathlib import Path

import pytest

from chomsky.grammar.dump import dump_grammar, dump_productions
from chomsky.grammar.grammar import Grammar, GrammarType
from chomsky.grammar.loader import load_grammar, load_grammar_text
from chomsky.grammar.parser import parse_grammar
from chomsky.grammar.symbols import EMPTY_WORD, Alphabet, Symbol

HERE = Path(__file__).parent / "grammar_test"


def w(*texts):
    return tuple(Symbol(t) for t in texts)


def test_parse_declarations_and_rules():
    g = parse_grammar(
        """
        %name "Binary";
        %id "binary";
        %start S;
        %terminals 0 1;
        %nonterminals S B;
        B : 0 B | 1 B | 1 ;
        """
    )
    assert (g.id, g.name, g.start_symbol) == ("binary", "Binary", Symbol("S"))
    assert g.terminal_symbols == Alphabet(["0", "1"])
    assert g.non_terminal_symbols == Alphabet(["S", "B"])
    assert g.production_rules.bodies(["B"]) == (w("0", "B"), w("1", "B"), w("1"))
    assert g.type is GrammarType.REGULAR


def test_alphabets_and_start_are_inferred():
    g = parse_grammar("S : A b ; A -> a A | 'x y' ;")
    assert g.start_symbol == Symbol("S")
    assert g.non_terminal_symbols == Alphabet(["S", "A"])
    assert g.terminal_symbols == Alphabet(["b", "a", "x y"])
    assert g.production_rules.bodies(["A"]) == (w("a", "A"), w("x y"))


def test_multi_symbol_heads():
    g = parse_grammar("%start S; S : A B ; A B -> B A ;")
    assert g.production_rules.bodies(["A", "B"]) == (w("B", "A"),)
    assert g.type is GrammarType.UNRESTRICTED


def test_empty_word_spellings():
    g = parse_grammar("%start S; A : ε | %empty | | a ;")
    assert g.production_rules.bodies(["A"]) == (EMPTY_WORD, w("a"))
    assert Symbol("ε") not in g.terminal_symbols


def test_declared_head_without_bodies():
    g = parse_grammar("%start S; %head S; %head A B;")
    assert g.production_rules.bodies(["A", "B"]) == ()
    assert g.type is GrammarType.UNRESTRICTED
    assert parse_grammar("%start S; %head A;").type is GrammarType.REGULAR


def test_repeated_heads_merge():
    g = parse_grammar("%start Z; A : a ; A : a | b ;")
    assert g.production_rules.bodies(["A"]) == (w("a"), w("b"))


def test_explicit_type_is_kept():
    g = parse_grammar("%start S; %type CONTEXT_FREE; S : a ;")
    assert g.type is GrammarType.CONTEXT_FREE


def test_grammar_id_precedence():
    assert parse_grammar('%id "file"; A : a ;', grammar_id="arg").id == "arg"
    assert parse_grammar('%id "file"; A : a ;').id == "file"
    assert len(parse_grammar("A : a ;").id) == 32


def test_unicode_identifiers():
    g = parse_grammar("%start 문장; 문장 : 주어 서술어 ;")
    assert g.production_rules.bodies(["문장"]) == (w("주어", "서술어"),)


def test_missing_semicolon_is_reported():
    with pytest.raises(SyntaxError, match="Missing ';' after production rule"):
        parse_grammar("S : a\nA : b ;")


@pytest.mark.parametrize("src, message", [
    ("%frobnicate x;", "Unknown directive %frobnicate"),
    ("%type TYPE_9; S : a ;", "Unknown grammar type"),
    ("%start S T;", "expects exactly one value"),
    (": a ;", "Empty production head"),
    ("S a ;", "Expected ':' or '->'"),
    ("S : a # ;", "Unexpected char"),
    ("S : %nope ;", "did you mean '%empty'"),
    ("// nothing here\n", "Missing %start"),
])
def test_syntax_errors(src, message):
    with pytest.raises(SyntaxError, match=message):
        parse_grammar(src)


def test_error_carries_position_and_caret():
    with pytest.raises(SyntaxError) as exc:
        parse_grammar("%start S;\n%bogus;")
    text = str(exc.value)
    assert "2:2" in text
    assert "%bogus;\n ^" in text


def test_missing_semicolon_caret_follows_last_symbol():
    with pytest.raises(SyntaxError) as exc:
        parse_grammar("%start S;\nS : a\n")
    text = str(exc.value)
    assert "- Found: EOF at 3:1" in text
    assert text.endswith("S : a\n     ^")


def sample():
    g = Grammar.new("g-1", "S", name="with \"quotes\"")
    g.add_terminal_symbol("+")
    g.add_terminal_symbol("id")
    g.add_non_terminal_symbol("S")
    g.add_non_terminal_symbol("E")
    g.add_production(["E"], [["E", "+", "E"], ["id"], []])
    g.add_production_head(["S", "E"])
    g.reclassify()
    return g


def test_dump_round_trip():
    g = sample()
    assert parse_grammar(dump_grammar(g)) == g


def test_dump_round_trip_with_empty_alphabets():
    g = Grammar.new("g-2", "S")
    g.add_production(["A"], [["x"]])
    assert parse_grammar(dump_grammar(g)) == g


def test_dump_quotes_non_identifiers():
    text = dump_grammar(sample())
    assert '"+"' in text
    assert "%head S E;" in text
    assert "E : E \"+\" E | id | ε ;" in text


def test_dump_productions_lists_one_line_per_body():
    assert dump_productions(sample()).splitlines() == [
        'E -> E "+" E',
        "E -> id",
        "E -> ε",
    ]


def test_load_text_and_json_files():
    g = load_grammar(str(HERE / "swap.g"))
    j = load_grammar(str(HERE / "swap.json"))
    assert g.production_rules == j.production_rules
    assert g.type is GrammarType.REGULAR
    assert j.type is GrammarType.UNRESTRICTED


def test_load_grammar_text_normalises_newlines(tmp_path):
    path = tmp_path / "crlf.g"
    path.write_bytes(b"%start S;\r\nA : a ;\r")
    assert load_grammar_text(str(path)) == "%start S;\nA : a ;\n"
