from frozendict import frozendict

from chomsky.grammar import persistent as P
from chomsky.grammar import rules as R
from chomsky.grammar.grammar import Grammar, GrammarType
from chomsky.grammar.symbols import EMPTY_WORD, Symbol


def w(*texts):
    return tuple(Symbol(t) for t in texts)


def base():
    g = P.new_pgrammar("g", "S", name="demo")
    g = P.add_terminal_symbol(g, "a")
    g = P.add_non_terminal_symbol(g, "S")
    g = P.add_non_terminal_symbol(g, "A")
    return P.add_production(g, ["A"], [["a", "A"], ["a"]])


def test_new_pgrammar_is_empty():
    g = P.new_pgrammar("g", "S")
    assert g.start_symbol == Symbol("S")
    assert g.type is GrammarType.REGULAR
    assert g.production_rules == frozendict()
    assert len(g.terminal_symbols) == 0


def test_edits_leave_previous_value_untouched():
    g0 = base()
    g1 = P.add_production_body(g0, ["A"], ["b"])
    g2 = P.remove_production_head(g1, ["A"])
    assert R.bodies_of(g0.production_rules, ["A"]) == (w("a", "A"), w("a"))
    assert R.bodies_of(g1.production_rules, ["A"]) == (w("a", "A"), w("a"), w("b"))
    assert w("A") not in g2.production_rules
    assert w("A") in g1.production_rules


def test_add_head_is_idempotent():
    g0 = base()
    assert P.add_production_head(g0, ["A"]) is g0
    g1 = P.add_production_head(g0, ["B"])
    assert g1 is not g0
    assert g1.production_rules[w("B")] == frozendict()


def test_missing_head_is_treated_as_empty():
    g0 = P.new_pgrammar("g", "S")
    g1 = P.add_production_body(g0, ["A"], ["a"])
    assert R.bodies_of(g1.production_rules, ["A"]) == (w("a"),)
    assert P.remove_production_head(g0, ["X"]) is g0
    assert P.remove_production_body(g0, ["X"], ["a"]) is g0
    assert P.remove_production(g0, ["X"], [["a"]]) is g0


def test_duplicate_bodies_return_same_value():
    g0 = base()
    assert P.add_production_body(g0, ["A"], ["a"]) is g0
    assert P.add_production(g0, ["A"], [["a"], ["a", "A"]]) is g0


def test_add_production_merges_each_body_independently():
    g0 = P.add_production(P.new_pgrammar("g", "S"), ["A"], [["a"]])
    g1 = P.add_production(g0, ["A"], [["a"], ["b"]])
    assert set(R.bodies_of(g1.production_rules, ["A"])) == {w("a"), w("b")}


def test_unchanged_substructure_is_shared():
    g0 = P.add_production(base(), ["B"], [["b"]])
    g1 = P.add_production_body(g0, ["A"], ["b", "A"])
    assert g1.production_rules[w("B")] is g0.production_rules[w("B")]
    assert g1.terminal_symbols is g0.terminal_symbols


def test_remove_body_and_production():
    g0 = base()
    g1 = P.remove_production_body(g0, ["A"], ["a"])
    assert R.bodies_of(g1.production_rules, ["A"]) == (w("a", "A"),)
    g2 = P.remove_production(g0, ["A"], [["a"], ["a", "A"]])
    assert g2.production_rules[w("A")] == frozendict()
    assert P.remove_production_body(g0, ["A"], ["zz"]) is g0


def test_alphabet_updates():
    g0 = base()
    assert P.add_terminal_symbol(g0, "a") is g0
    assert P.remove_terminal_symbol(g0, "zz") is g0
    g1 = P.remove_non_terminal_symbol(g0, "A")
    assert Symbol("A") not in g1.non_terminal_symbols
    assert Symbol("A") in g0.non_terminal_symbols


def test_scalar_updates():
    g0 = base()
    g1 = P.set_name(P.set_start_symbol(g0, "A"), "other")
    assert (g1.name, g1.start_symbol) == ("other", Symbol("A"))
    assert (g0.name, g0.start_symbol) == ("demo", Symbol("S"))
    assert P.set_type(g0, GrammarType.REGULAR) is g0


def test_reclassify():
    g0 = P.add_production(base(), ["A", "B"], [["B", "A"]])
    assert g0.type is GrammarType.REGULAR
    assert P.check_own_type(g0) is GrammarType.UNRESTRICTED
    assert P.reclassify(g0).type is GrammarType.UNRESTRICTED
    assert g0.type is GrammarType.REGULAR


def test_values_are_hashable_and_compare_structurally():
    g1 = P.add_production(P.new_pgrammar("g", "S"), ["A"], [["a"], ["b"]])
    g2 = P.add_production(P.new_pgrammar("g", "S"), ["A"], [["b"], ["a"]])
    assert g1 == g2
    assert hash(g1) == hash(g2)
    assert len({g1, g2}) == 1


def test_freeze_and_thaw_round_trip():
    g = Grammar.new("g", "S", name="demo")
    g.add_terminal_symbol("a")
    g.add_non_terminal_symbol("A")
    g.add_production(["A"], [["a", "A"], []])
    g.add_production_head(["B"])
    p = P.freeze(g)
    assert p.production_rules[w("A")] == frozendict({w("a", "A"): None, EMPTY_WORD: None})
    assert P.thaw(p) == g
    assert P.freeze(P.thaw(p)) == p


def test_thawed_copy_is_independent():
    p = base()
    g = P.thaw(p)
    g.add_production_body(["A"], ["b"])
    g.add_terminal_symbol("b")
    assert R.bodies_of(p.production_rules, ["A"]) == (w("a", "A"), w("a"))
    assert Symbol("b") not in p.terminal_symbols


def test_relation_functions_are_pure():
    r0 = R.EMPTY
    r1 = R.add_head(r0, ["S"])
    r2 = R.add_body(r1, ["S"], ["a"])
    assert r0 == frozendict()
    assert r1 == frozendict({w("S"): frozendict()})
    assert R.add_head(r2, ["S"]) is r2
    assert R.to_canonical_list(r2) == [(w("S"), [w("a")])]
    assert R.from_pairs([(["S"], [["a"]]), (["S"], [["b"]])]) == frozendict(
        {w("S"): frozendict({w("a"): None, w("b"): None})}
    )
