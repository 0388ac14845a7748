"""Grammar model for chomsky.

This package provides:
- value types: Symbol / Word / Alphabet (and the EPSILON sentinel)
- a mutable Grammar edited in place and a persistent PGrammar
- the Chomsky-hierarchy classifier
- record (dict/JSON) serialisation plus a small text notation
"""

from .symbols import (
    Symbol, EPSILON, EMPTY_WORD, Word, Alphabet,
    as_symbol, as_word, real_length, is_empty_word,
)
from .errors import NotFoundError, RecordError
from .relation import ProductionRelation
from .grammar import Grammar, GrammarType, GrammarView
from .persistent import PGrammar, new_pgrammar, freeze, thaw
from .classify import classify
from .record import (
    GrammarRecord, to_record, from_record, pgrammar_from_record,
    to_json, from_json,
)
from .parser import parse_grammar
from .dump import dump_grammar, dump_productions
from .loader import load_grammar, load_grammar_text
