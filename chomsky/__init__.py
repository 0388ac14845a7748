"""chomsky - formal grammar model and Chomsky-hierarchy classifier."""

from .grammar import (
    Symbol, EPSILON, Alphabet, Grammar, GrammarType, PGrammar,
    NotFoundError, RecordError,
    classify, to_record, from_record, pgrammar_from_record,
    freeze, thaw, parse_grammar, dump_grammar, load_grammar,
)

__version__ = "0.1.0"
