"""Lambda calculus evaluator.

Basic program flow:
    1. Lexer: converts the program to tokens, one per character
        - See lceval/grammar/pure.py
    2. Parser: builds a λ-term syntax tree from the tokens by recursive descent
        - See lceval/grammar/pure.py for the grammar
    3. Reducer: beta-reduces the tree in normal order until it has no redex or the step bound is hit
        - See lceval/pure/lexical.py
    4. Unparser: converts the reduced tree back to tokens, and the tokens back to text

"""

from lceval.grammar.pure import parse, tokenize, unparse, untokenize
from lceval.pure.lexical import NormalOrderReducer, normalize


def evaluate(program, max_steps=NormalOrderReducer.MAX_STEPS):
    """Evaluates program and returns its normal form as text, e.g. evaluate("(λx.xy)") == "y"."""
    return untokenize(unparse(normalize(parse(tokenize(program)), max_steps)))
