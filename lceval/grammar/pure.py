"""Pure lambda calculus token generator and parser.

The concrete syntax is fully parenthesized, so every character is exactly one token and the grammar needs a single
token of lookahead:

```
<λ-term> ::= "(" <λ-term> <λ-term> ")"    ; application
           | <letter>                      ; variable, lowercase ascii only
           | "λ" <letter> "." <λ-term>     ; abstraction
```

There is no whitespace in this syntax: "(λx.xy)" is an application of λx.x to y.
"""

from dataclasses import dataclass
from string import ascii_lowercase

from lceval.lang.error import InvalidCharacter, MalformedInput
from lceval.pure.lexical import Abstraction, Application, Variable


@dataclass(frozen=True)
class Token:
    """Superclass for the five kinds of token in pure lambda calculus. Every token is one character."""
    char: str

    def __str__(self):
        return self.char


@dataclass(frozen=True)
class OpenParen(Token):
    char: str = "("


@dataclass(frozen=True)
class CloseParen(Token):
    char: str = ")"


@dataclass(frozen=True)
class Lambda(Token):
    char: str = "λ"


@dataclass(frozen=True)
class Period(Token):
    char: str = "."


@dataclass(frozen=True)
class Letter(Token):

    def __post_init__(self):
        if self.char not in ascii_lowercase or len(self.char) != 1:
            raise ValueError("{!r} is not a letter token".format(self.char))


class Builtin:
    """Built-in lambda calculus tokens: 'λ', '.', '(', ')' """
    TOKENS = {token.char: token for token in (OpenParen(), CloseParen(), Lambda(), Period())}


def tokenize(program):
    """Converts program to a list of Tokens, one per character. Raises InvalidCharacter on anything that isn't a builtin
    or a lowercase letter.
    """
    tokens = []
    for idx, char in enumerate(program):
        if char in Builtin.TOKENS:
            tokens.append(Builtin.TOKENS[char])
        elif char in ascii_lowercase:
            tokens.append(Letter(char))
        else:
            raise InvalidCharacter(program, idx)
    return tokens


def untokenize(tokens):
    """Inverse of tokenize."""
    return "".join(token.char for token in tokens)


class Parser:
    """Recursive-descent parser over a token list. Keeps the position of the next unread token so that errors can
    point at the offending character.
    """

    def __init__(self, tokens):
        self.tokens = list(tokens)
        self.program = untokenize(self.tokens)  # used for error messages
        self.pos = 0

    def parse(self):
        """Parses self.tokens as exactly one λ-term."""
        term = self.parse_term()
        if self.pos != len(self.tokens):
            raise MalformedInput("unexpected trailing '{}'".format(self.tokens[self.pos]), self.program, self.pos)
        return term

    def parse_term(self):
        token = self.advance("expected a λ-term")

        if isinstance(token, OpenParen):
            func = self.parse_term()
            arg = self.parse_term()
            self.expect(CloseParen, "expected ')' to close application")
            return Application(func, arg)

        elif isinstance(token, Letter):
            return Variable(token.char)

        elif isinstance(token, Lambda):
            param = self.expect(Letter, "expected a variable after 'λ'")
            self.expect(Period, "expected '.' after abstraction parameter")
            return Abstraction(Variable(param.char), self.parse_term())

        raise MalformedInput("unexpected '{}'".format(token), self.program, self.pos - 1)

    def advance(self, reason):
        """Returns the next token, raising MalformedInput with reason if there are none left."""
        if self.pos >= len(self.tokens):
            raise MalformedInput(reason + ", got end of input", self.program, self.pos)
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def expect(self, token_cls, reason):
        token = self.advance(reason)
        if not isinstance(token, token_cls):
            raise MalformedInput(reason, self.program, self.pos - 1)
        return token


def parse(tokens):
    """Converts a token list to a LambdaTerm. Raises MalformedInput if tokens aren't exactly one λ-term."""
    return Parser(tokens).parse()


def unparse(term):
    """Converts a LambdaTerm back to a token list. Inverse of parse."""
    if isinstance(term, Variable):
        return [Letter(term.name)]
    elif isinstance(term, Abstraction):
        return [Lambda(), Letter(term.param.name), Period()] + unparse(term.body)
    elif isinstance(term, Application):
        return [OpenParen()] + unparse(term.func) + unparse(term.arg) + [CloseParen()]
    raise TypeError("{!r} is not a LambdaTerm".format(term))
