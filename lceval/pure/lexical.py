"""Pure lambda calculus syntax tree and normal-order reducer.

The `pure` directory contains the pure lambda calculus term model- everything needed to reduce a term, nothing needed
to read or print one (see lceval/grammar/pure.py for that).

Formally, the terms handled here can be defined as

```
<λ-term> ::= <letter>                    ; "variable"
                                         ; - exactly one lowercase ascii letter
           | "λ" <letter> "." <λ-term>   ; "abstraction"
                                         ; - one parameter per abstraction, no currying
           | "(" <λ-term> <λ-term> ")"   ; "application"
                                         ; - always parenthesized, so there is no associativity to resolve
```

Terms are immutable: reduction, substitution and alpha-conversion always build new nodes and never touch the nodes
they were given. Subtrees may therefore be shared freely between terms.

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from abc import abstractmethod, ABC
from dataclasses import dataclass
from string import ascii_lowercase

from lceval.lang.error import OutOfVariables


class LambdaTerm(ABC):
    """Represents a valid λ-term: variable, abstraction, or application. Abstractly defines the case analysis that the
    reducer is built from; each subclass implements every case.
    """

    @abstractmethod
    def has_redex(self):
        """Whether or not a beta-redex exists anywhere in this term, including inside abstraction bodies."""

    @abstractmethod
    def reduce(self):
        """Returns this term after one batched normal-order step. If this term is an application whose left child is an
        abstraction, that redex is contracted. Otherwise both children of an application are stepped independently,
        so more than one redex may fire in a single call.
        """

    @abstractmethod
    def sub(self, var, new_term):
        """Given a redex (λvar.M)new_term, this method returns M with all free occurrences of var replaced with new_term.
        Binders that would capture a free variable of new_term are alpha-converted first.
        """

    @abstractmethod
    def occurs_free(self, var):
        """Whether or not var occurs free in this term."""

    @abstractmethod
    def occurs(self, var):
        """Whether or not var occurs anywhere in this term, bound, free or as a binder."""

    @abstractmethod
    def rename(self, old, new):
        """Returns this term with occurrences of old replaced with new. Stops at abstractions that bind either old or new,
        as anything below them belongs to a different binding.
        """

    @abstractmethod
    def alpha_equals(self, other, mapping=None):
        """Whether or not two LambdaTerms are alpha-equivalent. mapping represents the map between bound self vars and
        the other vars that are currently bound to the same abstraction depth.
        """


@dataclass(frozen=True)
class Variable(LambdaTerm):
    """Variable in lambda calculus: a single lowercase letter."""
    name: str

    def __post_init__(self):
        if not (isinstance(self.name, str) and len(self.name) == 1 and self.name in ascii_lowercase):
            raise ValueError("{!r} not proper Variable grammar".format(self.name))

    def has_redex(self):
        return False

    def reduce(self):
        return self

    def sub(self, var, new_term):
        if self == var:
            return new_term
        return self

    def occurs_free(self, var):
        return self == var

    def occurs(self, var):
        return self == var

    def rename(self, old, new):
        return new if self == old else self

    def alpha_equals(self, other, mapping=None):
        if not isinstance(other, Variable):
            return False
        if mapping is None:
            mapping = {}

        if self in mapping:
            return mapping[self] == other
        return other not in mapping.values() and self == other  # free variables must match exactly

    def next(self):
        """Returns the cyclic successor of this variable: a -> b -> ... -> z -> a."""
        return Variable(ascii_lowercase[(ascii_lowercase.index(self.name) + 1) % len(ascii_lowercase)])

    def next_unused(self, term):
        """Returns the first cyclic successor of this variable that doesn't occur anywhere in term. Occurrence, not free
        occurrence, is checked, so bound names of term are never reused either.
        """
        candidate = self.next()
        while candidate != self:
            if not term.occurs(candidate):
                return candidate
            candidate = candidate.next()
        return None

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Abstraction(LambdaTerm):
    """Abstraction: the basic datatype in lambda calculus. Binds param over body."""
    param: Variable
    body: LambdaTerm

    def __post_init__(self):
        if not isinstance(self.param, Variable):
            raise TypeError("abstraction parameter must be a Variable, got {!r}".format(self.param))

    def has_redex(self):
        return self.body.has_redex()

    def reduce(self):
        return Abstraction(self.param, self.body.reduce())

    def sub(self, var, new_term):
        abstraction = self
        tried = {self.param}
        while True:
            if abstraction.param == var:
                return abstraction  # var is shadowed, nothing below here refers to it
            elif not new_term.occurs_free(abstraction.param):
                return Abstraction(abstraction.param, abstraction.body.sub(var, new_term))

            abstraction = abstraction.alpha_convert()
            if abstraction.param in tried:  # every name is either in the body or free in new_term
                raise OutOfVariables(self)
            tried.add(abstraction.param)

    def occurs_free(self, var):
        return self.param != var and self.body.occurs_free(var)

    def occurs(self, var):
        return self.param == var or self.body.occurs(var)

    def rename(self, old, new):
        if self.param in (old, new):
            return self
        return Abstraction(self.param, self.body.rename(old, new))

    def alpha_equals(self, other, mapping=None):
        if not isinstance(other, Abstraction):
            return False
        if mapping is None:
            mapping = {}

        inner = {var: other_var for var, other_var in mapping.items() if var != self.param and other_var != other.param}
        inner[self.param] = other.param
        return self.body.alpha_equals(other.body, inner)

    def alpha_convert(self):
        """Returns an alpha-equivalent abstraction whose parameter is the next letter not occurring in the body."""
        new_param = self.param.next_unused(self.body)
        if new_param is None:
            raise OutOfVariables(self)
        return Abstraction(new_param, self.body.rename(self.param, new_param))

    def beta_reduce(self, new_term):
        """Contracts the redex (self new_term)."""
        return self.body.sub(self.param, new_term)

    def __str__(self):
        return f"λ{self.param}.{self.body}"


@dataclass(frozen=True)
class Application(LambdaTerm):
    """Application of func to arg."""
    func: LambdaTerm
    arg: LambdaTerm

    def has_redex(self):
        if self.is_leftmost:
            return True
        return self.func.has_redex() or self.arg.has_redex()

    def reduce(self):
        if self.is_leftmost:
            return self.func.beta_reduce(self.arg)
        return Application(self.func.reduce(), self.arg.reduce())

    def sub(self, var, new_term):
        return Application(self.func.sub(var, new_term), self.arg.sub(var, new_term))

    def occurs_free(self, var):
        return self.func.occurs_free(var) or self.arg.occurs_free(var)

    def occurs(self, var):
        return self.func.occurs(var) or self.arg.occurs(var)

    def rename(self, old, new):
        return Application(self.func.rename(old, new), self.arg.rename(old, new))

    def alpha_equals(self, other, mapping=None):
        if not isinstance(other, Application):
            return False
        if mapping is None:
            mapping = {}
        return self.func.alpha_equals(other.func, mapping) and self.arg.alpha_equals(other.arg, mapping)

    @property
    def is_leftmost(self):
        """Applications are the only LambdaTerm that can be a redex. An Application is a redex if its left child is an
        Abstraction.
        """
        return isinstance(self.func, Abstraction)

    def __str__(self):
        return f"({self.func}{self.arg})"


def has_redex(term):
    return term.has_redex()


def reduce(term):
    return term.reduce()


def beta_reduce(abstraction, new_term):
    return abstraction.beta_reduce(new_term)


def substitute(new_term, var, body):
    """Replaces free occurrences of var in body with new_term without capturing any free variable of new_term."""
    return body.sub(var, new_term)


def occurs_free(var, term):
    return term.occurs_free(var)


def alpha_convert(abstraction):
    return abstraction.alpha_convert()


class NormalOrderReducer:
    """Implements bounded normal-order beta reduction of a syntax tree. Used by Session, which needs to know how many
    steps were taken and whether a normal form was reached.
    """
    MAX_STEPS = 100

    def __init__(self, tree, max_steps=None):
        if max_steps is None:
            max_steps = NormalOrderReducer.MAX_STEPS
        if not isinstance(max_steps, int) or max_steps < 0:
            raise ValueError("max_steps must be a natural number, got {!r}".format(max_steps))

        self.original_tree = tree
        self.tree = tree
        self.max_steps = max_steps

        self.steps = 0
        self.reduced = False

    def beta_reduce(self, error_handler=None):
        """Reduces self.tree until it has no redex or max_steps steps have been taken. error_handler, if given, is
        notified of every step. Returns the final tree.
        """
        while self.tree.has_redex() and self.steps < self.max_steps:
            self.tree = self.tree.reduce()
            self.steps += 1
            if error_handler is not None:
                error_handler.register_step("β", self.tree)

        self.reduced = not self.tree.has_redex()
        return self.tree

    def __repr__(self):
        return f"NormalOrderReducer({self.tree!r}, steps={self.steps})"

    def __str__(self):
        return str(self.tree)


def normalize(term, max_steps=NormalOrderReducer.MAX_STEPS):
    """Reduces term to beta-normal form, or returns the term reached after exactly max_steps steps if it doesn't get
    there first. Non-termination is not an error.
    """
    return NormalOrderReducer(term, max_steps).beta_reduce()
