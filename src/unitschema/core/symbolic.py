import logging
import re
import typing


logger = logging.getLogger(__name__)


MULTIPLY = '*'
DIVIDE = '/'
PLUS = '+'
MINUS = '-'

OPERATIONS = (None, MULTIPLY, DIVIDE)
"""Operators that may join a factor to the preceding factor in a term."""

SEPARATORS = (None, PLUS, MINUS)
"""Operators that may join a term to the following term in a symbol."""


PATTERN = re.compile(
    r"""
    (?P<base>[a-z]+)            # one or more lowercase letters
    (?:\^(?P<exponent>-?\d+))?  # followed by an optional integer exponent
    """,
    re.VERBOSE,
)
"""Compiled regular expression for a decorated base symbol."""


class OperatorValueError(ValueError):
    """An operator is not valid in its position."""

    def __init__(self, operator: typing.Any, allowed: typing.Iterable) -> None:
        self.operator = operator
        self.allowed = tuple(allowed)

    def __str__(self) -> str:
        return (
            f"Operator {self.operator!r} is not one of {self.allowed}"
        )


class SymbolValueError(ValueError):
    """A string does not represent a decorated base symbol."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol

    def __str__(self) -> str:
        return f"Can't interpret {self.symbol!r} as a base symbol"


class Factor(typing.NamedTuple):
    """A base symbol and the operator joining it to the previous factor."""

    symbol: str
    operation: typing.Optional[str] = None

    def format(self, style: str=None) -> str:
        """Format this factor for printing."""
        operator = self.operation or ''
        if not style:
            return f"{operator}{self.symbol}"
        if 'tex' not in style.lower():
            raise ValueError(f"Unknown format style {style!r}")
        parts = decompose(self.symbol)
        if parts is None or parts[1] == 1:
            return f"{operator}{self.symbol}"
        base, exponent = parts
        return f"{operator}{base}^{{{exponent}}}"


class Term(typing.NamedTuple):
    """A product or quotient of factors.

    The separator records how this term combines with the term that follows it
    in a symbol, not the term that precedes it.
    """

    factors: typing.Tuple[Factor, ...] = ()
    separator: typing.Optional[str] = None

    def format(self, style: str=None) -> str:
        """Format this term for printing."""
        body = ''.join(factor.format(style=style) for factor in self.factors)
        return f"{body}{self.separator or ''}"


Symbol = typing.Tuple[Term, ...]


FactorLike = typing.Union[Factor, typing.Sequence]
TermLike = typing.Union[Term, typing.Sequence]
SymbolLike = typing.Iterable[TermLike]


def asfactor(this: FactorLike) -> Factor:
    """Convert `this` to a symbolic factor, if possible.

    Parameters
    ----------
    this
        An existing `~symbolic.Factor` or a ``(symbol, operation)`` pair, where
        `operation` is one of ``'*'``, ``'/'``, or ``None``.
    """
    symbol, operation = this
    if operation not in OPERATIONS:
        raise OperatorValueError(operation, OPERATIONS)
    return Factor(str(symbol), operation)


def asterm(this: TermLike) -> Term:
    """Convert `this` to a symbolic term, if possible.

    Parameters
    ----------
    this
        An existing `~symbolic.Term` or a ``(factors, separator)`` pair, where
        `factors` is an iterable of objects that `~symbolic.asfactor` accepts
        and `separator` is one of ``'+'``, ``'-'``, or ``None``.
    """
    factors, separator = this
    if separator not in SEPARATORS:
        raise OperatorValueError(separator, SEPARATORS)
    return Term(tuple(asfactor(factor) for factor in factors), separator)


def assymbol(these: SymbolLike) -> Symbol:
    """Convert `these` to a tuple of symbolic terms."""
    return tuple(asterm(this) for this in these)


def decompose(symbol: str) -> typing.Optional[typing.Tuple[str, int]]:
    """Split a decorated symbol into its base and integer exponent.

    Returns ``None`` if `symbol` does not have the form ``base[^exponent]``.

    Examples
    --------
    >>> symbolic.decompose('kg')
    ('kg', 1)
    >>> symbolic.decompose('s^-2')
    ('s', -2)
    >>> symbolic.decompose('Hz') is None
    True
    """
    match = PATTERN.fullmatch(symbol)
    if not match:
        return
    exponent = match['exponent']
    return match['base'], int(exponent) if exponent else 1


def reduce(term: Term, strict: bool=False) -> Term:
    """Collapse repeated bases in `term` into single factors.

    Parameters
    ----------
    term : `~symbolic.Term`
        The term to reduce.

    strict : bool, default=False
        If true, raise `~symbolic.SymbolValueError` when a factor does not
        contain a valid base symbol. The default behavior is to skip it.

    Notes
    -----
    Bases appear in the result in the order in which this function first
    encounters them. A base whose exponents sum to zero does not appear. The
    first factor in the result has no operator. Each later factor is either a
    division by a bare base, when its total exponent is -1, or a multiplication
    by the base raised to its total exponent.
    """
    totals = {}
    for factor in term.factors:
        parts = decompose(factor.symbol)
        if parts is None:
            if strict:
                raise SymbolValueError(factor.symbol)
            logger.debug("Skipping unrecognized symbol %r", factor.symbol)
            continue
        base, exponent = parts
        if factor.operation == DIVIDE:
            exponent = -exponent
        totals[base] = totals.get(base, 0) + exponent
    factors = []
    for base, exponent in totals.items():
        if exponent == 0:
            continue
        if not factors:
            factors.append(Factor(_raise(base, exponent), None))
        elif exponent == -1:
            factors.append(Factor(base, DIVIDE))
        else:
            factors.append(Factor(_raise(base, exponent), MULTIPLY))
    return Term(tuple(factors), term.separator)


def _raise(base: str, exponent: int) -> str:
    """Decorate `base` with `exponent`, if necessary."""
    if exponent == 1:
        return base
    return f"{base}^{exponent}"


def simplify(symbol: Symbol, strict: bool=False) -> Symbol:
    """Reduce each term in `symbol` independently.

    Terms never merge with or cancel each other. See `~symbolic.reduce` for a
    description of the per-term algorithm and of `strict`.
    """
    return tuple(reduce(term, strict=strict) for term in symbol)


def combine(a: Symbol, b: Symbol, operation: str) -> Symbol:
    """Join every term in `a` with every term in `b`.

    Each resulting term contains the factors of a term in `a` followed by the
    factors of a term in `b`, where the latter all take on `operation`. The
    result contains ``len(a) * len(b)`` terms, in order of the terms in `a`,
    then `b`, before simplification.
    """
    if operation not in (MULTIPLY, DIVIDE):
        raise OperatorValueError(operation, (MULTIPLY, DIVIDE))
    terms = [
        Term(
            (
                *ta.factors,
                *(Factor(fb.symbol, operation) for fb in tb.factors),
            ),
            None,
        )
        for ta in a for tb in b
    ]
    return simplify(terms)


def product(a: Symbol, b: Symbol) -> Symbol:
    """Symbolically compute a * b."""
    return combine(a, b, MULTIPLY)


def ratio(a: Symbol, b: Symbol) -> Symbol:
    """Symbolically compute a / b."""
    return combine(a, b, DIVIDE)


def format(symbol: Symbol, style: str=None) -> str:
    """Join symbolic terms into a string.

    Each term contributes its factors, each preceded by its operator, followed
    by its separator. The separator of the final term, if any, appears at the
    end of the string.
    """
    return ''.join(term.format(style=style) for term in symbol)
