import functools
import logging
import math
import numbers
import typing

import numpy

import unitschema
from unitschema.core import symbolic


logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """The magnitude of a unit value is not a finite real number."""

    def __init__(self, value: typing.Any) -> None:
        self.value = value

    def __str__(self) -> str:
        return f"Can't create a unit value with magnitude {self.value!r}"


class IncompatibleUnitsError(TypeError):
    """Unit values do not belong to the operating schema."""

    def __init__(self, schema: 'UnitSchema', *values: 'UnitValue') -> None:
        self.schema = schema
        self.values = values

    def __str__(self) -> str:
        others = ', '.join(f"{v.value} {v.schema}" for v in self.values)
        return f"Can't combine ({others}) with schema {self.schema}"


DEFAULTS = {'strict': False, 'style': ''}
"""Settings to use when configuration is missing or unusable."""


@functools.lru_cache(maxsize=None)
def settings() -> typing.Dict[str, typing.Any]:
    """The configured defaults for schema operations.

    Any value that is missing from the configuration file, or that this module
    can't interpret, takes its value from `DEFAULTS`.
    """
    try:
        env = unitschema.Environment('schema')
    except KeyError as err:
        logger.warning("Using default schema settings: %s", err)
        return dict(DEFAULTS)
    result = dict(DEFAULTS)
    try:
        result['strict'] = env.getboolean('strict', DEFAULTS['strict'])
    except ValueError:
        logger.warning("Ignoring invalid value of 'strict' in %s", env.path)
    style = env.get('style', DEFAULTS['style'])
    if not style or 'tex' in style.lower():
        result['style'] = style
    else:
        logger.warning("Ignoring unknown style %r in %s", style, env.path)
    return result


def _finite(value: numbers.Real) -> bool:
    """True if `value` is neither infinite nor undefined."""
    if isinstance(value, numbers.Rational):
        return True
    return math.isfinite(value)


class UnitSchema:
    """The symbolic unit of a collection of numerical values.

    An instance of this class is an immutable sequence of symbolic terms. Two
    instances are never interchangeable for addition or subtraction, even when
    they represent the same symbol: only values created by the same instance,
    via `~UnitSchema.parse`, may be added to or subtracted from each other.
    Multiplication and division always create a new instance.
    """

    __slots__ = ('_terms',)

    def __init__(self, symbol: symbolic.SymbolLike=()) -> None:
        """Create a schema from a literal symbol.

        Parameters
        ----------
        symbol : iterable
            An iterable of terms. Each term is a pair containing an iterable of
            ``(symbol, operation)`` factors, with `operation` one of ``'*'``,
            ``'/'``, or ``None``, and the separator (``'+'``, ``'-'``, or
            ``None``) that joins it to the next term.

        Examples
        --------
        Create schemas for speed and for an additive combination of length:

        >>> UnitSchema([([('m', None), ('s', '/')], None)])
        core.schema.UnitSchema(m/s)
        >>> UnitSchema([([('m', None)], '+'), ([('km', None)], None)])
        core.schema.UnitSchema(m+km)
        """
        self._terms = symbolic.assymbol(symbol)

    @classmethod
    def base(cls, symbol: str):
        """Create a schema consisting of a single base symbol."""
        return cls([([(symbol, None)], None)])

    @property
    def terms(self) -> symbolic.Symbol:
        """The symbolic terms in this schema."""
        return self._terms

    def __len__(self) -> int:
        """The number of terms in this schema."""
        return len(self._terms)

    def __iter__(self) -> typing.Iterator[symbolic.Term]:
        return iter(self._terms)

    def mul(self, other: 'UnitSchema'):
        """Create the product of this schema and `other`."""
        return type(self)(symbolic.product(self._terms, other.terms))

    def div(self, other: 'UnitSchema'):
        """Create the ratio of this schema to `other`."""
        return type(self)(symbolic.ratio(self._terms, other.terms))

    def __mul__(self, other):
        """Called for self * other."""
        if not isinstance(other, UnitSchema):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other):
        """Called for self / other."""
        if not isinstance(other, UnitSchema):
            return NotImplemented
        return self.div(other)

    def simplify(self, strict: bool=None):
        """Create a new schema with repeated bases collapsed in each term.

        Parameters
        ----------
        strict : bool, optional
            If true, raise `~symbolic.SymbolValueError` for any factor that does
            not contain a valid base symbol. The default value comes from the
            ``strict`` setting in the ``[schema]`` configuration section.
        """
        if strict is None:
            strict = settings()['strict']
        return type(self)(symbolic.simplify(self._terms, strict=strict))

    def parse(self, value: numbers.Real) -> 'UnitValue':
        """Create a value with this schema.

        Raises
        ------
        InvalidInputError
            `value` is not a finite real number.
        """
        if not isinstance(value, numbers.Real) or not _finite(value):
            raise InvalidInputError(value)
        return UnitValue(value, self)

    def add(self, a: 'UnitValue', b: 'UnitValue') -> 'UnitValue':
        """Add two values created by this schema."""
        self._check(a, b)
        return UnitValue(a.value + b.value, self)

    def sub(self, a: 'UnitValue', b: 'UnitValue') -> 'UnitValue':
        """Subtract two values created by this schema."""
        self._check(a, b)
        return UnitValue(a.value - b.value, self)

    def _check(self, *values: 'UnitValue') -> None:
        """Raise an exception if any value has a different schema."""
        if any(value.schema is not self for value in values):
            raise IncompatibleUnitsError(self, *values)

    def __str__(self) -> str:
        """The canonical string representation of this schema."""
        return symbolic.format(self._terms)

    def format(self, style: str=None) -> str:
        """Format this schema for printing.

        Parameters
        ----------
        style : string, optional
            The name of a formatting style. Passing ``'tex'`` will enclose
            non-trivial exponents in braces. The default value comes from the
            ``style`` setting in the ``[schema]`` configuration section.
        """
        if style is None:
            style = settings()['style']
        return symbolic.format(self._terms, style=style)

    def __repr__(self) -> str:
        """An unambiguous representation of this object."""
        module = f"{self.__module__.replace('unitschema.', '')}."
        name = self.__class__.__qualname__
        return f"{module}{name}({self})"


class UnitValue:
    """A numerical magnitude paired with its schema."""

    __slots__ = ('_value', '_schema')

    def __init__(self, value: numbers.Real, schema: UnitSchema) -> None:
        self._value = value
        self._schema = schema

    @property
    def value(self) -> numbers.Real:
        """The numerical magnitude of this value."""
        return self._value

    @property
    def schema(self) -> UnitSchema:
        """The schema of this value."""
        return self._schema

    def mul(self, other: 'UnitValue'):
        """Multiply this value by `other`.

        Any two values may be multiplied. The result has a new schema equal to
        the product of the two schemas.
        """
        schema = self._schema.mul(other.schema)
        return type(self)(self._value * other.value, schema)

    def div(self, other: 'UnitValue'):
        """Divide this value by `other`.

        Any two values may be divided. The result has a new schema equal to the
        ratio of the two schemas. Dividing by zero produces an infinite or
        undefined magnitude, as in floating-point arithmetic.
        """
        schema = self._schema.div(other.schema)
        with numpy.errstate(divide='ignore', invalid='ignore'):
            value = numpy.true_divide(self._value, other.value)
        return type(self)(float(value), schema)

    def __mul__(self, other):
        """Called for self * other."""
        if not isinstance(other, UnitValue):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other):
        """Called for self / other."""
        if not isinstance(other, UnitValue):
            return NotImplemented
        return self.div(other)

    def __add__(self, other):
        """Called for self + other."""
        if not isinstance(other, UnitValue):
            return NotImplemented
        return self._schema.add(self, other)

    def __sub__(self, other):
        """Called for self - other."""
        if not isinstance(other, UnitValue):
            return NotImplemented
        return self._schema.sub(self, other)

    def __float__(self) -> float:
        """Called for float(self)."""
        return float(self._value)

    def __eq__(self, other) -> bool:
        """True if two values have equal magnitudes and the same schema."""
        if not isinstance(other, UnitValue):
            return NotImplemented
        return other.schema is self._schema and other.value == self._value

    def __hash__(self) -> int:
        return hash((self._value, id(self._schema)))

    def __str__(self) -> str:
        """A simplified representation of this object."""
        return f"{self._value} {self._schema}".rstrip()

    def __repr__(self) -> str:
        """An unambiguous representation of this object."""
        module = f"{self.__module__.replace('unitschema.', '')}."
        name = self.__class__.__qualname__
        return f"{module}{name}({self})"
