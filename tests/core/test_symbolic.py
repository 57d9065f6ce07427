import pytest

from unitschema.core import symbolic


def build(*terms):
    """Helper for building a symbol from literal terms."""
    return symbolic.assymbol(terms)


@pytest.fixture
def decompositions():
    """Decorated symbols and their expected base and exponent."""
    return {
        'm': ('m', 1),
        'kg': ('kg', 1),
        'm^2': ('m', 2),
        's^-2': ('s', -2),
        'mol^0': ('mol', 0),
        'cd^12': ('cd', 12),
    }


@pytest.mark.symbol
def test_decompose(decompositions: dict):
    """Split decorated symbols into base and exponent."""
    for string, expected in decompositions.items():
        assert symbolic.decompose(string) == expected
    invalid = [
        '', # empty
        'Hz', # uppercase letters
        'm2', # trailing digits
        'm^', # missing exponent
        '^2', # exponent only
        'm^+2', # explicit positive sign
        'm^1.5', # non-integer exponent
        'm s', # whitespace
    ]
    for string in invalid:
        assert symbolic.decompose(string) is None


@pytest.mark.symbol
def test_normalize_literals():
    """Convert literal tuples and lists into factors and terms."""
    factor = symbolic.asfactor(['m', '/'])
    assert factor == symbolic.Factor('m', '/')
    term = symbolic.asterm(([('m', None), ('s', '/')], '+'))
    assert term.factors == (
        symbolic.Factor('m', None),
        symbolic.Factor('s', '/'),
    )
    assert term.separator == '+'
    assert symbolic.asterm(term) == term
    with pytest.raises(symbolic.OperatorValueError):
        symbolic.asfactor(('m', '+'))
    with pytest.raises(symbolic.OperatorValueError):
        symbolic.asterm(([('m', None)], '*'))


@pytest.mark.symbol
def test_reduce_term():
    """Collapse repeated bases within a single term."""
    cases = [
        ([('kg', None), ('m', None), ('s', '/'), ('s', '/')], 'kg*m*s^-2'),
        ([('m', None), ('s', '/')], 'm/s'),
        ([('m', None), ('m', '*')], 'm^2'),
        ([('m', None), ('m', '/')], ''),
        ([('m^3', None), ('m^-1', '*'), ('s^2', '/')], 'm^2*s^-2'),
        ([('s', '/')], 's^-1'),
        ([('s', '/'), ('m', None), ('s', '/')], 's^-2*m'),
        ([('m', None), ('kg', '*')], 'm*kg'),
        ([('m^2', None), ('m^2', '/'), ('s', None)], 's'),
    ]
    for factors, expected in cases:
        term = symbolic.reduce(symbolic.asterm((factors, None)))
        assert term.format() == expected


@pytest.mark.symbol
def test_reduce_operations():
    """Check the operator of each factor in a reduced term."""
    term = symbolic.reduce(
        symbolic.asterm(
            ([('kg', None), ('m', '*'), ('s', '/'), ('a', '/'), ('a', '/')], None)
        )
    )
    assert term.factors == (
        symbolic.Factor('kg', None),
        symbolic.Factor('m', '*'),
        symbolic.Factor('s', '/'),
        symbolic.Factor('a^-2', '*'),
    )


@pytest.mark.symbol
def test_reduce_separator():
    """Reduction should keep the separator of each term."""
    for separator in symbolic.SEPARATORS:
        term = symbolic.asterm(([('m', None), ('m', '*')], separator))
        assert symbolic.reduce(term).separator == separator


@pytest.mark.symbol
def test_reduce_unrecognized():
    """Skip unrecognized symbols unless reduction is strict."""
    term = symbolic.asterm(([('Hz', None), ('m', '*'), ('m', '*')], None))
    assert symbolic.reduce(term).format() == 'm^2'
    with pytest.raises(symbolic.SymbolValueError):
        symbolic.reduce(term, strict=True)
    only = symbolic.asterm(([('Hz', None)], None))
    assert symbolic.reduce(only).factors == ()


@pytest.mark.symbol
def test_simplify_terms_independently():
    """Simplification never merges or cancels separate terms."""
    symbol = build(
        ([('m', None), ('m', '*')], '-'),
        ([('m', None), ('m', '/')], '+'),
        ([('m', None)], None),
    )
    result = symbolic.simplify(symbol)
    assert len(result) == 3
    assert symbolic.format(result) == 'm^2-+m'


@pytest.mark.symbol
def test_simplify_idempotent():
    """Simplifying a simplified symbol should not change it."""
    symbols = [
        build(([('kg', None), ('m', None), ('s', '/'), ('s', '/')], None)),
        build(([('s', '/'), ('m', '/')], '+'), ([('x^3', None)], None)),
        build(([('m', None), ('m', '/')], None)),
        build(),
    ]
    for symbol in symbols:
        once = symbolic.simplify(symbol)
        twice = symbolic.simplify(once)
        assert once == twice
        assert symbolic.format(once) == symbolic.format(twice)


@pytest.mark.symbol
def test_combine_cross_product():
    """Combining two symbols should join every pair of terms."""
    a = build(([('x', None)], '+'), ([('y', None)], None))
    b = build(([('p', None)], '+'), ([('q', None)], '-'), ([('r', None)], None))
    result = symbolic.product(a, b)
    assert len(result) == len(a) * len(b)
    assert all(term.separator is None for term in result)
    expected = ['x*p', 'x*q', 'x*r', 'y*p', 'y*q', 'y*r']
    assert [term.format() for term in result] == expected
    result = symbolic.ratio(a, b)
    expected = ['x/p', 'x/q', 'x/r', 'y/p', 'y/q', 'y/r']
    assert [term.format() for term in result] == expected


@pytest.mark.symbol
def test_combine_retags_operations():
    """Factors from the right operand take on the combining operator."""
    m = build(([('m', None)], None))
    speed = build(([('m', None), ('s', '/')], None))
    assert symbolic.format(symbolic.product(m, speed)) == 'm^2*s'
    assert symbolic.format(symbolic.ratio(m, speed)) == 's^-1'
    with pytest.raises(symbolic.OperatorValueError):
        symbolic.combine(m, speed, '+')


@pytest.mark.symbol
def test_combine_empty():
    """Combining with an empty symbol should produce an empty symbol."""
    m = build(([('m', None)], None))
    assert symbolic.product(m, build()) == ()
    assert symbolic.ratio(build(), m) == ()


@pytest.mark.symbol
def test_format():
    """Join terms with trailing separators."""
    symbol = build(([('m', None)], '+'), ([('km', None)], None))
    assert symbolic.format(symbol) == 'm+km'
    symbol = build(([('m', None), ('s', '/')], '-'))
    assert symbolic.format(symbol) == 'm/s-'
    assert symbolic.format(build()) == ''
    assert symbolic.format(build(([], None))) == ''


@pytest.mark.symbol
def test_format_tex():
    """Enclose non-trivial exponents in braces."""
    symbol = build(([('kg', None), ('m', '*'), ('s^-2', '*'), ('Hz', '/')], None))
    assert symbolic.format(symbol, style='tex') == 'kg*m*s^{-2}/Hz'
    assert symbolic.format(symbol, style='TeX') == 'kg*m*s^{-2}/Hz'
    with pytest.raises(ValueError):
        symbolic.format(symbol, style='html')
