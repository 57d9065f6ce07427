"""
Schemas for base units of the International System of Units.

Each schema in this module is a single shared instance. Values created from
these schemas, for example via ``meter.parse(2.5)``, may be added to and
subtracted from each other because they share the module-level instance.
"""

import argparse
import typing

from unitschema.core.schema import UnitSchema


class BaseUnit(typing.NamedTuple):
    """Metadata for a named base unit."""

    symbol: str
    name: str
    quantity: str


_base_units = [
    BaseUnit('m', 'meter', 'length'),
    BaseUnit('kg', 'kilogram', 'mass'),
    BaseUnit('s', 'second', 'time'),
    BaseUnit('mol', 'mole', 'amount'),
    BaseUnit('cd', 'candela', 'luminous intensity'),
]
# NOTE: Ampere ('A') and kelvin ('K') do not have lowercase symbols.


BASE_UNITS = {unit.name: unit for unit in _base_units}
"""Metadata for each predefined base unit, by name."""


SCHEMAS = {unit.name: UnitSchema.base(unit.symbol) for unit in _base_units}
"""The shared schema for each predefined base unit, by name."""


meter = SCHEMAS['meter']
kilogram = SCHEMAS['kilogram']
second = SCHEMAS['second']
mole = SCHEMAS['mole']
candela = SCHEMAS['candela']


def lookup(name: str) -> UnitSchema:
    """Get the shared schema for a base unit by name or symbol."""
    if name in SCHEMAS:
        return SCHEMAS[name]
    for unit in _base_units:
        if unit.symbol == name:
            return SCHEMAS[unit.name]
    raise KeyError(f"No base unit named {name!r}") from None


def _show_units():
    """Print all predefined base units."""
    for name, unit in BASE_UNITS.items():
        print(f"{name}: {unit.quantity} [{SCHEMAS[name]}]")


def _show_symbols():
    """Print the symbol of each predefined base unit."""
    print(' '.join(str(schema) for schema in SCHEMAS.values()))


def show(*subsets):
    """Print information about base units defined in this module."""
    printers = {
        'units': _show_units,
        'symbols': _show_symbols,
    }
    if not subsets:
        subsets = tuple(printers)
    for subset in subsets:
        if subset in printers:
            printers[subset]()
        else:
            print(f"Nothing to print for {subset!r}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(
        description=show.__doc__,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--units',
        help=_show_units.__doc__,
        action='store_true',
    )
    parser.add_argument(
        '--symbols',
        help=_show_symbols.__doc__,
        action='store_true',
    )
    args = vars(parser.parse_args())
    subsets = (k for k, v in args.items() if v)
    show(*subsets)
