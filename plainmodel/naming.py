"""
Naming-case styles for plainmodel.

Each style maps to a pure ``str -> str`` function. ``NamingCase.NON_CASE``
is the identity and is treated specially by deserialization: a model
configured with it never has its incoming keys converted.

Example:
    from plainmodel import NamingCase, naming_case_fn

    naming_case_fn(NamingCase.CAMEL_CASE)("full_name")  # 'fullName'
    naming_case_fn("snake_case")("fullName")            # 'full_name'
"""

from enum import Enum
from typing import Callable, Dict, Union

from pydantic.alias_generators import to_camel, to_pascal, to_snake

from .errors import NamingCaseError


class NamingCase(str, Enum):
    """Supported key naming conventions."""

    NON_CASE = "non_case"
    CAMEL_CASE = "camelCase"
    SNAKE_CASE = "snake_case"
    PASCAL_CASE = "PascalCase"
    KEBAB_CASE = "kebab-case"


def _identity(key: str) -> str:
    return key


def _to_kebab(key: str) -> str:
    return to_snake(key).replace("_", "-")


NAMING_CASE_FUNCTIONS: Dict[NamingCase, Callable[[str], str]] = {
    NamingCase.NON_CASE: _identity,
    NamingCase.CAMEL_CASE: to_camel,
    NamingCase.SNAKE_CASE: to_snake,
    NamingCase.PASCAL_CASE: to_pascal,
    NamingCase.KEBAB_CASE: _to_kebab,
}


def resolve_naming_case(case: Union[NamingCase, str]) -> NamingCase:
    """Coerce a style token to ``NamingCase``, failing fast on unknown values."""
    if isinstance(case, NamingCase):
        return case
    try:
        return NamingCase(case)
    except ValueError:
        raise NamingCaseError(case) from None


def naming_case_fn(case: Union[NamingCase, str]) -> Callable[[str], str]:
    """Return the key conversion function for a naming-case style."""
    return NAMING_CASE_FUNCTIONS[resolve_naming_case(case)]


__all__ = ["NamingCase", "NAMING_CASE_FUNCTIONS", "resolve_naming_case", "naming_case_fn"]
