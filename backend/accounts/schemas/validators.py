"""Field validators shared by the user schemas."""

from __future__ import annotations

import re

from marshmallow import ValidationError, validate

CPF_LENGTH = 14
CPF_PATTERN = re.compile(r"^\d{3}\.\d{3}\.\d{3}-\d{2}$")


def _check_digit(digits: str) -> str:
    """Mod-11 check digit over ``digits`` with weights counting down to 2."""
    weight = len(digits) + 1
    total = sum(int(d) * (weight - i) for i, d in enumerate(digits))
    remainder = total % 11
    return "0" if remainder < 2 else str(11 - remainder)


def cpf_check_digits(base: str) -> str:
    """Return the two verification digits for a nine-digit CPF ``base``.

    >>> cpf_check_digits("056065766")
    '86'
    """
    if len(base) != 9 or not base.isdigit():
        raise ValueError("CPF base must be exactly nine digits.")
    first = _check_digit(base)
    return first + _check_digit(base + first)


def format_cpf(digits: str) -> str:
    """Format eleven digits as ``000.000.000-00``."""
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"


def is_valid_cpf(value: object) -> bool:
    """Return ``True`` for a formatted CPF whose check digits match.

    Sequences of one repeated digit (``111.111.111-11``) pass the arithmetic
    but are not issued, so they are rejected.
    """
    if not isinstance(value, str) or not CPF_PATTERN.match(value):
        return False
    digits = re.sub(r"\D", "", value)
    if len(set(digits)) == 1:
        return False
    return cpf_check_digits(digits[:9]) == digits[9:]


class CPF(validate.Validator):
    """marshmallow validator for formatted Brazilian CPF numbers."""

    length_error = "Provide a CPF with 14 characters"
    default_error = "Provide a valid CPF"

    def __init__(self, *, error: str | None = None) -> None:
        self.error = error or self.default_error

    def __call__(self, value: str) -> str:
        if not isinstance(value, str) or len(value) != CPF_LENGTH:
            raise ValidationError(self.length_error)
        if not is_valid_cpf(value):
            raise ValidationError(self.error)
        return value


class NotBlank(validate.Validator):
    """Reject strings that are empty once surrounding whitespace is stripped."""

    default_error = "Field may not be blank"

    def __init__(self, *, error: str | None = None) -> None:
        self.error = error or self.default_error

    def __call__(self, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(self.error)
        return value


class DottedDomain(validate.Validator):
    """Require a dot in the domain part of an email address.

    ``fields.Email`` accepts ``user@localhost``; stored accounts need a
    routable domain such as ``user@example.com``.
    """

    default_error = "Provide a valid email address"

    def __init__(self, *, error: str | None = None) -> None:
        self.error = error or self.default_error

    def __call__(self, value: str) -> str:
        domain = value.rpartition("@")[2].strip() if isinstance(value, str) else ""
        if "." not in domain.strip("."):
            raise ValidationError(self.error)
        return value
