from __future__ import annotations
import ipaddress
import logging
import re
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Union

from common.logs import LOGGER_NAME
from common.models import Err, ErrorKind, FieldSpec, FieldType, Ok, ValidationResult
from common.settings import settings

log = logging.getLogger(LOGGER_NAME)

INT_RE   = re.compile(r"-?[0-9]+")
FLOAT_RE = re.compile(r"-?[0-9]+(\.[0-9]+)?")

# practical ceiling for a deliverable address; overrides any caller max
EMAIL_MAX_LENGTH = 254

_TRIM_CHARS = " \t\n\r\0\x0b"
_EMAIL_ILLEGAL = re.compile(r"[^A-Za-z0-9!#$%&'*+\-=?^_`{|}~@.\[\]]")
_EMAIL_RE = re.compile(
    r"(?P<local>[A-Za-z0-9!#$%&'*+\-=?^_`{|}~]+(?:\.[A-Za-z0-9!#$%&'*+\-=?^_`{|}~]+)*)"
    r"@"
    r"(?:(?P<host>(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+"
    r"[A-Za-z](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)"  # tld starts with a letter
    r"|\[(?P<literal>[^\[\]]+)\])"
)

FieldLike = Union[FieldSpec, Mapping[str, Any]]


def sanitize_email(value: str) -> str:
    return _EMAIL_ILLEGAL.sub("", value)


def _is_ip_literal(literal: str) -> bool:
    # [IPv6:...] or [a.b.c.d]
    try:
        if literal[:5].lower() == "ipv6:":
            ipaddress.IPv6Address(literal[5:])
        else:
            ipaddress.IPv4Address(literal)
    except ValueError:
        return False
    return True


def is_valid_email(value: str) -> bool:
    m = _EMAIL_RE.fullmatch(value)
    if not m or len(m.group("local")) > 64:
        return False
    if m.group("literal") is not None:
        return _is_ip_literal(m.group("literal"))
    return True


def _as_spec(field: FieldLike) -> FieldSpec:
    if isinstance(field, FieldSpec):
        return field
    return FieldSpec.model_validate(field)


def _fail(kind: ErrorKind, message: str, field: Optional[str] = None) -> Err:
    level = logging.INFO if settings.log_failures else logging.DEBUG
    log.log(level, "form validation failed field=%s kind=%s", field, kind.value)
    return Err(kind=kind, message=message, field=field)


def _check_field(spec: FieldSpec, value: str) -> Optional[Err]:
    max_size, min_size = spec.max_size, spec.min_size

    if spec.type == FieldType.EMAIL:
        value = sanitize_email(value)
        if not is_valid_email(value):
            return _fail(ErrorKind.INVALID_FORMAT, "Invalid email address provided.", spec.name)
        max_size = EMAIL_MAX_LENGTH
    elif spec.type == FieldType.INT:
        if not INT_RE.fullmatch(value):
            return _fail(ErrorKind.INVALID_FORMAT, f"{spec.label} must be an integer.", spec.name)
    elif spec.type == FieldType.FLOAT:
        if not FLOAT_RE.fullmatch(value):
            return _fail(ErrorKind.INVALID_FORMAT, f"{spec.label} must be a number.", spec.name)

    # size: length for text, magnitude for numbers (Decimal has no digit limit)
    if spec.type in (FieldType.STRING, FieldType.EMAIL):
        size: Union[int, Decimal] = len(value)
    else:
        size = Decimal(value)

    is_text = spec.type == FieldType.STRING
    if max_size is not None and size > max_size:
        msg = (f"{spec.label} too long (maximum {max_size} characters.)" if is_text
               else f"{spec.label} too big (max: {max_size})")
        return _fail(ErrorKind.TOO_LARGE, msg, spec.name)
    if min_size is not None and size < min_size:
        msg = (f"{spec.label} too short (minimum {min_size} characters.)" if is_text
               else f"{spec.label} too small (min: {min_size})")
        return _fail(ErrorKind.TOO_SMALL, msg, spec.name)
    return None


def validate_form(submission: Mapping[str, Any], fields: Iterable[FieldLike],
                  *, is_post: bool = True) -> ValidationResult:
    """
    Validate a submitted form against an ordered list of field specs.

    Stops at the first failing field and returns its Err. On success returns
    Ok with a copy of the submission minus blank optional fields. Neither the
    submission nor the specs are modified.
    """
    if not is_post:
        return _fail(ErrorKind.WRONG_METHOD, "The request method was not POST.")

    cleaned = dict(submission)
    for field in fields:
        spec = _as_spec(field)
        raw = submission.get(spec.name)
        value = "" if raw is None else str(raw).strip(_TRIM_CHARS)

        if value == "":
            if spec.required:
                return _fail(ErrorKind.MISSING_REQUIRED, f"{spec.label} is required.", spec.name)
            cleaned.pop(spec.name, None)
            log.debug("dropping blank optional field %s", spec.name)
            continue

        if spec.type is None:
            continue
        err = _check_field(spec, value)
        if err is not None:
            return err

    return Ok(cleaned=cleaned)
