# apps/gateway/forms.py
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, Mapping, Union

from fastapi import HTTPException, Request

from common.models import ErrorKind, FieldSpec, Ok, ValidationResult
from common.validators import validate_form


async def validate_form_request(request: Request,
                                fields: Iterable[Union[FieldSpec, Mapping[str, Any]]]) -> ValidationResult:
    # uploads are skipped; repeated keys keep the last value
    if request.method.upper() != "POST":
        return validate_form({}, fields, is_post=False)

    form = await request.form()
    submission: Dict[str, str] = {k: v for k, v in form.items() if isinstance(v, str)}
    return validate_form(submission, fields)


def require_valid_form(fields: Iterable[Union[FieldSpec, Mapping[str, Any]]]) -> Callable:
    """FastAPI dependency: cleaned submission, or HTTPException (405 wrong method, else 422)."""
    specs = [f if isinstance(f, FieldSpec) else FieldSpec.model_validate(f) for f in fields]

    async def _dependency(request: Request) -> Dict[str, Any]:
        result = await validate_form_request(request, specs)
        if isinstance(result, Ok):
            return result.cleaned
        status = 405 if result.kind == ErrorKind.WRONG_METHOD else 422
        raise HTTPException(status_code=status, detail=result.message)

    return _dependency
