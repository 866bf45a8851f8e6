import pytest
from pydantic import TypeAdapter, ValidationError

from common.models import Err, ErrorKind, FieldSpec, FieldType, Ok, ValidationResult


def test_field_type_keeps_legacy_codes():
    assert [t.value for t in FieldType] == [0, 1, 2, 11]


@pytest.mark.parametrize("raw,expected", [
    (FieldType.EMAIL, FieldType.EMAIL),
    (11, FieldType.EMAIL),
    ("email", FieldType.EMAIL),
    (" Float ", FieldType.FLOAT),
    (None, None),
])
def test_field_type_inputs(raw, expected):
    spec = FieldSpec(name="f", label="F", type=raw)
    assert spec.type == expected


def test_unknown_type_rejected():
    with pytest.raises(ValidationError):
        FieldSpec(name="f", label="F", type="date")
    with pytest.raises(ValidationError):
        FieldSpec(name="f", label="F", type=7)


def test_empty_name_rejected():
    with pytest.raises(ValidationError):
        FieldSpec(name="", label="Nothing")


def test_size_aliases():
    a = FieldSpec.model_validate({"name": "f", "label": "F", "min-size": 1, "max-size": 9})
    b = FieldSpec.model_validate({"name": "f", "label": "F", "minSize": 1, "maxSize": 9})
    c = FieldSpec(name="f", label="F", min_size=1, max_size=9)
    assert a == b == c
    assert (c.min_size, c.max_size) == (1, 9)
    assert c.required is False


def test_field_spec_is_frozen():
    spec = FieldSpec(name="f", label="F", max_size=3)
    with pytest.raises(ValidationError):
        spec.max_size = 254


def test_result_truthiness_and_payload():
    ok = Ok(cleaned={"a": "1"})
    err = Err(kind=ErrorKind.MISSING_REQUIRED, message="A is required.", field="a")
    assert ok and not err
    assert ok.to_payload() == {"ok": True}
    assert err.to_payload() == {"ok": False, "err": "A is required."}


def test_result_union_round_trips_by_status():
    ta = TypeAdapter(ValidationResult)
    parsed = ta.validate_python({"status": "err", "kind": "too_small", "message": "X too small (min: 1)"})
    assert isinstance(parsed, Err)
    assert parsed.kind == ErrorKind.TOO_SMALL
    assert isinstance(ta.validate_python({"status": "ok"}), Ok)
