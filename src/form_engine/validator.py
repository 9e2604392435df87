"""
Record validator.

Evaluates the declarative schema against a Record snapshot. Every pass
looks at the whole record, untouched fields included, and returns a
fresh result; nothing is cached between passes.
"""

from form_engine.models.record import Record
from form_engine.models.validation_result import (
    ErrorMap,
    FieldValidationError,
    SequenceConstraintError,
    ValidationResult,
)
from form_engine.paths import attribute_for, format_path, read_path
from form_engine.schema import FORM_SCHEMA, FormSchema


def check(record: Record, schema: FormSchema = FORM_SCHEMA) -> ValidationResult:
    """
    Validate a record and return structured errors.

    All failing paths are collected in one pass. Each path carries at most
    one error: the first failing rule declared for it.

    Args:
        record: The record snapshot to validate.
        schema: Rule table to evaluate.

    Returns:
        ValidationResult with the errors, and the submission payload
        as ``validated_data`` when there are none.
    """
    errors: list[FieldValidationError] = []
    failed: set[str] = set()

    for rule in schema.field_rules:
        if rule.path in failed or not rule.applies_to(record):
            continue
        value = read_path(record, rule.path)
        if not rule.check(value):
            failed.add(rule.path)
            errors.append(FieldValidationError(
                field_path=rule.path,
                error_type=rule.error_type,
                message=rule.message,
                received=value,
            ))

    for seq_rule in schema.sequence_rules:
        items = read_path(record, seq_rule.path)
        if len(items) < seq_rule.min_items:
            failed.add(seq_rule.path)
            errors.append(SequenceConstraintError(
                field_path=seq_rule.path,
                message=seq_rule.message,
                received=len(items),
            ))

    for item_rule in schema.item_rules:
        items = read_path(record, item_rule.sequence)
        for index, item in enumerate(items):
            path = format_path(item_rule.sequence, index, item_rule.attribute)
            if path in failed:
                continue
            value = getattr(item, attribute_for(type(item), item_rule.attribute, path))
            if not item_rule.check(value):
                failed.add(path)
                errors.append(FieldValidationError(
                    field_path=path,
                    error_type=item_rule.error_type,
                    message=item_rule.message,
                    received=value,
                ))

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        validated_data=None if errors else record.to_payload(),
    )


def validate(record: Record) -> ErrorMap:
    """Validate a record and return its ErrorMap (empty when valid)."""
    return check(record).to_error_map()


def validate_path(record: Record, path: str) -> str | None:
    """
    Check a single field path without touching any state.

    Conditional rules still see the whole record, so ``referral`` reflects
    the current ``subscribe`` value. Raises FieldPathError or OutOfRangeError
    when the path does not exist in the record.
    """
    read_path(record, path)
    return validate(record).get(path)
