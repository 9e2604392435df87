"""
Declarative form schema.

Rules are plain data; the validator module evaluates them.
"""

from form_engine.schema.rules import (
    FORM_SCHEMA,
    FieldRule,
    FormSchema,
    ItemRule,
    SequenceRule,
)

__all__ = [
    "FORM_SCHEMA",
    "FieldRule",
    "FormSchema",
    "ItemRule",
    "SequenceRule",
]
