"""
Field update resolution.

Matches the requested `field name -> value` pairs against the live field
schema of a project and builds the list of field updates to apply to an item.
Unknown fields, unknown options and unsupported data types are skipped with a
warning; they never abort the run.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional
from add_to_project.github.models import (
    FieldDataType,
    FieldSpec,
    FieldUpdate,
    NumberValue,
    OptionSpec,
    SingleSelectValue,
    TextValue,
)
from add_to_project.utils.logger import get_logger

logger = get_logger(__name__)


def is_valid_field_spec(record: Any) -> bool:
    """
    Check whether a raw schema node describes a field.

    The fields connection returns `{}` (or null) for union members that none
    of the query fragments matched.
    """
    return isinstance(record, Mapping) and len(record) > 0


def find_field(fields: Iterable[FieldSpec], name: str) -> Optional[FieldSpec]:
    """Return the first field whose name matches case-insensitively."""
    wanted = name.lower()
    return next((field for field in fields if field.name.lower() == wanted), None)


def find_option(field: FieldSpec, value: str) -> Optional[OptionSpec]:
    """Return the first option of a single-select field matching `value`."""
    wanted = value.lower()
    return next(
        (option for option in field.options or [] if option.name.lower() == wanted),
        None,
    )


def resolve_field_updates(
    desired: Mapping[str, str],
    schema: Iterable[Mapping[str, Any]],
    log: Optional[logging.Logger] = None,
) -> List[FieldUpdate]:
    """
    Resolve requested field values into field updates.

    Args:
        desired: Field name to value, in the order updates should be applied
        schema: Raw field nodes returned by the project fields query
        log: Receives skip diagnostics (module logger when omitted)

    Returns:
        Updates for every requested field that could be resolved, in request order

    Raises:
        TypeError: If `desired` is not a mapping
        pydantic.ValidationError: If a non-empty schema node lacks `id` or `name`
    """
    log = log or logger

    if not isinstance(desired, Mapping):
        raise TypeError(f"desired fields must be a mapping, got {type(desired).__name__}")

    fields = [FieldSpec.model_validate(record) for record in schema if is_valid_field_spec(record)]

    updates: List[FieldUpdate] = []
    for field_name, field_value in desired.items():
        field = find_field(fields, field_name)
        if field is None or not field.dataType:
            log.warning(f"Could not find field with name {field_name}")
            continue

        kind = field.kind
        if kind is FieldDataType.SINGLE_SELECT:
            option = find_option(field, field_value)
            if option is None:
                log.warning(
                    f"Could not find option for field {field.name} with value {field_value}"
                )
                continue
            updates.append(
                FieldUpdate(fieldId=field.id, value=SingleSelectValue(singleSelectOptionId=option.id))
            )

        # TEXT and NUMBER carry the field's own name as their value
        elif kind is FieldDataType.TEXT:
            updates.append(FieldUpdate(fieldId=field.id, value=TextValue(textValueName=field.name)))

        elif kind is FieldDataType.NUMBER:
            updates.append(FieldUpdate(fieldId=field.id, value=NumberValue(numberValue=field.name)))

        else:
            log.warning(f"Unsupported data type for field {field_name}: {field.dataType}")

    log.debug(f"Resolved field updates: {[update.model_dump() for update in updates]}")
    return updates
