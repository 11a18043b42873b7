"""
Partial-update merge.

A patch is sparse: only the keys the caller actually sent are applied. With a
pydantic update schema, "sent" means `model_dump(exclude_unset=True)`, which is
what lets an explicit `null` (clear the field) differ from an absent key (keep
the stored value).

| Patch content for a field      | Stored value after merge             |
| ------------------------------ | ------------------------------------ |
| key absent                     | unchanged                            |
| key present with a value       | overwritten                          |
| key present with null          | cleared (nullable columns only)      |
| key present with null, NOT NULL| ValidationError, nothing applied     |
| key not in `allowed_fields`    | ValidationError, nothing applied     |

`updated_at` / `updated_by` are refreshed on every merge, even when no field
value actually changed.
"""
import logging
from typing import Any, Iterable, Mapping

from pydantic import BaseModel

from ..exceptions.base import ValidationError
from ..models.mixins import utc_now
from ..validators.model_validators import find_unknown_model_kwargs, get_non_nullable_columns

logger = logging.getLogger(__name__)


def patch_to_dict(patch: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    """Keys the caller actually provided, with their values."""
    if isinstance(patch, BaseModel):
        return patch.model_dump(exclude_unset=True)
    return dict(patch)


def apply_patch(
    entity: Any,
    patch: BaseModel | Mapping[str, Any],
    *,
    actor_id: int | None,
    allowed_fields: Iterable[str] | None = None,
) -> list[str]:
    """
    Merge `patch` into `entity` field by field.

    Args:
        entity: ORM instance to mutate in place.
        patch: pydantic update model or plain mapping.
        actor_id: principal recorded in `updated_by`.
        allowed_fields: attribute names the caller may change. Defaults to every mapped column.

    Returns:
        Names of the fields whose stored value changed, sorted.

    Raises:
        ValidationError: unknown/disallowed key, or explicit null on a NOT NULL column.
    """
    model = type(entity)
    changes = patch_to_dict(patch)

    # 1) keys must be mapped columns and, if restricted, allowed ones
    invalid = find_unknown_model_kwargs(model, changes.keys())
    if allowed_fields is not None:
        allowed = set(allowed_fields)
        invalid = sorted(set(invalid) | {k for k in changes if k not in allowed})
    if invalid:
        raise ValidationError(
            f"Field(s) cannot be updated on {model.__name__}: {', '.join(invalid)}",
            fields=invalid,
        )

    # 2) explicit nulls are only accepted on nullable columns
    non_nullable = get_non_nullable_columns(model)
    null_violations = sorted(k for k, v in changes.items() if v is None and k in non_nullable)
    if null_violations:
        raise ValidationError(
            f"Field(s) cannot be null on {model.__name__}: {', '.join(null_violations)}",
            fields=null_violations,
        )

    # 3) apply
    changed = []
    for key, value in changes.items():
        if getattr(entity, key) != value:
            setattr(entity, key, value)
            changed.append(key)

    entity.updated_at = utc_now()
    entity.updated_by = actor_id

    logger.debug(
        "repo.merge.applied",
        extra={
            "model": model.__name__,
            "provided_keys": sorted(changes.keys()),
            "changed_fields": sorted(changed),
        },
    )
    return sorted(changed)


__all__ = ["apply_patch", "patch_to_dict"]
