from typing import Iterable

from sqlalchemy import inspect as sa_inspect


def mapped_column_keys(model) -> set[str]:
    """
    Attribute names of every mapped column on the model class.
    - model: the SQLAlchemy model class (not instance)
    """
    mapper = sa_inspect(model)
    return {attr.key for attr in mapper.column_attrs}


def find_unknown_model_kwargs(model, keys: Iterable[str]) -> list[str]:
    """
    Return the keys that are not mapped columns of the model, sorted.
    """
    allowed = mapped_column_keys(model)
    return sorted(k for k in keys if k not in allowed)


def get_non_nullable_columns(model) -> set[str]:
    """
    Attribute names of NOT NULL columns (primary keys included).
    Used to refuse explicit nulls in partial updates.
    """
    mapper = sa_inspect(model)
    return {
        attr.key
        for attr in mapper.column_attrs
        if any(not col.nullable for col in attr.columns)
    }
