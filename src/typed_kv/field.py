"""Named singleton fields.

A Field is a pydantic model stored under a fixed name of its own, so it can
be read and written without the caller supplying a key:

    class Theme(Field):
        field_key: ClassVar[str] = "ui.theme"

        name: str = "light"

    await store.set_field(Theme(name="dark"))
    theme = await store.get_field(Theme)

Key names are registered when the class is created and must be unique
across all Field subclasses in the process.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

F = TypeVar("F", bound="Field")

# field_key -> Field subclass
_REGISTRY: dict[str, type[Field]] = {}


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class Field(BaseModel):
    """Base class for values stored under a type-associated key.

    Subclasses set ``field_key``. A subclass that does not set it is an
    intermediate base class and cannot be stored directly.
    """

    field_key: ClassVar[str]

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)

        if "field_key" not in cls.__dict__:
            return

        name = cls.__dict__["field_key"]
        if not isinstance(name, str) or not name:
            msg = f"{cls.__qualname__}.field_key must be a non-empty string, got {name!r}"
            raise TypeError(msg)

        existing = _REGISTRY.get(name)
        if existing is not None and _qualified_name(existing) != _qualified_name(cls):
            msg = (
                f"Field key {name!r} of {_qualified_name(cls)} is already used by "
                f"{_qualified_name(existing)}"
            )
            raise TypeError(msg)

        _REGISTRY[name] = cls
        logger.debug("Registered field %s as %r", _qualified_name(cls), name)

    @classmethod
    def key(cls) -> str:
        """Return the storage name of this field type.

        Raises:
            TypeError: If the class does not declare a field_key.
        """
        name = cls.__dict__.get("field_key")
        if name is None:
            msg = f"{cls.__qualname__} does not declare a field_key"
            raise TypeError(msg)
        return name

    @classmethod
    def default(cls: type[F]) -> F:
        """Return the value used when the field has never been stored.

        Override when the default cannot be built from field defaults alone.
        """
        return cls()


def registered_fields() -> dict[str, type[Field]]:
    """Return a copy of the field key registry."""
    return dict(_REGISTRY)
