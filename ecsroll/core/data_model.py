__all__ = [
    "DataModel",
    "DataModelField",
    "FrozenDataModel",
    "PassThroughModel",
]

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field


class DataModel(BaseModel):
    """Data model."""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra="ignore",
        populate_by_name=True,
    )

    def copy(self, deep: bool = False, **kwargs):
        return self.model_copy(deep=deep, **kwargs)

    @classmethod
    def from_dict(cls, obj: dict | None) -> Self:
        return cls.model_validate(obj)


class PassThroughModel(DataModel):
    """Data model that keeps unknown keys for the native API."""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra="allow",
        populate_by_name=True,
    )

    def get_extra(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class FrozenDataModel(DataModel):
    """Immutable data model."""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )


def DataModelField(
    alias: str | None = None,
    min_length: int | None = None,
    **kwargs,
) -> Any:
    return Field(alias=alias, min_length=min_length, **kwargs)
