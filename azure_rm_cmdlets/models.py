"""
Intune REST models and their structural validation.
"""

import json
from typing import Dict, Iterable, List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class ValidationRules:
    """Names of the structural rules a model can violate."""

    CANNOT_BE_NULL = "CannotBeNull"


class ModelValidationError(ValueError):
    """A model failed structural validation."""

    def __init__(self, rule: str, target: str, message: Optional[str] = None):
        self.rule = rule
        self.target = target
        super().__init__(message or f"'{target}' failed validation rule '{rule}'")


class MissingRequiredFieldError(ModelValidationError):
    """A required field was None."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            ValidationRules.CANNOT_BE_NULL,
            field_name,
            f"'{field_name}' cannot be null",
        )


@runtime_checkable
class Validatable(Protocol):
    """Anything that can check its own structure."""

    def validate(self) -> None:
        ...


def validate_required_items(field_name: str, items: Optional[Iterable[Optional[Validatable]]]) -> None:
    """
    Validate a required list field and each of its elements.

    None elements are skipped. The first element failure is raised as is.

    Args:
        field_name: Field name reported when the list itself is missing
        items: The list to check

    Raises:
        MissingRequiredFieldError: If items is None
    """
    if items is None:
        raise MissingRequiredFieldError(field_name)

    for element in items:
        if element is not None:
            element.validate()


class RestModel(BaseModel):
    """Base for wire models: PascalCase attributes, camelCase JSON keys."""

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> Dict:
        """Convert to a wire dictionary."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


class LocationProperties(RestModel):
    """Properties of an Intune location."""

    HostName: Optional[str] = Field(default=None, alias="hostName")

    def validate(self) -> None:
        if self.HostName is None:
            raise MissingRequiredFieldError("HostName")


class Location(RestModel):
    """Intune location resource."""

    Id: Optional[str] = Field(default=None, alias="id")
    Name: Optional[str] = Field(default=None, alias="name")
    Type: Optional[str] = Field(default=None, alias="type")
    Properties: Optional[LocationProperties] = Field(default=None, alias="properties")

    def validate(self) -> None:
        if self.Properties is not None:
            self.Properties.validate()


class LocationCollection(RestModel):
    """One page of Intune locations."""

    Value: Optional[List[Optional[Location]]] = Field(default=None, alias="value")
    Nextlink: Optional[str] = Field(default=None, alias="nextlink")

    def validate(self) -> None:
        """
        Validate the page.

        Raises:
            MissingRequiredFieldError: If Value is None
            ModelValidationError: The first failure of a location in Value
        """
        validate_required_items("Value", self.Value)
