"""Stream, table and function definitions.

Definitions are the named declarations a plan resolves identifiers against.
They are immutable pydantic models: builder methods such as ``attribute``
return a new definition, so a definition held by a plan cannot change after
it was registered.

Example:
    >>> stock = (
    ...     StreamDefinition.stream("StockStream")
    ...     .attribute("symbol", AttributeType.STRING)
    ...     .attribute("price", AttributeType.FLOAT)
    ... )
    >>> stock.attribute_names
    ('symbol', 'price')
"""

from __future__ import annotations

from enum import Enum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from streamplan.core.annotation import Annotation
from streamplan.exceptions import AttributeNotExistError, DuplicateAttributeError


class AttributeType(str, Enum):
    """Value types an attribute can carry."""

    STRING = "string"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    BOOL = "bool"
    OBJECT = "object"


class Attribute(BaseModel):
    """A named, typed field of a stream or table."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Attribute name")
    type: AttributeType = Field(..., description="Attribute type")


class AbstractDefinition(BaseModel):
    """Common shape of stream and table definitions.

    Attributes:
        id: Identifier the definition is registered under (None until set)
        attributes: Ordered attributes of the schema
        annotations: Annotations attached to the definition

    Equality is structural and includes the concrete class, so a stream and
    a table with the same id and attributes are never equal.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, description="Definition identifier")
    attributes: tuple[Attribute, ...] = Field(default=(), description="Schema")
    annotations: tuple[Annotation, ...] = Field(default=(), description="Annotations")

    def attribute(self, name: str, type: AttributeType | str) -> Self:
        """Return a copy with an attribute appended.

        Raises:
            DuplicateAttributeError: If the name is already used
        """
        if name in self.attribute_names:
            raise DuplicateAttributeError(
                f"'{name}' is already defined for {self.__class__.__name__} "
                f"'{self.id}', hence cannot add it again"
            )
        attribute = Attribute(name=name, type=AttributeType(type))
        return self.model_copy(update={"attributes": (*self.attributes, attribute)})

    def annotation(self, annotation: Annotation) -> Self:
        """Return a copy with an annotation appended."""
        return self.model_copy(update={"annotations": (*self.annotations, annotation)})

    @property
    def attribute_names(self) -> tuple[str, ...]:
        """Attribute names in declaration order."""
        return tuple(a.name for a in self.attributes)

    def attribute_position(self, name: str) -> int:
        """Get the zero-based position of an attribute."""
        for position, attribute in enumerate(self.attributes):
            if attribute.name == name:
                return position
        raise AttributeNotExistError(
            f"Cannot find attribute '{name}' in {self.__class__.__name__} '{self.id}'"
        )

    def attribute_type(self, name: str) -> AttributeType:
        """Get the type of an attribute."""
        return self.attributes[self.attribute_position(name)].type

    def __str__(self) -> str:
        fields = ", ".join(f"{a.name} {a.type.value}" for a in self.attributes)
        return f"{self.__class__.__name__}({self.id}: {fields})"


class StreamDefinition(AbstractDefinition):
    """Schema of an unbounded event stream."""

    @classmethod
    def stream(cls, stream_id: str) -> StreamDefinition:
        return cls(id=stream_id)


class TableDefinition(AbstractDefinition):
    """Schema of a queryable table."""

    @classmethod
    def table(cls, table_id: str) -> TableDefinition:
        return cls(id=table_id)


class FunctionDefinition(BaseModel):
    """A named, callable function declared inside a plan.

    Attributes:
        function_id: Identifier the function is called by
        language: Implementation language of the body (e.g. "javascript")
        body: Function source, kept opaque
        return_type: Type of the returned value
    """

    model_config = ConfigDict(frozen=True)

    function_id: str | None = Field(default=None, description="Function identifier")
    language: str | None = Field(default=None, description="Body language")
    body: str | None = Field(default=None, description="Function body")
    return_type: AttributeType | None = Field(default=None, description="Return type")

    @classmethod
    def function(cls, function_id: str) -> FunctionDefinition:
        return cls(function_id=function_id)

    def with_language(self, language: str) -> FunctionDefinition:
        return self.model_copy(update={"language": language})

    def with_body(self, body: str) -> FunctionDefinition:
        return self.model_copy(update={"body": body})

    def with_return_type(self, return_type: AttributeType | str) -> FunctionDefinition:
        return self.model_copy(update={"return_type": AttributeType(return_type)})
