"""Execution elements: queries and partitions.

An execution element is either a standalone ``Query`` or a ``Partition``
grouping queries by key. The two share no base class; ``ExecutionElement``
is a tagged union discriminated by ``kind``, so documents can be validated
straight into the right variant:

    >>> from pydantic import TypeAdapter
    >>> TypeAdapter(ExecutionElement).validate_python(
    ...     {"kind": "query", "input_stream": "StockStream"}
    ... )
    Query(kind='query', input_stream='StockStream', selection=(), output_stream=None, annotations=())
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from streamplan.core.annotation import (
    ANNOTATION_ELEMENT_NAME,
    ANNOTATION_INFO,
    Annotation,
    get_annotation_value,
)


class Query(BaseModel):
    """A single continuous query.

    The query body is kept opaque: selection entries are expression strings
    handed to the compiler untouched.

    Example:
        >>> q = (
        ...     Query()
        ...     .from_stream("StockStream")
        ...     .select("symbol", "price")
        ...     .insert_into("OutStream")
        ...     .annotation(Annotation(name="info").element("name", "q1"))
        ... )
        >>> element_name(q)
        'q1'
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["query"] = "query"
    input_stream: str | None = Field(default=None, description="Stream read from")
    selection: tuple[str, ...] = Field(default=(), description="Output expressions")
    output_stream: str | None = Field(default=None, description="Stream written to")
    annotations: tuple[Annotation, ...] = Field(default=(), description="Annotations")

    def from_stream(self, stream_id: str) -> Query:
        return self.model_copy(update={"input_stream": stream_id})

    def select(self, *expressions: str) -> Query:
        return self.model_copy(update={"selection": (*self.selection, *expressions)})

    def insert_into(self, stream_id: str) -> Query:
        return self.model_copy(update={"output_stream": stream_id})

    def annotation(self, annotation: Annotation) -> Query:
        return self.model_copy(update={"annotations": (*self.annotations, annotation)})


class PartitionKey(BaseModel):
    """Partitioning expression applied to one stream."""

    model_config = ConfigDict(frozen=True)

    stream_id: str = Field(..., min_length=1, description="Partitioned stream")
    expression: str = Field(..., min_length=1, description="Key expression")


class Partition(BaseModel):
    """A group of queries executed per partition key.

    Attributes:
        keys: How each participating stream is partitioned
        queries: Queries run inside every partition instance
        annotations: Annotations attached to the partition
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["partition"] = "partition"
    keys: tuple[PartitionKey, ...] = Field(default=(), description="Partition keys")
    queries: tuple[Query, ...] = Field(default=(), description="Inner queries")
    annotations: tuple[Annotation, ...] = Field(default=(), description="Annotations")

    def partition_by(self, stream_id: str, expression: str) -> Partition:
        key = PartitionKey(stream_id=stream_id, expression=expression)
        return self.model_copy(update={"keys": (*self.keys, key)})

    def add_query(self, query: Query) -> Partition:
        return self.model_copy(update={"queries": (*self.queries, query)})

    def annotation(self, annotation: Annotation) -> Partition:
        return self.model_copy(update={"annotations": (*self.annotations, annotation)})


ExecutionElement = Annotated[Query | Partition, Field(discriminator="kind")]


def element_name(element: Query | Partition) -> str | None:
    """Declared name of an element from its ``@info(name=...)`` annotation."""
    return get_annotation_value(
        ANNOTATION_INFO, ANNOTATION_ELEMENT_NAME, element.annotations
    )
