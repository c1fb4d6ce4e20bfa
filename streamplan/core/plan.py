"""Execution plan assembly and validation.

``ExecutionPlan`` collects the definitions and execution elements of one
compilation unit and rejects conflicting input as it arrives:

- stream and table ids share one namespace; re-registering an equal
  definition of the same kind is tolerated, anything else is a duplicate
- function ids must be unique, with no tolerance for equal redefinitions
- declared execution element names (``@info(name=...)``) must be unique

Every check runs before any state is written, so a rejected call leaves the
plan exactly as it was. Mutators return the plan for chaining.

Example:
    >>> from streamplan.core.annotation import Annotation
    >>> from streamplan.core.definitions import AttributeType, StreamDefinition
    >>> from streamplan.core.execution import Query
    >>> plan = (
    ...     ExecutionPlan("StockPlan")
    ...     .define_stream(
    ...         StreamDefinition.stream("StockStream")
    ...         .attribute("symbol", AttributeType.STRING)
    ...     )
    ...     .add_query(
    ...         Query()
    ...         .from_stream("StockStream")
    ...         .insert_into("OutStream")
    ...         .annotation(Annotation(name="info").element("name", "q1"))
    ...     )
    ... )
    >>> plan.execution_element_names
    ('q1',)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from streamplan.core.annotation import (
    ANNOTATION_ELEMENT_NAME,
    ANNOTATION_INFO,
    Annotation,
    get_annotation_value,
)
from streamplan.core.definitions import (
    AbstractDefinition,
    FunctionDefinition,
    StreamDefinition,
    TableDefinition,
)
from streamplan.core.execution import Partition, Query, element_name
from streamplan.exceptions import (
    DuplicateDefinitionError,
    FunctionAlreadyExistsError,
    PlanValidationError,
)

logger = logging.getLogger(__name__)


class ExecutionPlan:
    """A validated container of definitions and execution elements.

    Attributes:
        annotations: Annotations attached to the plan
        execution_elements: Queries and partitions in registration order
        execution_element_names: Declared names, index-aligned with the elements
        stream_definitions: Stream id -> definition (read-only view)
        table_definitions: Table id -> definition (read-only view)
        function_definitions: Function id -> definition (read-only view)

    Two plans are equal when their streams, tables, elements, element names
    and annotations are equal. Function definitions do not take part in
    equality.
    """

    def __init__(
        self,
        name: str | None = None,
        annotations: Iterable[Annotation] | None = None,
    ) -> None:
        """Create an empty plan.

        Args:
            name: Plan name, recorded as an ``@info(name=...)`` annotation
            annotations: Initial plan annotations (copied)
        """
        self._stream_definitions: dict[str, StreamDefinition] = {}
        self._table_definitions: dict[str, TableDefinition] = {}
        self._function_definitions: dict[str, FunctionDefinition] = {}
        self._execution_elements: list[Query | Partition] = []
        self._execution_element_names: list[str | None] = []
        self._annotations: list[Annotation] = list(annotations or ())

        if name is not None:
            self._annotations.append(
                Annotation(name=ANNOTATION_INFO).element(ANNOTATION_ELEMENT_NAME, name)
            )

    # === Definitions ===

    def define_stream(self, stream_definition: StreamDefinition) -> ExecutionPlan:
        """Register a stream definition, overwriting an equal one.

        Raises:
            PlanValidationError: If the definition is missing, mistyped or has no id
            DuplicateDefinitionError: If the id conflicts with another definition
        """
        if stream_definition is None:
            raise PlanValidationError("Stream definition should not be None")
        if not isinstance(stream_definition, StreamDefinition):
            raise PlanValidationError(
                f"Expected a StreamDefinition, got {type(stream_definition).__name__}"
            )
        if stream_definition.id is None:
            raise PlanValidationError("Stream id should not be None for stream definition")
        self._check_duplicate_definition(stream_definition)
        self._stream_definitions[stream_definition.id] = stream_definition
        logger.debug(f"Defined stream '{stream_definition.id}'")
        return self

    def remove_stream(self, stream_id: str) -> ExecutionPlan:
        """Remove a stream definition; unknown ids are ignored.

        Raises:
            PlanValidationError: If the id is missing
        """
        if stream_id is None:
            raise PlanValidationError("Stream id should not be None")
        if self._stream_definitions.pop(stream_id, None) is not None:
            logger.debug(f"Removed stream '{stream_id}'")
        return self

    def define_table(self, table_definition: TableDefinition) -> ExecutionPlan:
        """Register a table definition, overwriting an equal one.

        Raises:
            PlanValidationError: If the definition is missing, mistyped or has no id
            DuplicateDefinitionError: If the id conflicts with another definition
        """
        if table_definition is None:
            raise PlanValidationError("Table definition should not be None")
        if not isinstance(table_definition, TableDefinition):
            raise PlanValidationError(
                f"Expected a TableDefinition, got {type(table_definition).__name__}"
            )
        if table_definition.id is None:
            raise PlanValidationError("Table id should not be None for table definition")
        self._check_duplicate_definition(table_definition)
        self._table_definitions[table_definition.id] = table_definition
        logger.debug(f"Defined table '{table_definition.id}'")
        return self

    def _check_duplicate_definition(self, definition: AbstractDefinition) -> None:
        """Reject a definition whose id is held by a different definition."""
        existing_table = self._table_definitions.get(definition.id)
        if existing_table is not None and (
            existing_table != definition or isinstance(definition, StreamDefinition)
        ):
            raise DuplicateDefinitionError(
                f"Table definition with same id '{definition.id}' already exists: "
                f"{existing_table}, hence cannot add {definition}"
            )

        existing_stream = self._stream_definitions.get(definition.id)
        if existing_stream is not None and (
            existing_stream != definition or isinstance(definition, TableDefinition)
        ):
            raise DuplicateDefinitionError(
                f"Stream definition with same id '{definition.id}' already exists: "
                f"{existing_stream}, hence cannot add {definition}"
            )

    def define_function(self, function_definition: FunctionDefinition) -> ExecutionPlan:
        """Register a function definition.

        Raises:
            PlanValidationError: If the definition is missing, mistyped or has no id
            FunctionAlreadyExistsError: If the function id is already registered
        """
        if function_definition is None:
            raise PlanValidationError("Function definition should not be None")
        if not isinstance(function_definition, FunctionDefinition):
            raise PlanValidationError(
                f"Expected a FunctionDefinition, got {type(function_definition).__name__}"
            )
        function_id = function_definition.function_id
        if function_id is None:
            raise PlanValidationError(
                "Function id should not be None for function definition"
            )
        if function_id in self._function_definitions:
            raise FunctionAlreadyExistsError(
                f"The function definition with the same function id exists: {function_id}"
            )
        self._function_definitions[function_id] = function_definition
        logger.debug(f"Defined function '{function_id}'")
        return self

    # === Execution elements ===

    def add_query(self, query: Query) -> ExecutionPlan:
        """Append a query.

        Raises:
            PlanValidationError: If the query is missing, not a Query or its name is taken
        """
        if query is None:
            raise PlanValidationError("Query should not be None")
        if not isinstance(query, Query):
            raise PlanValidationError(f"Expected a Query, got {type(query).__name__}")
        self._add_execution_element(query, "Query")
        return self

    def add_partition(self, partition: Partition) -> ExecutionPlan:
        """Append a partition.

        Raises:
            PlanValidationError: If the partition is missing, not a Partition or its name is taken
        """
        if partition is None:
            raise PlanValidationError("Partition should not be None")
        if not isinstance(partition, Partition):
            raise PlanValidationError(
                f"Expected a Partition, got {type(partition).__name__}"
            )
        self._add_execution_element(partition, "Partition")
        return self

    def _add_execution_element(self, element: Query | Partition, label: str) -> None:
        name = element_name(element)
        if name is not None and name in self._execution_element_names:
            raise PlanValidationError(
                f"Cannot add {label} as another execution element "
                f"already uses its name={name}"
            )
        self._execution_element_names.append(name)
        self._execution_elements.append(element)
        logger.debug(f"Added {label.lower()} '{name or '<anonymous>'}'")

    # === Annotations ===

    def annotation(self, annotation: Annotation) -> ExecutionPlan:
        """Attach an annotation to the plan."""
        self._annotations.append(annotation)
        return self

    # === Accessors ===

    @property
    def name(self) -> str | None:
        """Plan name from its ``@info(name=...)`` annotation."""
        return get_annotation_value(
            ANNOTATION_INFO, ANNOTATION_ELEMENT_NAME, self._annotations
        )

    @property
    def annotations(self) -> tuple[Annotation, ...]:
        return tuple(self._annotations)

    @property
    def execution_elements(self) -> tuple[Query | Partition, ...]:
        return tuple(self._execution_elements)

    @property
    def execution_element_names(self) -> tuple[str | None, ...]:
        return tuple(self._execution_element_names)

    @property
    def stream_definitions(self) -> Mapping[str, StreamDefinition]:
        return MappingProxyType(self._stream_definitions)

    @property
    def table_definitions(self) -> Mapping[str, TableDefinition]:
        return MappingProxyType(self._table_definitions)

    @property
    def function_definitions(self) -> Mapping[str, FunctionDefinition]:
        return MappingProxyType(self._function_definitions)

    def summary(self) -> dict[str, Any]:
        """Get a human-readable summary of the plan.

        Returns:
            Dictionary with the plan name, declared ids and element names
        """
        return {
            "name": self.name,
            "streams": sorted(self._stream_definitions),
            "tables": sorted(self._table_definitions),
            "functions": sorted(self._function_definitions),
            "execution_element_count": len(self._execution_elements),
            "execution_element_names": list(self._execution_element_names),
        }

    # === Value semantics ===

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ExecutionPlan):
            return NotImplemented
        return (
            self._stream_definitions == other._stream_definitions
            and self._table_definitions == other._table_definitions
            and self._execution_elements == other._execution_elements
            and self._execution_element_names == other._execution_element_names
            and self._annotations == other._annotations
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"ExecutionPlan(stream_definitions={self._stream_definitions!r}, "
            f"table_definitions={self._table_definitions!r}, "
            f"execution_elements={self._execution_elements!r}, "
            f"execution_element_names={self._execution_element_names!r}, "
            f"annotations={self._annotations!r})"
        )
