"""Core plan model for streamplan.

This module contains:
- Annotations and the info/name lookup helper
- Stream, table and function definitions
- Execution elements (queries and partitions)
- The ExecutionPlan container and its invariants
"""

from streamplan.core.annotation import (
    ANNOTATION_ELEMENT_NAME,
    ANNOTATION_INFO,
    Annotation,
    Element,
    get_annotation_element,
    get_annotation_value,
)
from streamplan.core.definitions import (
    AbstractDefinition,
    Attribute,
    AttributeType,
    FunctionDefinition,
    StreamDefinition,
    TableDefinition,
)
from streamplan.core.execution import (
    ExecutionElement,
    Partition,
    PartitionKey,
    Query,
    element_name,
)
from streamplan.core.plan import ExecutionPlan

__all__ = [
    "ANNOTATION_ELEMENT_NAME",
    "ANNOTATION_INFO",
    "AbstractDefinition",
    "Annotation",
    "Attribute",
    "AttributeType",
    "Element",
    "ExecutionElement",
    "ExecutionPlan",
    "FunctionDefinition",
    "Partition",
    "PartitionKey",
    "Query",
    "StreamDefinition",
    "TableDefinition",
    "element_name",
    "get_annotation_element",
    "get_annotation_value",
]
