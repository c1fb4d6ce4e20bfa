"""Build execution plans from structured documents.

A plan document is a JSON object whose entries are already structured
definitions and elements (no query-language text is parsed here):

    {
        "name": "StockPlan",
        "annotations": [{"name": "config", "elements": [{"key": "async", "value": "true"}]}],
        "streams": [{"id": "StockStream", "attributes": [{"name": "price", "type": "float"}]}],
        "tables": [],
        "functions": [{"function_id": "concat", "language": "javascript", "body": "..."}],
        "elements": [{"kind": "query", "input_stream": "StockStream", "annotations": [...]}]
    }

Entries are validated with pydantic, then registered through the plan's
mutators in document order so the usual duplicate and name checks apply.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from streamplan.core.annotation import Annotation
from streamplan.core.definitions import (
    FunctionDefinition,
    StreamDefinition,
    TableDefinition,
)
from streamplan.core.execution import ExecutionElement, Query
from streamplan.core.plan import ExecutionPlan
from streamplan.exceptions import PlanValidationError

logger = logging.getLogger(__name__)

_element_adapter: TypeAdapter[Any] = TypeAdapter(ExecutionElement)


def _section(document: Mapping[str, Any], key: str) -> list[Any]:
    """Get a list-valued section; a missing key is an empty section."""
    if key not in document:
        return []
    entries = document[key]
    if not isinstance(entries, list):
        raise PlanValidationError(
            f"Plan section '{key}' must be a list, got {type(entries).__name__}"
        )
    return entries


def load_plan(document: Mapping[str, Any]) -> ExecutionPlan:
    """Assemble a plan from a plan document.

    Args:
        document: Parsed plan document

    Returns:
        The assembled ExecutionPlan

    Raises:
        PlanValidationError: If the document is not a mapping or a section
            is not a list
        pydantic.ValidationError: If an entry is malformed
        PlanError: If an entry violates a plan invariant
    """
    if not isinstance(document, Mapping):
        raise PlanValidationError(
            f"Plan document must be an object, got {type(document).__name__}"
        )

    plan = ExecutionPlan(
        name=document.get("name"),
        annotations=[Annotation.model_validate(a) for a in _section(document, "annotations")],
    )

    for entry in _section(document, "streams"):
        plan.define_stream(StreamDefinition.model_validate(entry))
    for entry in _section(document, "tables"):
        plan.define_table(TableDefinition.model_validate(entry))
    for entry in _section(document, "functions"):
        plan.define_function(FunctionDefinition.model_validate(entry))

    for entry in _section(document, "elements"):
        element = _element_adapter.validate_python(entry)
        if isinstance(element, Query):
            plan.add_query(element)
        else:
            plan.add_partition(element)

    logger.info(
        f"Loaded plan '{plan.name or '<unnamed>'}' with "
        f"{len(plan.execution_elements)} execution elements"
    )
    return plan


def load_plan_file(path: Path | str) -> ExecutionPlan:
    """Read a JSON plan document from disk and assemble it.

    Args:
        path: Path to the JSON file

    Returns:
        The assembled ExecutionPlan
    """
    path = Path(path)
    logger.debug(f"Reading plan document {path}")
    with open(path, encoding="utf-8") as f:
        document = json.load(f)
    return load_plan(document)
