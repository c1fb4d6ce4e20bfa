"""Pytest configuration and fixtures for streamplan tests."""

import pytest

from streamplan.core.annotation import Annotation
from streamplan.core.definitions import (
    AttributeType,
    FunctionDefinition,
    StreamDefinition,
    TableDefinition,
)
from streamplan.core.execution import Partition, Query


@pytest.fixture
def stock_stream() -> StreamDefinition:
    """Return a stock ticker stream definition."""
    return (
        StreamDefinition.stream("StockStream")
        .attribute("symbol", AttributeType.STRING)
        .attribute("price", AttributeType.FLOAT)
        .attribute("volume", AttributeType.LONG)
    )


@pytest.fixture
def stock_table() -> TableDefinition:
    """Return a table holding the latest price per symbol."""
    return (
        TableDefinition.table("StockTable")
        .attribute("symbol", AttributeType.STRING)
        .attribute("price", AttributeType.FLOAT)
    )


@pytest.fixture
def concat_function() -> FunctionDefinition:
    """Return a scripted function definition."""
    return (
        FunctionDefinition.function("concat")
        .with_language("javascript")
        .with_body("return data[0] + data[1];")
        .with_return_type(AttributeType.STRING)
    )


@pytest.fixture
def named_query() -> Query:
    """Return a query named 'FilterQuery'."""
    return (
        Query()
        .from_stream("StockStream")
        .select("symbol", "price")
        .insert_into("FilteredStream")
        .annotation(Annotation(name="info").element("name", "FilterQuery"))
    )


@pytest.fixture
def named_partition() -> Partition:
    """Return a partition named 'SymbolPartition'."""
    return (
        Partition()
        .partition_by("StockStream", "symbol")
        .add_query(Query().from_stream("StockStream").insert_into("#Inner"))
        .annotation(Annotation(name="info").element("name", "SymbolPartition"))
    )


@pytest.fixture
def sample_plan_document() -> dict:
    """Return a valid plan document for loader and CLI tests."""
    return {
        "name": "StockPlan",
        "annotations": [
            {"name": "config", "elements": [{"key": "async", "value": "true"}]}
        ],
        "streams": [
            {
                "id": "StockStream",
                "attributes": [
                    {"name": "symbol", "type": "string"},
                    {"name": "price", "type": "float"},
                ],
            }
        ],
        "tables": [
            {"id": "StockTable", "attributes": [{"name": "symbol", "type": "string"}]}
        ],
        "functions": [
            {
                "function_id": "concat",
                "language": "javascript",
                "body": "return data[0] + data[1];",
                "return_type": "string",
            }
        ],
        "elements": [
            {
                "kind": "query",
                "input_stream": "StockStream",
                "selection": ["symbol"],
                "output_stream": "OutStream",
                "annotations": [
                    {"name": "info", "elements": [{"key": "name", "value": "q1"}]}
                ],
            },
            {
                "kind": "partition",
                "keys": [{"stream_id": "StockStream", "expression": "symbol"}],
                "queries": [{"input_stream": "StockStream"}],
            },
        ],
    }
