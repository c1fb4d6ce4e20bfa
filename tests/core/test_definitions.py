"""Tests for stream, table and function definitions."""

import pytest
from pydantic import ValidationError

from streamplan.core.annotation import Annotation
from streamplan.core.definitions import (
    Attribute,
    AttributeType,
    FunctionDefinition,
    StreamDefinition,
    TableDefinition,
)
from streamplan.exceptions import AttributeNotExistError, DuplicateAttributeError


class TestStreamDefinition:
    """Tests for stream definitions."""

    def test_builder(self, stock_stream: StreamDefinition) -> None:
        """Test building a stream definition attribute by attribute."""
        assert stock_stream.id == "StockStream"
        assert stock_stream.attribute_names == ("symbol", "price", "volume")
        assert stock_stream.attribute_type("price") == AttributeType.FLOAT
        assert stock_stream.attribute_position("volume") == 2

    def test_attribute_returns_new_definition(self) -> None:
        """Test that attribute() does not modify the receiver."""
        base = StreamDefinition.stream("S")
        extended = base.attribute("a", AttributeType.INT)
        assert base.attributes == ()
        assert extended.attributes == (Attribute(name="a", type=AttributeType.INT),)

    def test_attribute_type_from_string(self) -> None:
        """Test attribute types given as strings."""
        definition = StreamDefinition.stream("S").attribute("a", "double")
        assert definition.attribute_type("a") == AttributeType.DOUBLE

    def test_unknown_attribute_type_rejected(self) -> None:
        """Test that unknown type names raise."""
        with pytest.raises(ValueError):
            StreamDefinition.stream("S").attribute("a", "decimal")

    def test_duplicate_attribute_rejected(self) -> None:
        """Test that repeating an attribute name raises."""
        definition = StreamDefinition.stream("S").attribute("a", AttributeType.INT)
        with pytest.raises(DuplicateAttributeError) as exc_info:
            definition.attribute("a", AttributeType.LONG)
        assert "'a'" in str(exc_info.value)

    def test_unknown_attribute_lookup(self, stock_stream: StreamDefinition) -> None:
        """Test looking up an attribute that does not exist."""
        with pytest.raises(AttributeNotExistError):
            stock_stream.attribute_position("missing")
        with pytest.raises(AttributeNotExistError):
            stock_stream.attribute_type("missing")

    def test_annotation(self) -> None:
        """Test attaching annotations to a definition."""
        annotation = Annotation(name="source").element("type", "http")
        definition = StreamDefinition.stream("S").annotation(annotation)
        assert definition.annotations == (annotation,)

    def test_id_is_optional(self) -> None:
        """Test that an id may be left unset."""
        assert StreamDefinition().id is None

    def test_is_frozen(self, stock_stream: StreamDefinition) -> None:
        """Test that definitions are immutable."""
        with pytest.raises(ValidationError):
            stock_stream.id = "Other"  # type: ignore[misc]

    def test_str(self) -> None:
        """Test the text form used in error messages."""
        definition = StreamDefinition.stream("S").attribute("a", AttributeType.INT)
        assert str(definition) == "StreamDefinition(S: a int)"

    def test_from_document(self) -> None:
        """Test validating a definition from plain data."""
        definition = StreamDefinition.model_validate(
            {"id": "S", "attributes": [{"name": "a", "type": "int"}]}
        )
        assert definition == StreamDefinition.stream("S").attribute("a", AttributeType.INT)


class TestDefinitionEquality:
    """Tests for value equality between definitions."""

    def test_equal_streams(self) -> None:
        """Test that streams with the same content are equal."""
        a = StreamDefinition.stream("S").attribute("a", AttributeType.INT)
        b = StreamDefinition(id="S", attributes=[Attribute(name="a", type="int")])
        assert a == b

    def test_attribute_order_matters(self) -> None:
        """Test that attribute order is part of equality."""
        a = StreamDefinition.stream("S").attribute("a", "int").attribute("b", "int")
        b = StreamDefinition.stream("S").attribute("b", "int").attribute("a", "int")
        assert a != b

    def test_stream_never_equals_table(self) -> None:
        """Test that the definition kind is part of equality."""
        stream = StreamDefinition.stream("X").attribute("a", AttributeType.INT)
        table = TableDefinition.table("X").attribute("a", AttributeType.INT)
        assert stream != table


class TestFunctionDefinition:
    """Tests for function definitions."""

    def test_builder(self, concat_function: FunctionDefinition) -> None:
        """Test building a function definition."""
        assert concat_function.function_id == "concat"
        assert concat_function.language == "javascript"
        assert concat_function.body == "return data[0] + data[1];"
        assert concat_function.return_type == AttributeType.STRING

    def test_builders_return_copies(self) -> None:
        """Test that builders do not modify the receiver."""
        base = FunctionDefinition.function("f")
        base.with_language("python")
        assert base.language is None

    def test_return_type_from_string(self) -> None:
        """Test return types given as strings."""
        function = FunctionDefinition.function("f").with_return_type("long")
        assert function.return_type == AttributeType.LONG
