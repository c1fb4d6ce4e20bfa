"""Annotations attached to plans, definitions and execution elements.

Annotations are small immutable values: a name, an ordered tuple of
key/value elements and optionally nested annotations. The plan only reads
them, mainly to recover a declared name through ``@info(name='...')``.

Example:
    >>> info = Annotation(name="info").element("name", "FilterQuery")
    >>> get_annotation_value(ANNOTATION_INFO, ANNOTATION_ELEMENT_NAME, [info])
    'FilterQuery'
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ANNOTATION_INFO = "info"
ANNOTATION_ELEMENT_NAME = "name"

_POSITIONAL: Any = object()


class Element(BaseModel):
    """A single ``key='value'`` entry of an annotation.

    Attributes:
        key: Element key (None for positional elements)
        value: Element value
    """

    model_config = ConfigDict(frozen=True)

    key: str | None = Field(default=None, description="Element key")
    value: str = Field(..., description="Element value")

    def __str__(self) -> str:
        if self.key is None:
            return f"'{self.value}'"
        return f"{self.key}='{self.value}'"


class Annotation(BaseModel):
    """Named metadata with ordered elements.

    Builder methods return a new annotation; the receiver is never modified.

    Example:
        >>> Annotation(name="info").element("name", "q1").elements
        (Element(key='name', value='q1'),)
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Annotation name")
    elements: tuple[Element, ...] = Field(default=(), description="Elements")
    annotations: tuple[Annotation, ...] = Field(
        default=(), description="Nested annotations"
    )

    def element(self, key: str | None, value: str = _POSITIONAL) -> Annotation:
        """Return a copy with an element appended.

        Called with one argument, the argument is a positional (keyless) value.
        An explicit ``None`` value fails validation.
        """
        if value is _POSITIONAL:
            key, value = None, key
        return self.model_copy(
            update={"elements": (*self.elements, Element(key=key, value=value))}
        )

    def annotation(self, annotation: Annotation) -> Annotation:
        """Return a copy with a nested annotation appended."""
        return self.model_copy(
            update={"annotations": (*self.annotations, annotation)}
        )

    def get_element(self, key: str | None) -> Element | None:
        """Find the first element with the given key (case-insensitive)."""
        for element in self.elements:
            if _keys_match(element.key, key):
                return element
        return None

    def __str__(self) -> str:
        parts = [str(e) for e in self.elements]
        parts.extend(str(a) for a in self.annotations)
        return f"@{self.name}({', '.join(parts)})"


def _keys_match(actual: str | None, wanted: str | None) -> bool:
    if wanted is None:
        return actual is None
    return actual is not None and actual.lower() == wanted.lower()


def get_annotation_element(
    annotation_name: str,
    element_key: str | None,
    annotations: Iterable[Annotation],
) -> Element | None:
    """Look up an element across a sequence of annotations.

    Annotations named ``annotation_name`` are searched in order for the first
    element keyed ``element_key``. Both comparisons ignore case.

    Args:
        annotation_name: Annotation to look in (e.g. "info")
        element_key: Element key to find (e.g. "name"), None for a keyless element
        annotations: Annotations attached to a plan, definition or element

    Returns:
        The matching element, or None
    """
    for annotation in annotations:
        if annotation.name.lower() != annotation_name.lower():
            continue
        element = annotation.get_element(element_key)
        if element is not None:
            return element
    return None


def get_annotation_value(
    annotation_name: str,
    element_key: str | None,
    annotations: Iterable[Annotation],
) -> str | None:
    """Same as ``get_annotation_element`` but returns the element value."""
    element = get_annotation_element(annotation_name, element_key, annotations)
    if element is None:
        return None
    return element.value
