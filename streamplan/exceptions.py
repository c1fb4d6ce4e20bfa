"""Errors raised while assembling an execution plan.

All errors derive from ``PlanError``, which is a ``ValueError`` so callers that
already treat bad input as ``ValueError`` keep working.
"""


class PlanError(ValueError):
    """Base class for plan construction errors."""


class PlanValidationError(PlanError):
    """A required argument or identifier is missing, or an element name is taken."""


class DuplicateDefinitionError(PlanError):
    """A stream or table id clashes with an existing, conflicting definition."""


class FunctionAlreadyExistsError(PlanError):
    """A function id is already registered in the plan."""


class DuplicateAttributeError(PlanError):
    """An attribute name is repeated within a single definition."""


class AttributeNotExistError(PlanError):
    """An attribute lookup names an attribute the definition does not have."""
