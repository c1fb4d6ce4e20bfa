"""streamplan: execution plan assembly for a stream-processing query language.

This package collects stream, table and function definitions together with
queries and partitions into a validated execution plan, ready to be handed
to a compiler or runtime.
"""

__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy imports for main package exports."""
    if name == "ExecutionPlan":
        from streamplan.core.plan import ExecutionPlan

        return ExecutionPlan
    if name == "load_plan":
        from streamplan.loader import load_plan

        return load_plan
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ExecutionPlan",
    "__version__",
    "load_plan",
]
