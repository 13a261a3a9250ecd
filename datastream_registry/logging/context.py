import contextvars
from collections.abc import Iterator
from contextlib import contextmanager


class LoggingContext:
    """Context variables for logging context."""

    labels_var: contextvars.ContextVar[dict[str, str]] = contextvars.ContextVar(
        "labels", default={}
    )

    @classmethod
    def get_labels(cls) -> dict[str, str]:
        return cls.labels_var.get()

    @classmethod
    def add_labels(cls, labels: dict[str, str]) -> contextvars.Token:
        """Add labels to the current context without mutating the parent's."""
        return cls.labels_var.set(cls.get_labels() | labels)

    @classmethod
    def reset_labels(cls, token: contextvars.Token) -> None:
        cls.labels_var.reset(token)


@contextmanager
def table_labels(database: str, schema: str, table: str) -> Iterator[None]:
    """Label every log entry emitted inside the block with the table it concerns."""
    token = LoggingContext.add_labels(
        {"database": database, "schema": schema, "table": table}
    )
    try:
        yield
    finally:
        LoggingContext.reset_labels(token)
