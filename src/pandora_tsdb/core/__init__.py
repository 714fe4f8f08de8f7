"""Transport, error types and error construction."""

__all__: list[str] = []
