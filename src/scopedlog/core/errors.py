"""Exceptions raised by scopedlog adapters."""


class ConfigStoreError(Exception):
    """A configuration store could not complete an operation.

    Store adapters wrap their backend errors in this type. The registry
    treats a failed load as an absent key and logs failed saves. ``key`` is
    None for operations that span every key.
    """

    def __init__(
        self, operation: str, key: str | None, cause: BaseException | None = None
    ) -> None:
        self.operation = operation
        self.key = key
        self.cause = cause
        target = f" for {key!r}" if key is not None else ""
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Config store {operation} failed{target}{detail}")
