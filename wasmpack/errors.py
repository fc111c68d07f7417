"""Error type raised for user-facing failures."""


class WasmPackError(Exception):
    """A failure that is reported to the user as an error message."""