class SchemaError(ValueError):
    """Raised when an input table lacks one or more required columns."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(
            "The following required columns are missing from 'newdata': "
            + ", ".join(self.missing)
        )


class InitializationError(RuntimeError):
    """Raised when a bundled model cannot be loaded or does not match its schema."""
