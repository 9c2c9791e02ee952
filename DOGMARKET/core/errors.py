# file: DOGMARKET/core/errors.py


class InvalidInput(ValueError):
    """A required argument is missing or malformed. Rendered as HTTP 400."""
