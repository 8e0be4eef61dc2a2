"""Custom exceptions for the vlang system.

Only conditions that make output non-deterministic are raised. Per-key and
per-range problems found while translating are reported as sentinel
strings instead (see vlang.models).
"""


class VlangError(Exception):
    """Base exception for all vlang errors.

    Example:
        try:
            session = create_session()
        except VlangError as e:
            logger.error("vlang_error", error=str(e))
    """

    pass


class ConfigurationError(VlangError):
    """Raised when no locale can be resolved.

    Example:
        >>> resolve_active_locale([], LocaleSuggestions(chosen="fr"))
        Traceback (most recent call last):
        ...
        ConfigurationError: No locale configured and no valid suggestion
    """

    pass


class MessageBlockError(VlangError):
    """Raised when a message block does not match the expected schema.

    Also raised for unknown filter names when importing translations.
    """

    pass
