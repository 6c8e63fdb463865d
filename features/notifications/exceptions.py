"""Error kinds raised by the notification scheduling engine."""


class NotificationError(Exception):
    """Base class for notification engine failures."""
    pass


class EvaluationError(NotificationError):
    """Raised when a rule evaluator cannot judge an entity (malformed data)."""
    pass


class PersistenceError(NotificationError):
    """Raised when writing a notification or its bookkeeping fails."""
    pass


class DuplicateNotification(PersistenceError):
    """Raised when storage rejects a notification already issued for its period."""
    pass


class ConfigurationError(NotificationError):
    """Raised when a user's notification preferences are missing or invalid."""
    pass
