"""Errors raised by the notification domain."""


class NotificationError(ValueError):
    """Base class for notification precondition failures."""


class UserNotFoundError(NotificationError):
    """The addressed user does not exist."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__("Usuario no encontrado")


class RecipientNotResolvedError(NotificationError):
    """No address, number or device token could be derived for the user."""

    def __init__(self, user_id: int, notification_type: str) -> None:
        self.user_id = user_id
        self.notification_type = notification_type
        super().__init__(
            f"No se encontró un destinatario para el usuario {user_id} y el tipo {notification_type}"
        )


class TemplateError(ValueError):
    """Base class for template lookup and authoring errors."""


class TemplateNotFoundError(TemplateError):
    def __init__(self, template_id: str, notification_type: str | None = None) -> None:
        self.template_id = template_id
        self.notification_type = notification_type
        super().__init__("Plantilla no encontrada")


class TemplateInactiveError(TemplateError):
    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__("Plantilla inactiva")


class TemplateValidationError(TemplateError):
    """Template authoring data is incomplete or malformed."""


class TemplateConflictError(TemplateError):
    def __init__(self, template_id: str, notification_type: str) -> None:
        self.template_id = template_id
        self.notification_type = notification_type
        super().__init__(
            f"Ya existe una plantilla '{template_id}' para el tipo '{notification_type}'"
        )


__all__ = [
    "NotificationError",
    "RecipientNotResolvedError",
    "TemplateConflictError",
    "TemplateError",
    "TemplateInactiveError",
    "TemplateNotFoundError",
    "TemplateValidationError",
    "UserNotFoundError",
]
