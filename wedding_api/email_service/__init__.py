from wedding_api.config.settings import Settings, settings
from wedding_api.email_service.base import EmailServiceBase
from wedding_api.email_service.resend_service import ResendEmailService
from wedding_api.email_service.smtp_service import SMTPEmailService
from wedding_api.email_service.templates import EmailTemplates


def get_email_service(config: Settings = settings) -> EmailServiceBase:
    if config.resend_api_key:
        return ResendEmailService(config=config)
    return SMTPEmailService(config=config)


__all__ = [
    "EmailServiceBase",
    "EmailTemplates",
    "get_email_service",
]
