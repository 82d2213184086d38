from .email_template_send_log_content import EmailTemplateSendLogContentModel

__all__ = [
    "EmailTemplateSendLogContentModel",
]
