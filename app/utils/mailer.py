# Outbound Mail
import logging
import smtplib

from flask import current_app
from flask_mail import Mail, Message
from markupsafe import escape

from app.utils.errors import ExternalServiceError

logger = logging.getLogger(__name__)

mail = Mail()


def _send(message, failure_message):
    """Deliver synchronously; relay failures surface to the caller as ExternalServiceError."""
    try:
        mail.send(message)
    except (smtplib.SMTPException, OSError) as e:
        logger.error('Mail delivery to %s failed: %s', ', '.join(message.recipients), e)
        raise ExternalServiceError(failure_message)
    logger.info('Mail "%s" sent to %s', message.subject, ', '.join(message.recipients))


def send_password_reset(user, token):
    link = f"{current_app.config['CLIENT_URL'].rstrip('/')}/resetpassword/{token}"
    minutes = current_app.config['RESET_TOKEN_MINUTES']
    message = Message(
        subject='Password Reset',
        recipients=[user.email],
        html=(
            f'<p>Hello {escape(user.name)},</p>'
            f'<p>Click the link below to reset your password. It expires in {minutes} minutes.</p>'
            f'<p><a href="{link}">Reset password</a></p>'
        ),
        body=f'Reset your password within {minutes} minutes: {link}',
    )
    _send(message, 'Failed to send email.')
    return link


def send_contact_message(name, email, text):
    message = Message(
        subject=f'New Message from {name}',
        recipients=[current_app.config['CONTACT_RECIPIENT']],
        reply_to=email,
        body=f'You have received a new message from {name} ({email}):\n\n{text}',
    )
    _send(message, 'Error sending message.')
