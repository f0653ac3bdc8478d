"""
Notifications Module - Outbound email

Every helper here is best-effort: failures are logged and reported through
the return value, never raised. The in-app Notification rows are the
authoritative record of an event.
"""

import smtplib
import threading
from markupsafe import escape
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formataddr
from flask import current_app


def get_smtp_config():
    """Read SMTP settings from the app config"""
    return {
        'host': current_app.config.get('SMTP_HOST'),
        'port': current_app.config.get('SMTP_PORT', 587),
        'use_tls': current_app.config.get('SMTP_USE_TLS', True),
        'username': current_app.config.get('SMTP_USERNAME'),
        'password': current_app.config.get('SMTP_PASSWORD'),
        'from_email': current_app.config.get('SMTP_FROM_EMAIL') or current_app.config.get('SMTP_USERNAME'),
        'from_name': current_app.config.get('SMTP_FROM_NAME') or 'Digital Portfolio'
    }


def send_email(recipient, subject, body, html=True):
    """
    Send a single email over SMTP

    Args:
        recipient (str): Email recipient
        subject (str): Email subject
        body (str): Email body
        html (bool): Whether body is HTML

    Returns:
        bool: Success status
    """
    smtp_config = get_smtp_config()
    if not smtp_config.get('host'):
        current_app.logger.debug(f"SMTP is not configured. Skipping email to {recipient}")
        return False

    try:
        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = formataddr((smtp_config['from_name'], smtp_config['from_email'] or ''))
        msg['To'] = recipient
        msg.attach(MIMEText(body, 'html' if html else 'plain'))

        with smtplib.SMTP(smtp_config['host'], int(smtp_config['port'])) as server:
            if smtp_config['use_tls']:
                server.starttls()
            if smtp_config.get('username'):
                server.login(smtp_config['username'], smtp_config.get('password') or '')
            server.send_message(msg)

        current_app.logger.info(f"Email sent to {recipient}: {subject}")
        return True
    except Exception as e:
        current_app.logger.error(f"Error sending email to {recipient}: {str(e)}")
        return False


def dispatch_email(recipient, subject, body):
    """Send now, or on a daemon thread when EMAIL_ASYNC is enabled"""
    if not recipient:
        current_app.logger.warning(f"Email '{subject}' skipped: no recipient")
        return False

    if not current_app.config.get('EMAIL_ASYNC'):
        return send_email(recipient, subject, body)

    app = current_app._get_current_object()

    def _send():
        with app.app_context():
            send_email(recipient, subject, body)

    thread = threading.Thread(target=_send)
    thread.daemon = True
    thread.start()
    return True


def _wrap(inner):
    return (
        "<div style='font-family:Arial,sans-serif; max-width: 600px; margin: 0 auto;'>"
        f"<div style='background-color: #f8f9fa; padding: 20px; border-radius: 8px;'>{inner}</div>"
        "<hr style='margin: 20px 0; border: none; border-top: 1px solid #e2e8f0;'/>"
        "<p style='color:#6b7280;font-size:12px; text-align: center;'>"
        "This is an automated message. Please do not reply.</p>"
        "</div>"
    )


def _button(href, label):
    return (
        f"<div style='text-align: center; margin: 25px 0;'><a href='{escape(href)}' "
        "style='display: inline-block; background: #3182ce; color: white; padding: 12px 24px; "
        f"text-decoration: none; border-radius: 8px; font-weight: 600;'>{label}</a></div>"
    )


def send_registration_confirmation(to_email, full_name):
    safe_name = escape(full_name) if full_name and full_name.strip() else 'there'
    body = _wrap(
        f"<h2>Welcome, {safe_name}</h2>"
        "<p>Your account has been created successfully.</p>"
        "<p>You can now sign in and start building your professional portfolio.</p>"
    )
    return dispatch_email(to_email, 'Welcome to Digital Portfolio!', body)


def send_access_requested(to_email, owner_name, requester_name, portfolio_title, message=''):
    """Tell a portfolio owner that someone asked to see their portfolio"""
    frontend = current_app.config.get('FRONTEND_URL', '')
    note = ''
    if message:
        note = (
            "<div style='background-color: white; padding: 15px; border-radius: 6px; "
            "margin: 20px 0; border-left: 4px solid #3182ce;'>"
            f"<p style='margin: 0;'><em>&ldquo;{escape(message)}&rdquo;</em></p></div>"
        )
    body = _wrap(
        "<h2 style='color: #2d3748;'>Access Request Notification</h2>"
        f"<h3>Hello {escape(owner_name or '')},</h3>"
        f"<p><strong>{escape(requester_name or '')}</strong> has requested access to view your "
        f"private portfolio '<em>{escape(portfolio_title or '')}</em>'.</p>"
        f"{note}"
        "<p><strong>Action Required:</strong> Please review and respond to this access request.</p>"
        f"{_button(frontend + '/notifications', 'View Notifications')}"
    )
    subject = f"Access requested for '{portfolio_title}'"
    return dispatch_email(to_email, subject, body)


def send_access_decision(to_email, requester_name, portfolio_title, approved, note=None):
    """Tell a requester how the owner decided"""
    frontend = current_app.config.get('FRONTEND_URL', '')
    status_text = 'APPROVED' if approved else 'REJECTED'
    status_color = '#48bb78' if approved else '#f56565'
    subject = 'Your access request was approved' if approved else 'Your access request was rejected'
    outcome = ("Great news! You now have access to view the requested portfolio."
               if approved else
               "Unfortunately, your request to view this portfolio has been declined.")
    owner_note = f"<p><strong>Note from the owner:</strong> {escape(note)}</p>" if note else ''
    label = 'View Your Accessible Portfolios' if approved else 'Browse Other Portfolios'

    body = _wrap(
        "<h2 style='color: #2d3748;'>Access Request Update</h2>"
        f"<h3>Hello {escape(requester_name or '')},</h3>"
        "<div style='background-color: white; padding: 20px; border-radius: 6px; margin: 20px 0; "
        f"border-left: 4px solid {status_color};'>"
        f"<h4 style='margin: 0 0 10px 0; color: {status_color};'>REQUEST {status_text}</h4>"
        f"<p style='margin: 0;'>Your request to view '<em>{escape(portfolio_title or '')}</em>' has been "
        f"<strong style='color: {status_color};'>{status_text.lower()}</strong>.</p></div>"
        f"<p>{outcome}</p>"
        f"{owner_note}"
        f"{_button(frontend + '/dashboard', label)}"
    )
    return dispatch_email(to_email, subject, body)


def send_forgot_password_contact_admin(to_email, admin_name, admin_email, admin_phone=''):
    phone = f"<li>Phone: {escape(admin_phone)}</li>" if admin_phone else ''
    body = _wrap(
        "<h2>Password assistance</h2>"
        "<p>We received a request to help with your password.</p>"
        "<p>Kindly contact the administrator to reset it:</p>"
        f"<ul><li>Name: {escape(admin_name or '')}</li>"
        f"<li>Email: {escape(admin_email or '')}</li>{phone}</ul>"
    )
    return dispatch_email(to_email, 'Password assistance', body)


__all__ = [
    'get_smtp_config',
    'send_email',
    'dispatch_email',
    'send_registration_confirmation',
    'send_access_requested',
    'send_access_decision',
    'send_forgot_password_contact_admin'
]
