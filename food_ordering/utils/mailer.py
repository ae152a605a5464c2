import traceback

import requests
from flask import current_app


def send_email(to, subject, html):
    """
    POST an e-mail to the configured mail API.
    Delivery is best-effort: failures are logged and reported as False.
    """
    url = current_app.config.get("MAIL_API_URL")
    if not url:
        current_app.logger.info("SendEmailSkipped | to=%s | subject=%s | reason=MailApiNotConfigured", to, subject)
        return False

    headers = {"Content-Type": "application/json"}
    token = current_app.config.get("MAIL_API_TOKEN")
    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        response = requests.post(
            url,
            json={
                "from": current_app.config.get("MAIL_SENDER"),
                "to": [to],
                "subject": subject,
                "html": html,
            },
            headers=headers,
            timeout=current_app.config.get("MAIL_API_TIMEOUT", 10),
        )
    except requests.RequestException as e:
        current_app.logger.error(
            "SendEmailException | to=%s | error=%s\n%s",
            to, str(e), traceback.format_exc()
        )
        return False

    if response.status_code >= 400:
        current_app.logger.warning("SendEmailFailed | to=%s | status=%s", to, response.status_code)
        return False

    current_app.logger.info("SendEmailSuccess | to=%s | subject=%s", to, subject)
    return True


def send_verification_email(email, code):
    return send_email(
        email,
        "Verify your email",
        f"<p>Your verification code is <strong>{code}</strong>.</p>",
    )


def send_welcome_email(email, name):
    return send_email(email, "Welcome", f"<p>Welcome {name}, your email is verified.</p>")


def send_password_reset_email(email, reset_url):
    return send_email(
        email,
        "Reset your password",
        f'<p>Click <a href="{reset_url}">here</a> to reset your password. The link expires in one hour.</p>',
    )


def send_reset_success_email(email):
    return send_email(email, "Password reset successful", "<p>Your password has been reset.</p>")
