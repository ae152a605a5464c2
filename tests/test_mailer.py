from unittest.mock import MagicMock

import requests

from food_ordering.utils import mailer


def test_skipped_without_api_url(app):
    with app.app_context():
        assert mailer.send_email("a@example.com", "Hi", "<p>hi</p>") is False


def test_posts_to_mail_api(app, monkeypatch):
    app.config.update(MAIL_API_URL="https://mail.example.com/send", MAIL_API_TOKEN="secret")
    post = MagicMock(return_value=MagicMock(status_code=202))
    monkeypatch.setattr(mailer.requests, "post", post)

    with app.app_context():
        assert mailer.send_password_reset_email("a@example.com", "http://localhost:5173/resetpassword/t") is True

    args, kwargs = post.call_args
    assert args == ("https://mail.example.com/send",)
    assert kwargs["json"]["to"] == ["a@example.com"]
    assert "resetpassword/t" in kwargs["json"]["html"]
    assert kwargs["headers"]["Authorization"] == "Bearer secret"
    assert kwargs["timeout"] == app.config["MAIL_API_TIMEOUT"]


def test_delivery_failure_does_not_raise(app, monkeypatch):
    app.config.update(MAIL_API_URL="https://mail.example.com/send")
    monkeypatch.setattr(mailer.requests, "post", MagicMock(side_effect=requests.Timeout("slow")))

    with app.app_context():
        assert mailer.send_welcome_email("a@example.com", "Ann") is False


def test_rejected_delivery_reports_false(app, monkeypatch):
    app.config.update(MAIL_API_URL="https://mail.example.com/send")
    monkeypatch.setattr(mailer.requests, "post", MagicMock(return_value=MagicMock(status_code=500)))

    with app.app_context():
        assert mailer.send_reset_success_email("a@example.com") is False
