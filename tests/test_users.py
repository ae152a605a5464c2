from datetime import datetime, timedelta

from food_ordering.utils import mailer
from tests.utils.request_utils import PASSWORD, image_file, signup


def test_signup_starts_session(client, db):
    user = signup(client, "new@example.com", fullname="New User")

    assert user["email"] == "new@example.com"
    assert user["isVerified"] is False
    assert "password" not in user
    assert "verificationToken" not in user
    stored = db.users.find_one({"email": "new@example.com"})
    assert stored["password"] != PASSWORD

    response = client.get("/api/v1/user/check-auth")
    assert response.status_code == 200
    assert response.get_json()["user"]["email"] == "new@example.com"


def test_signup_sends_verification_code(client, db, monkeypatch):
    sent = []
    monkeypatch.setattr(mailer, "send_verification_email", lambda email, code: sent.append((email, code)))

    signup(client, "verify@example.com")

    stored = db.users.find_one({"email": "verify@example.com"})
    assert sent == [("verify@example.com", stored["verificationToken"])]


def test_signup_duplicate_email_conflicts(app, client):
    signup(client, "dup@example.com")

    response = app.test_client().post("/api/v1/user/signup", json={
        "fullname": "Again", "email": "DUP@example.com", "password": PASSWORD, "contact": "1",
    })

    assert response.status_code == 409


def test_signup_validates_input(client):
    response = client.post("/api/v1/user/signup", json={
        "fullname": "Weak", "email": "weak@example.com", "password": "short", "contact": "1",
    })
    assert response.status_code == 400
    assert response.get_json()["code"] == "WEAK_PASSWORD"

    response = client.post("/api/v1/user/signup", json={
        "fullname": "Bad", "email": "not-an-email", "password": PASSWORD, "contact": "1",
    })
    assert response.status_code == 400
    assert response.get_json()["code"] == "INVALID_EMAIL"

    response = client.post("/api/v1/user/signup", json={"email": "x@example.com"})
    assert response.status_code == 400
    assert response.get_json()["code"] == "FIELD_REQUIRED"


def test_login_and_logout(app, db):
    signup(app.test_client(), "login@example.com", fullname="Lou")
    client = app.test_client()

    response = client.post("/api/v1/user/login", json={"email": "login@example.com", "password": PASSWORD})
    assert response.status_code == 200
    assert response.get_json()["message"] == "Welcome back Lou"
    assert client.get("/api/v1/user/check-auth").status_code == 200

    response = client.post("/api/v1/user/logout")
    assert response.status_code == 200
    assert response.get_json()["success"] is True
    assert client.get("/api/v1/user/check-auth").status_code == 401


def test_login_wrong_password(app):
    signup(app.test_client(), "wrong@example.com")

    response = app.test_client().post("/api/v1/user/login", json={"email": "wrong@example.com", "password": "Nope12345"})

    assert response.status_code == 401
    assert response.get_json()["message"] == "Incorrect email or password"


def test_check_auth_without_session(client):
    response = client.get("/api/v1/user/check-auth")

    assert response.status_code == 401
    assert response.get_json()["success"] is False


def test_verify_email(client, db):
    signup(client, "code@example.com")
    code = db.users.find_one({"email": "code@example.com"})["verificationToken"]

    response = client.post("/api/v1/user/verify-email", json={"verificationCode": code})

    assert response.status_code == 200
    assert response.get_json()["user"]["isVerified"] is True
    stored = db.users.find_one({"email": "code@example.com"})
    assert "verificationToken" not in stored


def test_verify_email_expired_code(client, db):
    signup(client, "late@example.com")
    db.users.update_one(
        {"email": "late@example.com"},
        {"$set": {"verificationTokenExpiresAt": datetime.utcnow() - timedelta(minutes=1)}}
    )
    code = db.users.find_one({"email": "late@example.com"})["verificationToken"]

    response = client.post("/api/v1/user/verify-email", json={"verificationCode": code})

    assert response.status_code == 400


def request_reset(client, email, monkeypatch):
    links = []
    monkeypatch.setattr(mailer, "send_password_reset_email", lambda to, url: links.append(url))
    response = client.post("/api/v1/user/forgot-password", json={"email": email})
    assert response.status_code == 200
    assert links[0].startswith("http://localhost:5173/resetpassword/")
    return links[0].rsplit("/", 1)[1]


def test_password_reset_flow(app, client, monkeypatch):
    signup(client, "reset@example.com")
    token = request_reset(client, "reset@example.com", monkeypatch)

    response = client.post(f"/api/v1/user/reset-password/{token}", json={"newPassword": "NewPassword2"})
    assert response.status_code == 200

    fresh = app.test_client()
    assert fresh.post("/api/v1/user/login", json={"email": "reset@example.com", "password": PASSWORD}).status_code == 401
    assert fresh.post("/api/v1/user/login", json={"email": "reset@example.com", "password": "NewPassword2"}).status_code == 200


def test_reset_token_is_single_use(client, monkeypatch):
    signup(client, "once@example.com")
    token = request_reset(client, "once@example.com", monkeypatch)

    assert client.post(f"/api/v1/user/reset-password/{token}", json={"newPassword": "NewPassword2"}).status_code == 200
    response = client.post(f"/api/v1/user/reset-password/{token}", json={"newPassword": "NewPassword3"})

    assert response.status_code == 400
    assert response.get_json()["code"] == "INVALID_RESET_TOKEN"


def test_reset_with_garbage_token(client):
    response = client.post("/api/v1/user/reset-password/garbage", json={"newPassword": "NewPassword2"})

    assert response.status_code == 400


def test_forgot_password_unknown_email(client):
    response = client.post("/api/v1/user/forgot-password", json={"email": "ghost@example.com"})

    assert response.status_code == 404


def test_update_profile_merges(client, db):
    signup(client, "profile@example.com", fullname="Pat")

    response = client.put("/api/v1/user/profile/update", json={"city": "Berlin", "country": "Germany"})

    assert response.status_code == 200
    user = response.get_json()["user"]
    assert user["city"] == "Berlin"
    assert user["country"] == "Germany"
    assert user["fullname"] == "Pat"


def test_update_profile_picture_upload(client, s3):
    signup(client, "picture@example.com")

    response = client.put(
        "/api/v1/user/profile/update",
        data={"fullname": "Pic Person", "profilePicture": image_file("me.png")},
        content_type="multipart/form-data",
    )

    assert response.status_code == 200
    user = response.get_json()["user"]
    assert user["fullname"] == "Pic Person"
    assert "/profile_pictures/" in user["profilePicture"]
    s3.upload_fileobj.assert_called_once()


def test_update_profile_email_taken(app, client):
    signup(app.test_client(), "taken@example.com")
    signup(client, "mine@example.com")

    response = client.put("/api/v1/user/profile/update", json={"email": "taken@example.com"})

    assert response.status_code == 409


def test_login_rejects_non_string_password(app):
    signup(app.test_client(), "typed@example.com")

    response = app.test_client().post("/api/v1/user/login", json={"email": "typed@example.com", "password": 12345678})

    assert response.status_code == 400
    assert response.get_json()["code"] == "INVALID_FIELD"


def test_signup_rejects_non_string_fields(client, db):
    response = client.post("/api/v1/user/signup", json={
        "fullname": "Num Bers",
        "email": "numbers@example.com",
        "password": 123456789,
        "contact": "5551234567",
    })
    assert response.status_code == 400
    assert response.get_json()["code"] == "INVALID_FIELD"

    response = client.post("/api/v1/user/signup", json={
        "fullname": "Num Bers",
        "email": 42,
        "password": PASSWORD,
        "contact": "5551234567",
    })
    assert response.status_code == 400
    assert response.get_json()["code"] == "INVALID_FIELD"
    assert db.users.count_documents({}) == 0
