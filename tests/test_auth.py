from datetime import datetime, timedelta, timezone

from jose import jwt

from conftest import register
from taskmanager.core.config import settings
from taskmanager.models.user import User


def assert_no_password(user):
    assert "password" not in user
    assert "passwordHash" not in user
    assert "password_hash" not in user


# ========== REGISTER ==========

def test_register_success(client):
    """Test : créer un utilisateur avec succès"""
    response = register(client, "Alice@Example.com", display_name="Alice")
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    user = body["data"]["user"]
    assert user["email"] == "alice@example.com"
    assert user["displayName"] == "Alice"
    assert user["isActive"] is True
    assert user["lastLogin"] is not None
    assert body["data"]["token"]
    assert_no_password(user)


def test_register_default_display_name(client):
    response = register(client, "bob.smith@example.com")
    assert response.json()["data"]["user"]["displayName"] == "bob.smith"


def test_register_duplicate_email(client):
    """Test : impossible de créer 2 users avec le même email"""
    register(client, "dup@example.com")
    response = register(client, "DUP@example.com")
    assert response.status_code == 409
    assert response.json()["success"] is False
    assert "already exists" in response.json()["message"]


def test_register_validation_errors(client):
    response = client.post("/api/auth/register", json={"email": "not-an-email", "password": "123"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    fields = {error["field"] for error in body["errors"]}
    assert {"email", "password"} <= fields


def test_register_password_over_72_bytes(client):
    """Test : 40 caractères accentués = 80 octets, refusé avant bcrypt"""
    response = register(client, "mb@example.com", password="é" * 40)
    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert "password" in fields

    # 36 x "é" = 72 octets : accepté
    assert register(client, "mb@example.com", password="é" * 36).status_code == 201



def test_password_is_hashed(client, db):
    register(client, "hash@example.com", password="secret42")
    user = db.query(User).filter(User.email == "hash@example.com").first()
    assert user.password_hash != "secret42"
    assert user.verify_password("secret42")


# ========== LOGIN ==========

def test_login_success(client):
    register(client, "login@example.com", password="password123")
    response = client.post("/api/auth/login", json={"email": "login@example.com", "password": "password123"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token"]
    assert data["user"]["email"] == "login@example.com"
    assert_no_password(data["user"])


def test_login_wrong_password(client, db):
    """Test : mauvais password -> 401, pas de token, lastLogin inchangé"""
    register(client, "wrong@example.com", password="correctpassword")
    before = db.query(User).filter(User.email == "wrong@example.com").first().last_login

    response = client.post("/api/auth/login", json={"email": "wrong@example.com", "password": "wrongpassword"})
    assert response.status_code == 401
    assert "data" not in response.json()

    db.expire_all()
    after = db.query(User).filter(User.email == "wrong@example.com").first().last_login
    assert after == before


def test_login_unknown_email(client):
    response = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "whatever"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


def test_login_deactivated_account(client, db):
    register(client, "inactive@example.com")
    user = db.query(User).filter(User.email == "inactive@example.com").first()
    user.is_active = False
    db.commit()

    response = client.post("/api/auth/login", json={"email": "inactive@example.com", "password": "pass123"})
    assert response.status_code == 401
    assert response.json()["message"] == "Account is deactivated"


# ========== GOOGLE ==========

def test_google_sign_in_creates_account(client):
    response = client.post("/api/auth/google", json={
        "googleId": "g-123",
        "email": "gmail@example.com",
        "avatar": "https://example.com/me.png"
    })
    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["googleId"] == "g-123"
    assert user["displayName"] == "gmail"
    assert user["avatar"] == "https://example.com/me.png"
    assert_no_password(user)


def test_google_sign_in_links_existing_account(client):
    register(client, "linked@example.com", display_name="Alice")
    response = client.post("/api/auth/google", json={
        "googleId": "g-456",
        "email": "linked@example.com",
        "displayName": "Someone Else",
        "avatar": "https://example.com/a.png"
    })
    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["googleId"] == "g-456"
    assert user["displayName"] == "Alice"
    assert user["avatar"] == "https://example.com/a.png"

    # même compte retrouvé par googleId
    again = client.post("/api/auth/google", json={"googleId": "g-456", "email": "linked@example.com"})
    assert again.json()["data"]["user"]["id"] == user["id"]


def test_google_account_has_no_usable_password(client):
    client.post("/api/auth/google", json={"googleId": "g-789", "email": "fed@example.com"})
    response = client.post("/api/auth/login", json={"email": "fed@example.com", "password": "pass123"})
    assert response.status_code == 401


def test_google_sign_in_prefers_google_id_over_email(client):
    """Test : le googleId déjà lié gagne, l'autre compte n'est pas touché"""
    first = client.post("/api/auth/google", json={"googleId": "g-A", "email": "a@example.com"})
    register(client, "b@example.com")

    response = client.post("/api/auth/google", json={"googleId": "g-A", "email": "b@example.com"})
    assert response.status_code == 200
    assert response.json()["data"]["user"]["id"] == first.json()["data"]["user"]["id"]

    login = client.post("/api/auth/login", json={"email": "b@example.com", "password": "pass123"})
    assert login.json()["data"]["user"]["googleId"] is None



# ========== PROFILE ==========

def test_get_profile(client, auth_headers):
    response = client.get("/api/auth/profile", headers=auth_headers)
    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["email"] == "test@example.com"
    assert_no_password(user)


def test_update_profile_partial(client, auth_headers):
    response = client.put("/api/auth/profile", headers=auth_headers, json={"displayName": "Bob"})
    assert response.status_code == 200
    assert response.json()["data"]["user"]["displayName"] == "Bob"
    assert response.json()["data"]["user"]["avatar"] is None

    response = client.put("/api/auth/profile", headers=auth_headers, json={"avatar": "https://example.com/a.png"})
    user = response.json()["data"]["user"]
    assert user["displayName"] == "Bob"
    assert user["avatar"] == "https://example.com/a.png"


def test_update_profile_invalid_avatar(client, auth_headers):
    response = client.put("/api/auth/profile", headers=auth_headers, json={"avatar": "not a url"})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"].startswith("avatar")


def test_change_password(client, auth_headers):
    response = client.put("/api/auth/change-password", headers=auth_headers, json={
        "currentPassword": "nope",
        "newPassword": "newpass123"
    })
    assert response.status_code == 401

    response = client.put("/api/auth/change-password", headers=auth_headers, json={
        "currentPassword": "pass123",
        "newPassword": "newpass123"
    })
    assert response.status_code == 200

    old = client.post("/api/auth/login", json={"email": "test@example.com", "password": "pass123"})
    new = client.post("/api/auth/login", json={"email": "test@example.com", "password": "newpass123"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_change_password_over_72_bytes(client, auth_headers):
    response = client.put("/api/auth/change-password", headers=auth_headers, json={
        "currentPassword": "pass123",
        "newPassword": "é" * 40
    })
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "newPassword"



def test_logout(client, auth_headers):
    response = client.post("/api/auth/logout", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Logged out successfully"


# ========== TOKEN ==========

def test_missing_token(client):
    response = client.get("/api/auth/profile")
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_bearer_scheme_is_case_insensitive(client, auth_headers):
    token = auth_headers["Authorization"].split(" ", 1)[1]
    response = client.get("/api/auth/profile", headers={"Authorization": f"bearer {token}"})
    assert response.status_code == 200

    response = client.get("/api/auth/profile", headers={"Authorization": "Bearer "})
    assert response.status_code == 401



def test_token_signed_with_other_secret(client, db, auth_headers):
    user = db.query(User).filter(User.email == "test@example.com").first()
    token = jwt.encode({"user_id": user.id, "type": "access"}, "not-the-secret", algorithm="HS256")
    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_expired_token(client, db):
    register(client, "expired@example.com")
    user = db.query(User).filter(User.email == "expired@example.com").first()
    token = jwt.encode(
        {"user_id": user.id, "type": "access", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM
    )
    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_of_deactivated_user(client, db, auth_headers):
    user = db.query(User).filter(User.email == "test@example.com").first()
    user.is_active = False
    db.commit()

    response = client.get("/api/tasks", headers=auth_headers)
    assert response.status_code == 401


# ========== MISC ==========

def test_health(client):
    """Test : l'endpoint health fonctionne"""
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "OK"


def test_unknown_route(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json()["success"] is False
