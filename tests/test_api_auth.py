"""
API tests for login, roles and user administration.
"""
from models.user import UserRole, UserStatus

from conftest import TEST_PASSWORD


class TestLogin:

    def test_login_returns_token(self, client, make_user):
        make_user("alice")

        response = client.post("/api/auth/login", json={"username": "alice", "password": TEST_PASSWORD})

        assert response.status_code == 200
        token = response.json()["accessToken"]
        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.json()["username"] == "alice"

    def test_wrong_password(self, client, make_user):
        make_user("alice")
        response = client.post("/api/auth/login", json={"username": "alice", "password": "nope"})
        assert response.status_code == 401

    def test_inactive_user_cannot_log_in(self, client, make_user):
        make_user("bob", status=UserStatus.INACTIVE)
        response = client.post("/api/auth/login", json={"username": "bob", "password": TEST_PASSWORD})
        assert response.status_code == 401

    def test_missing_token(self, client):
        assert client.get("/api/styles/").status_code in (401, 403)

    def test_invalid_token(self, client):
        response = client.get("/api/styles/", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401


class TestRoles:

    def test_viewer_is_read_only(self, client, viewer_headers):
        assert client.get("/api/styles/", headers=viewer_headers).status_code == 200
        response = client.post("/api/styles/", json={"description": "Tee"}, headers=viewer_headers)
        assert response.status_code == 403

    def test_users_list_requires_admin(self, client, user_headers, admin_headers):
        assert client.get("/api/users", headers=user_headers).status_code == 403
        assert client.get("/api/users", headers=admin_headers).status_code == 200

    def test_only_superadmin_creates_admins(self, client, admin_headers, superadmin_headers):
        payload = {"username": "newadmin", "password": "secret123", "role": "admin"}

        assert client.post("/api/users", json=payload, headers=admin_headers).status_code == 403
        response = client.post("/api/users", json=payload, headers=superadmin_headers)
        assert response.status_code == 201
        assert response.json()["role"] == UserRole.ADMIN.value

    def test_admin_creates_viewer(self, client, admin_headers):
        response = client.post("/api/users", json={
            "username": "auditor", "password": "secret123", "role": "viewer", "fullName": "Audit Team"
        }, headers=admin_headers)
        assert response.status_code == 201
        assert response.json()["fullName"] == "Audit Team"

    def test_superadmin_cannot_delete_self(self, client, superadmin_headers):
        me = client.get("/api/auth/me", headers=superadmin_headers).json()
        response = client.delete(f"/api/users/{me['id']}", headers=superadmin_headers)
        assert response.status_code == 400
