"""
Tests for the user profile API routes.

Tests cover:
- Reading the caller's profile
- Partial updates with camelCase fields
- Validation and authentication
"""


class TestProfile:
    """Tests for GET/PUT /api/users/profile."""

    def test_get_profile(self, client, register):
        alice = register(height=165)

        response = client.get("/api/users/profile", headers=alice["headers"])

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == alice["user"]["id"]
        assert body["height"] == 165
        assert body["weight"] is None

    def test_update_profile(self, client, register):
        alice = register(height=165)

        response = client.put(
            "/api/users/profile",
            json={"weight": 61.5, "fitnessGoal": "Deadlift bodyweight"},
            headers=alice["headers"],
        )

        assert response.status_code == 200
        body = response.json()
        assert body["weight"] == 61.5
        assert body["fitnessGoal"] == "Deadlift bodyweight"
        assert body["height"] == 165
        assert body["name"] == "Alice"

    def test_email_cannot_be_changed(self, client, register):
        alice = register()

        response = client.put(
            "/api/users/profile",
            json={"email": "new@example.com"},
            headers=alice["headers"],
        )

        assert response.status_code == 200
        assert response.json()["email"] == "alice@example.com"

    def test_invalid_weight(self, client, register):
        alice = register()
        response = client.put("/api/users/profile", json={"weight": -5}, headers=alice["headers"])
        assert response.status_code == 422

    def test_null_name_rejected(self, client, register):
        alice = register()
        response = client.put("/api/users/profile", json={"name": None}, headers=alice["headers"])
        assert response.status_code == 422

    def test_requires_auth(self, client):
        assert client.get("/api/users/profile").status_code == 401
        assert client.put("/api/users/profile", json={"name": "x"}).status_code == 401
