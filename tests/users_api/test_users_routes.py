"""
Users CRUD Testing Suite
Drives every user endpoint through HTTP against the in-memory store
"""

import re

import pytest
from bson import ObjectId


OBJECT_ID_PATTERN = re.compile(r"^[0-9a-f]{24}$")


class TestCreateUser:
    """POST /createUser"""

    @pytest.mark.asyncio
    async def test_create_user_returns_generated_id_and_submitted_fields(self, client, sample_user):
        response = await client.post("/createUser", json=sample_user)

        assert response.status_code == 200
        body = response.json()
        assert OBJECT_ID_PATTERN.match(body["id"])
        assert body["firstName"] == sample_user["firstName"]
        assert body["lastName"] == sample_user["lastName"]
        assert body["email"] == sample_user["email"]
        assert body["createdAt"] is not None
        assert body["updatedAt"] is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing_field,expected_message", [
        ("firstName", "firstName: Please enter first name"),
        ("lastName", "lastName: Please enter Last name"),
        ("email", "email: Please enter your email"),
    ])
    async def test_create_user_missing_required_field_returns_500(
        self, client, user_store, sample_user, missing_field, expected_message
    ):
        del sample_user[missing_field]

        response = await client.post("/createUser", json=sample_user)

        assert response.status_code == 500
        assert response.json() == {"message": f"User validation failed: {expected_message}"}
        assert user_store.documents == {}

    @pytest.mark.asyncio
    async def test_create_user_with_empty_body_reports_every_field(self, client):
        response = await client.post("/createUser", json={})

        assert response.status_code == 500
        assert response.json()["message"] == (
            "User validation failed: firstName: Please enter first name, "
            "lastName: Please enter Last name, email: Please enter your email"
        )

    @pytest.mark.asyncio
    async def test_create_user_rejects_empty_string(self, client, sample_user):
        sample_user["email"] = ""

        response = await client.post("/createUser", json=sample_user)

        assert response.status_code == 500
        assert "email: Please enter your email" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_create_user_stores_number_as_text(self, client, sample_user):
        sample_user["firstName"] = 42

        response = await client.post("/createUser", json=sample_user)

        assert response.status_code == 200
        assert response.json()["firstName"] == "42"

    @pytest.mark.asyncio
    async def test_create_user_ignores_unknown_fields(self, client, user_store, sample_user):
        sample_user["role"] = "admin"
        sample_user["id"] = "client-chosen-id"

        response = await client.post("/createUser", json=sample_user)

        assert response.status_code == 200
        body = response.json()
        assert "role" not in body
        assert body["id"] != "client-chosen-id"
        assert "role" not in user_store.documents[body["id"]]

    @pytest.mark.asyncio
    async def test_create_user_with_malformed_json_returns_500(self, client):
        response = await client.post(
            "/createUser",
            content=b'{"firstName": ',
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 500
        assert "message" in response.json()

    @pytest.mark.asyncio
    async def test_create_user_with_array_body_returns_500(self, client, sample_user):
        response = await client.post("/createUser", json=[sample_user])

        assert response.status_code == 500
        assert "message" in response.json()


class TestGetUsers:
    """GET /getAllUsers and GET /getUserById/{id}"""

    @pytest.mark.asyncio
    async def test_get_all_users_when_empty(self, client):
        response = await client.get("/getAllUsers")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_get_all_users_contains_created_users(self, client, sample_user):
        created_ids = []
        for first_name in ("Ada", "Grace", "Linus"):
            response = await client.post("/createUser", json={**sample_user, "firstName": first_name})
            created_ids.append(response.json()["id"])

        response = await client.get("/getAllUsers")

        assert response.status_code == 200
        users = response.json()
        assert len(users) >= 3
        assert set(created_ids) <= {user["id"] for user in users}

    @pytest.mark.asyncio
    async def test_get_user_by_id(self, client, created_user):
        response = await client.get(f"/getUserById/{created_user['id']}")

        assert response.status_code == 200
        assert response.json() == created_user

    @pytest.mark.asyncio
    async def test_get_user_by_unknown_id_returns_null(self, client):
        response = await client.get(f"/getUserById/{ObjectId()}")

        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.asyncio
    async def test_get_user_by_malformed_id_returns_500(self, client):
        response = await client.get("/getUserById/not-an-id")

        assert response.status_code == 500
        assert response.json() == {
            "message": 'Cast to ObjectId failed for value "not-an-id" (type string) at path "_id" for model "User"'
        }


class TestUpdateUser:
    """PUT /updateUser/{id}"""

    @pytest.mark.asyncio
    async def test_update_single_field_keeps_the_others(self, client, created_user):
        response = await client.put(f"/updateUser/{created_user['id']}", json={"firstName": "X"})

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == created_user["id"]
        assert body["firstName"] == "X"
        assert body["lastName"] == created_user["lastName"]
        assert body["email"] == created_user["email"]
        assert body["createdAt"] == created_user["createdAt"]

    @pytest.mark.asyncio
    async def test_update_is_visible_to_later_reads(self, client, created_user):
        await client.put(
            f"/updateUser/{created_user['id']}",
            json={"firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com"}
        )

        response = await client.get(f"/getUserById/{created_user['id']}")

        body = response.json()
        assert (body["firstName"], body["lastName"], body["email"]) == ("Ada", "Lovelace", "ada@example.com")

    @pytest.mark.asyncio
    async def test_update_unknown_id_returns_404(self, client):
        user_id = str(ObjectId())

        response = await client.put(f"/updateUser/{user_id}", json={"firstName": "X"})

        assert response.status_code == 404
        assert response.json() == {"message": f"User with ID {user_id} not found"}

    @pytest.mark.asyncio
    async def test_update_malformed_id_returns_500(self, client):
        response = await client.put("/updateUser/12345", json={"firstName": "X"})

        assert response.status_code == 500
        assert response.json()["message"].startswith("Cast to ObjectId failed")

    @pytest.mark.asyncio
    async def test_update_cannot_blank_a_required_field(self, client, user_store, created_user):
        response = await client.put(f"/updateUser/{created_user['id']}", json={"lastName": None})

        assert response.status_code == 500
        assert response.json() == {"message": "User validation failed: lastName: Please enter Last name"}
        assert user_store.documents[created_user["id"]]["lastName"] == created_user["lastName"]


class TestDeleteUser:
    """DELETE /deleteUserById/{id}"""

    @pytest.mark.asyncio
    async def test_delete_returns_null_and_removes_user(self, client, created_user):
        response = await client.delete(f"/deleteUserById/{created_user['id']}")

        assert response.status_code == 200
        assert response.json() is None

        follow_up = await client.get(f"/getUserById/{created_user['id']}")
        assert follow_up.status_code == 200
        assert follow_up.json() is None

    @pytest.mark.asyncio
    async def test_delete_unknown_id_returns_404(self, client):
        user_id = str(ObjectId())

        response = await client.delete(f"/deleteUserById/{user_id}")

        assert response.status_code == 404
        assert response.json() == {"message": f"cannot find any user with ID {user_id}"}

    @pytest.mark.asyncio
    async def test_delete_twice_returns_404_the_second_time(self, client, created_user):
        first = await client.delete(f"/deleteUserById/{created_user['id']}")
        second = await client.delete(f"/deleteUserById/{created_user['id']}")

        assert first.status_code == 200
        assert second.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_malformed_id_returns_500(self, client):
        response = await client.delete("/deleteUserById/abc")

        assert response.status_code == 500
        assert response.json()["message"].startswith("Cast to ObjectId failed")


class TestDatabaseUnavailable:
    """Store failures become 500 responses with the driver's message"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method,path,body", [
        ("POST", "/createUser", {"firstName": "A", "lastName": "B", "email": "c@d.e"}),
        ("GET", "/getAllUsers", None),
        ("GET", f"/getUserById/{ObjectId()}", None),
        ("PUT", f"/updateUser/{ObjectId()}", {"firstName": "A"}),
        ("DELETE", f"/deleteUserById/{ObjectId()}", None),
    ])
    async def test_store_errors_return_500_with_message(self, unreachable_client, method, path, body):
        response = await unreachable_client.request(method, path, json=body)

        assert response.status_code == 500
        assert "Connection refused" in response.json()["message"]
