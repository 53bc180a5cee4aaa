"""
API tests for user endpoints.
"""

API = "/api/v1/users"


class TestUsers:

    def test_create_and_get(self, client):
        response = client.post(API, json={"emp_id": "EMP1", "name": "Asha", "mobile_no": "9876543210"})

        assert response.status_code == 201
        assert response.json()["role"] == "employee"

        fetched = client.get(f"{API}/EMP1").json()
        assert fetched["name"] == "Asha"
        assert fetched["mobile_no"] == "9876543210"

    def test_duplicate_emp_id(self, client):
        client.post(API, json={"emp_id": "EMP1"})
        assert client.post(API, json={"emp_id": "EMP1"}).status_code == 400

    def test_invalid_mobile(self, client):
        assert client.post(API, json={"emp_id": "EMP1", "mobile_no": "123"}).status_code == 422

    def test_get_unknown(self, client):
        assert client.get(f"{API}/NOPE").status_code == 404

    def test_update(self, client):
        client.post(API, json={"emp_id": "EMP1", "name": "Asha"})

        response = client.patch(f"{API}/EMP1", json={"email": "asha@example.com"})

        assert response.status_code == 200
        body = response.json()
        assert body["email"] == "asha@example.com"
        assert body["name"] == "Asha"

    def test_update_nothing(self, client):
        client.post(API, json={"emp_id": "EMP1"})
        assert client.patch(f"{API}/EMP1", json={}).status_code == 400

    def test_update_unknown(self, client):
        assert client.patch(f"{API}/NOPE", json={"name": "X"}).status_code == 404
