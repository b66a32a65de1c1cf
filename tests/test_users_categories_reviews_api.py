"""
HTTP tests for the user, category and review adapters.
"""

import bcrypt

from app.db.models.user import User


def test_register_user_hashes_password(client, db):
    response = client.post(
        "/users",
        json={"name": "Ana Souza", "email": "ana@example.com", "password": "s3cret"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["is_active"] is True
    assert "password" not in body

    stored = db.query(User).filter(User.id == body["id"]).one()
    assert stored.password != "s3cret"
    assert bcrypt.checkpw(b"s3cret", stored.password.encode("utf-8"))


def test_register_duplicate_email_returns_400(client):
    payload = {"name": "Ana", "email": "ana@example.com", "password": "s3cret"}
    client.post("/users", json=payload)

    response = client.post("/users", json=payload)

    assert response.status_code == 400
    assert response.json()["message"] == "Email already registered"


def test_register_invalid_email_returns_422(client):
    response = client.post("/users", json={"name": "Ana", "email": "not-an-email", "password": "x"})

    assert response.status_code == 422


def test_get_user(client):
    user_id = client.post(
        "/users", json={"name": "Ana", "email": "ana@example.com", "password": "s3cret"}
    ).json()["id"]

    assert client.get(f"/users/{user_id}").json()["name"] == "Ana"
    assert client.get("/users/999").status_code == 404


def test_categories_create_and_list(client):
    client.post("/categories", json={"name": "Plumbing", "description": "Pipes"})
    client.post("/categories", json={"name": "Heating"})

    duplicate = client.post("/categories", json={"name": "Plumbing"})
    listed = client.get("/categories").json()

    assert duplicate.status_code == 400
    assert [category["name"] for category in listed] == ["Plumbing", "Heating"]
    assert listed[0]["description"] == "Pipes"


def test_review_for_unknown_professional_returns_404(client):
    response = client.post("/reviews", json={"professional_id": 1, "rating": 5})

    assert response.status_code == 404


def test_review_rating_out_of_range_returns_422(client):
    response = client.post("/reviews", json={"professional_id": 1, "rating": 6})

    assert response.status_code == 422


def test_list_reviews_for_professional(client):
    user_id = client.post(
        "/users", json={"name": "Ana", "email": "ana@example.com", "password": "s3cret"}
    ).json()["id"]
    professional_id = client.post(
        "/professionals",
        json={"user_id": user_id, "phone_number": "123", "description": "Painter"},
    ).json()["id"]
    client.post("/reviews", json={"professional_id": professional_id, "rating": 4, "comment": "Good"})
    client.post("/reviews", json={"professional_id": professional_id, "rating": 2})

    reviews = client.get(f"/reviews/professional/{professional_id}").json()

    assert len(reviews) == 2
    assert {review["rating"] for review in reviews} == {2, 4}
