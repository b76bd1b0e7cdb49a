"""
Smoke tests for application wiring.
"""

from ibge_api.middleware.error_handler import request_errors_by_field


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_request_errors_grouped_by_field():
    errors = [
        {"loc": ("body", "email"), "msg": "Input should be a valid string"},
        {"loc": ("body", "email"), "msg": "second"},
        {"loc": ("body",), "msg": "Field required"},
    ]

    assert request_errors_by_field(errors) == {
        "email": ["Input should be a valid string", "second"],
        "body": ["Field required"],
    }
