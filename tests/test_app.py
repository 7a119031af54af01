import pytest
import json # For working with JSON data
from unittest.mock import patch

# app.py builds its engine and loads the bundled catalog at import time
import app as app_module
from app import app as flask_app

@pytest.fixture
def app_fixture():
    """Create and configure a new app instance for each test."""
    flask_app.config.update({
        "TESTING": True,
    })
    yield flask_app

@pytest.fixture
def client(app_fixture):
    """A test client for the app."""
    return app_fixture.test_client()

def post_query(client, payload):
    return client.post('/api/query', data=json.dumps(payload), content_type='application/json')

def test_home_get_api_running(client):
    """Test GET request to the root path '/'."""
    response = client.get('/')
    assert response.status_code == 200
    assert response.content_type == 'application/json'
    assert response.json == {"message": "Backend API is running"}

def test_api_query_with_results(client):
    response = post_query(client, {"user_input": "Show me Samsung TVs under $500"})

    assert response.status_code == 200
    response_data = response.json
    assert [p["id"] for p in response_data["products"]] == ["ele-001"]
    assert response_data["total"] == 1
    assert response_data["parsed_query"] == {
        "category": "electronics",
        "intent": "find",
        "filters": {"price_max": 500, "brand": "samsung"},
    }
    assert response_data["search_text"] == "Samsung TVs"
    assert "The item is under $500." in response_data["summary"]

def test_api_query_no_results(client):
    response = post_query(client, {"user_input": "yellow laptop under $1"})

    assert response.status_code == 200
    assert response.json["products"] == []
    assert response.json["total"] == 0
    assert '"yellow laptop under $1"' in response.json["summary"]

def test_api_query_limit_and_sort(client):
    response = post_query(client, {"user_input": "coffee maker", "limit": 1, "sort": "price-desc"})

    assert response.status_code == 200
    assert [p["id"] for p in response.json["products"]] == ["hom-002"]
    assert response.json["total"] == 2
    assert response.json["summary"].endswith("Showing 1 of 2 results.")

def test_api_query_with_last_viewed_product(client):
    payload = {"user_input": "show me something similar to this", "last_viewed_product_id": "hom-001"}
    response = post_query(client, payload)

    assert response.status_code == 200
    assert response.json["referenced_product"]["id"] == "hom-001"
    assert [p["id"] for p in response.json["similar_products"]] == ["hom-002"]

def test_api_query_without_reference_has_no_context_keys(client):
    response = post_query(client, {"user_input": "coffee maker", "last_viewed_product_id": "hom-001"})

    assert "referenced_product" not in response.json
    assert "similar_products" not in response.json

@pytest.mark.parametrize("payload, error", [
    ({}, "user_input is required"),
    ({"user_input": 42}, "user_input must be a string"),
    ({"user_input": "tv", "limit": -1}, "limit must be a non-negative integer"),
    ({"user_input": "tv", "limit": "ten"}, "limit must be a non-negative integer"),
])
def test_api_query_bad_payload(client, payload, error):
    response = post_query(client, payload)
    assert response.status_code == 400
    assert response.json == {"error": error}

def test_api_query_invalid_json(client):
    response = client.post('/api/query', data="not json", content_type='application/json')
    assert response.status_code == 400
    assert response.json == {"error": "Invalid JSON payload"}

def test_api_query_unknown_sort(client):
    response = post_query(client, {"user_input": "tv", "sort": "popularity"})
    assert response.status_code == 400
    assert "error" in response.json

@patch.object(app_module.engine, 'query', side_effect=ValueError("limit must be non-negative"))
def test_api_query_engine_value_error(mock_query, client):
    response = post_query(client, {"user_input": "tv"})

    assert response.status_code == 400
    assert response.json == {"error": "limit must be non-negative"}
    mock_query.assert_called_once()

def test_api_similar_products(client):
    response = client.get('/api/products/hom-001/similar')

    assert response.status_code == 200
    assert response.json["product"]["id"] == "hom-001"
    assert [p["id"] for p in response.json["similar_products"]] == ["hom-002"]

def test_api_similar_products_unknown_id(client):
    response = client.get('/api/products/nope/similar')
    assert response.status_code == 404
    assert response.json == {"error": "Product not found"}

def test_app_keeps_no_session_secret():
    # The API is stateless; context arrives in the request body
    assert flask_app.secret_key is None
