"""Integration tests for Order API endpoints."""
import pytest


@pytest.fixture
def product(create_product):
    return create_product()


@pytest.fixture
def create_order(client):
    def create(**fields):
        response = client.post("/orders", json=fields)
        assert response.status_code == 201, response.text
        return response.json()
    return create


class TestOrderCreate:
    """Tests for POST /orders"""

    def test_create_order_success(self, client, product):
        """A new order defaults to CREATED and its products come back expanded."""
        response = client.post("/orders", json={"buyerEmail": "a@b.com", "products": [product["id"]]})
        assert response.status_code == 201
        data = response.json()
        assert response.headers["Location"] == f"/orders/{data['id']}"
        assert data["status"] == "CREATED"
        assert data["buyerEmail"] == "a@b.com"
        assert data["products"] == [product]

    def test_create_order_trailing_slash(self, client, product):
        response = client.post("/orders/", json={"buyerEmail": "a@b.com", "products": [product["id"]]})
        assert response.status_code == 201

    def test_create_order_missing_products_returns_400(self, client):
        response = client.post("/orders", json={"buyerEmail": "a@b.com"})
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_create_order_empty_products_returns_400(self, client):
        response = client.post("/orders", json={"buyerEmail": "a@b.com", "products": []})
        assert response.status_code == 400

    def test_create_order_invalid_status_returns_400(self, client, product):
        response = client.post(
            "/orders", json={"buyerEmail": "a@b.com", "products": [product["id"]], "status": "SHIPPED"}
        )
        assert response.status_code == 400


class TestOrderRead:
    """Tests for GET /orders and GET /orders/{id}"""

    def test_get_order_expands_products(self, client, product, create_order):
        order = create_order(buyerEmail="a@b.com", products=[product["id"], "gone"])

        response = client.get(f"/orders/{order['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["products"][0] == product
        assert data["products"][1] is None

    def test_get_order_after_product_deleted(self, client, product, create_order):
        order = create_order(buyerEmail="a@b.com", products=[product["id"]])
        client.delete(f"/products/{product['id']}")

        data = client.get(f"/orders/{order['id']}").json()

        assert data["products"] == [None]

    def test_get_order_not_found(self, client):
        response = client.get("/orders/missing")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_list_orders_with_filters(self, client, create_product, create_order):
        a = create_product()
        b = create_product()
        first = create_order(buyerEmail="1@x.com", products=[a["id"]])
        second = create_order(buyerEmail="2@x.com", products=[a["id"], b["id"]], status="PENDING")
        create_order(buyerEmail="3@x.com", products=[b["id"]], status="PENDING")

        response = client.get("/orders", params={"productId": a["id"]})
        assert response.status_code == 200
        assert {o["id"] for o in response.json()} == {first["id"], second["id"]}
        assert response.headers["X-Total-Count"] == "2"

        response = client.get("/orders", params={"productId": a["id"], "status": "PENDING"})
        assert [o["id"] for o in response.json()] == [second["id"]]
        assert response.json()[0]["products"] == [a["id"], b["id"]]

    def test_list_orders_pagination(self, client, product, create_order):
        ids = sorted(create_order(buyerEmail=f"{i}@x.com", products=[product["id"]])["id"] for i in range(3))
        response = client.get("/orders?offset=1&limit=1")
        assert [o["id"] for o in response.json()] == ids[1:2]
        assert response.headers["X-Total-Count"] == "3"

    def test_list_orders_bogus_status_returns_400(self, client):
        response = client.get("/orders?status=BOGUS")
        assert response.status_code == 400

    def test_list_orders_empty_filters_are_ignored(self, client, product, create_order):
        create_order(buyerEmail="a@b.com", products=[product["id"]])
        response = client.get("/orders?productId=&status=")
        assert len(response.json()) == 1


class TestOrderEdit:
    """Tests for PUT /orders/{id}"""

    def test_edit_status(self, client, product, create_order):
        order = create_order(buyerEmail="a@b.com", products=[product["id"]])

        response = client.put(f"/orders/{order['id']}", json={"status": "COMPLETED"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "COMPLETED"
        assert data["buyerEmail"] == "a@b.com"
        assert data["products"] == [product]

    def test_edit_status_backwards_is_allowed(self, client, product, create_order):
        order = create_order(buyerEmail="a@b.com", products=[product["id"]], status="COMPLETED")
        response = client.put(f"/orders/{order['id']}", json={"status": "PENDING"})
        assert response.status_code == 200
        assert response.json()["status"] == "PENDING"

    def test_edit_bogus_status_returns_400(self, client, product, create_order):
        """Out-of-enum statuses fail validation and are not persisted."""
        order = create_order(buyerEmail="a@b.com", products=[product["id"]])

        response = client.put(f"/orders/{order['id']}", json={"status": "BOGUS"})

        assert response.status_code == 400
        assert client.get(f"/orders/{order['id']}").json()["status"] == "CREATED"

    def test_edit_order_not_found_returns_404(self, client):
        response = client.put("/orders/missing", json={"status": "PENDING"})
        assert response.status_code == 404


class TestOrderDelete:
    """Tests for DELETE /orders/{id}"""

    def test_delete_order_success(self, client, product, create_order):
        order = create_order(buyerEmail="a@b.com", products=[product["id"]])
        response = client.delete(f"/orders/{order['id']}")
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert client.get(f"/orders/{order['id']}").status_code == 404
        assert client.get(f"/products/{product['id']}").status_code == 200

    def test_delete_missing_order_succeeds(self, client):
        response = client.delete("/orders/missing")
        assert response.status_code == 200
        assert response.json() == {"success": True}
