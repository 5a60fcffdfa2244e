"""
HTTP surface tests.

Requests go through the FastAPI app with ``get_db`` pointed at the per-test
in-memory database. Every error body is ``{"message": ...}``.
"""
from models.log import AuditLog


def register(client, username="alice", email="a@x.com", password="secret", address="1 Main St"):
    return client.post(
        "/users",
        json={"username": username, "password": password, "email": email, "address": address},
    )


def create_product(client, **overrides):
    body = {"name": "Widget", "stock": 5, "price": 10, "image": "widget.png"}
    body.update(overrides)
    return client.post("/products", json=body)


def test_root(test_client):
    response = test_client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Shop API is running"}


class TestUsersEndpoints:
    """Registration and user maintenance."""

    def test_register_returns_201_and_hides_password(self, test_client):
        response = register(test_client)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User registered successfully"

        user = test_client.get(f"/users/{data['userId']}").json()
        assert user["username"] == "alice"
        assert user["email"] == "a@x.com"
        assert user["role"] == "customer"
        assert "password" not in user and "password_hash" not in user

    def test_duplicate_username(self, test_client):
        register(test_client)
        response = register(test_client, email="other@x.com")

        assert response.status_code == 400
        assert response.json() == {"message": "Username already exists"}

    def test_missing_field(self, test_client):
        response = test_client.post("/users", json={"username": "bob", "email": "b@x.com"})

        assert response.status_code == 400
        assert response.json() == {"message": "Field 'password' is required"}

    def test_invalid_email(self, test_client):
        response = register(test_client, email="not-an-email")

        assert response.status_code == 400
        assert response.json() == {"message": "Field 'email' has an invalid value"}

    def test_update_and_delete(self, test_client):
        user_id = register(test_client).json()["userId"]

        response = test_client.put(
            f"/users/{user_id}",
            json={"username": "alice2", "password": "new", "email": "a2@x.com", "role": "admin"},
        )
        assert response.status_code == 200
        assert test_client.get(f"/users/{user_id}").json()["role"] == "admin"

        assert test_client.delete(f"/users/{user_id}").json() == {"message": "User deleted successfully"}
        assert test_client.get(f"/users/{user_id}").status_code == 404
        assert test_client.get("/users").json() == []

    def test_unknown_user(self, test_client):
        assert test_client.delete("/users/99").json() == {"message": "User not found"}


class TestProductEndpoints:
    """Catalog endpoints and their validation messages."""

    def test_create_and_fetch(self, test_client):
        response = create_product(test_client, price="10.50", stock="7", description="Blue")

        assert response.status_code == 201
        product_id = response.json()["productId"]

        product = test_client.get(f"/products/{product_id}").json()
        assert product["price"] == 10.5
        assert product["stock"] == 7
        assert product["categories"] == []

    def test_duplicate_name(self, test_client):
        create_product(test_client)
        response = create_product(test_client, name="  Widget  ")

        assert response.status_code == 400
        assert response.json() == {"message": "A product with that name already exists"}

    def test_non_positive_price(self, test_client):
        response = create_product(test_client, price=0)

        assert response.status_code == 400
        assert response.json() == {"message": "Price must be a positive number"}

    def test_unparseable_price(self, test_client):
        response = create_product(test_client, price="abc")

        assert response.status_code == 400
        assert response.json() == {"message": "Field 'price' has an invalid value"}

    def test_boolean_numbers_are_rejected(self, test_client):
        response = create_product(test_client, stock=True, price=True)

        assert response.status_code == 400
        assert response.json() == {"message": "Field 'stock' has an invalid value"}
        assert test_client.get("/products").json() == []

    def test_malformed_json(self, test_client):
        response = test_client.post(
            "/products", content="{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Request body is not valid JSON"}

    def test_update_replaces_categories(self, test_client):
        product_id = create_product(test_client).json()["productId"]
        tools = test_client.post("/categories", json={"categoryName": "Tools"}).json()["categoryId"]
        gifts = test_client.post("/categories", json={"categoryName": "Gifts"}).json()["categoryId"]

        response = test_client.put(
            f"/products/{product_id}",
            json={"name": "Widget", "stock": 3, "price": 11, "image": "w.png", "categoryIds": [gifts, tools]},
        )
        assert response.status_code == 200

        product = test_client.get(f"/products/{product_id}").json()
        assert product["stock"] == 3
        assert [c["name"] for c in product["categories"]] == ["Tools", "Gifts"]

    def test_update_and_delete_unknown(self, test_client):
        body = {"name": "X", "stock": 1, "price": 1, "image": "x.png"}
        assert test_client.put("/products/42", json=body).status_code == 404
        assert test_client.delete("/products/42").json() == {"message": "Product not found"}


class TestCategoryEndpoints:

    def test_create_list_and_link(self, test_client):
        product_id = create_product(test_client).json()["productId"]
        category_id = test_client.post("/categories", json={"categoryName": "Tools"}).json()["categoryId"]

        assert test_client.get("/categories").json() == [{"id": category_id, "name": "Tools"}]

        link = {"productId": product_id, "categoryId": category_id}
        assert test_client.post("/product-category", json=link).status_code == 200
        assert test_client.post("/product-category", json=link).status_code == 400

        listed = test_client.get("/products").json()
        assert listed[0]["categories"] == [{"id": category_id, "name": "Tools"}]

    def test_link_unknown_category(self, test_client):
        product_id = create_product(test_client).json()["productId"]
        response = test_client.post("/product-category", json={"productId": product_id, "categoryId": 9})

        assert response.status_code == 404


class TestCartEndpoints:
    """Cart lifecycle over HTTP."""

    def test_empty_cart(self, test_client):
        user_id = register(test_client).json()["userId"]

        assert test_client.get(f"/cart/{user_id}").json() == []
        assert test_client.get(f"/cart/{user_id}/total").json() == {"cart_id": None, "total": 0.0}

    def test_add_update_remove(self, test_client):
        user_id = register(test_client).json()["userId"]
        product_id = create_product(test_client).json()["productId"]

        added = test_client.post(f"/cart/{user_id}/items", json={"productId": product_id, "quantity": 2})
        assert added.status_code == 200
        item_id = added.json()["cartItemId"]

        lines = test_client.get(f"/cart/{user_id}").json()
        assert lines == [{
            "cart_item_id": item_id,
            "quantity": 2,
            "product_id": product_id,
            "name": "Widget",
            "price": 10.0,
            "image": "widget.png",
            "line_total": 20.0,
        }]

        assert test_client.put(f"/cart/items/{item_id}", json={"quantity": 4}).status_code == 200
        assert test_client.get(f"/cart/{user_id}/total").json()["total"] == 40.0

        assert test_client.delete(f"/cart/items/{item_id}").json() == {"message": "Cart item removed"}
        assert test_client.get(f"/cart/{user_id}").json() == []
        total = test_client.get(f"/cart/{user_id}/total").json()
        assert total["cart_id"] is not None
        assert total["total"] == 0.0

    def test_add_errors(self, test_client):
        user_id = register(test_client).json()["userId"]
        product_id = create_product(test_client).json()["productId"]

        too_many = test_client.post(f"/cart/{user_id}/items", json={"productId": product_id, "quantity": 9})
        assert too_many.status_code == 400
        assert too_many.json() == {"message": "Insufficient stock. Available: 5"}

        zero = test_client.post(f"/cart/{user_id}/items", json={"productId": product_id, "quantity": 0})
        assert zero.json() == {"message": "Quantity must be a positive whole number"}

        missing = test_client.post(f"/cart/{user_id}/items", json={"productId": 77, "quantity": 1})
        assert missing.status_code == 404

    def test_boolean_quantity_is_rejected(self, test_client):
        user_id = register(test_client).json()["userId"]
        product_id = create_product(test_client).json()["productId"]

        response = test_client.post(f"/cart/{user_id}/items", json={"productId": product_id, "quantity": True})

        assert response.status_code == 400
        assert response.json() == {"message": "Field 'quantity' has an invalid value"}
        assert test_client.get(f"/cart/{user_id}").json() == []

    def test_unknown_cart_item(self, test_client):
        assert test_client.put("/cart/items/5", json={"quantity": 1}).json() == {"message": "Cart item not found"}
        assert test_client.delete("/cart/items/5").status_code == 404


class TestTransactionEndpoints:

    def test_record_and_list(self, test_client):
        user_id = register(test_client).json()["userId"]

        created = test_client.post("/transactions", json={"userId": user_id, "totalAmount": 42.5})
        assert created.status_code == 200
        transaction_id = created.json()["transactionId"]

        listed = test_client.get(f"/transactions/{user_id}").json()
        assert [(t["id"], t["total_amount"]) for t in listed] == [(transaction_id, 42.5)]

    def test_unknown_user(self, test_client):
        response = test_client.post("/transactions", json={"userId": 8, "totalAmount": 1})
        assert response.status_code == 404

    def test_boolean_amount_is_rejected(self, test_client):
        user_id = register(test_client).json()["userId"]

        response = test_client.post("/transactions", json={"userId": user_id, "totalAmount": False})

        assert response.status_code == 400
        assert response.json() == {"message": "Field 'totalAmount' has an invalid value"}
        assert test_client.get(f"/transactions/{user_id}").json() == []


def test_mutations_are_audited(test_client, session_factory):
    user_id = register(test_client).json()["userId"]
    create_product(test_client)

    db = session_factory()
    try:
        actions = [(log.action, log.user_id) for log in db.query(AuditLog).order_by(AuditLog.id)]
    finally:
        db.close()
    assert actions == [("REGISTER", user_id), ("PRODUCT_CREATE", None)]
