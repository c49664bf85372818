"""Tests for product API endpoints."""

from uuid import uuid4

import httpx
import pytest

from catalog_api.infrastructure.config import settings

U1 = "http://a/1.png"
U2 = "http://a/2.png"
U3 = "http://a/3.png"


async def create_product(
    client: httpx.AsyncClient,
    headers: dict[str, str],
    **fields,
) -> dict:
    payload = {"title": "Chair", "price": 10, **fields}
    response = await client.post("/products", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateProduct:
    """Tests for POST /products."""

    async def test_create_product(self, client, auth_headers) -> None:
        """Should create product and return images as URLs."""
        response = await client.post(
            "/products",
            json={"title": "Chair", "price": 10, "images": [U1]},
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["slug"] == "chair"
        assert data["images"] == [U1]
        assert data["id"]

    async def test_create_requires_auth(self, client) -> None:
        response = await client.post("/products", json={"title": "Chair"})

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"

    async def test_create_duplicate_title(self, client, auth_headers) -> None:
        """Should return 400 with conflict code on duplicate title."""
        await create_product(client, auth_headers)

        response = await client.post("/products", json={"title": "Chair"}, headers=auth_headers)

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "PRODUCT_CONFLICT"
        assert data["message"]

    async def test_create_missing_title(self, client, auth_headers) -> None:
        response = await client.post("/products", json={"price": 10}, headers=auth_headers)

        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["details"][0]["field"] == "title"

    async def test_create_negative_price(self, client, auth_headers) -> None:
        response = await client.post(
            "/products", json={"title": "Chair", "price": -1}, headers=auth_headers
        )
        assert response.status_code == 422


class TestListProducts:
    """Tests for GET /products."""

    async def test_list_products(self, client, auth_headers) -> None:
        await create_product(client, auth_headers, title="Chair", images=[U1])
        await create_product(client, auth_headers, title="Table", images=[U2, U3])

        response = await client.get("/products")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 2
        images = {p["title"]: p["images"] for p in data}
        assert images == {"Chair": [U1], "Table": [U2, U3]}

    async def test_list_with_limit_and_offset(self, client, auth_headers) -> None:
        for title in ("A", "B", "C"):
            await create_product(client, auth_headers, title=title)

        first = (await client.get("/products", params={"limit": "2"})).json()
        rest = (await client.get("/products", params={"limit": "2", "offset": "2"})).json()

        assert len(first) == 2
        assert len(rest) == 1

    @pytest.mark.parametrize(
        ("params", "field"),
        [
            ({"limit": "0"}, "limit"),
            ({"limit": "-3"}, "limit"),
            ({"limit": "many"}, "limit"),
            ({"offset": "-1"}, "offset"),
        ],
    )
    async def test_list_rejects_bad_pagination(self, client, params, field) -> None:
        response = await client.get("/products", params=params)

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["details"][0]["field"] == field


class TestGetProduct:
    """Tests for GET /products/{term}."""

    async def test_get_by_id(self, client, auth_headers) -> None:
        created = await create_product(client, auth_headers, images=[U1, U2])

        response = await client.get(f"/products/{created['id']}")

        assert response.status_code == 200
        assert response.json()["images"] == [U1, U2]

    async def test_get_by_slug_and_title(self, client, auth_headers) -> None:
        await create_product(client, auth_headers, title="Office Chair")

        by_slug = await client.get("/products/office-chair")
        by_title = await client.get("/products/OFFICE CHAIR")

        assert by_slug.status_code == 200
        assert by_title.status_code == 200
        assert by_slug.json()["id"] == by_title.json()["id"]

    async def test_get_not_found(self, client) -> None:
        response = await client.get(f"/products/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"


class TestUpdateProduct:
    """Tests for PATCH /products/{id}."""

    async def test_update_replaces_images(self, client, auth_headers) -> None:
        created = await create_product(client, auth_headers, images=[U1, U2])

        response = await client.patch(
            f"/products/{created['id']}",
            json={"images": [U3], "stock": 4},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["images"] == [U3]
        assert data["stock"] == 4
        assert data["title"] == "Chair"

        fetched = (await client.get(f"/products/{created['id']}")).json()
        assert fetched["images"] == [U3]

    async def test_update_null_clears_description(self, client, auth_headers) -> None:
        created = await create_product(client, auth_headers, description="Oak")

        response = await client.patch(
            f"/products/{created['id']}",
            json={"description": None},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["description"] is None

    async def test_update_null_title_rejected(self, client, auth_headers) -> None:
        created = await create_product(client, auth_headers)

        response = await client.patch(
            f"/products/{created['id']}",
            json={"title": None},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert response.json()["details"][0]["field"] == "title"

    async def test_update_invalid_id(self, client, auth_headers) -> None:
        response = await client.patch("/products/chair", json={"price": 1}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_update_not_found(self, client, auth_headers) -> None:
        response = await client.patch(
            f"/products/{uuid4()}", json={"price": 1}, headers=auth_headers
        )
        assert response.status_code == 404

    async def test_update_requires_auth(self, client) -> None:
        response = await client.patch(f"/products/{uuid4()}", json={"price": 1})
        assert response.status_code == 401


class TestDeleteProduct:
    """Tests for DELETE /products/{id}."""

    async def test_delete_product(self, client, auth_headers) -> None:
        created = await create_product(client, auth_headers, images=[U1])

        response = await client.delete(f"/products/{created['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert (await client.get(f"/products/{created['id']}")).status_code == 404

    async def test_delete_not_found(self, client, auth_headers) -> None:
        response = await client.delete(f"/products/{uuid4()}", headers=auth_headers)
        assert response.status_code == 404


class TestDeleteAllProducts:
    """Tests for DELETE /products (bulk)."""

    @pytest.fixture
    def bulk_delete_enabled(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "bulk_delete_enabled", True)

    async def test_disabled_by_default(self, client, admin_headers) -> None:
        response = await client.delete("/products", params={"confirm": "true"}, headers=admin_headers)

        assert response.status_code == 403
        assert response.json()["error_code"] == "BULK_DELETE_DISABLED"

    async def test_requires_admin_key(
        self, client, auth_headers, bulk_delete_enabled
    ) -> None:
        response = await client.delete("/products", params={"confirm": "true"}, headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["error_code"] == "ADMIN_REQUIRED"

    async def test_requires_confirmation(
        self, client, auth_headers, admin_headers, bulk_delete_enabled
    ) -> None:
        await create_product(client, auth_headers)

        response = await client.delete("/products", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "BULK_DELETE_NOT_CONFIRMED"
        assert len((await client.get("/products")).json()) == 1

    async def test_deletes_all(
        self, client, auth_headers, admin_headers, bulk_delete_enabled
    ) -> None:
        await create_product(client, auth_headers, title="Chair", images=[U1])
        await create_product(client, auth_headers, title="Table")

        response = await client.delete("/products", params={"confirm": "true"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": 2}
        assert (await client.get("/products")).json() == []
