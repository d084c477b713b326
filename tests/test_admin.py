import pytest

from tests.conftest import ADMIN, USER

ADMIN_ROUTES = [
    ("GET", "/api/admin/products", None),
    ("POST", "/api/admin/products", {"name": "X"}),
    ("PUT", "/api/admin/products", {"id": "x"}),
    ("DELETE", "/api/admin/products", {"id": "x"}),
    ("GET", "/api/admin/catalog", None),
    ("POST", "/api/admin/catalog", {"kind": "main", "label": "A", "slug": "a"}),
    ("GET", "/api/admin/orders", None),
    ("PATCH", "/api/admin/orders", {"id": "x", "status": "paid"}),
    ("GET", "/api/admin/landing", None),
]


@pytest.fixture
def admin(store):
    store.make_admin("admin-1")


@pytest.mark.parametrize("method,url,body", ADMIN_ROUTES)
def test_admin_routes_are_guarded(client, method, url, body):
    resp = client.request(method, url, json=body)
    assert resp.status_code == 401

    resp = client.request(method, url, json=body, headers=USER)
    assert resp.status_code == 403
    assert resp.json() == {"error": "Forbidden"}


def test_admin_me(client, admin):
    assert client.get("/api/admin/me").json() == {"isAdmin": False}
    assert client.get("/api/admin/me", headers=USER).json() == {"isAdmin": False}
    assert client.get("/api/admin/me", headers=ADMIN).json() == {"isAdmin": True}


def test_create_product_defaults(client, admin, store):
    resp = client.post(
        "/api/admin/products",
        json={"name": "  Tênis Águia Pro ", "price_cents": -50, "images": "a.jpg, b.jpg\nc.jpg"},
        headers=ADMIN,
    )
    assert resp.status_code == 200
    product = store.get_product(resp.json()["id"])

    assert product.name == "Tênis Águia Pro"
    assert product.slug == "tenis-aguia-pro"
    assert product.category == "Outros"
    assert product.brand == "Solid Choice"
    assert product.badge == "Outros"
    assert product.price_cents == 0
    assert product.images == ["a.jpg", "b.jpg", "c.jpg"]
    assert product.sizes == ["S", "M", "L", "XL", "XXL"]


def test_create_product_sizes_follow_root_catalog_node(client, admin, store):
    root = store.add_catalog_node(kind="main", label="Sneakers", slug="sneakers")
    brand = store.add_catalog_node(kind="brand", label="Nike", slug="nike", parent_id=root)

    resp = client.post("/api/admin/products", json={"name": "Air", "catalog_node_id": brand}, headers=ADMIN)
    product = store.get_product(resp.json()["id"])
    assert product.sizes[0] == "36"
    assert product.sizes[-1] == "44"


def test_create_product_requires_name(client, admin):
    assert client.post("/api/admin/products", json={"name": " "}, headers=ADMIN).status_code == 400


def test_update_product(client, admin, store):
    product_id = store.add_product(name="Old", price_cents=100)

    resp = client.put(
        "/api/admin/products",
        json={"id": product_id, "name": "New Name", "price_cents": 1999.6, "new_slug": "", "colors": ["preto"]},
        headers=ADMIN,
    )
    assert resp.json() == {"ok": True}

    product = store.get_product(product_id)
    assert product.name == "New Name"
    assert product.slug == "new-name"
    assert product.price_cents == 2000
    assert product.colors == ["preto"]


def test_update_missing_product(client, admin):
    resp = client.put("/api/admin/products", json={"id": "nope", "name": "x"}, headers=ADMIN)
    assert resp.status_code == 404


def test_delete_product_removes_references(client, admin, store):
    product_id = store.add_product()
    client.post("/api/cart", json={"product_id": product_id}, headers=USER)
    order = store.add_order()
    store.add_order_item(order.id, product_id)

    resp = client.request("DELETE", "/api/admin/products", json={"id": product_id}, headers=ADMIN)
    assert resp.json() == {"ok": True}
    assert store.get_product(product_id) is None
    assert store.cart_item_count("user-1") == 0
    assert store.order_items(order.id) == []


def test_catalog_crud(client, admin):
    resp = client.post(
        "/api/admin/catalog",
        json={"kind": "main", "label": " Roupas ", "slug": "roupas", "sort_order": 2.4},
        headers=ADMIN,
    )
    node_id = resp.json()["id"]
    client.post("/api/admin/catalog", json={"kind": "main", "label": "Tenis", "slug": "tenis", "sort_order": 1}, headers=ADMIN)

    nodes = client.get("/api/admin/catalog", headers=ADMIN).json()["items"]
    assert [n["slug"] for n in nodes] == ["tenis", "roupas"]
    assert nodes[1]["label"] == "Roupas"
    assert nodes[1]["sort_order"] == 2

    resp = client.put("/api/admin/catalog", json={"id": node_id, "patch": {"label": " Vestuario ", "sort_order": 0}}, headers=ADMIN)
    assert resp.json() == {"ok": True}
    nodes = client.get("/api/admin/catalog", headers=ADMIN).json()["items"]
    assert nodes[0]["label"] == "Vestuario"

    client.request("DELETE", "/api/admin/catalog", json={"id": node_id}, headers=ADMIN)
    assert len(client.get("/api/admin/catalog", headers=ADMIN).json()["items"]) == 1


def test_catalog_validation(client, admin):
    resp = client.post("/api/admin/catalog", json={"kind": "planet", "label": "A", "slug": "a"}, headers=ADMIN)
    assert resp.status_code == 400
    resp = client.post("/api/admin/catalog", json={"kind": "main", "label": "A"}, headers=ADMIN)
    assert resp.status_code == 400
    resp = client.put("/api/admin/catalog", json={"id": "x", "patch": {"colour": "red"}}, headers=ADMIN)
    assert resp.status_code == 400


def test_admin_orders_list_and_patch(client, admin, store):
    product_id = store.add_product()
    order = store.add_order(public_token="tok")
    store.add_order_item(order.id, product_id, quantity=3)

    items = client.get("/api/admin/orders", headers=ADMIN).json()["items"]
    assert items[0]["id"] == order.id
    assert items[0]["order_items"][0]["quantity"] == 3

    resp = client.patch("/api/admin/orders", json={"id": order.id, "status": "shipping"}, headers=ADMIN)
    assert resp.json() == {"ok": True}
    assert store.get_order(order.id).status == "shipping"

    resp = client.patch("/api/admin/orders", json={"id": order.id, "payment_link": "https://pay.test/x"}, headers=ADMIN)
    assert store.get_order(order.id).payment_link == "https://pay.test/x"


def test_admin_order_patch_validation(client, admin, store):
    order = store.add_order()
    assert client.patch("/api/admin/orders", json={"id": order.id}, headers=ADMIN).status_code == 400
    assert client.patch("/api/admin/orders", json={"id": order.id, "status": "lost"}, headers=ADMIN).status_code == 400
    assert client.patch("/api/admin/orders", json={"status": "paid"}, headers=ADMIN).status_code == 400
    assert client.patch("/api/admin/orders", json={"id": "nope", "status": "paid"}, headers=ADMIN).status_code == 404


def test_awaiting_payment_binds_payment_page(client, admin, store, stripe_gateway):
    order = store.add_order(public_token="tok-pay", total_cents=7000)

    resp = client.patch(
        "/api/admin/orders",
        json={"id": order.id, "status": "awaiting_payment"},
        headers={**ADMIN, "Origin": "https://loja.test"},
    )
    assert resp.json() == {"ok": True}

    saved = store.get_order(order.id)
    assert saved.status == "awaiting_payment"
    assert saved.payment_link == "https://loja.test/pagamento/tok-pay"
    assert saved.gateway_provider == "stripe"
    assert saved.gateway_order_id == "pi_test_1"
    assert stripe_gateway.intents["pi_test_1"]["amount_cents"] == 7000


@pytest.mark.parametrize("patch", [{"label": None}, {"slug": "  "}, {"kind": None}])
def test_catalog_update_rejects_empty_required_fields(client, admin, store, patch):
    node_id = store.add_catalog_node()
    resp = client.put("/api/admin/catalog", json={"id": node_id, "patch": patch}, headers=ADMIN)
    assert resp.status_code == 400

    nodes = client.get("/api/admin/catalog", headers=ADMIN).json()["items"]
    assert (nodes[0]["kind"], nodes[0]["label"], nodes[0]["slug"]) == ("main", "Tenis", "tenis")
