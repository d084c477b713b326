import json

from tests.conftest import PAGARME_HOOK_TOKEN, stripe_signature

PAGARME_URL = f"/api/webhooks/pagarme?token={PAGARME_HOOK_TOKEN}"


def _pagarme_paid(order_id):
    return {
        "type": "order.paid",
        "data": {"id": "or_abc", "status": "paid", "metadata": {"order_id": order_id}},
    }


def _post_stripe(client, event, signature=None):
    payload = json.dumps(event)
    return client.post(
        "/api/webhooks/stripe",
        content=payload,
        headers={
            "Content-Type": "application/json",
            "Stripe-Signature": signature or stripe_signature(payload),
        },
    )


def test_pagarme_paid_redelivery_stays_paid(client, store):
    order = store.add_order()

    for _ in range(2):
        resp = client.post(PAGARME_URL, json=_pagarme_paid(order.id))
        assert resp.status_code == 200
        assert resp.json() == {"ok": True}

    saved = store.get_order(order.id)
    assert saved.status == "paid"
    assert saved.gateway_provider == "pagarme"
    assert saved.gateway_order_id == "or_abc"


def test_pagarme_matches_by_gateway_order_id(client, store):
    order = store.add_order(gateway_order_id="or_known", gateway_provider="pagarme")

    payload = {"type": "charge.refused", "data": {"status": "refused", "order": {"id": "or_known"}}}
    client.post(PAGARME_URL, json=payload)

    assert store.get_order(order.id).status == "canceled"


def test_pagarme_status_falls_back_to_event_type(client, store):
    order = store.add_order()
    payload = {"type": "order.paid", "data": {"status": "pending", "metadata": {"order_id": order.id}}}
    client.post(PAGARME_URL, json=payload)
    assert store.get_order(order.id).status == "paid"


def test_pagarme_event_without_order_reference_is_ignored(client, store):
    order = store.add_order()

    resp = client.post(PAGARME_URL, json={"type": "order.paid", "data": {"status": "paid"}})
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}

    saved = store.get_order(order.id)
    assert saved.status == "pending"
    assert saved.gateway_provider is None


def test_pagarme_rejects_bad_token(client, store):
    order = store.add_order()

    resp = client.post("/api/webhooks/pagarme?token=wrong", json=_pagarme_paid(order.id))
    assert resp.status_code == 401
    assert store.get_order(order.id).status == "pending"

    resp = client.post("/api/webhooks/pagarme", json=_pagarme_paid(order.id))
    assert resp.status_code == 401


def test_pagarme_invalid_json(client):
    resp = client.post(PAGARME_URL, content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400


def test_stripe_invalid_signature_changes_nothing(client, store):
    order = store.add_order()
    event = {"type": "payment_intent.succeeded", "data": {"object": {"id": "pi_1", "metadata": {"order_id": order.id}}}}

    resp = _post_stripe(client, event, signature=stripe_signature("something else"))
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid signature"}

    resp = _post_stripe(client, event, signature="t=1,v1=deadbeef")
    assert resp.status_code == 400

    saved = store.get_order(order.id)
    assert saved.status == "pending"
    assert saved.gateway_order_id is None


def test_stripe_missing_signature(client):
    resp = client.post("/api/webhooks/stripe", content=b"{}", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing signature"}


def test_stripe_payment_intent_succeeded(client, store):
    order = store.add_order()
    event = {"type": "payment_intent.succeeded", "data": {"object": {"id": "pi_42", "metadata": {"order_id": order.id}}}}

    resp = _post_stripe(client, event)
    assert resp.json() == {"ok": True}

    saved = store.get_order(order.id)
    assert saved.status == "paid"
    assert saved.gateway_provider == "stripe"
    assert saved.gateway_order_id == "pi_42"


def test_stripe_failed_payment_cancels(client, store):
    order = store.add_order()
    event = {"type": "payment_intent.payment_failed", "data": {"object": {"id": "pi_9", "metadata": {"order_id": order.id}}}}
    _post_stripe(client, event)
    assert store.get_order(order.id).status == "canceled"


def test_stripe_unmapped_event_is_acknowledged(client, store):
    order = store.add_order()
    event = {"type": "customer.created", "data": {"object": {"id": "cus_1", "metadata": {"order_id": order.id}}}}

    resp = _post_stripe(client, event)
    assert resp.status_code == 200
    assert store.get_order(order.id).status == "pending"


def test_stripe_completed_session_copies_present_shipping_fields(client, store):
    order = store.add_order(shipping_zip="99999-000", shipping_notes="portao azul")
    event = {
        "type": "checkout.session.completed",
        "data": {
            "object": {
                "id": "cs_123",
                "client_reference_id": order.id,
                "shipping_details": {
                    "name": "Ana Souza",
                    "address": {"line1": "Rua A, 10", "line2": "Apto 3", "city": "Caxias do Sul", "state": "RS"},
                },
                "customer_details": {"phone": "+5554999990000"},
            }
        },
    }

    _post_stripe(client, event)

    saved = store.get_order(order.id)
    assert saved.status == "paid"
    assert saved.shipping_name == "Ana Souza"
    assert saved.shipping_phone == "+5554999990000"
    assert saved.shipping_address == "Rua A, 10, Apto 3"
    assert saved.shipping_city == "Caxias do Sul"
    assert saved.shipping_state == "RS"
    # absent in the event, left as they were
    assert saved.shipping_zip == "99999-000"
    assert saved.shipping_notes == "portao azul"


def test_stripe_event_without_order_reference_is_ignored(client, store):
    order = store.add_order()
    resp = _post_stripe(client, {"type": "payment_intent.succeeded", "data": {"object": {"id": "pi_x"}}})
    assert resp.json() == {"ok": True}
    assert store.get_order(order.id).status == "pending"


def test_stripe_non_utf8_body_is_rejected(client, store):
    order = store.add_order()
    resp = client.post(
        "/api/webhooks/stripe",
        content=b"\xff\xfe{}",
        headers={"Content-Type": "application/json", "Stripe-Signature": "t=1,v1=deadbeef"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid signature"}
    assert store.get_order(order.id).status == "pending"
