# test_order_flow_e2e.py
def jprint(step, r):
    """Helper to print response and assert on failure."""
    assert 200 <= r.status_code < 300, f"{step} -> {r.status_code}: {r.text}"
    return r.json() if r.headers.get("content-type", "").startswith("application/json") else r.text


PICKUP = "2026-03-10"


def booking(rng_suffix, **over):
    body = {
        "customer_name": f"Asha {rng_suffix}",
        "phone": f"98{rng_suffix}",
        "society_name": "PSR Aster",
        "block": "B",
        "flat_number": "B-304",
        "pickup_date": PICKUP,
        "pickup_slot": "Evening",
        "express_delivery": False,
    }
    body.update(over)
    return body


def test_booking_billing_and_delivery(client, rng_suffix):
    # ===== 1. Societies =====
    jprint("POST /societies", client.post("/societies/", json={"name": "PSR Aster"}))
    r = client.post("/societies/", json={"name": "PSR Aster"})
    assert r.status_code == 409
    names = [s["name"] for s in jprint("GET /societies", client.get("/societies/"))]
    assert names == ["PSR Aster"]

    # ===== 2. Customer books with an item estimate =====
    order = jprint("POST /orders", client.post("/orders/", json=booking(
        rng_suffix, items_json={"men_shirt_kurta_tshirt": 5, "retired_item": 2, "women_dress": 0},
    )))
    oid = order["id"]
    assert order["status"] == "NEW"
    assert order["items_json"] == {"men_shirt_kurta_tshirt": 5, "retired_item": 2}
    assert order["estimated_total"] == 50
    assert order["total_price"] is None

    prof = jprint("GET /customers", client.get("/customers/", params={"phone": f"98{rng_suffix}"}))
    assert prof["flat_number"] == "B-304"
    matches = jprint("GET /admin/customers", client.get("/admin/customers", params={"society": "PSR Aster", "flat": "b 304"}))
    assert [m["phone"] for m in matches] == [f"98{rng_suffix}"]

    # ===== 3. Customer edits before pickup =====
    upd = jprint("PATCH /orders/{id}", client.patch(f"/orders/{oid}", json={"notes": "starch collars"}))
    assert upd["notes"] == "starch collars"
    assert client.patch(f"/orders/{oid}", json={}).status_code == 400

    # ===== 4. Billing: default 10% discount on itemised base =====
    bill = jprint("POST billing", client.post(f"/admin/orders/{oid}/billing", json={}))
    assert (bill["base_amount"], bill["final_total"], bill["discount_percent"]) == (50, 45, 10)
    assert bill["order"]["total_price"] == 45
    r = client.post(f"/admin/orders/{oid}/billing", json={"discount_percent": 15})
    assert r.status_code == 400

    # ===== 5. Status machine =====
    r = client.patch(f"/admin/orders/{oid}", json={"status": "READY"})
    assert r.status_code == 409
    for st in ("PICKED", "READY", "DELIVERED"):
        jprint(f"PATCH status {st}", client.patch(f"/admin/orders/{oid}", json={"status": st}))

    assert client.post(f"/admin/orders/{oid}/billing", json={}).status_code == 409
    assert client.patch(f"/orders/{oid}", json={"action": "cancel"}).status_code == 409

    # ===== 6. Reports =====
    w = jprint("GET /reports/revenue", client.get("/reports/revenue", params={"at": "2026-03-10T06:00:00+00:00"}))
    assert w == {"today": 45, "month": 45, "lifetime": 45}
    top = jprint("GET /reports/top-customers", client.get("/reports/top-customers"))
    assert top[0]["flat_number"] == "B-304"
    assert top[0]["total_lifetime_revenue"] == 45
    s = jprint("GET /reports/summary/week", client.get("/reports/summary/week", params={"day": PICKUP}))
    assert s["date_from"] == "2026-03-09" and s["date_to"] == "2026-03-15"
    assert s["total_revenue"] == 45
    assert s["status_counts"]["DELIVERED"] == 1


def test_walk_in_manual_base_and_items_edit(client, rng_suffix):
    w = client.post("/admin/orders", json=booking(rng_suffix, self_drop=True))
    assert w.status_code == 201, w.text
    walk_in = w.json()
    assert walk_in["status"] == "PICKED"
    wid = walk_in["id"]

    bill = jprint("billing manual", client.post(f"/admin/orders/{wid}/billing",
                                                json={"base_amount": "200", "discount_percent": 20}))
    assert bill["final_total"] == 160
    assert bill["order"]["base_amount"] == 200

    # items cleared: the manual amount must not come back
    bill = jprint("billing items cleared", client.post(f"/admin/orders/{wid}/billing",
                                                       json={"items_json": {}, "items_changed": True}))
    assert bill["final_total"] is None
    assert bill["billable"] is False
    assert bill["order"]["total_price"] is None

    bill = jprint("billing items added", client.post(f"/admin/orders/{wid}/billing", json={
        "items_json": {"women_simple_saree": "2"}, "items_changed": True, "discount_percent": 0,
    }))
    assert (bill["base_amount"], bill["final_total"]) == (90, 90)
    assert bill["order"]["items_json"] == {"women_simple_saree": 2}


def test_cancel_bulk_and_queues(client, rng_suffix):
    a = jprint("book a", client.post("/orders/", json=booking(rng_suffix, flat_number="A-1", block="A")))
    b = jprint("book b", client.post("/orders/", json=booking(rng_suffix, flat_number="A-2", block="A", express_delivery=True)))
    c = jprint("book c", client.post("/orders/", json=booking(rng_suffix, flat_number="C-9", block="C")))

    intake = jprint("intake", client.get("/admin/queues/intake"))
    assert [o["id"] for o in intake] == [b["id"], a["id"], c["id"]]

    cancelled = jprint("cancel c", client.patch(f"/orders/{c['id']}", json={"action": "cancel"}))
    assert cancelled["status"] == "CANCELLED"

    r = client.patch("/admin/orders", json={"ids": [a["id"], c["id"]], "status": "PICKED"})
    assert r.status_code == 409
    assert jprint("get a", client.get("/admin/orders", params={"date": PICKUP}))[0]["status"] == "NEW"

    moved = jprint("bulk pick", client.patch("/admin/orders", json={"ids": [a["id"], b["id"]], "status": "PICKED"}))
    assert {o["status"] for o in moved} == {"PICKED"}
    jprint("bulk ready", client.patch("/admin/orders", json={"ids": [a["id"], b["id"]], "status": "READY"}))

    ready = jprint("ready", client.get("/admin/queues/ready"))
    assert [o["id"] for o in ready] == [a["id"], b["id"]]

    mine = jprint("mine", client.get("/orders/mine", params={"phone": f"98{rng_suffix}"}))
    assert len(mine) == 3
    assert client.get("/admin/orders", params={"date": "yesterday"}).status_code == 400
    assert client.patch("/orders/does-not-exist", json={"notes": "x"}).status_code == 404


def test_catalog_and_health(client):
    assert jprint("healthz", client.get("/healthz")) == {"ok": True}
    card = jprint("catalog", client.get("/catalog/"))
    assert card["discount_options"] == [0, 5, 10, 20]
    assert {"key": "women_lehenga", "label": "Lehenga", "unit_price": 60} in card["items"]
    boot = jprint("dev-bootstrap", client.post("/admin/dev-bootstrap"))
    assert boot["society_name"] == "PSR Aster"
