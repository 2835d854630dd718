"""
HTTP API tests through the FastAPI test client.
"""

from tests.helpers import ALICE, BOB, as_caller


def register(client, device_id="sensor-1", caller=ALICE):
    return client.post(
        "/devices/",
        json={"device_id": device_id, "device_type": "air-quality"},
        headers=as_caller(caller)
    )


def mint(client, amount=100, device_id="sensor-1", caller=ALICE):
    return client.post(
        "/credits/",
        json={"carbon_reduced": amount, "project_type": "solar", "device_id": device_id},
        headers=as_caller(caller)
    )


class TestHealth:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["health"] == "/health"

    def test_ready_reports_supply(self, client):
        response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json() == {"status": "ready", "total_supply": 0}


class TestDevicesApi:

    def test_register_and_fetch(self, client):
        response = register(client)
        assert response.status_code == 201
        assert response.json()["owner"] == ALICE

        fetched = client.get("/devices/sensor-1").json()
        assert fetched["is_active"] is True
        assert client.get(f"/producers/{ALICE}").json()["is_verified"] is True

    def test_duplicate_registration_conflict(self, client):
        register(client)
        response = register(client, caller=BOB)

        assert response.status_code == 409
        assert response.json()["code"] == "AlreadyRegistered"

    def test_empty_device_id(self, client):
        response = register(client, device_id="")
        assert response.status_code == 400
        assert response.json()["code"] == "InvalidInput"

    def test_missing_caller_header(self, client):
        response = client.post("/devices/", json={"device_id": "x", "device_type": "t"})
        assert response.status_code == 422

    def test_unknown_device_empty_record(self, client):
        response = client.get("/devices/nope")
        assert response.status_code == 200
        assert response.json()["owner"] == ""

    def test_deactivate_requires_admin(self, client, admin_address):
        register(client)

        denied = client.post("/devices/sensor-1/deactivate", headers=as_caller(ALICE))
        assert denied.status_code == 403

        allowed = client.post("/devices/sensor-1/deactivate", headers=as_caller(admin_address))
        assert allowed.json() == {"changed": True}

        blocked = mint(client)
        assert blocked.status_code == 400
        assert blocked.json()["code"] == "DeviceInactive"


class TestCreditsApi:

    def test_mint_and_supply(self, client):
        register(client)
        first = mint(client)
        second = mint(client, amount=5)

        assert first.status_code == 201
        assert [first.json()["id"], second.json()["id"]] == [0, 1]

        supply = client.get("/credits/supply").json()
        assert supply["total_supply"] == 2
        assert supply["symbol"]

    def test_mint_not_verified(self, client):
        response = mint(client, caller=BOB)
        assert response.status_code == 403
        assert response.json()["code"] == "NotVerified"

    def test_get_missing_credit(self, client):
        response = client.get("/credits/9")
        assert response.status_code == 404
        assert response.json()["code"] == "NotFound"

    def test_list_buy_flow(self, client):
        register(client)
        mint(client)

        listed = client.post("/credits/0/list", json={"price": 100}, headers=as_caller(ALICE))
        assert listed.status_code == 200
        assert listed.json()["for_sale"] is True

        again = client.post("/credits/0/list", json={"price": 100}, headers=as_caller(ALICE))
        assert again.status_code == 409
        assert again.json()["code"] == "AlreadyListed"

        for_sale = client.get("/credits/", params={"for_sale": True}).json()
        assert [c["id"] for c in for_sale] == [0]

        wrong = client.post("/credits/0/buy", json={"payment": 10}, headers=as_caller(BOB))
        assert wrong.status_code == 400
        assert wrong.json()["code"] == "WrongPayment"

        own = client.post("/credits/0/buy", json={"payment": 100}, headers=as_caller(ALICE))
        assert own.json()["code"] == "SelfPurchase"

        bought = client.post("/credits/0/buy", json={"payment": 100}, headers=as_caller(BOB))
        assert bought.status_code == 200
        assert bought.json()["for_sale"] is False
        assert bought.json()["price"] == 0

        assert client.get("/credits/0/owner").json() == {"token_id": 0, "owner": BOB}
        seller = client.get(f"/producers/{ALICE}").json()
        assert seller["proceeds"] == 100
        assert seller["token_balance"] == 0

    def test_oversized_values_rejected(self, client):
        register(client)
        too_big = mint(client, amount=2**63)
        assert too_big.status_code == 400
        assert too_big.json()["code"] == "InvalidAmount"

        mint(client)
        listed = client.post("/credits/0/list", json={"price": 2**64}, headers=as_caller(ALICE))
        assert listed.status_code == 400
        assert listed.json()["code"] == "InvalidAmount"
        assert client.get("/credits/0").json()["for_sale"] is False

    def test_trade_endpoint(self, client):
        register(client)
        mint(client)

        listed = client.post("/credits/0/trade", json={"price": 40}, headers=as_caller(ALICE))
        assert listed.json()["price"] == 40

        bought = client.post(
            "/credits/0/trade",
            json={"price": 0, "payment": 40},
            headers=as_caller(BOB)
        )
        assert bought.status_code == 200
        assert client.get("/credits/0/owner").json()["owner"] == BOB

    def test_transfer_and_delist(self, client):
        register(client)
        mint(client)
        client.post("/credits/0/list", json={"price": 100}, headers=as_caller(ALICE))

        delisted = client.post("/credits/0/delist", headers=as_caller(ALICE))
        assert delisted.json()["for_sale"] is False

        moved = client.post("/credits/0/transfer", json={"to": BOB}, headers=as_caller(ALICE))
        assert moved.json() == {"token_id": 0, "owner": BOB}

        denied = client.post("/credits/0/transfer", json={"to": ALICE}, headers=as_caller(ALICE))
        assert denied.status_code == 403
        assert denied.json()["code"] == "NotOwner"


class TestProducersAndEvents:

    def test_verify_producer(self, client, admin_address):
        denied = client.post(f"/producers/{BOB}/verify", headers=as_caller(ALICE))
        assert denied.status_code == 403

        response = client.post(f"/producers/{BOB}/verify", headers=as_caller(admin_address))
        assert response.status_code == 200
        assert response.json()["is_verified"] is True

    def test_events_newest_first(self, client):
        register(client)
        mint(client)

        events = client.get("/events/", params={"limit": 2}).json()
        assert [e["event"] for e in events] == ["DataVerified", "CreditMinted"]
