"""Tests for the snap service API and share pages."""

import httpx
import pytest
from fastapi.testclient import TestClient
from stellar_sdk import Keypair, TransactionEnvelope

from stellar_snaps.constants import NETWORK_PASSPHRASES
from stellar_snaps.db import get_connection, insert_snap
from stellar_snaps.models import RegistryEntry, SnapCreate
from stellar_snaps.registry import create_registry, save_registry_file
from stellar_snaps.web.app import create_app

CREATOR = "GCEZWKCA5VLDNRLN3RPRJMRZOX3Z6G5CHCGSNFHEYVXM3XOJMDS674JZ"
DESTINATION = "GBZXN7PIRZGNMHGA7MUUUF4GWPY5AYPV6LY4UV2GL6VJGIQRXFDNMADI"


@pytest.fixture
def db_path(monkeypatch, tmp_path):
    path = tmp_path / "snaps_api.db"
    monkeypatch.setattr("stellar_snaps.web.app.get_database_path", lambda: path)
    monkeypatch.setattr("stellar_snaps.web.app.get_registry_path", lambda: tmp_path / "registry.json")
    return path


@pytest.fixture
def client(db_path) -> TestClient:
    return TestClient(create_app())


def _snap_body(**overrides) -> dict:
    body = {"creator": CREATOR, "title": "Coffee", "destination": DESTINATION, "amount": "5"}
    body.update(overrides)
    return body


def test_create_and_fetch_snap(client):
    created = client.post("/api/snaps", json=_snap_body(description="Morning", imageUrl="https://img.example/c.png"))

    assert created.status_code == 201
    snap = created.json()
    assert len(snap["id"]) == 8
    assert snap["creator"] == CREATOR
    assert snap["assetCode"] == "XLM"
    assert snap["memoType"] == "MEMO_TEXT"
    assert snap["network"] == "testnet"
    assert snap["imageUrl"] == "https://img.example/c.png"

    metadata = client.get(f"/api/snap/{snap['id']}")
    assert metadata.status_code == 200
    assert metadata.headers["cache-control"].startswith("public")
    assert metadata.json()["title"] == "Coffee"
    assert "creator" not in metadata.json()

    assert client.get(f"/api/metadata/{snap['id']}").json()["destination"] == DESTINATION


@pytest.mark.parametrize(
    "body, message",
    [
        ({"creator": CREATOR, "title": "No destination"}, "creator, title, and destination are required"),
        ({"creator": CREATOR, "title": "", "destination": DESTINATION}, "creator, title, and destination are required"),
        (_snap_body(destination="GNOPE"), "Invalid destination address: GNOPE"),
        (_snap_body(amount="-5"), "Invalid amount: -5. Must be a positive number."),
        (_snap_body(assetCode="USDC"), "asset_issuer required for non-XLM assets"),
    ],
)
def test_create_snap_rejects_invalid(client, body, message):
    response = client.post("/api/snaps", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": message}


def test_create_snap_rejects_non_json(client):
    response = client.post("/api/snaps", content=b"not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400


def test_list_snaps_by_creator_newest_first(client, db_path):
    with get_connection(db_path) as conn:
        insert_snap(conn, SnapCreate(**_snap_body(title="First")), "first01")
        insert_snap(conn, SnapCreate(**_snap_body(title="Second")), "second01")
        insert_snap(conn, SnapCreate(**_snap_body(creator=DESTINATION, title="Other")), "other01")
        conn.commit()

    response = client.get("/api/snaps", params={"creator": CREATOR})

    assert response.status_code == 200
    assert [s["title"] for s in response.json()] == ["Second", "First"]
    assert client.get("/api/snaps").status_code == 400


def test_delete_snap_requires_owner(client):
    snap_id = client.post("/api/snaps", json=_snap_body()).json()["id"]

    assert client.delete("/api/snaps", params={"id": snap_id}).status_code == 400
    assert client.delete("/api/snaps", params={"id": "missing1", "creator": CREATOR}).status_code == 404

    forbidden = client.delete("/api/snaps", params={"id": snap_id, "creator": DESTINATION})
    assert forbidden.status_code == 403
    assert forbidden.json() == {"error": "Unauthorized"}

    deleted = client.delete("/api/snaps", params={"id": snap_id, "creator": CREATOR})
    assert deleted.json() == {"success": True}
    assert client.get(f"/api/snap/{snap_id}").status_code == 404


def test_snap_metadata_resolves_short_link(client, monkeypatch):
    snap_id = client.post("/api/snaps", json=_snap_body()).json()["id"]

    async def fake_follow(url):
        assert url == "https://t.co/abc"
        return f"https://stellar-snaps.vercel.app/s/{snap_id}"

    monkeypatch.setattr("stellar_snaps.web.routes.service.follow_redirects", fake_follow)

    response = client.get("/api/snap/ignored", params={"resolve": "https://t.co/abc"})

    assert response.status_code == 200
    assert response.json()["id"] == snap_id


def test_snap_metadata_resolve_errors(client, monkeypatch):
    async def elsewhere(url):
        return "https://example.com/blog"

    monkeypatch.setattr("stellar_snaps.web.routes.service.follow_redirects", elsewhere)
    assert client.get("/api/snap/x", params={"resolve": "https://t.co/abc"}).status_code == 400

    async def broken(url):
        raise httpx.ConnectError("down")

    monkeypatch.setattr("stellar_snaps.web.routes.service.follow_redirects", broken)
    assert client.get("/api/snap/x", params={"resolve": "https://t.co/abc"}).status_code == 500


def test_discovery_file(client):
    response = client.get("/.well-known/stellar-snap.json")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Stellar Snaps"
    assert body["rules"] == [{"pathPattern": "/s/*", "apiPath": "/api/snap/$1"}]


def test_registry_defaults_and_lookup(client):
    listing = client.get("/api/registry").json()
    assert {d["domain"] for d in listing["domains"]} == {"stellar-snaps.vercel.app", "localhost:3000"}

    entry = client.get("/api/registry", params={"domain": "www.stellar-snaps.vercel.app"})
    assert entry.status_code == 200
    assert entry.json()["status"] == "trusted"

    missing = client.get("/api/registry", params={"domain": "nope.example"})
    assert missing.status_code == 404
    assert missing.json() == {"error": "Domain not found", "domain": "nope.example"}


def test_registry_serves_written_document(client, tmp_path):
    save_registry_file(
        tmp_path / "registry.json",
        create_registry([RegistryEntry(domain="evil.example", status="blocked")]),
    )

    listing = client.get("/api/registry").json()

    assert listing == {"domains": [{"domain": "evil.example", "status": "blocked"}]}


def test_proxy(client, monkeypatch):
    assert client.get("/api/proxy").status_code == 400

    async def fake_follow(url):
        return "http://localhost:3000/s/abc123"

    monkeypatch.setattr("stellar_snaps.web.routes.service.follow_redirects", fake_follow)
    response = client.get("/api/proxy", params={"url": "https://t.co/abc"})

    assert response.json() == {
        "url": "http://localhost:3000/s/abc123",
        "domain": "localhost:3000",
        "originalUrl": "https://t.co/abc",
    }


def test_build_tx(client):
    source = Keypair.random().public_key
    destination = Keypair.random().public_key

    response = client.post(
        "/api/build-tx",
        json={
            "source": source,
            "sequence": 41,
            "destination": destination,
            "amount": "2",
            "memo": "thanks",
            "network": "testnet",
        },
    )

    assert response.status_code == 200
    tx = TransactionEnvelope.from_xdr(response.json()["xdr"], NETWORK_PASSPHRASES["testnet"]).transaction
    assert tx.sequence == 42
    assert tx.source_account.account_id == source


def test_build_tx_errors(client):
    missing = client.post("/api/build-tx", json={"source": CREATOR})
    assert missing.status_code == 400

    invalid = client.post(
        "/api/build-tx",
        json={"source": CREATOR, "sequence": "1", "destination": DESTINATION, "amount": "0"},
    )
    assert invalid.status_code == 400
    assert invalid.json()["code"] == "INVALID_AMOUNT"


def test_share_page(client):
    snap_id = client.post("/api/snaps", json=_snap_body(title="Coffee <3")).json()["id"]

    page = client.get(f"/s/{snap_id}")

    assert page.status_code == 200
    assert 'property="og:title" content="Coffee &lt;3"' in page.text
    assert "Coffee <3" not in page.text
    assert "PaymentService" in page.text

    missing = client.get("/s/nothere1")
    assert missing.status_code == 404
