from fastapi.testclient import TestClient
from csv_listings.config import Settings, settings
from csv_listings.main import app
from csv_listings.models import Platform

client = TestClient(app)

SHOPIFY_CSV = (
    "Handle,Title,Body (HTML),Variant SKU,Variant Price,Variant Inventory Qty,Variant Grams,Image Src,Type\n"
    "lamp,Desk lamp,<p>Brass</p>,L-1,49.50,3,2500,https://x/1.jpg,Lighting\n"
    ",,orphan,,,,,,\n"
)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_platforms():
    r = client.get("/platforms")
    assert r.status_code == 200
    assert r.json() == ["woocommerce", "ebay", "shopify", "amazon"]


def test_parse_upload():
    files = {"file": ("products.csv", SHOPIFY_CSV.encode("utf-8"), "text/csv")}
    r = client.post("/parse", files=files, data={"platform": "shopify"})
    assert r.status_code == 200

    data = r.json()
    assert data["platform"] == "shopify"
    assert data["report"]["records"] == 1
    assert data["report"]["dropped"] == 1

    (record,) = data["records"]
    assert record["id"] == "L-1"
    assert record["weight"] == 2.5
    assert record["weightUnit"] == "kg"
    assert record["dimensions"] is None
    assert record["images"] == ["https://x/1.jpg"]


def test_parse_rejects_non_csv():
    files = {"file": ("products.xlsx", b"whatever", "application/octet-stream")}
    r = client.post("/parse", files=files, data={"platform": "shopify"})
    assert r.status_code == 422
    assert r.json()["detail"] == "Only CSV files are supported"


def test_parse_rejects_unknown_platform():
    files = {"file": ("products.csv", SHOPIFY_CSV.encode("utf-8"), "text/csv")}
    r = client.post("/parse", files=files, data={"platform": "etsy"})
    assert r.status_code == 422


def test_parse_reports_decode_stage():
    files = {"file": ("broken.csv", b'Handle,Title\nh,"open\n', "text/csv")}
    r = client.post("/parse", files=files, data={"platform": "shopify"})
    assert r.status_code == 422
    detail = r.json()["detail"]
    assert detail["stage"] == "decode"
    assert detail["message"]


def test_encode_edited_records():
    body = {
        "records": [
            {"id": "A", "title": "Edited title", "price": 10, "weight": 1.5, "weightUnit": "kg"},
        ],
        "created_at": 100,
    }
    r = client.post("/encode", json=body)
    assert r.status_code == 200

    (event,) = r.json()["events"]
    assert event["kind"] == 30402
    assert event["created_at"] == 100
    assert event["tags"][1] == ["title", "Edited title"]
    assert event["tags"][2] == ["price", "10", "USD"]
    assert event["tags"][-1] == ["weight", "1.5", "kg"]


def test_encode_rejects_blank_id():
    r = client.post("/encode", json={"records": [{"id": "", "title": "x"}]})
    assert r.status_code == 422


def test_convert_upload():
    files = {"file": ("products.csv", SHOPIFY_CSV.encode("utf-8"), "text/csv")}
    r = client.post("/convert", files=files, data={"platform": "shopify"})
    assert r.status_code == 200

    data = r.json()
    assert data["report"]["dropped"] == 1
    (event,) = data["events"]
    assert event["content"] == "<p>Brass</p>"
    assert event["tags"][0] == ["d", "L-1"]
    assert ["image", "https://x/1.jpg", "", "0"] in event["tags"]
    assert ["t", "Lighting"] in event["tags"]
    assert ["weight", "2.5", "kg"] in event["tags"]


def test_parse_rejects_oversized_upload(monkeypatch):
    monkeypatch.setattr(settings, "max_upload_bytes", 10)
    files = {"file": ("products.csv", SHOPIFY_CSV.encode("utf-8"), "text/csv")}
    r = client.post("/parse", files=files, data={"platform": "shopify"})
    assert r.status_code == 413
    assert r.json()["detail"] == "CSV file is too large"


def test_settings_read_prefixed_env(monkeypatch):
    monkeypatch.setenv("CSV_LISTINGS_MAX_UPLOAD_BYTES", "2048")
    monkeypatch.setenv("CSV_LISTINGS_DEFAULT_PLATFORM", "ebay")
    fresh = Settings()
    assert fresh.max_upload_bytes == 2048
    assert fresh.default_platform == Platform.ebay
