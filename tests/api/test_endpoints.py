"""
Integration tests for the table, axis-setting and transfer endpoints.

Each test runs against a fresh SQLite file created by the app lifespan.
"""

from __future__ import annotations

import pytest

API = "/api"


def _seed(client, rows=("Fire",), columns=("Speed",)):
    for name in columns:
        assert client.post(f"{API}/column", json={"column_name": name}).status_code == 201
    for name in rows:
        assert client.post(f"{API}/row", json={"name": name}).status_code == 201


def _problem(resp, status: int, code: str) -> dict:
    assert resp.status_code == status
    assert resp.headers["content-type"].startswith("application/problem+json")
    body = resp.json()
    assert body["status"] == status
    assert body["errors"][0]["code"] == code
    return body


class TestTableEndpoints:
    def test_empty_table(self, client):
        resp = client.get(f"{API}/table")
        assert resp.status_code == 200
        assert resp.json()["data"] == {"columns": [], "rows": []}

    def test_dense_table(self, client):
        _seed(client, rows=("Fire", "火焰"), columns=("Speed", "Power"))
        data = client.get(f"{API}/table").json()["data"]
        assert data["columns"] == ["Speed", "Power"]
        assert [r["name"] for r in data["rows"]] == ["Fire", "火焰"]
        assert data["rows"][1]["spell"] == "HuoYan"
        assert all(r["attributes"] == {"Speed": 0, "Power": 0} for r in data["rows"])


class TestColumnEndpoints:
    def test_add(self, client):
        resp = client.post(f"{API}/column", json={"column_name": "Speed"})
        assert resp.status_code == 201
        assert resp.json()["data"]["name"] == "Speed"

    def test_add_empty(self, client):
        body = _problem(client.post(f"{API}/column", json={"column_name": "  "}), 400, "INVALID_INPUT")
        assert body["errors"][0]["field"] == "column_name"

    def test_add_duplicate(self, client):
        _seed(client, rows=())
        _problem(client.post(f"{API}/column", json={"column_name": "Speed"}), 409, "DUPLICATE_NAME")

    def test_delete(self, client):
        _seed(client)
        resp = client.delete(f"{API}/column/Speed")
        assert resp.status_code == 204
        assert resp.content == b""
        assert client.get(f"{API}/table").json()["data"]["rows"][0]["attributes"] == {}

    def test_delete_missing(self, client):
        _problem(client.delete(f"{API}/column/Nope"), 404, "NOT_FOUND")


class TestRowEndpoints:
    def test_add_with_annotation(self, client):
        resp = client.post(f"{API}/row", json={"name": "Fire", "annotation": "hot"})
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["annotation"] == "hot"
        assert data["spell"] == "Fire"

    def test_add_duplicate(self, client):
        _seed(client, columns=())
        _problem(client.post(f"{API}/row", json={"name": "Fire"}), 409, "DUPLICATE_NAME")

    def test_rename(self, client):
        _seed(client)
        client.put(f"{API}/cell", json={"row_id": "Fire", "column_name": "Speed", "value": 4})
        resp = client.put(f"{API}/row/Fire/name", json={"new_name": "火"})
        assert resp.status_code == 200
        assert resp.json()["data"]["spell"] == "Huo"
        row = client.get(f"{API}/table").json()["data"]["rows"][0]
        assert row["name"] == "火"
        assert row["attributes"] == {"Speed": 4}

    def test_rename_missing(self, client):
        _problem(client.put(f"{API}/row/Nope/name", json={"new_name": "X"}), 404, "NOT_FOUND")

    def test_annotation(self, client):
        _seed(client)
        resp = client.put(f"{API}/annotation", json={"row_id": "Fire", "annotation": "note"})
        assert resp.status_code == 200
        assert client.get(f"{API}/table").json()["data"]["rows"][0]["annotation"] == "note"

    def test_delete(self, client):
        _seed(client)
        assert client.delete(f"{API}/row/Fire").status_code == 204
        assert client.get(f"{API}/table").json()["data"]["rows"] == []


class TestCellEndpoints:
    def test_write_and_read(self, client):
        _seed(client)
        resp = client.put(f"{API}/cell", json={"row_id": "Fire", "column_name": "Speed", "value": "7"})
        assert resp.status_code == 200
        assert resp.json()["data"] == {"row": "Fire", "column": "Speed", "value": 7, "created": False}

        resp = client.get(f"{API}/cell", params={"row_id": "Fire", "column_name": "Speed"})
        assert resp.json()["data"] == 7

    def test_non_integer(self, client):
        _seed(client)
        resp = client.put(f"{API}/cell", json={"row_id": "Fire", "column_name": "Speed", "value": "abc"})
        body = _problem(resp, 400, "INVALID_INPUT")
        assert body["errors"][0]["field"] == "value"

    def test_unknown_row(self, client):
        _seed(client)
        resp = client.put(f"{API}/cell", json={"row_id": "Ice", "column_name": "Speed", "value": 1})
        _problem(resp, 404, "NOT_FOUND")

    def test_missing_query(self, client):
        _problem(client.get(f"{API}/cell"), 400, "INVALID_INPUT")

    def test_malformed_body(self, client):
        resp = client.put(
            f"{API}/cell",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        _problem(resp, 400, "INVALID_INPUT")


class TestAxisSettingEndpoints:
    BODY = {
        "name": "Default",
        "xNegative": "A",
        "xPositive": "B",
        "yNegative": "C",
        "yPositive": "D",
    }

    @pytest.fixture()
    def seeded(self, client):
        _seed(client, rows=(), columns=("A", "B", "C", "D"))
        return client

    def test_crud(self, seeded):
        created = seeded.post(f"{API}/axis-settings", json=self.BODY)
        assert created.status_code == 201
        setting = created.json()["data"]
        assert setting["axes"]["xNegative"]["name"] == "A"

        listed = seeded.get(f"{API}/axis-settings").json()["data"]
        assert [s["id"] for s in listed] == [setting["id"]]

        updated = seeded.put(
            f"{API}/axis-settings/{setting['id']}",
            json={**self.BODY, "name": "Swapped", "xNegative": "D", "yPositive": "A"},
        )
        assert updated.status_code == 200
        assert updated.json()["data"]["axes"]["xNegative"]["name"] == "D"

        fetched = seeded.get(f"{API}/axis-settings/{setting['id']}").json()["data"]
        assert fetched["name"] == "Swapped"

        assert seeded.delete(f"{API}/axis-settings/{setting['id']}").status_code == 204
        _problem(seeded.get(f"{API}/axis-settings/{setting['id']}"), 404, "NOT_FOUND")

    def test_missing_field(self, seeded):
        body = {k: v for k, v in self.BODY.items() if k != "yPositive"}
        _problem(seeded.post(f"{API}/axis-settings", json=body), 400, "INVALID_INPUT")

    def test_unknown_column(self, seeded):
        _problem(
            seeded.post(f"{API}/axis-settings", json={**self.BODY, "xNegative": "Z"}),
            404,
            "NOT_FOUND",
        )
        assert seeded.get(f"{API}/axis-settings").json()["data"] == []

    def test_duplicate_name(self, seeded):
        seeded.post(f"{API}/axis-settings", json=self.BODY)
        _problem(seeded.post(f"{API}/axis-settings", json=self.BODY), 409, "DUPLICATE_NAME")

    def test_deleted_column_reads_null(self, seeded):
        seeded.post(f"{API}/axis-settings", json=self.BODY)
        seeded.delete(f"{API}/column/B")
        (setting,) = seeded.get(f"{API}/axis-settings").json()["data"]
        assert setting["axes"]["xPositive"] is None
        assert setting["axes"]["xNegative"]["name"] == "A"


class TestTransferEndpoints:
    def test_export_is_raw_document(self, client):
        _seed(client)
        body = client.get(f"{API}/export").json()
        assert set(body) == {"data", "timestamp", "version"}
        assert body["data"]["columns"] == ["Speed"]

    def test_import_then_export(self, client):
        document = {
            "data": {
                "columns": ["Speed", "Power"],
                "rows": [
                    {"name": "Fire", "annotation": "hot", "attributes": {"Speed": 3, "Ghost": 1}},
                    {"name": "Ice", "attributes": {"Power": "2"}},
                ],
            }
        }
        resp = client.post(f"{API}/import", json={"data": document})
        assert resp.status_code == 200
        summary = resp.json()["data"]
        assert summary["columns_created"] == 2
        assert summary["rows_created"] == 2
        assert summary["cells_skipped"] == 1

        rows = client.get(f"{API}/export").json()["data"]["rows"]
        assert rows[0] == {"name": "Fire", "annotation": "hot", "attributes": {"Speed": 3, "Power": 0}}
        assert rows[1]["attributes"] == {"Speed": 0, "Power": 2}

    def test_reimport_export_is_noop(self, client):
        _seed(client)
        client.put(f"{API}/cell", json={"row_id": "Fire", "column_name": "Speed", "value": 9})
        before = client.get(f"{API}/table").json()["data"]

        exported = client.get(f"{API}/export").json()
        assert client.post(f"{API}/import", json={"data": exported}).status_code == 200
        assert client.get(f"{API}/table").json()["data"] == before

    def test_import_invalid(self, client):
        _problem(client.post(f"{API}/import", json={"data": {"rows": []}}), 400, "INVALID_INPUT")
        assert client.get(f"{API}/table").json()["data"]["columns"] == []
