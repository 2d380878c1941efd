from docportal.core.config import settings

from conftest import login

API = settings.API_V1_STR


def test_client_routes_require_admin(api, admin_headers) -> None:
    acme = api.post(f"{API}/clients", json={"name": "Acme"}, headers=admin_headers).json()
    headers = login(api, "Acme", acme["password"])

    assert api.get(f"{API}/clients", headers=headers).status_code == 403
    assert api.post(f"{API}/clients", json={"name": "X"}, headers=headers).status_code == 403


def test_create_is_idempotent(api, admin_headers) -> None:
    first = api.post(f"{API}/clients", json={"name": "Acme"}, headers=admin_headers).json()
    second = api.post(f"{API}/clients", json={"name": "  aCmE "}, headers=admin_headers).json()
    assert first["id"] == second["id"]
    assert len(api.get(f"{API}/clients", headers=admin_headers).json()) == 1


def test_create_rejects_blank_name(api, admin_headers) -> None:
    res = api.post(f"{API}/clients", json={"name": "   "}, headers=admin_headers)
    assert res.status_code == 422


def test_create_with_contract_and_email(api, admin_headers) -> None:
    res = api.post(
        f"{API}/clients",
        json={"name": "Acme", "email": "ops@acme.es", "contract_type": "pack_horas"},
        headers=admin_headers,
    )
    body = res.json()
    assert body["contract_type"] == "pack_horas"
    assert body["contract_label"] == "Pack por horas"
    assert body["email"] == "ops@acme.es"
    assert len(body["password"]) == 10


def test_update_client(api, admin_headers) -> None:
    acme = api.post(f"{API}/clients", json={"name": "Acme"}, headers=admin_headers).json()
    res = api.patch(
        f"{API}/clients/{acme['id']}",
        json={"name": "Acme Norte", "contract_type": "mensual"},
        headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["name"] == "Acme Norte"
    assert res.json()["contract_label"] == "Mensual"

    assert api.patch(f"{API}/clients/missing", json={"name": "X"}, headers=admin_headers).status_code == 404


def test_delete_is_idempotent(api, admin_headers) -> None:
    acme = api.post(f"{API}/clients", json={"name": "Acme"}, headers=admin_headers).json()
    assert api.delete(f"{API}/clients/{acme['id']}", headers=admin_headers).status_code == 200
    assert api.delete(f"{API}/clients/{acme['id']}", headers=admin_headers).status_code == 200
    assert api.get(f"{API}/clients/{acme['id']}", headers=admin_headers).status_code == 404


def test_permissions_drop_self_reference(api, admin_headers) -> None:
    a = api.post(f"{API}/clients", json={"name": "A"}, headers=admin_headers).json()
    b = api.post(f"{API}/clients", json={"name": "B"}, headers=admin_headers).json()

    res = api.put(
        f"{API}/clients/{a['id']}/permissions",
        json={"viewable_client_ids": [a["id"], b["id"]]},
        headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["viewable_client_ids"] == [b["id"]]


def test_permissions_reject_unknown_ids(api, admin_headers) -> None:
    a = api.post(f"{API}/clients", json={"name": "A"}, headers=admin_headers).json()
    res = api.put(
        f"{API}/clients/{a['id']}/permissions",
        json={"viewable_client_ids": ["ghost"]},
        headers=admin_headers,
    )
    assert res.status_code == 400


def test_regenerate_password(api, admin_headers) -> None:
    acme = api.post(f"{API}/clients", json={"name": "Acme"}, headers=admin_headers).json()
    res = api.post(f"{API}/clients/{acme['id']}/password", headers=admin_headers)
    assert res.status_code == 200
    new_password = res.json()["password"]
    login(api, "Acme", new_password)


def test_clear_email_with_explicit_null(api, admin_headers) -> None:
    acme = api.post(
        f"{API}/clients", json={"name": "Acme", "email": "ops@acme.es"}, headers=admin_headers
    ).json()

    res = api.patch(f"{API}/clients/{acme['id']}", json={"contract_type": "mensual"}, headers=admin_headers)
    assert res.json()["email"] == "ops@acme.es"

    res = api.patch(f"{API}/clients/{acme['id']}", json={"email": None}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["email"] is None
    assert res.json()["name"] == "Acme"


def test_listing_reports_document_count_and_super_client(api, analyzer, admin_headers) -> None:
    analyzer.results[b"a1"] = {"clientName": "Acme", "confidence": 1}
    analyzer.results[b"a2"] = {"clientName": "Acme", "confidence": 1}
    api.post(
        f"{API}/documents/upload",
        files=[("files", ("1.pdf", b"a1", "application/pdf")), ("files", ("2.pdf", b"a2", "application/pdf"))],
        headers=admin_headers,
    )
    beta = api.post(f"{API}/clients", json={"name": "Beta"}, headers=admin_headers).json()
    assert beta["document_count"] == 0
    assert beta["is_super_client"] is False

    acme = next(c for c in api.get(f"{API}/clients", headers=admin_headers).json() if c["name"] == "Acme")
    assert acme["document_count"] == 2

    res = api.put(
        f"{API}/clients/{beta['id']}/permissions",
        json={"viewable_client_ids": [acme["id"]]},
        headers=admin_headers,
    )
    assert res.json()["is_super_client"] is True
    assert api.get(f"{API}/clients/{acme['id']}", headers=admin_headers).json()["document_count"] == 2
