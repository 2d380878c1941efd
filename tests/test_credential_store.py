from docportal.core.security import PASSWORD_ALPHABET, PASSWORD_LENGTH
from docportal.models.client import ContractType


def test_create_generates_password_and_empty_permissions(clients) -> None:
    client = clients.create("Acme")
    assert client.id
    assert len(client.password) == PASSWORD_LENGTH
    assert set(client.password) <= set(PASSWORD_ALPHABET)
    assert client.viewable_client_ids == []
    assert client.contract_type == ContractType.NO_CONTRACT
    assert client.last_login is None


def test_create_is_idempotent_ignoring_case(clients) -> None:
    first = clients.create("Acme Servicios")
    second = clients.create("ACME servicios")
    assert first.id == second.id
    assert first.password == second.password
    assert len(clients.list()) == 1


def test_list_keeps_creation_order(clients) -> None:
    names = ["Zeta", "Alfa", "Media"]
    for name in names:
        clients.create(name)
    assert [c.name for c in clients.list()] == names


def test_find_by_name_is_exact_not_substring(clients) -> None:
    clients.create("Construcciones S.A.")
    assert clients.find_by_name("construcciones s.a.") is not None
    assert clients.find_by_name("Construcciones") is None


def test_update_is_partial(clients) -> None:
    client = clients.create("Acme")
    clients.update(client.id, contract_type=ContractType.MONTHLY)
    updated = clients.get(client.id)
    assert updated.name == "Acme"
    assert updated.contract_type == ContractType.MONTHLY
    assert updated.contract_type.label == "Mensual"

    clients.update(client.id, name="Acme Norte")
    assert clients.get(client.id).name == "Acme Norte"
    assert clients.get(client.id).contract_type == ContractType.MONTHLY


def test_update_and_delete_unknown_id_are_noops(clients) -> None:
    clients.create("Acme")
    clients.update("missing", name="Other")
    clients.delete("missing")
    clients.set_permissions("missing", ["x"])
    clients.record_login("missing")
    assert [c.name for c in clients.list()] == ["Acme"]


def test_set_permissions_strips_self_and_duplicates(clients) -> None:
    a = clients.create("A")
    b = clients.create("B")
    c = clients.create("C")
    clients.set_permissions(a.id, [b.id, a.id, c.id, b.id])
    assert clients.get(a.id).viewable_client_ids == [b.id, c.id]

    clients.set_permissions(a.id, [a.id])
    assert clients.get(a.id).viewable_client_ids == []


def test_set_permissions_replaces_wholesale(clients) -> None:
    a = clients.create("A")
    b = clients.create("B")
    c = clients.create("C")
    clients.set_permissions(a.id, [b.id])
    clients.set_permissions(a.id, [c.id])
    assert clients.get(a.id).viewable_client_ids == [c.id]


def test_record_login_overwrites_timestamp(clients) -> None:
    client = clients.create("Acme")
    clients.record_login(client.id)
    first = clients.get(client.id).last_login
    assert first is not None
    clients.record_login(client.id)
    assert clients.get(client.id).last_login >= first


def test_delete_leaves_other_permissions_dangling(clients) -> None:
    a = clients.create("A")
    b = clients.create("B")
    clients.set_permissions(a.id, [b.id])
    clients.delete(b.id)
    assert clients.get(b.id) is None
    assert clients.get(a.id).viewable_client_ids == [b.id]


def test_regenerate_password(clients) -> None:
    client = clients.create("Acme")
    new = clients.regenerate_password(client.id)
    assert new is not None and len(new) == PASSWORD_LENGTH
    assert clients.get(client.id).password == new
    assert clients.regenerate_password("missing") is None


def test_update_email_none_clears_it(clients) -> None:
    client = clients.create("Acme", email="ops@acme.es")
    clients.update(client.id, name=None)
    assert clients.get(client.id).email == "ops@acme.es"
    assert clients.get(client.id).name == "Acme"

    clients.update(client.id, email=None)
    assert clients.get(client.id).email is None


def test_create_without_commit_is_undone_by_rollback(clients, db) -> None:
    clients.create("Acme", commit=False)
    assert clients.find_by_name("Acme") is not None
    db.rollback()
    assert clients.list() == []
