from docportal.models.document import DocumentRecord
from docportal.services.document_store import filter_by_file_name


def _doc(client_id: str, name: str, extracted=None) -> DocumentRecord:
    return DocumentRecord(client_id=client_id, file_name=name, extracted=extracted)


def test_append_does_not_validate_owner(documents) -> None:
    record = documents.append(_doc("nobody", "parte.pdf"))
    assert documents.get(record.id).client_id == "nobody"


def test_list_by_owners_filters_and_orders_newest_first(documents) -> None:
    documents.append(_doc("a", "1.pdf"))
    documents.append(_doc("b", "2.pdf"))
    documents.append(_doc("a", "3.pdf"))

    assert [d.file_name for d in documents.list_by_owners({"a"})] == ["3.pdf", "1.pdf"]
    assert [d.file_name for d in documents.list_by_owners({"a", "b"})] == ["3.pdf", "2.pdf", "1.pdf"]
    assert documents.list_by_owners(set()) == []
    assert documents.list_by_owners({"c"}) == []


def test_listing_is_stable(documents) -> None:
    for i in range(5):
        documents.append(_doc("a", f"{i}.pdf"))
    first = [d.id for d in documents.list_by_owners({"a"})]
    second = [d.id for d in documents.list_by_owners({"a"})]
    assert first == second


def test_document_ids_are_unique(documents) -> None:
    ids = {documents.append(_doc("a", f"{i}.pdf")).id for i in range(10)}
    assert len(ids) == 10


def test_extracted_data_round_trips_as_typed_object(documents) -> None:
    extracted = {"hours": 2.5, "is_resolved": True, "materials": [{"name": "Tubo", "units": 3}]}
    record = documents.append(_doc("a", "1.pdf", extracted))
    data = documents.get(record.id).data
    assert data.hours == 2.5
    assert data.is_resolved is True
    assert data.materials[0].name == "Tubo"
    assert documents.append(_doc("a", "2.pdf")).data is None


def test_filter_by_file_name_ignores_case(documents) -> None:
    documents.append(_doc("a", "Parte-Enero.pdf"))
    documents.append(_doc("a", "albaran.pdf"))
    docs = documents.list_all()
    assert [d.file_name for d in filter_by_file_name(docs, "parte")] == ["Parte-Enero.pdf"]
    assert len(filter_by_file_name(docs, None)) == 2


def test_count_by_owner(documents) -> None:
    for owner in ("acme", "acme", "beta"):
        documents.append(_doc(owner, "x.pdf"))
    assert documents.count_by_owner() == {"acme": 2, "beta": 1}
