"""
Tests for the generic entity service.

The service is exercised directly against an in-memory database:
- create/read round trip
- validation gate (one message per failing rule)
- not-found handling for get, update and delete
- fault boundary (unexpected exceptions become one failure message)
"""

from sqlmodel import Session, select

from catalog.errors import BODY_REQUIRED, NAME_REQUIRED, NOT_FOUND, NOT_FOUND_TO_DELETE, NOT_FOUND_TO_UPDATE
from catalog.models import Brand, BrandCategory
from catalog.services.catalog_services import BrandService, CategoryService


def test_create_acme_returns_first_id(session: Session):
    response = BrandService(session).create({"name": "Acme"})

    assert response.is_success is True
    assert response.error_messages == []
    assert response.result.id == 1
    assert response.result.name == "Acme"
    assert response.result.description is None


def test_created_item_reads_back_equivalent(session: Session):
    service = CategoryService(session)
    created = service.create({"name": "Shoes", "description": "Things for feet"}).result

    assert created.id != 0
    fetched = service.get_by_id(created.id)
    assert fetched.is_success is True
    assert fetched.result == created

    by_name = service.get_by_name("Shoes")
    assert by_name.result == created


def test_create_ignores_client_supplied_id(session: Session):
    response = CategoryService(session).create({"id": 77, "name": "Hats"})

    assert response.is_success is True
    assert response.result.id == 1


def test_list_items_ordered_by_id(session: Session):
    service = CategoryService(session)
    for name in ["Tools", "Garden", "Kitchen"]:
        service.create({"name": name})

    response = service.list_items()

    assert response.is_success is True
    assert [item.name for item in response.result] == ["Tools", "Garden", "Kitchen"]


def test_list_items_empty(session: Session):
    response = BrandService(session).list_items()

    assert response.is_success is True
    assert response.result == []


def test_get_by_name_nonexistent(session: Session):
    response = BrandService(session).get_by_name("nonexistent")

    assert response.model_dump(by_alias=True) == {
        "isSuccess": False,
        "result": None,
        "errorMessages": [NOT_FOUND],
    }


def test_get_by_id_nonexistent(session: Session):
    response = BrandService(session).get_by_id(5)

    assert response.is_success is False
    assert response.error_messages == [NOT_FOUND]


def test_create_rejects_blank_name(session: Session):
    service = BrandService(session)

    for payload in [{"name": ""}, {"name": "   "}, {"description": "no name at all"}]:
        response = service.create(payload)
        assert response.is_success is False
        assert response.error_messages == [NAME_REQUIRED]

    assert service.list_items().result == []


def test_create_requires_body(session: Session):
    response = CategoryService(session).create(None)

    assert response.is_success is False
    assert response.error_messages == [BODY_REQUIRED]


def test_create_reports_each_malformed_field(session: Session):
    response = CategoryService(session).create({"id": "abc", "name": ["not", "a", "string"]})

    assert response.is_success is False
    assert len(response.error_messages) == 2
    assert response.error_messages[0].startswith("id:")
    assert response.error_messages[1].startswith("name:")


def test_brand_create_checks_nested_categories(session: Session):
    service = BrandService(session)

    response = service.create({"name": "", "brandCategories": [{"brandId": 0, "categoryId": 99}]})

    assert response.is_success is False
    assert response.error_messages == [NAME_REQUIRED, "Category 99 not found."]
    assert service.list_items().result == []


def test_brand_create_persists_nested_categories(session: Session):
    categories = CategoryService(session)
    first = categories.create({"name": "Shoes"}).result
    second = categories.create({"name": "Socks"}).result

    response = BrandService(session).create(
        {
            "name": "Acme",
            "brandCategories": [
                {"brandId": 0, "categoryId": second.id},
                {"brandId": 0, "categoryId": first.id},
                {"brandId": 0, "categoryId": first.id},
            ],
        }
    )

    assert response.is_success is True
    assert response.result.category_ids == [first.id, second.id]
    assert all(link.brand_id == response.result.id for link in response.result.brand_categories)


def test_update_changes_fields(session: Session):
    service = CategoryService(session)
    created = service.create({"name": "Shoes"}).result

    response = service.update({"id": created.id, "name": "Footwear", "description": "Renamed"})

    assert response.is_success is True
    assert response.result.name == "Footwear"
    assert service.get_by_id(created.id).result.description == "Renamed"


def test_update_keeps_brand_categories(session: Session):
    category = CategoryService(session).create({"name": "Shoes"}).result
    service = BrandService(session)
    brand = service.create({"name": "Acme", "brandCategories": [{"categoryId": category.id}]}).result

    response = service.update({"id": brand.id, "name": "Acme Corp", "brandCategories": []})

    assert response.is_success is True
    assert response.result.category_ids == [category.id]


def test_update_nonexistent_creates_nothing(session: Session):
    service = BrandService(session)

    response = service.update({"id": 42, "name": "Ghost"})

    assert response.is_success is False
    assert response.error_messages == [NOT_FOUND_TO_UPDATE]
    assert service.list_items().result == []
    assert service.get_by_name("Ghost").is_success is False


def test_update_validates_before_lookup(session: Session):
    response = BrandService(session).update({"id": 42, "name": ""})

    assert response.error_messages == [NAME_REQUIRED]


def test_delete_removes_item_and_links(session: Session):
    category = CategoryService(session).create({"name": "Shoes"}).result
    service = BrandService(session)
    brand = service.create({"name": "Acme", "brandCategories": [{"categoryId": category.id}]}).result

    response = service.delete(brand.id)

    assert response.is_success is True
    assert response.result is None
    assert service.get_by_id(brand.id).is_success is False
    assert session.exec(select(BrandCategory)).all() == []
    # The category itself survives
    assert CategoryService(session).get_by_id(category.id).is_success is True


def test_delete_nonexistent_is_repeatable_failure(session: Session):
    service = BrandService(session)

    first = service.delete(9)
    second = service.delete(9)

    assert first.is_success is False
    assert first.error_messages == [NOT_FOUND_TO_DELETE]
    assert second.is_success is False
    assert second.error_messages == [NOT_FOUND_TO_DELETE]


def test_persistence_fault_becomes_single_message(session: Session, monkeypatch):
    service = BrandService(session)

    def broken_commit():
        raise RuntimeError("disk full")

    monkeypatch.setattr(service.repository, "save_changes", broken_commit)

    response = service.create({"name": "Acme"})

    assert response.is_success is False
    assert response.error_messages == ["RuntimeError: disk full"]
    assert session.exec(select(Brand)).all() == []


def test_mapping_fault_becomes_single_message(session: Session, monkeypatch):
    service = CategoryService(session)
    service.create({"name": "Shoes"})

    def broken_mapping(model):
        raise ValueError("cannot map")

    monkeypatch.setattr(service.mapper, "to_dto", broken_mapping)

    for response in [service.list_items(), service.get_by_id(1), service.get_by_name("Shoes")]:
        assert response.is_success is False
        assert response.error_messages == ["ValueError: cannot map"]


def test_duplicate_name_is_reported_and_session_recovers(session: Session):
    service = CategoryService(session)
    service.create({"name": "Shoes"})

    response = service.create({"name": "Shoes"})

    assert response.is_success is False
    assert len(response.error_messages) == 1
    assert response.error_messages[0].startswith("IntegrityError")

    # Session was rolled back and is usable again
    assert [item.name for item in service.list_items().result] == ["Shoes"]


def test_update_ignores_stale_nested_categories(session: Session):
    category = CategoryService(session).create({"name": "Shoes"}).result
    service = BrandService(session)
    brand = service.create({"name": "Acme", "brandCategories": [{"categoryId": category.id}]}).result

    response = service.update(
        {"id": brand.id, "name": "Acme Corp", "brandCategories": [{"brandId": brand.id, "categoryId": 999}]}
    )

    assert response.is_success is True
    assert response.result.name == "Acme Corp"
    assert response.result.category_ids == [category.id]
