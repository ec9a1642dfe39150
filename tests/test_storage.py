"""
Contract tests run against every storage backend.

The ``storage`` fixture is parametrized in conftest.py, so each test here
runs once on MemoryStorage and once on DatabaseStorage (SQLite).
"""
import random

import pytest

from customer_registry import schemas
from customer_registry.core.exceptions import CustomerNotFoundError, StoreError


def _customer(storage, name="Ahmed", responsible=None):
    return storage.create_customer(schemas.CustomerCreate(name=name, responsible=responsible))


def _phone(storage, customer_id, number, is_primary=False):
    return storage.create_phone_number(
        schemas.PhoneNumberCreate(customer_id=customer_id, number=number, is_primary=is_primary)
    )


def _service(storage, customer_id, name="Internet", code="INT-001", notes=None):
    return storage.create_service(
        schemas.ServiceCreate(customer_id=customer_id, name=name, code=code, notes=notes)
    )


def _primaries(storage, customer_id):
    return [p for p in storage.get_phone_numbers(customer_id) if p.is_primary]


# Clientes

def test_create_and_get_customer(storage):
    created = _customer(storage, "Ahmed", "Sara")
    assert created.id > 0
    assert created.name == "Ahmed"
    assert created.responsible == "Sara"
    assert storage.get_customer(created.id) == created


def test_get_missing_customer_returns_none(storage):
    assert storage.get_customer(999) is None
    assert storage.get_customer_with_details(999) is None


def test_ids_increase_and_are_not_reused(storage):
    first = _customer(storage, "A")
    second = _customer(storage, "B")
    assert second.id > first.id

    assert storage.delete_customer(second.id) is True
    third = _customer(storage, "C")
    assert third.id > second.id


def test_customer_with_details_has_empty_lists(storage):
    customer = _customer(storage)
    details = storage.get_customer_with_details(customer.id)
    assert details.id == customer.id
    assert details.phone_numbers == []
    assert details.services == []


def test_customer_with_details_includes_children(storage):
    customer = _customer(storage)
    phone = _phone(storage, customer.id, "0500000000", is_primary=True)
    service = _service(storage, customer.id)

    details = storage.get_customer_with_details(customer.id)
    assert [p.id for p in details.phone_numbers] == [phone.id]
    assert [s.id for s in details.services] == [service.id]


def test_list_customers_is_ordered_by_name(storage):
    _customer(storage, "Zaid")
    _customer(storage, "Ahmed")
    _customer(storage, "Mona")
    assert [c.name for c in storage.list_customers()] == ["Ahmed", "Mona", "Zaid"]


def test_update_customer_changes_only_sent_fields(storage):
    customer = _customer(storage, "Ahmed", "Sara")
    updated = storage.update_customer(customer.id, schemas.CustomerUpdate(name="X"))
    assert updated.id == customer.id
    assert updated.name == "X"
    assert updated.responsible == "Sara"
    assert storage.get_customer(customer.id) == updated


def test_update_customer_can_clear_responsible(storage):
    customer = _customer(storage, "Ahmed", "Sara")
    updated = storage.update_customer(customer.id, schemas.CustomerUpdate(responsible=None))
    assert updated.name == "Ahmed"
    assert updated.responsible is None


def test_update_missing_customer_has_no_side_effects(storage):
    customer = _customer(storage, "Ahmed")
    assert storage.update_customer(999, schemas.CustomerUpdate(name="X")) is None
    assert storage.list_customers() == [customer]


def test_delete_customer_cascades(storage):
    customer = _customer(storage)
    other = _customer(storage, "Other")
    _phone(storage, customer.id, "0500000001", is_primary=True)
    _phone(storage, customer.id, "0500000002")
    _service(storage, customer.id)
    other_phone = _phone(storage, other.id, "0500000003")
    other_service = _service(storage, other.id, code="TV-9")

    assert storage.delete_customer(customer.id) is True

    assert storage.get_customer(customer.id) is None
    assert storage.get_phone_numbers(customer.id) == []
    assert storage.get_services(customer.id) == []
    assert storage.get_customer_by_phone("0500000001") is None
    # Os filhos de outros clientes ficam intactos
    assert storage.get_phone_numbers(other.id) == [other_phone]
    assert storage.get_services(other.id) == [other_service]


def test_delete_missing_customer_returns_false(storage):
    assert storage.delete_customer(999) is False


# Busca por telefone

def test_customer_by_phone_ignores_whitespace(storage):
    customer = _customer(storage)
    _phone(storage, customer.id, "+966 54 123 4567")

    assert storage.get_customer_by_phone("+966 54 123 4567") == customer
    assert storage.get_customer_by_phone("+966541234567") == customer
    assert storage.get_customer_by_phone(" +966\t54 1234567 ") == customer
    assert storage.get_customer_by_phone("+966541234568") is None


def test_customer_by_phone_duplicate_match_prefers_lowest_id(storage):
    first = _customer(storage, "First")
    second = _customer(storage, "Second")
    _phone(storage, first.id, "050 111 2222")
    _phone(storage, second.id, "0501112222")

    assert storage.get_customer_by_phone("0501112222") == first


# Telefones e o principal

def test_phone_numbers_keep_insertion_order(storage):
    customer = _customer(storage)
    numbers = ["3", "1", "2"]
    for number in numbers:
        _phone(storage, customer.id, number)
    assert [p.number for p in storage.get_phone_numbers(customer.id)] == numbers


def test_phone_defaults_to_not_primary(storage):
    customer = _customer(storage)
    phone = _phone(storage, customer.id, "0500000000")
    assert phone.is_primary is False
    assert phone.customer_id == customer.id


def test_new_primary_demotes_previous_primary(storage):
    customer = _customer(storage)
    a = _phone(storage, customer.id, "A", is_primary=True)
    b = _phone(storage, customer.id, "B", is_primary=True)

    phones = {p.id: p for p in storage.get_phone_numbers(customer.id)}
    assert phones[a.id].is_primary is False
    assert phones[b.id].is_primary is True


def test_primary_is_per_customer(storage):
    one = _customer(storage, "One")
    two = _customer(storage, "Two")
    a = _phone(storage, one.id, "A", is_primary=True)
    _phone(storage, two.id, "B", is_primary=True)

    assert [p.id for p in _primaries(storage, one.id)] == [a.id]
    assert len(_primaries(storage, two.id)) == 1


def test_update_to_primary_demotes_others(storage):
    customer = _customer(storage)
    a = _phone(storage, customer.id, "A", is_primary=True)
    b = _phone(storage, customer.id, "B")

    updated = storage.update_phone_number(b.id, schemas.PhoneNumberUpdate(is_primary=True))
    assert updated.is_primary is True
    assert [p.id for p in _primaries(storage, customer.id)] == [b.id]
    assert storage.get_phone_numbers(customer.id)[0].id == a.id


def test_update_primary_to_primary_again_keeps_it(storage):
    customer = _customer(storage)
    a = _phone(storage, customer.id, "A", is_primary=True)
    updated = storage.update_phone_number(a.id, schemas.PhoneNumberUpdate(is_primary=True))
    assert updated.is_primary is True
    assert [p.id for p in _primaries(storage, customer.id)] == [a.id]


def test_update_without_primary_flag_leaves_others_alone(storage):
    customer = _customer(storage)
    a = _phone(storage, customer.id, "A", is_primary=True)
    b = _phone(storage, customer.id, "B")

    updated = storage.update_phone_number(b.id, schemas.PhoneNumberUpdate(number="B2"))
    assert updated.number == "B2"
    assert updated.is_primary is False
    assert [p.id for p in _primaries(storage, customer.id)] == [a.id]


def test_unsetting_primary_leaves_no_primary(storage):
    customer = _customer(storage)
    a = _phone(storage, customer.id, "A", is_primary=True)
    storage.update_phone_number(a.id, schemas.PhoneNumberUpdate(is_primary=False))
    assert _primaries(storage, customer.id) == []


def test_update_missing_phone_returns_none(storage):
    assert storage.update_phone_number(999, schemas.PhoneNumberUpdate(number="1")) is None


def test_delete_primary_promotes_first_remaining(storage):
    customer = _customer(storage)
    a = _phone(storage, customer.id, "A")
    primary = _phone(storage, customer.id, "P", is_primary=True)
    c = _phone(storage, customer.id, "C")

    assert storage.delete_phone_number(primary.id) is True

    phones = storage.get_phone_numbers(customer.id)
    assert [p.id for p in phones] == [a.id, c.id]
    assert [p.id for p in _primaries(storage, customer.id)] == [a.id]


def test_delete_non_primary_does_not_promote(storage):
    customer = _customer(storage)
    a = _phone(storage, customer.id, "A")
    b = _phone(storage, customer.id, "B")
    assert storage.delete_phone_number(b.id) is True
    assert _primaries(storage, customer.id) == []
    assert [p.id for p in storage.get_phone_numbers(customer.id)] == [a.id]


def test_delete_last_phone_leaves_customer_without_phones(storage):
    customer = _customer(storage)
    only = _phone(storage, customer.id, "A", is_primary=True)
    assert storage.delete_phone_number(only.id) is True
    assert storage.get_phone_numbers(customer.id) == []
    assert storage.get_customer(customer.id) is not None


def test_delete_missing_phone_returns_false(storage):
    assert storage.delete_phone_number(999) is False


def test_phone_for_missing_customer_is_rejected(storage):
    with pytest.raises(CustomerNotFoundError):
        _phone(storage, 999, "A", is_primary=True)
    assert isinstance(CustomerNotFoundError(1), StoreError)


def test_at_most_one_primary_after_random_operations(storage):
    rng = random.Random(20261016)
    customers = [_customer(storage, f"C{i}").id for i in range(3)]
    phone_ids = []

    for step in range(150):
        op = rng.choice(["create", "create", "update", "delete"])
        if op == "create" or not phone_ids:
            phone = _phone(
                storage, rng.choice(customers), f"05{step:08d}", is_primary=rng.random() < 0.5
            )
            phone_ids.append(phone.id)
        elif op == "update":
            phone_id = rng.choice(phone_ids)
            storage.update_phone_number(
                phone_id, schemas.PhoneNumberUpdate(is_primary=rng.random() < 0.7)
            )
        else:
            phone_id = rng.choice(phone_ids)
            phone_ids.remove(phone_id)
            assert storage.delete_phone_number(phone_id) is True

        for customer_id in customers:
            assert len(_primaries(storage, customer_id)) <= 1


# Serviços

def test_service_crud(storage):
    customer = _customer(storage)
    service = _service(storage, customer.id, name="Internet", code="INT-001", notes="100MB")
    assert service.customer_id == customer.id
    assert storage.get_services(customer.id) == [service]

    updated = storage.update_service(service.id, schemas.ServiceUpdate(code="INT-002"))
    assert updated.code == "INT-002"
    assert updated.name == "Internet"
    assert updated.notes == "100MB"

    cleared = storage.update_service(service.id, schemas.ServiceUpdate(notes=None))
    assert cleared.notes is None

    assert storage.delete_service(service.id) is True
    assert storage.get_services(customer.id) == []
    assert storage.delete_service(service.id) is False


def test_service_codes_need_not_be_unique(storage):
    customer = _customer(storage)
    a = _service(storage, customer.id, code="SAME")
    b = _service(storage, customer.id, code="SAME")
    assert [s.id for s in storage.get_services(customer.id)] == [a.id, b.id]


def test_update_missing_service_returns_none(storage):
    assert storage.update_service(999, schemas.ServiceUpdate(name="X")) is None


def test_service_for_missing_customer_is_rejected(storage):
    with pytest.raises(CustomerNotFoundError):
        _service(storage, 999)


def test_list_customers_with_details(storage):
    customer = _customer(storage, "Ahmed")
    _phone(storage, customer.id, "A", is_primary=True)
    _customer(storage, "Basma")

    result = storage.list_customers_with_details()
    assert [c.name for c in result] == ["Ahmed", "Basma"]
    assert len(result[0].phone_numbers) == 1
    assert result[1].phone_numbers == []


def test_ids_beyond_integer_range_are_not_found(storage):
    huge = 10**20
    customer = _customer(storage)

    assert storage.get_customer(huge) is None
    assert storage.get_customer_with_details(-huge) is None
    assert storage.update_customer(huge, schemas.CustomerUpdate(name="X")) is None
    assert storage.delete_customer(huge) is False
    assert storage.get_phone_numbers(huge) == []
    assert storage.get_services(huge) == []
    assert storage.update_phone_number(huge, schemas.PhoneNumberUpdate(number="1")) is None
    assert storage.delete_phone_number(huge) is False
    assert storage.update_service(huge, schemas.ServiceUpdate(name="X")) is None
    assert storage.delete_service(huge) is False
    with pytest.raises(CustomerNotFoundError):
        _phone(storage, huge, "A")
    with pytest.raises(CustomerNotFoundError):
        _service(storage, huge)

    assert storage.list_customers() == [customer]
