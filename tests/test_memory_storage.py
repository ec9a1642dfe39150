"""Tests specific to the in-memory backend."""
import threading

from customer_registry import schemas
from customer_registry.storage import MemoryStorage


def test_instances_are_isolated():
    one = MemoryStorage()
    two = MemoryStorage()
    created = one.create_customer(schemas.CustomerCreate(name="Ahmed"))

    assert two.get_customer(created.id) is None
    assert two.create_customer(schemas.CustomerCreate(name="Basma")).id == created.id


def test_returned_records_are_copies():
    storage = MemoryStorage()
    customer = storage.create_customer(schemas.CustomerCreate(name="Ahmed"))
    customer.name = "Changed"
    assert storage.get_customer(customer.id).name == "Ahmed"


def test_concurrent_primary_creation_keeps_one_primary():
    storage = MemoryStorage()
    customer = storage.create_customer(schemas.CustomerCreate(name="Ahmed"))

    def worker(n):
        for i in range(25):
            storage.create_phone_number(
                schemas.PhoneNumberCreate(customer_id=customer.id, number=f"{n}-{i}", is_primary=True)
            )

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    phones = storage.get_phone_numbers(customer.id)
    assert len(phones) == 100
    assert sum(1 for p in phones if p.is_primary) == 1
