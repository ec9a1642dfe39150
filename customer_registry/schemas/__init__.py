# customer_registry/schemas/__init__.py
from .customer import Customer, CustomerCreate, CustomerUpdate, CustomerWithDetails
from .phone_number import PhoneNumber, PhoneNumberCreate, PhoneNumberUpdate
from .service import Service, ServiceCreate, ServiceUpdate
from .sheets import SheetsSyncResult
