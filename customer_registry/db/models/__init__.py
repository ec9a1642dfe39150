from .customer import Customer
from .phone_number import PhoneNumber
from .service import Service
