from .crud_customer import customer
from .crud_phone_number import phone_number
from .crud_service import service
