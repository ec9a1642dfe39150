from .base import CustomerStorage
from .database import DatabaseStorage
from .memory import MemoryStorage
