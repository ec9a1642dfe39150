# customer_registry/schemas/sheets.py
from typing import List

from .base import CamelModel
from .customer import CustomerWithDetails


class SheetsSyncResult(CamelModel):
    synced: bool
    data: List[CustomerWithDetails]
