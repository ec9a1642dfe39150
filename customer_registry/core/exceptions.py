class StoreError(RuntimeError):
    """The backing store was unavailable or rejected the operation."""


class CustomerNotFoundError(StoreError):
    """A phone number or service referenced a customer that does not exist."""

    def __init__(self, customer_id: int):
        super().__init__(f"Customer {customer_id} does not exist")
        self.customer_id = customer_id


class SheetsSyncError(RuntimeError):
    """The Google Sheets mirror could not be updated."""
