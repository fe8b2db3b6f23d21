from abc import ABC, abstractmethod
from typing import List, Optional

from fieldsales.domain.models import CustomerReceipt
from fieldsales.domain.schemas import ReceiptOut

class IReceiptRepository(ABC):
    @abstractmethod
    def add_receipt(self, customer_id: int, cash_bank_id: str, amount: float,
                    note: Optional[str] = None, attachment: Optional[str] = None) -> CustomerReceipt:
        pass

    @abstractmethod
    def list_receipts(self) -> List[ReceiptOut]:
        pass
