import logging
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from fieldsales.core import clock
from fieldsales.domain.models import Customer, CustomerReceipt
from fieldsales.domain.schemas import ReceiptOut
from fieldsales.interfaces.IReceiptRepository import IReceiptRepository

logger = logging.getLogger(__name__)


class SqlReceiptRepository(IReceiptRepository):

    def __init__(self, session: Session):
        self.session = session

    def add_receipt(self, customer_id: int, cash_bank_id: str, amount: float,
                    note: Optional[str] = None, attachment: Optional[str] = None) -> CustomerReceipt:
        receipt = CustomerReceipt(
            customer_id=customer_id,
            cash_bank_id=cash_bank_id,
            amount=amount,
            note=note,
            attachment=attachment,
            created_at=clock.now(),
        )
        self.session.add(receipt)
        self.session.flush()
        logger.info(f"💰 Receipt {receipt.id} recorded for customer {customer_id}: {amount}")
        return receipt

    def list_receipts(self) -> List[ReceiptOut]:
        """All receipts with the customer's name, newest first."""
        query = (
            select(
                CustomerReceipt.id,
                CustomerReceipt.customer_id,
                Customer.name.label("customer_name"),
                CustomerReceipt.cash_bank_id,
                CustomerReceipt.amount,
                CustomerReceipt.note,
                CustomerReceipt.attachment,
                CustomerReceipt.created_at,
            )
            .select_from(CustomerReceipt)
            .outerjoin(Customer, Customer.entity_id == CustomerReceipt.customer_id)
            .order_by(desc(CustomerReceipt.created_at), desc(CustomerReceipt.id))
        )
        return [ReceiptOut.model_validate(row) for row in self.session.execute(query).all()]
