from typing import Any, Union

from pydantic import BaseModel, ConfigDict

# Sheets cells accept only scalars
Scalar = Union[str, int, float, bool]


class OrderMasterRecord(BaseModel):
    """Row appended to the orders master sheet for every non-payment event"""
    model_config = ConfigDict(frozen=True)

    order_id: Scalar = ""
    created_at: Scalar = ""
    created_date: str = ""
    product: str = ""
    gross_revenue: Scalar = ""  # includes shipping
    status: str = ""
    is_spam: bool = False
    is_canceled: bool = False
    is_deleted: bool = False
    last_updated_at: Scalar = ""

    def as_row(self) -> dict[str, Any]:
        return self.model_dump()


class PaymentStatusRecord(BaseModel):
    """Row appended to the payments status sheet"""
    model_config = ConfigDict(frozen=True)

    order_id: Scalar = ""
    paid_time: Scalar = ""
    paid_date: str = ""
    payment_status: str = ""
    last_updated_at: Scalar = ""

    def as_row(self) -> dict[str, Any]:
        return self.model_dump()
