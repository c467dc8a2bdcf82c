from pydantic import BaseModel, ConfigDict, Field
from decimal import Decimal
from typing import Optional, List
import datetime
from enum import Enum


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CHECK = "check"
    TRANSFER = "transfer"


class TransactionCreate(BaseModel):
    description: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0, description="Monto positivo; el tipo indica el signo")
    date: datetime.date = Field(default_factory=datetime.date.today)
    method: PaymentMethod = PaymentMethod.CASH
    status: str = "completed"
    type: TransactionType
    category: Optional[str] = Field(None, max_length=50)
    client_id: Optional[str] = None


class TransactionOut(TransactionCreate):
    id: str

    model_config = ConfigDict(from_attributes=True)


class TransactionList(BaseModel):
    transactions: List[TransactionOut]
    total: int


class FinanceSummary(BaseModel):
    balance: Decimal
    monthly_income: Decimal
    monthly_expense: Decimal
    client_debt: Decimal
    supplier_debt: Decimal
    month: str
