from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExpenseCreate(CamelModel):
    description: str = Field(min_length=1, max_length=500)
    amount: Decimal = Field(gt=0, max_digits=15, decimal_places=2)
    category: str = Field(min_length=1, max_length=100)
    user_id: str | None = Field(default=None, min_length=1, max_length=100)


class ExpenseUpdate(CamelModel):
    description: str | None = Field(default=None, min_length=1, max_length=500)
    amount: Decimal | None = Field(default=None, gt=0, max_digits=15, decimal_places=2)
    category: str | None = Field(default=None, min_length=1, max_length=100)

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "ExpenseUpdate":
        nulls = [name for name in self.model_fields_set if getattr(self, name) is None]
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(sorted(nulls))}")
        return self


class ExpenseOut(CamelModel):
    id: int
    description: str
    amount: Decimal
    category: str
    date: datetime
    user_id: str

    model_config = ConfigDict(from_attributes=True)


class CategorySummaryOut(CamelModel):
    category: str
    total_amount: Decimal
    count: int
    average_amount: Decimal

    model_config = ConfigDict(from_attributes=True)
