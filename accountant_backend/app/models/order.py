"""
Order database model.

Backing record every invoice is issued against.
"""

from sqlalchemy import Column, String, DateTime, Enum
from accountant_backend.app.db.session import Base
from accountant_backend.app.models.finance_enums import OrderStatus, enum_values
from accountant_backend.app.models.ledger_entry import new_id, utcnow


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(64), primary_key=True, default=new_id)

    # Customer being billed (owned by the user service)
    user_id = Column(String(64), nullable=True, index=True)

    status = Column(
        Enum(OrderStatus, name="order_status", values_callable=enum_values),
        default=OrderStatus.PENDING,
        nullable=False,
    )
    order_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Order(id={self.id}, status='{self.status.value}')>"
