"""
Vehicle model for database.
"""
from sqlalchemy import Column, Date, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from autoparts.database import Base


class Vehicle(Base):
    """Vehicle database model."""

    __tablename__ = "vehicles"
    __table_args__ = (
        UniqueConstraint("customer_id", "license_plate", name="uq_vehicle_customer_plate"),
    )

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    make = Column(String, nullable=False)
    model = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    vin = Column(String, nullable=True)
    license_plate = Column(String, nullable=True, index=True)
    color = Column(String, nullable=True)
    mileage = Column(Integer, nullable=True)
    last_service_date = Column(Date, nullable=True)
    next_service_due = Column(Date, nullable=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    customer = relationship("Customer", back_populates="vehicles")
    documents = relationship("Document", back_populates="vehicle", cascade="all, delete-orphan")

    @property
    def label(self) -> str:
        """Display label, e.g. "2018 Toyota Camry (UAX 123B)"."""
        text = f"{self.year} {self.make} {self.model}"
        if self.license_plate:
            text += f" ({self.license_plate})"
        return text
