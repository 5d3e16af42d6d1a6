"""
Logged emission SQLAlchemy model.
"""
import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Uuid,
)
from sqlalchemy.orm import relationship

from carbon_tracker.database import Base
from carbon_tracker.utils.constants import (
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    CO2E_DECIMAL_PLACES,
    CO2E_MAX_DIGITS,
    NOTES_MAX_LENGTH,
)


class EmissionDBModel(Base):
    """
    One logged activity and its CO2e.

    co2e is derived from (category, activity, amount) by the quantifier and is
    rewritten in the same flush whenever any of those fields change.
    """

    __tablename__ = "emissions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owner of the record",
    )

    user = relationship("UserDBModel", backref="emissions")

    category = Column(
        String(50),
        nullable=False,
        comment="transportation, energy, diet, shopping or waste",
    )

    activity = Column(
        String(100),
        nullable=False,
        comment="Activity key within the category (e.g. car, electricity, beef)",
    )

    amount = Column(
        Numeric(AMOUNT_MAX_DIGITS, AMOUNT_DECIMAL_PLACES),
        nullable=False,
        comment="Quantity in the category's unit (km, kWh, kg, items)",
    )

    unit = Column(
        String(50),
        nullable=False,
        comment="Descriptive unit label, not used in calculation",
    )

    passengers = Column(
        Integer,
        nullable=False,
        default=1,
        comment="People sharing a transportation trip",
    )

    co2e = Column(
        Numeric(CO2E_MAX_DIGITS, CO2E_DECIMAL_PLACES),
        nullable=False,
        comment="Calculated CO2e in kg",
    )

    date = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        comment="When the activity occurred",
    )

    notes = Column(String(NOTES_MAX_LENGTH), nullable=True, default="")

    tags = Column(JSON, nullable=True, default=list)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_emissions_user_date", "user_id", "date"),
        Index("ix_emissions_user_category", "user_id", "category"),
        Index("ix_emissions_user_created", "user_id", "created_at"),
        {"comment": "Logged activities with their calculated CO2e"},
    )

    def __repr__(self):
        return (
            f"<EmissionDBModel: {self.category}/{self.activity} "
            f"{self.amount} {self.unit} = {self.co2e} kgCO2e on {self.date}>"
        )
