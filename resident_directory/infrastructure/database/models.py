# resident_directory/infrastructure/database/models.py

from sqlalchemy import Column, DateTime, Index, String, UniqueConstraint

from resident_directory.infrastructure.database.session import Base


class ResidentRow(Base):
    """ORM model for persisted residents. Both unique constraints are enforced by the database."""

    __tablename__ = "residents"
    __table_args__ = (
        UniqueConstraint("car_plate", name="uq_residents_car_plate"),
        UniqueConstraint("permit_number", name="uq_residents_permit_number"),
        Index("ix_residents_updated_at", "updated_at"),
    )

    id = Column(String(36), primary_key=True)

    full_name = Column(String, nullable=False, index=True)
    section = Column(String, nullable=False, index=True)
    building = Column(String, nullable=False)
    door = Column(String, nullable=False)
    car_plate = Column(String, nullable=False)
    permit_number = Column(String, nullable=False)
    phone_primary = Column(String, nullable=False)
    phone_secondary = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
