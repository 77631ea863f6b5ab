from sqlalchemy import Boolean, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .db import Base


class UserProfile(Base):
    """Profile row keyed by the identity provider user id."""

    __tablename__ = "profiles"

    id = Column(String(64), primary_key=True, index=True)
    email = Column(String(255), nullable=True)
    full_name = Column(String(255), nullable=True)
    document_type = Column(String(8), nullable=True)
    document_number = Column(String(32), nullable=True)
    phone = Column(String(32), nullable=True)
    address = Column(String(255), nullable=True)
    city = Column(String(128), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class VehicleType(Base):
    __tablename__ = "vehicle_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(64), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), index=True, nullable=False)
    vehicle_type_id = Column(Integer, ForeignKey("vehicle_types.id"), nullable=False)
    license_plate = Column(String(16), unique=True, index=True, nullable=False)
    brand = Column(String(128), nullable=False)
    model = Column(String(128), nullable=False)
    year = Column(Integer, nullable=False)
    color = Column(String(64), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    vehicle_type = relationship("VehicleType", lazy="joined")


class RuntVehicleData(Base):
    """Registry (RUNT) record keyed by plate; read-only for the application."""

    __tablename__ = "runt_vehicle_data"

    id = Column(Integer, primary_key=True, index=True)
    license_plate = Column(String(16), unique=True, index=True, nullable=False)
    owner_document_type = Column(String(8), nullable=False)
    owner_document_number = Column(String(32), nullable=False)
    owner_full_name = Column(String(255), nullable=False)
    vehicle_brand = Column(String(128), nullable=True)
    vehicle_model = Column(String(128), nullable=True)
    vehicle_year = Column(Integer, nullable=True)
    vehicle_color = Column(String(64), nullable=True)
    vehicle_type = Column(String(64), nullable=True)
    vehicle_class = Column(String(64), nullable=True)
    vehicle_service = Column(String(64), nullable=True)
    vehicle_fuel_type = Column(String(64), nullable=True)
    vehicle_status = Column(String(64), nullable=True)
    has_restrictions = Column(Boolean, nullable=True)
    soat_expiry_date = Column(String(32), nullable=True)
    rtm_expiry_date = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class ServiceType(Base):
    __tablename__ = "service_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(128), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(64), nullable=False)
    estimated_duration = Column(Float, nullable=True)  # hours
    average_cost = Column(Float, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class VehicleService(Base):
    """Maintenance or repair performed on a registered vehicle."""

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), index=True, nullable=False)
    service_type_id = Column(Integer, ForeignKey("service_types.id"), nullable=False)
    description = Column(Text, nullable=False)
    cost = Column(Float, nullable=False)
    service_date = Column(Date, nullable=False)
    mileage = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    provider_id = Column(String(64), nullable=True)
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    vehicle = relationship("Vehicle", lazy="joined")
    service_type = relationship("ServiceType", lazy="joined")
