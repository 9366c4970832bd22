"""SQLAlchemy models for the customer, merchant and agent directories."""

from sqlalchemy import Column, String

from delivery_admin.infrastructure.database import Base


class _DirectoryMemberMixin:
    id = Column(String(64), primary_key=True)
    name = Column(String(120), nullable=True)
    geofence_id = Column(String(64), nullable=True, index=True)


class CustomerModel(_DirectoryMemberMixin, Base):
    """Customer app user."""

    __tablename__ = "customer"


class MerchantModel(_DirectoryMemberMixin, Base):
    """Merchant app user."""

    __tablename__ = "merchant"


class AgentModel(_DirectoryMemberMixin, Base):
    """Delivery agent (driver)."""

    __tablename__ = "agent"


__all__ = ["AgentModel", "CustomerModel", "MerchantModel"]
