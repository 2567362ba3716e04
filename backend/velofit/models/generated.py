from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, Text, text

from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class Stores(Base):
    __tablename__ = 'stores'

    name = Column(Text, nullable=False)
    city = Column(Text, nullable=False, server_default=text("''"))
    opening_hours = Column(Text, nullable=False, server_default=text("'{}'"))
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    id = Column(Integer, primary_key=True)
    address = Column(Text)
    postal_code = Column(Text)
    phone = Column(Text)
    email = Column(Text)
    created_at = Column(DateTime, server_default=text('CURRENT_TIMESTAMP'))

    technicians = relationship('Technicians', back_populates='store')
    services = relationship('Services', back_populates='store')
    bookings = relationship('Bookings', back_populates='store')


class Technicians(Base):
    __tablename__ = 'technicians'

    store_id = Column(ForeignKey('stores.id', ondelete='CASCADE'), nullable=False)
    name = Column(Text, nullable=False)
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    id = Column(Integer, primary_key=True)
    email = Column(Text)

    store = relationship('Stores', back_populates='technicians')


class Services(Base):
    __tablename__ = 'services'

    name = Column(Text, nullable=False)
    service_type = Column(Text, nullable=False, server_default=text("'workshop'"))
    duration_minutes = Column(Integer, nullable=False)
    price = Column(Float, nullable=False, server_default=text('0'))
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    id = Column(Integer, primary_key=True)
    store_id = Column(ForeignKey('stores.id', ondelete='CASCADE'))  # NULL = global service
    description = Column(Text)

    store = relationship('Stores', back_populates='services')
    bookings = relationship('Bookings', back_populates='service')


class Bookings(Base):
    __tablename__ = 'bookings'
    __table_args__ = (
        Index('ix_bookings_store_start', 'store_id', 'start_datetime'),
    )

    booking_token = Column(Text, nullable=False, unique=True)
    store_id = Column(ForeignKey('stores.id'), nullable=False)
    service_id = Column(ForeignKey('services.id'), nullable=False)
    technician_id = Column(ForeignKey('technicians.id', ondelete='SET NULL'))
    start_datetime = Column(DateTime, nullable=False)
    end_datetime = Column(DateTime, nullable=False)
    status = Column(Text, nullable=False, server_default=text("'pending'"))
    customer_firstname = Column(Text, nullable=False)
    customer_lastname = Column(Text, nullable=False)
    customer_email = Column(Text, nullable=False)
    customer_phone = Column(Text, nullable=False)
    customer_data = Column(Text, nullable=False, server_default=text("'{}'"))
    created_at = Column(DateTime, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    updated_at = Column(DateTime, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    id = Column(Integer, primary_key=True)
    internal_notes = Column(Text)
    cancellation_reason = Column(Text)
    cancelled_at = Column(DateTime)

    store = relationship('Stores', back_populates='bookings')
    service = relationship('Services', back_populates='bookings')
    technician = relationship('Technicians')


class AvailabilityBlocks(Base):
    __tablename__ = 'availability_blocks'

    store_id = Column(ForeignKey('stores.id', ondelete='CASCADE'), nullable=False)
    start_datetime = Column(DateTime, nullable=False)
    end_datetime = Column(DateTime, nullable=False)
    block_type = Column(Text, nullable=False, server_default=text("'other'"))
    id = Column(Integer, primary_key=True)
    technician_id = Column(ForeignKey('technicians.id', ondelete='CASCADE'))
    reason = Column(Text)
    created_at = Column(DateTime, server_default=text('CURRENT_TIMESTAMP'))


class BookingLocks(Base):
    __tablename__ = 'booking_locks'
    __table_args__ = (
        Index('ix_booking_locks_expires_at', 'expires_at'),
    )

    store_id = Column(ForeignKey('stores.id', ondelete='CASCADE'), nullable=False)
    start_datetime = Column(DateTime, nullable=False)
    end_datetime = Column(DateTime, nullable=False)
    session_id = Column(Text, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False)
    id = Column(Integer, primary_key=True)
    technician_id = Column(ForeignKey('technicians.id', ondelete='CASCADE'))
    created_at = Column(DateTime, server_default=text('CURRENT_TIMESTAMP'))
