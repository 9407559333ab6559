from sqlalchemy import Column, Integer, Text, text

from sqlalchemy.orm import declarative_base

Base = declarative_base()
metadata = Base.metadata


class Schedule(Base):
    __tablename__ = 'schedule'

    date = Column(Text, primary_key=True)
    time_slots = Column(Text)  # JSON list; NULL → config default
    available = Column(Integer, nullable=False, server_default=text('1'))
    updated_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))


class Reservations(Base):
    __tablename__ = 'reservations'

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    display_name = Column(Text)
    date = Column(Text, nullable=False, index=True)
    time = Column(Text, nullable=False)
    pickup_location = Column(Text, nullable=False)
    notes = Column(Text)
    status = Column(Text, nullable=False, server_default=text("'confirmed'"))
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))


class PickupLocations(Base):
    __tablename__ = 'pickup_locations'

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    address = Column(Text)
    sort_order = Column(Integer, nullable=False, server_default=text('0'))
