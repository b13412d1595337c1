from sqlalchemy import CheckConstraint, Column, Float, Integer, Text, text

from sqlalchemy.orm import declarative_base

Base = declarative_base()
metadata = Base.metadata


class SpecialDays(Base):
    __tablename__ = 'special_days'

    label = Column(Text, nullable=False)
    start_date = Column(Text, nullable=False)  # YYYY-MM-DD
    is_open = Column(Integer, nullable=False, server_default=text('0'))
    id = Column(Integer, primary_key=True)
    end_date = Column(Text)  # NULL = single day
    start_time = Column(Text)  # YYYY-MM-DD HH:MM:SS
    end_time = Column(Text)
    comment = Column(Text)


class HolidayHours(Base):
    __tablename__ = 'holiday_hours'

    holiday = Column(Text, nullable=False)
    start_md = Column(Integer, nullable=False)  # month*100 + day
    end_md = Column(Integer, nullable=False)
    is_open = Column(Integer, nullable=False, server_default=text('0'))
    id = Column(Integer, primary_key=True)
    start_time = Column(Text)  # HH:MM:SS
    end_time = Column(Text)
    comment = Column(Text)


class BusinessHours(Base):
    __tablename__ = 'business_hours'
    __table_args__ = (
        CheckConstraint('week_day BETWEEN 1 AND 7'),
    )

    week_day = Column(Integer, primary_key=True)  # Monday = 1 ... Sunday = 7
    start_time = Column(Text, nullable=False, server_default=text("'09:00:00'"))
    end_time = Column(Text, nullable=False, server_default=text("'17:00:00'"))
    is_open = Column(Integer, nullable=False, server_default=text('0'))


class Appointments(Base):
    __tablename__ = 'appointments'

    name = Column(Text, nullable=False)
    date = Column(Text, nullable=False)  # YYYY-MM-DD
    time = Column(Text, nullable=False)  # HH:MM:SS
    duration = Column(Integer, nullable=False)
    type = Column(Text, nullable=False)
    active = Column(Integer, nullable=False, server_default=text('1'))
    paid = Column(Integer, nullable=False, server_default=text('0'))
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))
    id = Column(Integer, primary_key=True)
    phone_number = Column(Text)
    email = Column(Text)
    comments = Column(Text)


class Services(Base):
    __tablename__ = 'services'

    price = Column(Float, nullable=False, server_default=text('0'))
    availability = Column(Integer, nullable=False, server_default=text('1'))  # 0 = hidden from the public catalog
    id = Column(Integer, primary_key=True)
    name = Column(Text)
    description = Column(Text)
