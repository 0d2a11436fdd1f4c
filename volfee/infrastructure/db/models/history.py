from __future__ import annotations

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from volfee.infrastructure.db.engine import Base


class TickObservationModel(Base):
    __tablename__ = "tick_observations"

    pool_id: Mapped[str] = mapped_column(String(66), primary_key=True)
    block_number: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    tick: Mapped[int] = mapped_column(BigInteger, nullable=False)


class FeeScheduleModel(Base):
    __tablename__ = "fee_schedule"

    pool_id: Mapped[str] = mapped_column(String(66), primary_key=True)
    block_number: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    fee: Mapped[int] = mapped_column(BigInteger, nullable=False)
