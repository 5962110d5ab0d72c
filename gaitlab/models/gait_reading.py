"""
Gait reading model (the reading store)
"""
from sqlalchemy import Column, Integer, String, Text, Index
from gaitlab.models.database import Base


class GaitReading(Base):
    """
    One second of quaternion samples from one device

    Not foreign-keyed to a session: readings belong to whichever session
    window their timestamp falls into.
    """
    __tablename__ = "gait_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    device = Column(String(64), nullable=False)
    timestamp = Column(String(64), nullable=False, index=True)
    quaternions = Column(Text, nullable=False)  # JSON array of {w, x, y, z}
    note = Column(Text, nullable=True)

    __table_args__ = (
        # Matches the window query ordering (timestamp, device)
        Index("ix_gait_data_timestamp_device", "timestamp", "device"),
    )

    def __repr__(self):
        return f"<GaitReading(device='{self.device}', timestamp='{self.timestamp}')>"
