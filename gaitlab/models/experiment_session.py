"""
Experiment session model (the session registry)
"""
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from gaitlab.models.database import Base


class ExperimentSession(Base):
    """
    One named experiment, bounded by start and end instants

    Timestamps are ISO-8601 UTC strings so they compare lexicographically
    against reading timestamps sent by the devices.
    """
    __tablename__ = "experiment_sessions"

    experiment_name = Column(String(255), primary_key=True)
    start_time = Column(String(64), nullable=False, index=True)
    end_time = Column(String(64), nullable=True)  # NULL while the session is open
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<ExperimentSession(name='{self.experiment_name}', start='{self.start_time}', end='{self.end_time}')>"
