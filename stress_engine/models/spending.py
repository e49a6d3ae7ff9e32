# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, DateTime, Boolean, Float, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from stress_engine.models.database import Base


class SpendingEntry(Base):
    __tablename__ = "spending_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(Float, nullable=True)
    category = Column(String, nullable=True)

    # Older clients wrote "planned", newer ones "is_planned"
    is_planned = Column(Boolean, nullable=True)
    planned = Column(Boolean, nullable=True)

    time = Column(DateTime, default=datetime.utcnow, index=True)

    user = relationship("User", back_populates="spending_entries")
