# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from stress_engine.models.database import Base


class MoodEntry(Base):
    __tablename__ = "mood_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    mood = Column(String, nullable=True)        # "Stressed", "Anxious", "Calm", ...
    money = Column(String, nullable=True)       # "Worried", "Guilty", "Confident", ...
    money_caused_stress = Column(Boolean, default=False)
    time = Column(DateTime, default=datetime.utcnow, index=True)

    user = relationship("User", back_populates="mood_entries")
