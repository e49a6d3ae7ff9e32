# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, String, DateTime, Float, JSON, ForeignKey
from datetime import datetime
from stress_engine.models.database import Base


class StressSummary(Base):
    """Latest stress snapshot shown to the student."""
    __tablename__ = "stress_summaries"

    user_id = Column(String, ForeignKey("users.id"), primary_key=True)
    financial_stress_index = Column(Float)
    risk_level = Column(String)
    money_personality = Column(String)
    trigger_types = Column(JSON, default=list)
    predicted_risk_window = Column(String, nullable=True)
    last_updated = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)


class UniversityStudent(Base):
    """Membership stub so a student shows up in the university listing."""
    __tablename__ = "university_students"

    university_id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.id"), primary_key=True)
    last_updated = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)


class UniversityStudentSummary(Base):
    """University admin's copy of a student's stress snapshot."""
    __tablename__ = "university_student_summaries"

    university_id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.id"), primary_key=True)
    financial_stress_index = Column(Float)
    risk_level = Column(String)
    money_personality = Column(String)
    trigger_types = Column(JSON, default=list)
    predicted_risk_window = Column(String, nullable=True)
    last_updated = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)
