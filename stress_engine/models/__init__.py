# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.


from .user import User, UserProfile
from .mood import MoodEntry
from .spending import SpendingEntry
from .stress_summary import StressSummary, UniversityStudent, UniversityStudentSummary
