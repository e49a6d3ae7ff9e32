# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.

from slowapi import Limiter
from slowapi.util import get_remote_address

from stress_engine.config import RECALCULATE_RATE_LIMIT

limiter = Limiter(key_func=get_remote_address)


def get_recalculate_limit() -> str:
    return RECALCULATE_RATE_LIMIT
