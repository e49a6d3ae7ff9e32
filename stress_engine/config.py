# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.

import os

# ✅ Only load .env in local/dev
if os.environ.get("ENV") != "production":
    from dotenv import load_dotenv
    load_dotenv()

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./stress_engine.db")

# "sql" or "firestore"
STORE_BACKEND = os.environ.get("STORE_BACKEND", "sql").lower()

# ✅ Daily sweep
SWEEP_CONCURRENCY = int(os.environ.get("SWEEP_CONCURRENCY", "8"))
STRESS_ENGINE_HOUR = int(os.environ.get("STRESS_ENGINE_HOUR", "2"))
STRESS_ENGINE_TIMEZONE = os.environ.get("STRESS_ENGINE_TIMEZONE", "UTC")

# ✅ On-demand recalculation
RECALCULATE_RATE_LIMIT = os.environ.get("RECALCULATE_RATE_LIMIT", "10/minute")

# 🔐 Bearer tokens for the on-demand endpoint
JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY")
if not JWT_SECRET_KEY:
    raise RuntimeError("JWT_SECRET_KEY environment variable is not set.")
