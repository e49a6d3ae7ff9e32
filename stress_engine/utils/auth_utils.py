# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.

from typing import Optional
from fastapi import Depends, Header
from stress_engine.utils.jwt_utils import unauthorized_error, verify_access_token


# ✅ Dependency to extract token payload
def require_token(authorization: Optional[str] = Header(None)) -> dict:
    if not authorization:
        raise unauthorized_error("User must be authenticated")
    if not authorization.startswith("Bearer "):
        raise unauthorized_error("Invalid authorization format")
    return verify_access_token(authorization[len("Bearer "):])


# ✅ The caller is always the target; there is no way to name another user
def get_caller_uid(token_data: dict = Depends(require_token)) -> str:
    uid = token_data.get("sub")
    if not uid:
        raise unauthorized_error("User must be authenticated")
    return str(uid)
