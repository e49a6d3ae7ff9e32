# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.

import os
import json
import firebase_admin
from firebase_admin import credentials, firestore


def init_firebase_app():
    """
    Initialize the Firebase Admin SDK once, from FIREBASE_ADMIN_JSON
    (either a stringified service account or a path to one).
    """
    if firebase_admin._apps:
        return firebase_admin.get_app()

    raw_json = os.getenv("FIREBASE_ADMIN_JSON")
    if not raw_json:
        raise ValueError("FIREBASE_ADMIN_JSON is not set in environment variables")

    try:
        if raw_json.strip().startswith("{"):
            # 🧠 Stringified JSON (e.g., Hugging Face Space)
            cred = credentials.Certificate(json.loads(raw_json))
        else:
            # 🧪 Local path to JSON (for dev)
            cred = credentials.Certificate(raw_json)

        return firebase_admin.initialize_app(cred)

    except Exception as e:
        raise RuntimeError("❌ Failed to initialize Firebase Admin SDK") from e


def get_firestore_client():
    init_firebase_app()
    return firestore.client()
