from __future__ import annotations

import os

import django


os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "weatherboard.settings")
os.environ.setdefault("TESTING_MODE", "1")

django.setup()
