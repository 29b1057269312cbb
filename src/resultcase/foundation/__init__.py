"""Foundation - error plumbing and configuration shared by results and logging."""

from __future__ import annotations
