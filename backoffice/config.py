"""Core application configuration & tunable business rules.

Rules that may evolve (affiliate code format, default commission rates,
notification addresses, seed credentials) are centralized here so they can be
adjusted without diving into service logic. Values come from environment
variables where a deployment is expected to override them; everything else is
a module constant (mutable dicts allowed so tests can monkeypatch values).
"""
from __future__ import annotations

import os

# -------------------------------- Logging --------------------------------- #
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE: str | None = os.getenv("LOG_FILE", "logs/backoffice.log") or None

# ---------------------------------- HTTP ---------------------------------- #
CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# ----------------------------- Affiliate Codes ---------------------------- #
AFFILIATE_CODE_SETTINGS: dict[str, str | int] = {
	"prefix": "AFF",
	"suffix_length": 5,          # Uppercase A-Z / 0-9 characters after prefix
	"max_attempts": 10,          # Random candidates tried before falling back
	"fallback_digits": 6,        # Trailing digits of the ms timestamp used as fallback
}

# ------------------------------- Commission ------------------------------- #
# Default commission per program type. ``rate`` is a percentage for
# ``percentage`` and an amount in rupiah for ``flat``.
COMMISSION_DEFAULTS: dict[str, dict[str, int | str]] = {
	"online": {"rate": 10, "type": "percentage"},
	"offline_pare": {"rate": 7, "type": "percentage"},
	"rombongan": {"rate": 100000, "type": "flat"},
	"cabang": {"rate": 5, "type": "percentage"},
}

# -------------------------------- Passwords ------------------------------- #
PASSWORD_SETTINGS: dict[str, int] = {
	"min_length": 6,
	"bcrypt_rounds": int(os.getenv("BCRYPT_ROUNDS", "12")),
}

# ------------------------------ Notifications ----------------------------- #
NOTIFICATION_SETTINGS: dict[str, str] = {
	"admin_email": os.getenv("ADMIN_NOTIFICATION_EMAIL", "admin@example.com"),
	"affiliate_link_base": os.getenv("AFFILIATE_LINK_BASE", "https://example.com/register"),
	"sender_name": "Affiliate Management",
}

# ---------------------------------- Seed ---------------------------------- #
ADMIN_SEED_SETTINGS: dict[str, str] = {
	"email": os.getenv("ADMIN_EMAIL", "admin@englishbooster.com"),
	"password": os.getenv("ADMIN_PASSWORD", "admin123"),
	"full_name": os.getenv("ADMIN_FULL_NAME", "English Booster Admin"),
}

__all__ = [
	"LOG_LEVEL",
	"LOG_FILE",
	"CORS_ORIGINS",
	"AFFILIATE_CODE_SETTINGS",
	"COMMISSION_DEFAULTS",
	"PASSWORD_SETTINGS",
	"NOTIFICATION_SETTINGS",
	"ADMIN_SEED_SETTINGS",
]
