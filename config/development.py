import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
JWT_SECRET = os.getenv("JWT_SECRET", "dev-jwt-secret")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendease"),
}

SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
OTP_EXPIRY_MINUTES = int(os.getenv("OTP_EXPIRY_MINUTES", "10"))
ATTENDANCE_THRESHOLD = float(os.getenv("ATTENDANCE_THRESHOLD", "75"))

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@attendease.local")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

# Development prints mails (and OTP codes) to the log instead of sending them
MAIL_BACKEND = os.getenv("MAIL_BACKEND", "console")
SMTP_HOST = os.getenv("SMTP_HOST", "")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER = os.getenv("SMTP_USER", "")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
SMTP_USE_TLS = os.getenv("SMTP_USE_TLS", "1") == "1"
MAIL_FROM = os.getenv("MAIL_FROM", SMTP_USER or "no-reply@attendease.local")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed the sample timetable on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
