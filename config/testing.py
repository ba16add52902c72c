import os

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendease_test"),
}

SESSION_DAYS = 7
OTP_EXPIRY_MINUTES = 10
ATTENDANCE_THRESHOLD = 75

ADMIN_EMAIL = "admin@test.local"
ADMIN_PASSWORD = "admin-pass"

MAIL_BACKEND = "console"
SMTP_HOST = ""
SMTP_PORT = 587
SMTP_USER = ""
SMTP_PASSWORD = ""
SMTP_USE_TLS = False
MAIL_FROM = "no-reply@test.local"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
