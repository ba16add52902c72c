from __future__ import annotations

APP_NAME = "AttendEase"


def login_otp(code: str, *, minutes: int) -> tuple[str, str]:
    subject = f"{APP_NAME} - Login OTP Verification"
    body = (
        "You have requested to log in to your AttendEase account.\n\n"
        f"Your one-time code is: {code}\n\n"
        f"It is valid for {minutes} minutes. Do not share it with anyone.\n"
        "If you didn't request this login, please ignore this email."
    )
    return subject, body


def password_reset_otp(code: str, *, minutes: int) -> tuple[str, str]:
    subject = f"{APP_NAME} - Password Reset OTP"
    body = (
        "You have requested to reset your AttendEase password.\n\n"
        f"Your reset code is: {code}\n\n"
        f"It is valid for {minutes} minutes. If you didn't request a reset, "
        "you can ignore this email and your password stays unchanged."
    )
    return subject, body


def welcome(name: str) -> tuple[str, str]:
    subject = f"Welcome to {APP_NAME}"
    body = (
        f"Hi {name},\n\n"
        "Your account is ready. Log in, pick today's classes from your timetable "
        "and mark them present or absent to keep your attendance above the bar.\n\n"
        f"- The {APP_NAME} team"
    )
    return subject, body
