# core/email_utils.py

from html import escape
from typing import Tuple


CREDENTIALS_SUBJECT = "Welcome to SocietyPro - Approval Granted"


def build_credentials_email(
    to: str,
    name: str,
    temp_password: str,
    login_url: str,
) -> Tuple[str, str]:
    """
    Returns (subject, html) for the "your account has been approved" email.

    The recipient address doubles as the username and the temporary
    password is shown in plain text; the user is asked to change it.
    """
    name = escape(name)
    username = escape(to)
    password = escape(temp_password)
    login_url = escape(login_url, quote=True)

    html = f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px; border: 1px solid #eee; border-radius: 10px;">
    <div style="text-align: center; margin-bottom: 20px;">
        <h1 style="color: #2563eb;">Welcome to SocietyPro!</h1>
        <p style="color: #64748b; font-size: 16px;">Hello {name}, your account has been approved.</p>
    </div>

    <div style="background-color: #f8fafc; padding: 20px; border-radius: 8px; margin-bottom: 20px;">
        <h3 style="margin-top: 0; color: #1e293b;">Login Credentials</h3>
        <p style="margin: 5px 0;"><strong>Username:</strong> {username}</p>
        <p style="margin: 5px 0;"><strong>Password:</strong> {password}</p>
    </div>

    <a href="{login_url}" style="display: block; width: 100%; text-align: center; background-color: #2563eb; color: white; padding: 12px 0; text-decoration: none; border-radius: 6px; font-weight: bold;">Login to Dashboard</a>

    <p style="text-align: center; margin-top: 20px; font-size: 12px; color: #94a3b8;">Please change your password after your first login.</p>
</div>
"""

    return CREDENTIALS_SUBJECT, html
