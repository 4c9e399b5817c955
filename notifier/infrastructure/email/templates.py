"""HTML body used for notification emails."""

from __future__ import annotations

from html import escape

from notifier.domain.entities import NotificationSeverity

SEVERITY_COLORS: dict[NotificationSeverity, str] = {
    NotificationSeverity.INFO: "#3b82f6",
    NotificationSeverity.SUCCESS: "#10b981",
    NotificationSeverity.WARNING: "#f59e0b",
    NotificationSeverity.CRITICAL: "#ef4444",
}

_FOOTER = "This is an automated notification. You can change your email preferences in the application."


def render_email_html(
    title: str,
    message: str,
    severity: NotificationSeverity | str = NotificationSeverity.INFO,
    notification_type: str | None = None,
    link_url: str | None = None,
) -> str:
    """Return a self-contained HTML document for a notification email.

    All user supplied values are HTML-escaped.
    """

    color = SEVERITY_COLORS.get(NotificationSeverity(severity), SEVERITY_COLORS[NotificationSeverity.INFO])
    safe_title = escape(title)
    safe_message = escape(message).replace("\n", "<br>")

    label = ""
    if notification_type:
        readable = notification_type.replace("_", " ").title()
        label = (
            f'<p style="font-size: 12px; text-transform: uppercase; color: {color}; '
            f'margin: 0 0 8px 0;">{escape(readable)}</p>'
        )

    button = ""
    if link_url:
        button = (
            '<div style="text-align: center; margin: 30px 0;">'
            f'<a href="{escape(link_url, quote=True)}" style="background-color: {color}; color: white; '
            "padding: 12px 30px; text-decoration: none; border-radius: 5px; display: inline-block; "
            'font-weight: bold;">View Details</a>'
            "</div>"
        )

    return (
        "<!DOCTYPE html>"
        '<html><head><meta charset="utf-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
        f"<title>{safe_title}</title></head>"
        '<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; '
        'max-width: 600px; margin: 0 auto; padding: 20px;">'
        f'<div style="border-left: 4px solid {color}; padding-left: 16px; margin-bottom: 30px;">'
        f"{label}"
        f'<h1 style="color: {color}; margin: 0;">{safe_title}</h1>'
        "</div>"
        f'<div style="padding: 20px 0;"><p style="font-size: 16px;">{safe_message}</p>{button}</div>'
        '<div style="border-top: 1px solid #eee; padding-top: 20px; margin-top: 30px; '
        f'font-size: 12px; color: #888;"><p>{_FOOTER}</p></div>'
        "</body></html>"
    )


__all__ = ["SEVERITY_COLORS", "render_email_html"]
