from __future__ import annotations

from volt_common.models import Message


def format_alert_text(msg: Message) -> str:
    """Plain-text rendering of *msg*, usable for chat, pager and email bodies."""
    lines = [
        f"[{msg.type.upper()}] {msg.title or '(no title)'}",
        f"source: {msg.source}",
        f"attempts: {msg.count}",
    ]
    if msg.text:
        lines.append("")
        lines.append(msg.text)
    if msg.contents:
        lines.append("")
        lines.extend(f"{k}: {v}" for k, v in sorted(msg.contents.items()))
    return "\n".join(lines)
