"""
Webhook Notifier - Post a short message after stage/unstage actions
"""

from __future__ import annotations

import asyncio

import aiohttp

# Keep references so background notifications are not garbage collected
_pending: set[asyncio.Task] = set()


async def notify_webhook(webhook_url: str, message: str, timeout_seconds: int = 10) -> bool:
    """POST {"text", "content"} to the webhook. Best effort: never raises."""
    if not webhook_url:
        return False

    payload = {"text": message, "content": message}
    timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    try:
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(webhook_url, json=payload) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    print(f"[Notifier] Webhook returned HTTP {response.status}: {error_text}")
                    return False
                return True
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        print(f"[Notifier] Webhook delivery failed: {e}")
        return False


def schedule_notification(webhook_url: str, message: str) -> asyncio.Task | None:
    """Fire a notification in the background of the running event loop"""
    if not webhook_url:
        return None
    task = asyncio.get_running_loop().create_task(notify_webhook(webhook_url, message))
    _pending.add(task)
    task.add_done_callback(_pending.discard)
    return task
