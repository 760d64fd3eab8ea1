"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from services.config_manager import ConfigManager

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    diff: dict | None = None
    git: dict | None = None
    notify: dict | None = None
    server: dict | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    diff: dict
    git: dict
    notify: dict
    server: dict


def mask_url(url: str) -> str:
    """Hide everything after the host of a webhook URL"""
    if not url:
        return ""
    scheme, sep, rest = url.partition("://")
    if not sep:
        return "*" * len(url)
    host, slash, path = rest.partition("/")
    return f"{scheme}://{host}{slash}{'*' * len(path)}"


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()

    notify = config.get("notify", {}).copy()
    notify["webhookUrl"] = mask_url(notify.get("webhookUrl", ""))

    return ConfigResponse(
        diff=config.get("diff", {}),
        git=config.get("git", {}),
        notify=notify,
        server=config.get("server", {}),
    )


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    if request.diff:
        context_lines = request.diff.get("contextLines")
        if context_lines is not None and (not isinstance(context_lines, int) or context_lines < 0):
            raise HTTPException(status_code=400, detail="diff.contextLines must be a non-negative integer")

    # Update only provided sections
    for section in ("diff", "git", "notify", "server"):
        value = getattr(request, section)
        if value:
            current_config[section] = {**current_config.get(section, {}), **value}

    try:
        config_manager.save_config(current_config)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"status": "success", "message": "Configuration updated"}
