"""Package-manager specific command rendering."""

from __future__ import annotations

from typing import Dict

_INSTALL: Dict[str, str] = {
    "npm": "npm install",
    "pnpm": "pnpm install",
    "yarn": "yarn",
    "bun": "bun install",
}


def install_command(manager: str) -> str:
    return _INSTALL.get(manager.lower(), _INSTALL["npm"])


def run_command(script: str, manager: str) -> str:
    """Return the invocation that runs ``script`` with ``manager``."""
    manager = manager.lower()
    if manager == "pnpm":
        return f"pnpm {script}"
    if manager == "yarn":
        return f"yarn {script}"
    if manager == "bun":
        return f"bun run {script}"
    # npm run <script>, except start which can be `npm start`
    if script == "start":
        return "npm start"
    return f"npm run {script}"


def manager_label(manager: str) -> str:
    if manager.lower() == "npm":
        return "npm (bundled with Node.js)"
    return manager.lower()


__all__ = ["install_command", "manager_label", "run_command"]
