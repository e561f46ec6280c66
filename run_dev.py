#!/usr/bin/env python3
"""
Development runner script for the WePadel Coach backend.
Starts the API server with auto-reload.
"""

import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent

load_dotenv(PROJECT_ROOT / ".env")

from config.settings import get_settings


def run_api(host: str, port: int):
    """Start the FastAPI backend server."""
    return subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "coach.api.main:app", "--reload", "--host", host, "--port", str(port)],
        cwd=PROJECT_ROOT,
    )


def main():
    settings = get_settings()

    print(f"""
╔════════════════════════════════════════════════════════════════════════╗
║   WePadel Coach Backend                                                ║
╠════════════════════════════════════════════════════════════════════════╣
║   API Server:    http://localhost:{settings.port:<37}║
║   Model:         {settings.gemini_model:<54}║
║   Press Ctrl+C to stop                                                 ║
╚════════════════════════════════════════════════════════════════════════╝
    """)

    if not settings.gemini_api_key:
        print("⚠️  GEMINI_API_KEY is not set. /coach/chat will answer 500 until it is.\n")

    api_proc = run_api(settings.api_host, settings.port)

    try:
        api_proc.wait()
    except KeyboardInterrupt:
        print("\n\n👋 Shutting down...")
        api_proc.terminate()
        try:
            api_proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            api_proc.kill()
        print("✅ Stopped.")
        sys.exit(0)


if __name__ == "__main__":
    main()
