#!/usr/bin/env python3
"""
Start the RideFlow development server.

Host, port and auto-reload come from config.settings
(RIDEFLOW_HOST, RIDEFLOW_PORT, RIDEFLOW_RELOAD).

Usage:
    python run_api.py
"""

import uvicorn

from config.settings import APP_NAME, API_HOST, API_PORT, API_RELOAD

if __name__ == "__main__":
    base_url = f"http://localhost:{API_PORT}"
    print(f"🚴 {APP_NAME} API on {base_url} (docs: {base_url}/docs)")
    if API_RELOAD:
        print("♻️  Auto-reload on, CTRL+C to stop\n")

    try:
        # reload needs an import string, not the app object
        uvicorn.run("api.main:app", host=API_HOST, port=API_PORT, reload=API_RELOAD)
    except Exception as e:
        print(f"❌ Could not start {APP_NAME} API: {e}")
        raise
