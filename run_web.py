#!/usr/bin/env python3
"""
Main entry point for the Matchday web API.

This script launches the Flask-based server.
"""
import os

from matchday.ui.web_app import run_web_app

if __name__ == "__main__":
    run_web_app(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", 7122)))
