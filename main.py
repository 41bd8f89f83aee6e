#!/usr/bin/env python3
"""
Main entry point for the VideoUp Service.

This script starts the HTTP API that registers videos and stores their
uploaded binary data.
"""

from videoup_service.main import main

if __name__ == "__main__":
    main()
