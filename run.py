#!/usr/bin/env python
"""
Run script for lotfinder.
Use: python run.py [--sync]
Or: streamlit run lotfinder/ui/app.py
"""
import os
import sys
import subprocess
from pathlib import Path

APP_PATH = Path(__file__).parent / "lotfinder" / "ui" / "app.py"


def main():
    """Refresh the snapshot if asked, then run the Streamlit app."""
    if "--sync" in sys.argv[1:]:
        from lotfinder.sync import main as sync_main
        if sync_main([]) != 0:
            sys.exit(1)

    port = os.getenv("LOTFINDER_PORT", "8502")
    subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        str(APP_PATH),
        f"--server.port={port}",
        "--browser.gatherUsageStats=false",
    ])


if __name__ == "__main__":
    main()
