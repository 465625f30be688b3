#!/usr/bin/env python3
"""
Main entry point for SmokeApp: brings the history up to date and logs statistics
"""

import logging
import sys

from smokeapp.app import main


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("SmokeApp stopped")
    except Exception as e:
        logging.error(f"SmokeApp crashed with error: {e}")
        sys.exit(1)
