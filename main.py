#!/usr/bin/env python3
"""
Gym Dashboard - Main entry point
"""
import argparse
import os
import sys

# Add the parent directory to sys.path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from simple_logger import LogLevel, Slogger
from gym_dashboard.config import load_config
from gym_dashboard.ui.app import GymDashboardApp


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Terminal dashboard for the gym management API")
    parser.add_argument("--route", default="/", help="Location to open, e.g. /members?filter=unpaid")
    parser.add_argument("--base-url", help="Override api.base_url")
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("--log-level", choices=[level.value for level in LogLevel], help="Minimum log level")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    if args.log_level:
        Slogger.configure(min_level=LogLevel(args.log_level))

    Slogger.log("Starting Gym Dashboard...")

    # Load configuration
    config = load_config(args.config)
    if args.base_url:
        config["api"]["base_url"] = args.base_url

    # Create and run the application
    app = GymDashboardApp(config, initial_route=args.route)
    app.run()


if __name__ == "__main__":
    main()
