"""
Main entry point for the job_radar package.

Usage:
    python -m job_radar [command] [options]

See 'python -m job_radar --help' for available commands.
"""

from job_radar.cli import main

if __name__ == "__main__":
    main()
