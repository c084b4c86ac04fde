"""Project orchestration core for IoT Workbench solutions."""

__version__ = "0.1.0"
