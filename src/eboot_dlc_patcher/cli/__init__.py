"""Command-line interface for eboot-dlc-patcher."""
